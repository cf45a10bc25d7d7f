"""
Top‑level package for the AgriMarket API.

This file makes ``agri_market_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``agri_market_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
