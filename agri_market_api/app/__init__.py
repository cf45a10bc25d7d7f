"""
Application package initializer.

This package contains the main entrypoint for the marketplace API and
all of its submodules.  Each domain (products, bids, transport,
messages, farmer profiles) has a service in ``services`` and exposes a
router defined in ``api/v1/endpoints``.  Shared building blocks such as
the entity store, the status machines and the security helpers live in
``core``.
"""

from .main import app  # noqa: F401
