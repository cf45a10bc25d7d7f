"""
Pydantic schema definitions for API payloads.

Each domain (users, products, bids, transport, messages) defines its
own models for request and response bodies.  ``*Read`` models double
as the records held by the entity store.
"""
