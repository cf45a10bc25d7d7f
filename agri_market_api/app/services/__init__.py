"""
Service layer.

Each service encapsulates the business logic for one domain: it loads
entities from the store, runs the ownership checks and state machine
transitions, and writes the result back.  Services raise the errors
from ``core.errors``; translating them into HTTP responses is left to
the application's exception handlers.
"""
