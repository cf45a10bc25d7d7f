"""
Error taxonomy for the marketplace.

Services raise these exceptions; the application factory maps them to
HTTP responses in one place (see ``main.register_exception_handlers``),
so endpoints never translate errors themselves.
"""

from typing import Any, Dict, List, Optional


class MarketplaceError(Exception):
    """Base class for all expected marketplace failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message}


class UnauthenticatedError(MarketplaceError):
    status_code = 401


class ForbiddenError(MarketplaceError):
    status_code = 403


class NotFoundError(MarketplaceError):
    status_code = 404


class ValidationError(MarketplaceError):
    """Invalid input, itemised per field when the field is known."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidTransitionError(ValidationError):
    """A status change that the entity's state machine does not allow.

    ``terminal`` is set when ``current`` has no outgoing transitions at
    all, e.g. a bid that has already been answered.
    """

    def __init__(self, entity: str, current: str, target: str, terminal: bool = False) -> None:
        if terminal:
            message = f"The {entity} is already '{current}' and its status can no longer change"
        else:
            message = f"Cannot change {entity} status from '{current}' to '{target}'"
        super().__init__(
            message,
            errors=[{"field": "status", "message": f"'{target}' is not reachable from '{current}'"}],
        )
        self.entity = entity
        self.current = current
        self.target = target
        self.terminal = terminal
