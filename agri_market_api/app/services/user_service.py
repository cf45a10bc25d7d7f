"""
Business logic for user accounts.

Registration, credential checks and lookups.  Passwords are stored as
PBKDF2 hashes (see ``core.security``).  Administrator accounts can only
be self‑registered while no administrator exists, which bootstraps the
first admin the same way as seeding one by hand.
"""

import logging
from typing import Any, Dict, Optional

from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..core.security import hash_password, verify_password
from ..core.store import get_store
from ..schemas.user import Role, UserCreate, UserRead


logger = logging.getLogger(__name__)


class UserService:
    """Service for registering and looking up users."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a new user and return its public record.

        Raises ``ValidationError`` when the username is taken and
        ``ForbiddenError`` when registering an additional admin.
        """
        store = get_store()
        with store.lock:
            if store.get_user_by_username(data.username):
                raise ValidationError.for_field("username", "Username already exists")
            if data.role == Role.ADMIN and store.has_role(Role.ADMIN):
                raise ForbiddenError("Administrator accounts cannot be self-registered")
            fields = data.model_dump(exclude={"password"})
            user = store.create_user(fields, password_hash=hash_password(data.password))
        logger.info("Registered %s user %s (id=%s)", user.role.value, user.username, user.id)
        return user.public()

    @classmethod
    async def authenticate(cls, username: str, password: str) -> Optional[UserRead]:
        """Return the user when the credentials match, otherwise ``None``."""
        user = get_store().get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s", username)
            return None
        return user.public()

    @classmethod
    async def get_user(cls, user_id: int) -> UserRead:
        user = get_store().get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user.public()

    @classmethod
    async def get_current(cls, current_user: Dict[str, Any]) -> UserRead:
        return await cls.get_user(current_user["user_id"])
