"""Server-side access policy."""

import logging
from typing import Optional

from ..errors import AuthenticationError, AuthorizationError
from ..models.user import User, UserRole
from ..repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AccessPolicy:
    """Resolves caller identity and admin rights from stored data only.

    Client-supplied role flags are never consulted: a caller is an admin when
    its stored user document has the admin role, or its stored email is in
    the configured admin list.
    """

    def __init__(self, users: UserRepository, admin_emails: list[str]) -> None:
        self.users = users
        self.admin_emails = {e.lower() for e in admin_emails}

    async def resolve(self, user_id: Optional[str], email_hint: Optional[str] = None) -> User:
        """Build the caller's identity from the stored user document."""
        if not user_id or not user_id.strip():
            raise AuthenticationError("Missing caller identity")
        user = await self.users.get_by_id(user_id)
        if user is None:
            # Unknown to the users collection: an ordinary user
            return User(id=user_id, email=email_hint, role=UserRole.USER)
        return user

    async def is_admin(self, user_id: str) -> bool:
        user = await self.users.get_by_id(user_id)
        if user is None:
            return False
        if user.role is UserRole.ADMIN:
            return True
        return bool(user.email) and user.email.lower() in self.admin_emails

    async def require_admin(self, user_id: str) -> None:
        """Raise AuthorizationError unless the caller is an admin."""
        if not await self.is_admin(user_id):
            logger.warning(f"Admin operation refused for user_id={user_id}")
            raise AuthorizationError("Administrator privileges required")
