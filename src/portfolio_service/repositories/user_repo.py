"""User repository (read-only; accounts are managed by the auth provider)."""

from typing import Optional

from ..database import USERS, PersistenceGateway
from ..models.user import User, UserRole


class UserRepository:
    """Repository for user documents."""

    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        doc = await self.gateway.get(USERS, user_id)
        if not doc:
            return None
        return User(
            id=doc["id"],
            email=doc.get("email"),
            display_name=doc.get("display_name"),
            role=UserRole(doc.get("role", UserRole.USER.value)),
        )
