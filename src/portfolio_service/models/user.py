"""User model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UserRole(str, Enum):
    """Roles stored on user documents."""

    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """Caller identity resolved on the server."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: UserRole = UserRole.USER
