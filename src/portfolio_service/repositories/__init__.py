"""Repository modules for document store operations."""

from .category_repo import CategoryRepository
from .category_request_repo import CategoryRequestRepository
from .portfolio_repo import PortfolioRepository
from .skill_request_repo import SkillRequestRepository
from .user_repo import UserRepository

__all__ = [
    "CategoryRepository",
    "CategoryRequestRepository",
    "PortfolioRepository",
    "SkillRequestRepository",
    "UserRepository",
]
