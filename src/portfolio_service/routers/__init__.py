"""API routers."""

from .categories import router as categories_router
from .category_requests import router as category_requests_router
from .form import router as form_router
from .portfolios import router as portfolios_router
from .skill_requests import router as skill_requests_router

__all__ = [
    "categories_router",
    "category_requests_router",
    "form_router",
    "portfolios_router",
    "skill_requests_router",
]
