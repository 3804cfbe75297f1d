"""Domain services."""

from .access import AccessPolicy
from .catalog import CategoryCatalog
from .category_requests import CategoryRequestWorkflow
from .moderation import ModerationWorkflow
from .portfolios import PortfolioService
from .skill_requests import SkillRequestWorkflow

__all__ = [
    "AccessPolicy",
    "CategoryCatalog",
    "CategoryRequestWorkflow",
    "ModerationWorkflow",
    "PortfolioService",
    "SkillRequestWorkflow",
]
