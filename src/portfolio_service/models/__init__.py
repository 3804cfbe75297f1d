"""Pydantic models for portfolio entities."""

from .category import SkillCategory, SkillCategoryCreate, SkillCategoryUpdate
from .category_request import (
    ApprovalResult,
    CategoryRequest,
    CategoryRequestComment,
    CategoryRequestCreate,
    CategoryRequestReject,
    RequestStatus,
)
from .form import FormState, StepValidation
from .portfolio import (
    Certification,
    Course,
    Education,
    LanguageProficiency,
    PersonalInfo,
    Portfolio,
    PortfolioContent,
    PortfolioFilters,
    PortfolioFormData,
    PortfolioStatus,
    Project,
    Reference,
    TechnicalSkill,
    WorkExperience,
)
from .user import User, UserRole
from .skill_request import SkillApprovalResult, SkillRequest, SkillRequestCreate

__all__ = [
    "SkillCategory",
    "SkillCategoryCreate",
    "SkillCategoryUpdate",
    "ApprovalResult",
    "CategoryRequest",
    "CategoryRequestComment",
    "CategoryRequestCreate",
    "CategoryRequestReject",
    "RequestStatus",
    "FormState",
    "StepValidation",
    "Certification",
    "Course",
    "Education",
    "LanguageProficiency",
    "PersonalInfo",
    "Portfolio",
    "PortfolioContent",
    "PortfolioFilters",
    "PortfolioFormData",
    "PortfolioStatus",
    "Project",
    "Reference",
    "TechnicalSkill",
    "WorkExperience",
    "SkillApprovalResult",
    "SkillRequest",
    "SkillRequestCreate",
    "User",
    "UserRole",
]
