"""Skill category model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SkillCategoryBase(BaseModel):
    """Base skill category attributes."""

    name: str = Field(..., min_length=1, max_length=100)
    approved: bool = True
    skills: list[str] = Field(default_factory=list)


class SkillCategoryCreate(SkillCategoryBase):
    """Schema for creating a skill category."""

    pass


class SkillCategoryUpdate(BaseModel):
    """Schema for updating a skill category."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    approved: Optional[bool] = None
    skills: Optional[list[str]] = None


class SkillCategory(SkillCategoryBase):
    """Complete skill category with metadata."""

    category_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


def category_key(name: str) -> str:
    """Normalized name used for uniqueness checks."""
    return " ".join(name.split()).lower()
