"""Skill request model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .category_request import RequestStatus


class SkillRequestCreate(BaseModel):
    """Schema for proposing a skill under an existing category."""

    skill_name: str = Field(..., max_length=100)
    category_id: str = Field(..., min_length=1)


class SkillRequest(BaseModel):
    """Complete skill request."""

    id: str
    user_id: str
    user_email: Optional[str] = None
    skill_name: str
    category_id: str
    category_name: Optional[str] = None  # name at submission time
    status: RequestStatus = RequestStatus.PENDING
    admin_comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkillApprovalResult(BaseModel):
    """Outcome of a skill approval."""

    request: SkillRequest
    category_id: Optional[str] = None
    added: bool  # False when the category already listed the skill
