"""Category request model."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RequestStatus(str, Enum):
    """Moderation status of a category request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


class CategoryRequestCreate(BaseModel):
    """Schema for submitting a category request."""

    category_name: str = Field(..., max_length=100)
    suggested_skills: list[str] = Field(default_factory=list)


class CategoryRequestReject(BaseModel):
    """Admin payload for rejecting a request."""

    reason: Optional[str] = Field(None, max_length=1000)


class CategoryRequestComment(BaseModel):
    """Admin payload for editing the comment on a request."""

    comment: str = Field(..., max_length=1000)


class CategoryRequest(BaseModel):
    """Complete category request."""

    id: str
    user_id: str
    user_email: Optional[str] = None
    category_name: str
    suggested_skills: list[str] = Field(default_factory=list)
    status: RequestStatus = RequestStatus.PENDING
    admin_comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApprovalResult(BaseModel):
    """Outcome of an approval: the request and the catalog entry it maps to."""

    request: CategoryRequest
    category_id: Optional[str] = None
    created: bool  # False when an existing entry was reused
