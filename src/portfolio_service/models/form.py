"""Form engine state and request models."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .portfolio import PortfolioFormData


class StepValidation(BaseModel):
    """Result of validating one form step."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class FormState(BaseModel):
    """Snapshot of a user's form session."""

    draft: PortfolioFormData
    current_step: int
    total_steps: int
    step_validation: dict[int, StepValidation] = Field(default_factory=dict)
    can_submit: bool = False


class StepChange(BaseModel):
    """Navigate to a step."""

    step: int


class SaveRequest(BaseModel):
    """Save or submit the draft, optionally naming the stored portfolio."""

    portfolio_id: Optional[str] = None


class ArrayItem(BaseModel):
    """Item to append to a field array; the empty template is used when omitted."""

    item: Optional[Any] = None


class ArrayMove(BaseModel):
    """Reorder a field array item."""

    to_index: int = Field(..., ge=0)
