"""Multi-step portfolio form engine."""

import logging
from typing import Any, Optional, Sequence

from ..errors import (
    AuthorizationError,
    NotFoundError,
    StepValidationError,
    SubmissionInProgressError,
    ValidationError,
)
from ..models.form import FormState, StepValidation
from ..models.portfolio import Portfolio, PortfolioFormData, PortfolioStatus
from ..repositories.portfolio_repo import PortfolioRepository
from .field_array import check_floors
from .session import FormSession
from .steps import DEFAULT_STEPS, FormStep
from .transform import form_data_to_portfolio, portfolio_to_form_data

logger = logging.getLogger(__name__)


class MultiStepFormEngine:
    """
    Drives one user's form session: editing, navigation, validation,
    saving and publishing.

    Steps may be visited in any order. Saving a draft never requires a valid
    form; submitting requires every step to be valid.
    """

    def __init__(
        self,
        session: FormSession,
        repository: PortfolioRepository,
        steps: Sequence[FormStep] = DEFAULT_STEPS,
    ) -> None:
        self.session = session
        self.repository = repository
        self.steps = {step.number: step for step in steps}

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def _step(self, step: int) -> FormStep:
        if step not in self.steps:
            raise ValidationError(f"Step must be between 1 and {self.total_steps}, got {step}")
        return self.steps[step]

    # ----- Editing -----

    def update_step_data(self, patch: dict[str, Any]) -> PortfolioFormData:
        """Merge fields into the draft. No step rules are applied.

        Floored lists may be replaced but never left below their floor.
        """
        check_floors(patch)
        return self.session.update_draft(patch)

    # ----- Validation -----

    def validate_step(self, step: int) -> StepValidation:
        result = self._step(step).validate(self.session.get_draft())
        self.session.step_validation[step] = result
        return result

    def validate_all(self) -> dict[int, StepValidation]:
        return {number: self.validate_step(number) for number in sorted(self.steps)}

    def can_submit(self) -> bool:
        draft = self.session.get_draft()
        return all(step.validate(draft).is_valid for step in self.steps.values())

    # ----- Navigation -----

    def go_to_step(self, step: int) -> int:
        self._step(step)
        self.session.current_step = step
        return step

    def next_step(self) -> int:
        return self.go_to_step(min(self.session.current_step + 1, self.total_steps))

    def previous_step(self) -> int:
        return self.go_to_step(max(self.session.current_step - 1, 1))

    # ----- Persistence -----

    async def save_draft(self, user_id: str, portfolio_id: Optional[str] = None) -> Portfolio:
        """Store the draft unpublished, whatever its validity."""
        return await self._persist(user_id, portfolio_id, PortfolioStatus.DRAFT)

    async def submit(self, user_id: str, portfolio_id: Optional[str] = None) -> Portfolio:
        """
        Validate every step and publish the portfolio.

        Raises:
            StepValidationError: Some step is invalid; nothing is written
            SubmissionInProgressError: Another save or submit is running
        """
        if self.session.saving:
            raise SubmissionInProgressError("Portfolio submission already in progress")
        results = self.validate_all()
        invalid = {number: r.errors for number, r in results.items() if not r.is_valid}
        if invalid:
            logger.info(f"Submit blocked for user_id={user_id}: invalid steps {sorted(invalid)}")
            raise StepValidationError(invalid)
        return await self._persist(user_id, portfolio_id, PortfolioStatus.PUBLISHED)

    async def _persist(
        self, user_id: str, portfolio_id: Optional[str], status: PortfolioStatus
    ) -> Portfolio:
        if self.session.saving:
            raise SubmissionInProgressError("Portfolio submission already in progress")
        if portfolio_id is not None and portfolio_id != user_id:
            raise AuthorizationError("Cannot write another user's portfolio")

        self.session.saving = True
        try:
            content = form_data_to_portfolio(self.session.get_draft())
            existing = await self.repository.get(user_id)
            if existing is None:
                if portfolio_id is not None:
                    raise NotFoundError(f"Portfolio not found: {portfolio_id}")
                portfolio = await self.repository.create(user_id, content, status)
                logger.info(f"Portfolio created for user_id={user_id} ({status.value})")
            else:
                portfolio = await self.repository.update(user_id, content, status)
                if portfolio is None:
                    raise NotFoundError(f"Portfolio not found: {user_id}")
                logger.info(f"Portfolio updated for user_id={user_id} ({status.value})")
            return portfolio
        finally:
            self.session.saving = False

    async def load(self, user_id: str) -> PortfolioFormData:
        """Replace the draft with the user's stored portfolio."""
        portfolio = await self.repository.get(user_id)
        if portfolio is None:
            raise NotFoundError(f"Portfolio not found: {user_id}")
        self.session.replace_draft(portfolio_to_form_data(portfolio))
        self.session.step_validation = {}
        return self.session.get_draft()

    def reset(self) -> None:
        self.session.reset()

    def state(self) -> FormState:
        return FormState(
            draft=self.session.get_draft(),
            current_step=self.session.current_step,
            total_steps=self.total_steps,
            step_validation=dict(self.session.step_validation),
            can_submit=self.can_submit(),
        )
