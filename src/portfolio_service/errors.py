"""Typed failures raised by repositories, services and the form engine."""

from typing import Any, Optional


class PortfolioServiceError(Exception):
    """Base class for all service errors."""

    status_code: int = 500

    def __init__(self, message: str, errors: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> dict:
        body: dict[str, Any] = {"detail": self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class ValidationError(PortfolioServiceError):
    """Input fails a schema constraint."""

    status_code = 422


class StepValidationError(ValidationError):
    """One or more form steps are invalid; `errors` is keyed by step number."""

    def __init__(self, step_errors: dict[int, list[str]]) -> None:
        invalid = ", ".join(str(step) for step in sorted(step_errors))
        super().__init__(f"Portfolio has invalid steps: {invalid}", errors=step_errors)
        self.step_errors = step_errors


class MinimumLengthViolation(ValidationError):
    """Removing an item would shrink a list below its floor."""

    def __init__(self, field: str, min_length: int) -> None:
        super().__init__(f"'{field}' must keep at least {min_length} item(s)")
        self.field = field
        self.min_length = min_length


class NotFoundError(PortfolioServiceError):
    """Referenced entity is absent."""

    status_code = 404


class PersistenceError(PortfolioServiceError):
    """The persistence gateway call failed."""

    status_code = 503


class AuthenticationError(PortfolioServiceError):
    """No caller identity was supplied."""

    status_code = 401


class AuthorizationError(PortfolioServiceError):
    """Caller lacks privilege for the operation."""

    status_code = 403


class InvalidTransitionError(PortfolioServiceError):
    """Requested status change is not allowed from the current state."""

    status_code = 409


class DuplicateEntityError(PortfolioServiceError):
    """Entity with the same unique key already exists."""

    status_code = 409


class SubmissionInProgressError(PortfolioServiceError):
    """A save or submit for this form session has not finished yet."""

    status_code = 409
