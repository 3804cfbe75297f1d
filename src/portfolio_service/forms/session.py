"""Form session: the user's draft plus navigation and validation state."""

import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..models.form import StepValidation
from ..models.portfolio import PortfolioFormData

logger = logging.getLogger(__name__)

Listener = Callable[[PortfolioFormData], None]


def pydantic_errors(exc: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into `field.path: message` strings."""
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]


class FormSession:
    """Holds one user's draft; any step may read or write the whole draft.

    Readers get deep copies, so the draft only changes through
    `update_draft` / `replace_draft`, and listeners see every change.
    """

    def __init__(self, draft: Optional[PortfolioFormData] = None) -> None:
        self._draft = draft or PortfolioFormData()
        self._listeners: list[Listener] = []
        self.current_step = 1
        self.step_validation: dict[int, StepValidation] = {}
        self.saving = False

    def get_draft(self) -> PortfolioFormData:
        return self._draft.model_copy(deep=True)

    def update_draft(self, patch: dict[str, Any]) -> PortfolioFormData:
        """Merge top-level fields into the draft. Values are parsed, not validated per step."""
        merged = self._draft.model_dump()
        merged.update(patch)
        try:
            draft = PortfolioFormData.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError("Invalid draft data", errors=pydantic_errors(e)) from e
        self._set(draft)
        return self.get_draft()

    def replace_draft(self, draft: PortfolioFormData) -> None:
        self._set(draft.model_copy(deep=True))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> None:
        """Empty draft, first step, no validations."""
        self.current_step = 1
        self.step_validation = {}
        self._set(PortfolioFormData())

    def _set(self, draft: PortfolioFormData) -> None:
        self._draft = draft
        for listener in list(self._listeners):
            listener(self.get_draft())


class FormSessionRegistry:
    """One form session per user, held in this process.

    Sessions idle for `idle_timeout` seconds expire, and past `max_sessions`
    the least recently used one is evicted. A session with a save in flight
    is never evicted.
    """

    def __init__(
        self,
        max_sessions: int = 10_000,
        idle_timeout: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._sessions: OrderedDict[str, FormSession] = OrderedDict()
        self._last_used: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def get(self, user_id: str) -> FormSession:
        now = self._clock()
        self._expire(now)
        session = self._sessions.get(user_id)
        if session is None:
            session = FormSession()
            self._sessions[user_id] = session
            logger.debug(f"Form session created for user_id={user_id}")
        else:
            self._sessions.move_to_end(user_id)
        self._last_used[user_id] = now
        self._evict_overflow(keep=user_id)
        return session

    def discard(self, user_id: str) -> None:
        """Reset the user's session if one exists and stop tracking it."""
        session = self._sessions.pop(user_id, None)
        self._last_used.pop(user_id, None)
        if session is not None:
            session.reset()

    def _expire(self, now: float) -> None:
        # Ordered by last use, so stop at the first fresh session
        for user_id in list(self._sessions):
            if now - self._last_used[user_id] < self.idle_timeout:
                break
            if not self._sessions[user_id].saving:
                self._drop(user_id)

    def _evict_overflow(self, keep: str) -> None:
        for user_id in list(self._sessions):
            if len(self._sessions) <= self.max_sessions:
                break
            if user_id != keep and not self._sessions[user_id].saving:
                self._drop(user_id)

    def _drop(self, user_id: str) -> None:
        del self._sessions[user_id]
        del self._last_used[user_id]
        logger.debug(f"Form session evicted for user_id={user_id}")
