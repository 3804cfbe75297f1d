"""Portfolio form API endpoints.

Each caller edits one server-held draft. List fields are edited through the
``/arrays`` endpoints, which keep every floored list at one item or more.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from ..deps import get_current_user, get_form_engine, get_form_session
from ..forms.engine import MultiStepFormEngine
from ..forms.field_array import array_controller, nested_array_controller
from ..forms.session import FormSession
from ..models.form import ArrayItem, ArrayMove, FormState, SaveRequest, StepChange, StepValidation
from ..models.portfolio import Portfolio
from ..models.user import User

router = APIRouter(prefix="/form", tags=["Form"])


@router.get("", response_model=FormState)
async def get_form_state(engine: MultiStepFormEngine = Depends(get_form_engine)) -> FormState:
    """Current draft, step and validation results."""
    return engine.state()


@router.patch("/draft", response_model=FormState)
async def update_draft(
    patch: dict[str, Any] = Body(...),
    engine: MultiStepFormEngine = Depends(get_form_engine),
) -> FormState:
    """Merge fields into the draft."""
    engine.update_step_data(patch)
    return engine.state()


@router.post("/steps/{step}/validate", response_model=StepValidation)
async def validate_step(
    step: int, engine: MultiStepFormEngine = Depends(get_form_engine)
) -> StepValidation:
    """Validate one step."""
    return engine.validate_step(step)


@router.post("/validate", response_model=dict[int, StepValidation])
async def validate_all(
    engine: MultiStepFormEngine = Depends(get_form_engine),
) -> dict[int, StepValidation]:
    """Validate every step."""
    return engine.validate_all()


@router.put("/step", response_model=FormState)
async def go_to_step(
    data: StepChange, engine: MultiStepFormEngine = Depends(get_form_engine)
) -> FormState:
    """Jump to any step."""
    engine.go_to_step(data.step)
    return engine.state()


@router.post("/next", response_model=FormState)
async def next_step(engine: MultiStepFormEngine = Depends(get_form_engine)) -> FormState:
    engine.next_step()
    return engine.state()


@router.post("/previous", response_model=FormState)
async def previous_step(engine: MultiStepFormEngine = Depends(get_form_engine)) -> FormState:
    engine.previous_step()
    return engine.state()


@router.post("/save", response_model=Portfolio)
async def save_draft(
    data: Optional[SaveRequest] = None,
    user: User = Depends(get_current_user),
    engine: MultiStepFormEngine = Depends(get_form_engine),
) -> Portfolio:
    """Store the draft unpublished."""
    return await engine.save_draft(user.id, data.portfolio_id if data else None)


@router.post("/submit", response_model=Portfolio)
async def submit(
    data: Optional[SaveRequest] = None,
    user: User = Depends(get_current_user),
    engine: MultiStepFormEngine = Depends(get_form_engine),
) -> Portfolio:
    """Validate every step and publish."""
    return await engine.submit(user.id, data.portfolio_id if data else None)


@router.post("/load", response_model=FormState)
async def load(
    user: User = Depends(get_current_user),
    engine: MultiStepFormEngine = Depends(get_form_engine),
) -> FormState:
    """Start editing the stored portfolio."""
    await engine.load(user.id)
    return engine.state()


@router.post("/reset", response_model=FormState)
async def reset(engine: MultiStepFormEngine = Depends(get_form_engine)) -> FormState:
    """Discard the draft."""
    engine.reset()
    return engine.state()


# ----- List fields -----


@router.post("/arrays/{field}", response_model=list[Any])
async def append_item(
    field: str,
    data: Optional[ArrayItem] = None,
    session: FormSession = Depends(get_form_session),
) -> list[Any]:
    return array_controller(session, field).append(data.item if data else None)


@router.delete("/arrays/{field}/{index}", response_model=list[Any])
async def remove_item(
    field: str, index: int, session: FormSession = Depends(get_form_session)
) -> list[Any]:
    return array_controller(session, field).remove(index)


@router.post("/arrays/{field}/{index}/move", response_model=list[Any])
async def move_item(
    field: str,
    index: int,
    data: ArrayMove,
    session: FormSession = Depends(get_form_session),
) -> list[Any]:
    return array_controller(session, field).move(index, data.to_index)


@router.post("/arrays/{field}/{outer_index}/{nested_field}", response_model=list[Any])
async def append_nested_item(
    field: str,
    outer_index: int,
    nested_field: str,
    data: Optional[ArrayItem] = None,
    session: FormSession = Depends(get_form_session),
) -> list[Any]:
    controller = nested_array_controller(session, field, nested_field)
    return controller.append(outer_index, data.item if data else None)


@router.delete("/arrays/{field}/{outer_index}/{nested_field}/{index}", response_model=list[Any])
async def remove_nested_item(
    field: str,
    outer_index: int,
    nested_field: str,
    index: int,
    session: FormSession = Depends(get_form_session),
) -> list[Any]:
    return nested_array_controller(session, field, nested_field).remove(outer_index, index)


@router.post(
    "/arrays/{field}/{outer_index}/{nested_field}/{index}/move", response_model=list[Any]
)
async def move_nested_item(
    field: str,
    outer_index: int,
    nested_field: str,
    index: int,
    data: ArrayMove,
    session: FormSession = Depends(get_form_session),
) -> list[Any]:
    controller = nested_array_controller(session, field, nested_field)
    return controller.move(outer_index, index, data.to_index)
