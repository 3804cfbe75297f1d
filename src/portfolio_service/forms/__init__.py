"""Multi-step portfolio form: session, steps, engine and list editors."""

from .editors import SkillsEditor, WorkExperienceEditor
from .engine import MultiStepFormEngine
from .field_array import (
    ARRAY_FIELDS,
    NESTED_ARRAY_FIELDS,
    FieldArrayController,
    NestedFieldArrayController,
    array_controller,
    check_floors,
    nested_array_controller,
)
from .session import FormSession, FormSessionRegistry
from .steps import DEFAULT_STEPS, FormStep
from .transform import form_data_to_portfolio, portfolio_to_form_data

__all__ = [
    "SkillsEditor",
    "WorkExperienceEditor",
    "MultiStepFormEngine",
    "ARRAY_FIELDS",
    "NESTED_ARRAY_FIELDS",
    "FieldArrayController",
    "NestedFieldArrayController",
    "array_controller",
    "check_floors",
    "nested_array_controller",
    "FormSession",
    "FormSessionRegistry",
    "DEFAULT_STEPS",
    "FormStep",
    "form_data_to_portfolio",
    "portfolio_to_form_data",
]
