"""Append, remove and reorder operations over list fields of the draft."""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel

from ..errors import MinimumLengthViolation, ValidationError
from ..models.portfolio import (
    Certification,
    Course,
    Education,
    LanguageProficiency,
    Project,
    Reference,
    TechnicalSkill,
    WorkExperience,
)
from .session import FormSession


@dataclass(frozen=True)
class ArrayField:
    """Template and floor of one list field."""

    template: Callable[[], Any]
    min_length: int = 0


def _model_template(model: type[BaseModel]) -> Callable[[], dict]:
    return lambda: model().model_dump()


def _blank() -> str:
    return ""


ARRAY_FIELDS: dict[str, ArrayField] = {
    "language_proficiency": ArrayField(_model_template(LanguageProficiency), 1),
    "references": ArrayField(_model_template(Reference), 1),
    "education": ArrayField(_model_template(Education), 1),
    "certifications": ArrayField(_model_template(Certification)),
    "courses": ArrayField(_model_template(Course)),
    "technical_skills": ArrayField(_model_template(TechnicalSkill), 1),
    "work_experience": ArrayField(_model_template(WorkExperience), 1),
    "projects": ArrayField(_model_template(Project), 1),
}

NESTED_ARRAY_FIELDS: dict[tuple[str, str], ArrayField] = {
    ("technical_skills", "skills"): ArrayField(_blank, 1),
    ("work_experience", "responsibilities"): ArrayField(_blank, 1),
    ("work_experience", "technologies"): ArrayField(_blank, 1),
    ("projects", "technologies"): ArrayField(_blank, 1),
    ("projects", "responsibilities"): ArrayField(_blank, 1),
    ("projects", "outcomes"): ArrayField(_blank),
}


def check_floors(patch: dict[str, Any]) -> None:
    """Raise MinimumLengthViolation if the patch sets a floored list below its floor.

    Covers top-level lists and the nested lists of each item they carry.
    """
    for field, value in patch.items():
        rule = ARRAY_FIELDS.get(field)
        if rule is None or not isinstance(value, list):
            continue
        if len(value) < rule.min_length:
            raise MinimumLengthViolation(field, rule.min_length)
        for (outer, nested), nested_rule in NESTED_ARRAY_FIELDS.items():
            if outer != field:
                continue
            for item in value:
                items = item.get(nested) if isinstance(item, dict) else None
                if isinstance(items, list) and len(items) < nested_rule.min_length:
                    raise MinimumLengthViolation(f"{field}.{nested}", nested_rule.min_length)


def _check_index(items: list, index: int, label: str) -> None:
    if not 0 <= index < len(items):
        raise ValidationError(f"Index {index} out of range for '{label}' ({len(items)} items)")


def _as_item(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump()
    return copy.deepcopy(item)


class _ArrayOps:
    """List operations shared by the flat and nested controllers."""

    def __init__(self, label: str, rule: ArrayField) -> None:
        self.label = label
        self.rule = rule

    def _appended(self, items: list, item: Any) -> list:
        items.append(self.rule.template() if item is None else _as_item(item))
        return items

    def _removed(self, items: list, index: int) -> list:
        _check_index(items, index, self.label)
        if len(items) - 1 < self.rule.min_length:
            raise MinimumLengthViolation(self.label, self.rule.min_length)
        del items[index]
        return items

    def _moved(self, items: list, from_index: int, to_index: int) -> list:
        _check_index(items, from_index, self.label)
        _check_index(items, to_index, self.label)
        items.insert(to_index, items.pop(from_index))
        return items


class FieldArrayController(_ArrayOps):
    """Operations on a top-level list field of the draft, e.g. ``education``.

    Removing below the field's floor raises MinimumLengthViolation and
    leaves the draft unchanged.
    """

    def __init__(self, session: FormSession, field: str, rule: ArrayField) -> None:
        super().__init__(field, rule)
        self.session = session
        self.field = field

    def items(self) -> list:
        return self.session.get_draft().model_dump()[self.field]

    def _write(self, items: list) -> list:
        draft = self.session.update_draft({self.field: items})
        return draft.model_dump()[self.field]

    def append(self, item: Any = None) -> list:
        return self._write(self._appended(self.items(), item))

    def remove(self, index: int) -> list:
        return self._write(self._removed(self.items(), index))

    def move(self, from_index: int, to_index: int) -> list:
        return self._write(self._moved(self.items(), from_index, to_index))


class NestedFieldArrayController(_ArrayOps):
    """Operations on a list inside one element of an outer list,
    e.g. the ``skills`` of ``technical_skills[outer_index]``."""

    def __init__(
        self, session: FormSession, field: str, nested_field: str, rule: ArrayField
    ) -> None:
        super().__init__(f"{field}.{nested_field}", rule)
        self.session = session
        self.field = field
        self.nested_field = nested_field

    def _outer(self, outer_index: int) -> list[dict]:
        outer = self.session.get_draft().model_dump()[self.field]
        _check_index(outer, outer_index, self.field)
        return outer

    def items(self, outer_index: int) -> list:
        return self._outer(outer_index)[outer_index][self.nested_field]

    def _apply(self, outer_index: int, change: Callable[[list], list]) -> list:
        outer = self._outer(outer_index)
        outer[outer_index][self.nested_field] = change(outer[outer_index][self.nested_field])
        draft = self.session.update_draft({self.field: outer})
        return draft.model_dump()[self.field][outer_index][self.nested_field]

    def append(self, outer_index: int, item: Optional[str] = None) -> list:
        return self._apply(outer_index, lambda items: self._appended(items, item))

    def remove(self, outer_index: int, index: int) -> list:
        return self._apply(outer_index, lambda items: self._removed(items, index))

    def move(self, outer_index: int, from_index: int, to_index: int) -> list:
        return self._apply(outer_index, lambda items: self._moved(items, from_index, to_index))


def array_controller(session: FormSession, field: str) -> FieldArrayController:
    """Controller for a registered top-level list field."""
    rule = ARRAY_FIELDS.get(field)
    if rule is None:
        raise ValidationError(f"Unknown list field: {field}")
    return FieldArrayController(session, field, rule)


def nested_array_controller(
    session: FormSession, field: str, nested_field: str
) -> NestedFieldArrayController:
    """Controller for a registered nested list field."""
    rule = NESTED_ARRAY_FIELDS.get((field, nested_field))
    if rule is None:
        raise ValidationError(f"Unknown list field: {field}.{nested_field}")
    return NestedFieldArrayController(session, field, nested_field, rule)
