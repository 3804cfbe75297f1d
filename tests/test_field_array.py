"""Tests for field array controllers and section editors."""

import pytest

from portfolio_service.errors import MinimumLengthViolation, ValidationError
from portfolio_service.forms.editors import SkillsEditor, WorkExperienceEditor
from portfolio_service.forms.field_array import array_controller, nested_array_controller


def test_append_uses_template(session):
    """Test that appending without an item adds a blank template."""
    controller = array_controller(session, "education")

    items = controller.append()

    assert len(items) == 2
    assert items[1] == {"degree": "", "institution": "", "passing_year": None, "grade": None}
    assert len(session.get_draft().education) == 2


def test_append_given_item(session):
    """Test appending a given item."""
    items = array_controller(session, "certifications").append(
        {"name": "AWS SA", "issuing_organization": "Amazon", "year": "2022"}
    )

    assert [c["name"] for c in items] == ["AWS SA"]


def test_append_invalid_item_rejected(session):
    """Test that an item failing the schema is refused."""
    with pytest.raises(ValidationError):
        array_controller(session, "education").append({"passing_year": "soon"})

    assert len(session.get_draft().education) == 1


def test_remove_below_floor_refused(session):
    """Test that removing below a list's floor is refused."""
    controller = array_controller(session, "work_experience")

    with pytest.raises(MinimumLengthViolation) as exc:
        controller.remove(0)

    assert exc.value.min_length == 1
    assert len(session.get_draft().work_experience) == 1


def test_optional_list_can_be_emptied(session):
    """Test that lists without a floor can be emptied."""
    controller = array_controller(session, "courses")
    controller.append()

    assert controller.remove(0) == []


def test_remove_keeps_order(session):
    """Test that removal keeps the remaining order."""
    controller = array_controller(session, "projects")
    session.update_draft({"projects": [{"name": "A"}]})
    controller.append({"name": "B"})
    controller.append({"name": "C"})

    items = controller.remove(1)

    assert [p["name"] for p in items] == ["A", "C"]


def test_move(session):
    """Test moving an item."""
    session.update_draft({"projects": [{"name": "A"}, {"name": "B"}, {"name": "C"}]})

    items = array_controller(session, "projects").move(0, 2)

    assert [p["name"] for p in items] == ["B", "C", "A"]


def test_out_of_range_index(session):
    """Test that out of range indices are refused."""
    controller = array_controller(session, "projects")

    with pytest.raises(ValidationError):
        controller.remove(5)
    with pytest.raises(ValidationError):
        controller.move(0, 3)


def test_unknown_field(session):
    """Test that unregistered list fields are refused."""
    with pytest.raises(ValidationError):
        array_controller(session, "hobbies")
    with pytest.raises(ValidationError):
        nested_array_controller(session, "projects", "hobbies")


def test_nested_append_and_remove(session):
    """Test appending to and removing from a nested list."""
    controller = nested_array_controller(session, "projects", "outcomes")

    assert controller.append(0, "Shipped") == ["Shipped"]
    assert controller.remove(0, 0) == []


def test_nested_outer_index_out_of_range(session):
    """Test a nested operation on a missing outer item."""
    with pytest.raises(ValidationError):
        nested_array_controller(session, "technical_skills", "skills").append(3)


def test_listeners_see_array_changes(session):
    """Test that session listeners see list edits."""
    seen = []
    unsubscribe = session.subscribe(lambda draft: seen.append(len(draft.education)))

    array_controller(session, "education").append()
    unsubscribe()
    array_controller(session, "education").append()

    assert seen == [2]


# ----- Editors -----


def test_skills_editor(session):
    """Test the skills editor."""
    editor = SkillsEditor(session)

    editor.add_category("Programming Languages", "Expert")
    editor.add_skill_to_category(1, "Python")
    skills = editor.add_skill_to_category(1, "Go")

    assert skills == ["", "Python", "Go"]
    assert editor.remove_skill_from_category(1, 0) == ["Python", "Go"]
    assert [g["category"] for g in editor.remove_category(0)] == ["Programming Languages"]


def test_skills_editor_never_drops_last_skill(session):
    """Test that the skills editor keeps at least one skill."""
    editor = SkillsEditor(session)

    with pytest.raises(MinimumLengthViolation):
        editor.remove_skill_from_category(0, 0)

    assert session.get_draft().technical_skills[0].skills == [""]


def test_work_experience_editor(session):
    """Test adding an experience with two responsibilities and dropping one."""
    editor = WorkExperienceEditor(session)
    session.update_draft(
        {"work_experience": [{"company": "Acme", "position": "Engineer", "start_date": "2020"}]}
    )

    editor.add_responsibility(0, "Design APIs")
    editor.add_technology(0, "FastAPI")
    editor.remove_responsibility(0, 0)
    editor.remove_technology(0, 0)
    editor.add_experience({"company": "Globex", "position": "Lead", "start_date": "2022"})

    draft = session.get_draft()
    assert draft.work_experience[0].responsibilities == ["Design APIs"]
    assert draft.work_experience[0].technologies == ["FastAPI"]
    assert [e.company for e in draft.work_experience] == ["Acme", "Globex"]

    editor.remove_experience(0)
    with pytest.raises(MinimumLengthViolation):
        editor.remove_experience(0)
    with pytest.raises(MinimumLengthViolation):
        editor.remove_responsibility(0, 0)
