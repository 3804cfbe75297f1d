"""Tests for form step validation rules."""

from datetime import date

import pytest

from portfolio_service.forms.steps import (
    EducationStep,
    PersonalInfoStep,
    ProjectsStep,
    SkillsExperienceStep,
)
from portfolio_service.models.portfolio import PortfolioFormData


@pytest.fixture
def draft(valid_draft):
    return PortfolioFormData.model_validate(valid_draft)


def _with(draft, **changes):
    return draft.model_copy(update=changes)


def test_valid_draft_passes_every_step(draft):
    """Test that a complete draft passes every step."""
    for step in (PersonalInfoStep(), EducationStep(), SkillsExperienceStep(), ProjectsStep()):
        result = step.validate(draft)
        assert result.is_valid, (step.title, result.errors)
        assert result.errors == []


def test_empty_draft_fails_every_step():
    """Test that an empty draft fails every step."""
    empty = PortfolioFormData()
    for step in (PersonalInfoStep(), EducationStep(), SkillsExperienceStep(), ProjectsStep()):
        assert step.validate(empty).is_valid is False


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"employee_code": " "}, "Employee code is required"),
        ({"email": "not-an-email"}, "Valid email is required"),
        ({"email": "alice@.example.com"}, "Valid email is required"),
        ({"email": "alice@example..com"}, "Valid email is required"),
        ({"email": ""}, "Email is required"),
        ({"summary": "Too short"}, "Professional summary must be at least 50 characters"),
        ({"years_of_experience": -1}, "Valid years of experience is required"),
        ({"language_proficiency": []}, "At least one valid language proficiency is required"),
    ],
)
def test_personal_info_rules(draft, changes, message):
    """Test the personal info rules."""
    result = PersonalInfoStep().validate(_with(draft, **changes))

    assert result.is_valid is False
    assert message in result.errors


def test_education_year_range(draft):
    """Test the allowed passing year range."""
    step = EducationStep(today=date(2024, 6, 1))
    education = draft.education[0]

    too_old = _with(draft, education=[education.model_copy(update={"passing_year": 1899})])
    too_new = _with(draft, education=[education.model_copy(update={"passing_year": 2035})])
    edge = _with(draft, education=[education.model_copy(update={"passing_year": 2034})])

    assert "Education 1: Valid year is required" in step.validate(too_old).errors
    assert "Education 1: Valid year is required" in step.validate(too_new).errors
    assert step.validate(edge).is_valid


def test_education_optional_sections_checked_when_present(draft):
    """Test that certifications and courses are checked only when present."""
    data = draft.model_dump()
    data["certifications"] = [{"name": "AWS SA", "issuing_organization": "", "year": "2022"}]
    data["courses"] = [{"name": "", "provider": "Coursera", "completion_date": "2021-05"}]

    errors = EducationStep().validate(PortfolioFormData.model_validate(data)).errors

    assert errors == [
        "Certification 1: Issuing organization is required",
        "Course 1: Name is required",
    ]


def test_skills_reject_blank_skill_and_bad_proficiency(draft):
    """Test that blank skills and unknown proficiencies fail."""
    data = draft.model_dump()
    data["technical_skills"][0]["skills"] = ["Python", ""]
    data["technical_skills"][0]["proficiency"] = "Guru"

    errors = SkillsExperienceStep().validate(PortfolioFormData.model_validate(data)).errors

    assert "Skill group 1: At least one valid skill is required" in errors
    assert "Skill group 1: Proficiency level is required" in errors


def test_past_role_needs_end_date(draft):
    """Test that past roles need an end date."""
    data = draft.model_dump()
    data["work_experience"][0]["is_current_role"] = False
    data["work_experience"][0]["end_date"] = None

    errors = SkillsExperienceStep().validate(PortfolioFormData.model_validate(data)).errors

    assert errors == ["Work experience 1: End date is required for past roles"]


def test_project_rules(draft):
    """Test the project rules."""
    data = draft.model_dump()
    data["projects"][0]["description"] = "short"
    data["projects"][0]["url"] = "example.com"
    data["projects"][0]["is_ongoing"] = False

    errors = ProjectsStep().validate(PortfolioFormData.model_validate(data)).errors

    assert errors == [
        "Project 1: Description must be at least 20 characters",
        "Project 1: End date is required for completed projects",
        "Project 1: Valid URL is required",
    ]


@pytest.mark.parametrize("repository", ["ftp://example.com/repo", "https://", "github.com/x"])
def test_project_repository_must_be_http_url(draft, repository):
    """Test that a non-HTTP repository link fails the projects step."""
    data = draft.model_dump()
    data["projects"][0]["repository"] = repository

    errors = ProjectsStep().validate(PortfolioFormData.model_validate(data)).errors

    assert errors == ["Project 1: Valid repository URL is required"]
