"""Per-step validation for the portfolio form.

Each step is a validator over the whole draft. Validation fails closed: a
step is valid only when no rule reports an error.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from pydantic import EmailStr, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..models.form import StepValidation
from ..models.portfolio import PROFICIENCY_LEVELS, PortfolioFormData

_EMAIL = TypeAdapter(EmailStr)
_URL = TypeAdapter(HttpUrl)

MIN_SUMMARY_LENGTH = 50
MIN_PROJECT_DESCRIPTION_LENGTH = 20
MIN_PASSING_YEAR = 1900


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _has_blank(values: list[str]) -> bool:
    return not values or any(_blank(v) for v in values)


def _is_valid(adapter: TypeAdapter, value: str) -> bool:
    try:
        adapter.validate_python(value.strip())
    except PydanticValidationError:
        return False
    return True


class FormStep(ABC):
    """One page of the portfolio form."""

    number: int
    title: str

    @abstractmethod
    def collect_errors(self, draft: PortfolioFormData) -> list[str]:
        """Return every rule violation for this step."""

    def validate(self, draft: PortfolioFormData) -> StepValidation:
        errors = self.collect_errors(draft)
        return StepValidation(is_valid=not errors, errors=errors)


class PersonalInfoStep(FormStep):
    number = 1
    title = "Personal Info"

    def collect_errors(self, draft: PortfolioFormData) -> list[str]:
        errors = []
        if _blank(draft.employee_code):
            errors.append("Employee code is required")
        if _blank(draft.designation):
            errors.append("Designation is required")
        if draft.years_of_experience is None or draft.years_of_experience < 0:
            errors.append("Valid years of experience is required")
        if _blank(draft.nationality):
            errors.append("Nationality is required")
        if not draft.language_proficiency or any(
            _blank(lang.language) for lang in draft.language_proficiency
        ):
            errors.append("At least one valid language proficiency is required")
        if _blank(draft.email):
            errors.append("Email is required")
        elif not _is_valid(_EMAIL, draft.email):
            errors.append("Valid email is required")
        if _blank(draft.mobile_no):
            errors.append("Mobile number is required")
        if _blank(draft.summary) or len(draft.summary.strip()) < MIN_SUMMARY_LENGTH:
            errors.append(
                f"Professional summary must be at least {MIN_SUMMARY_LENGTH} characters"
            )
        return errors


class EducationStep(FormStep):
    number = 2
    title = "Education"

    def __init__(self, today: Optional[date] = None) -> None:
        self._today = today

    @property
    def max_passing_year(self) -> int:
        return (self._today or date.today()).year + 10

    def collect_errors(self, draft: PortfolioFormData) -> list[str]:
        errors = []
        if not draft.education:
            errors.append("At least one education entry is required")
        for i, edu in enumerate(draft.education, start=1):
            if _blank(edu.degree):
                errors.append(f"Education {i}: Degree is required")
            if _blank(edu.institution):
                errors.append(f"Education {i}: Institution is required")
            year = edu.passing_year
            if year is None or not MIN_PASSING_YEAR <= year <= self.max_passing_year:
                errors.append(f"Education {i}: Valid year is required")

        for i, cert in enumerate(draft.certifications, start=1):
            if _blank(cert.name):
                errors.append(f"Certification {i}: Name is required")
            if _blank(cert.issuing_organization):
                errors.append(f"Certification {i}: Issuing organization is required")
            if _blank(cert.year):
                errors.append(f"Certification {i}: Year is required")

        for i, course in enumerate(draft.courses, start=1):
            if _blank(course.name):
                errors.append(f"Course {i}: Name is required")
            if _blank(course.provider):
                errors.append(f"Course {i}: Provider is required")
            if _blank(course.completion_date):
                errors.append(f"Course {i}: Completion date is required")
        return errors


class SkillsExperienceStep(FormStep):
    number = 3
    title = "Skills & Experience"

    def collect_errors(self, draft: PortfolioFormData) -> list[str]:
        errors = []
        if not draft.technical_skills:
            errors.append("At least one technical skill category is required")
        for i, group in enumerate(draft.technical_skills, start=1):
            if _blank(group.category):
                errors.append(f"Skill group {i}: Category is required")
            if _has_blank(group.skills):
                errors.append(f"Skill group {i}: At least one valid skill is required")
            if group.proficiency not in PROFICIENCY_LEVELS:
                errors.append(f"Skill group {i}: Proficiency level is required")

        if not draft.work_experience:
            errors.append("At least one work experience entry is required")
        for i, exp in enumerate(draft.work_experience, start=1):
            if _blank(exp.company):
                errors.append(f"Work experience {i}: Company is required")
            if _blank(exp.position):
                errors.append(f"Work experience {i}: Position is required")
            if _blank(exp.start_date):
                errors.append(f"Work experience {i}: Start date is required")
            if not exp.is_current_role and _blank(exp.end_date):
                errors.append(f"Work experience {i}: End date is required for past roles")
            if _has_blank(exp.responsibilities):
                errors.append(
                    f"Work experience {i}: At least one valid responsibility is required"
                )
        return errors


class ProjectsStep(FormStep):
    number = 4
    title = "Projects"

    def collect_errors(self, draft: PortfolioFormData) -> list[str]:
        errors = []
        if not draft.projects:
            errors.append("At least one project is required")
        for i, project in enumerate(draft.projects, start=1):
            if _blank(project.name):
                errors.append(f"Project {i}: Name is required")
            if len(project.description.strip()) < MIN_PROJECT_DESCRIPTION_LENGTH:
                errors.append(
                    f"Project {i}: Description must be at least "
                    f"{MIN_PROJECT_DESCRIPTION_LENGTH} characters"
                )
            if _has_blank(project.technologies):
                errors.append(f"Project {i}: At least one valid technology is required")
            if _blank(project.start_date):
                errors.append(f"Project {i}: Start date is required")
            if not project.is_ongoing and _blank(project.end_date):
                errors.append(f"Project {i}: End date is required for completed projects")
            if _blank(project.role):
                errors.append(f"Project {i}: Role is required")
            if _has_blank(project.responsibilities):
                errors.append(f"Project {i}: At least one valid responsibility is required")
            if project.url and not _is_valid(_URL, project.url):
                errors.append(f"Project {i}: Valid URL is required")
            if project.repository and not _is_valid(_URL, project.repository):
                errors.append(f"Project {i}: Valid repository URL is required")
        return errors


DEFAULT_STEPS: tuple[FormStep, ...] = (
    PersonalInfoStep(),
    EducationStep(),
    SkillsExperienceStep(),
    ProjectsStep(),
)
