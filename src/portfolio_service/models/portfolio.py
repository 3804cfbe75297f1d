"""Portfolio models: the editable draft and the stored document."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

PROFICIENCY_LEVELS = ("Beginner", "Intermediate", "Advanced", "Expert")


class PortfolioStatus(str, Enum):
    """Publication status of a stored portfolio."""

    DRAFT = "draft"
    PUBLISHED = "published"


class PortfolioEntry(BaseModel):
    """Base for portfolio sections. Unknown keys are rejected, as on the draft."""

    class Config:
        extra = "forbid"


class LanguageProficiency(PortfolioEntry):
    """Spoken language entry."""

    language: str = ""
    proficiency: str = ""


class Reference(PortfolioEntry):
    """Professional reference."""

    name: str = ""
    contact_info: str = ""
    relationship: str = ""


class Education(PortfolioEntry):
    """Education entry."""

    degree: str = ""
    institution: str = ""
    passing_year: Optional[int] = None
    grade: Optional[str] = None

    @field_validator("passing_year", mode="before")
    @classmethod
    def blank_year_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Certification(PortfolioEntry):
    """Certification entry."""

    name: str = ""
    issuing_organization: str = ""
    year: str = ""
    expiry_date: Optional[str] = None
    credential_id: Optional[str] = None


class Course(PortfolioEntry):
    """Course entry."""

    name: str = ""
    provider: str = ""
    completion_date: str = ""
    duration: Optional[str] = None


class TechnicalSkill(PortfolioEntry):
    """Skill group: a catalog category name with its skills."""

    category: str = ""  # free-text reference to SkillCategory.name
    skills: list[str] = Field(default_factory=lambda: [""])
    proficiency: str = ""


class WorkExperience(PortfolioEntry):
    """Work experience entry."""

    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    is_current_role: bool = False
    responsibilities: list[str] = Field(default_factory=lambda: [""])
    technologies: list[str] = Field(default_factory=lambda: [""])


class Project(PortfolioEntry):
    """Project entry."""

    name: str = ""
    description: str = ""
    contribution: str = ""
    technologies: list[str] = Field(default_factory=lambda: [""])
    start_date: str = ""
    end_date: Optional[str] = None
    is_ongoing: bool = False
    role: str = ""
    responsibilities: list[str] = Field(default_factory=lambda: [""])
    outcomes: list[str] = Field(default_factory=list)
    url: Optional[str] = None
    repository: Optional[str] = None


class PersonalInfo(PortfolioEntry):
    """Personal information block of a stored portfolio."""

    employee_code: str = ""
    designation: str = ""
    years_of_experience: int = 0
    nationality: str = ""
    language_proficiency: list[LanguageProficiency] = Field(default_factory=list)
    email: str = ""
    mobile_no: str = ""
    profile_image: str = ""
    summary: str = ""


class PortfolioFormData(BaseModel):
    """Flat, in-progress portfolio draft edited across the form steps."""

    # Step 1: Personal information
    employee_code: str = ""
    designation: str = ""
    years_of_experience: int = 0
    nationality: str = ""
    language_proficiency: list[LanguageProficiency] = Field(
        default_factory=lambda: [LanguageProficiency()]
    )
    email: str = ""
    mobile_no: str = ""
    profile_image: str = ""
    summary: str = ""
    references: list[Reference] = Field(default_factory=lambda: [Reference()])

    # Step 2: Education and certifications
    education: list[Education] = Field(default_factory=lambda: [Education()])
    certifications: list[Certification] = Field(default_factory=list)
    courses: list[Course] = Field(default_factory=list)

    # Step 3: Skills and experience
    technical_skills: list[TechnicalSkill] = Field(default_factory=lambda: [TechnicalSkill()])
    work_experience: list[WorkExperience] = Field(default_factory=lambda: [WorkExperience()])

    # Step 4: Projects
    projects: list[Project] = Field(default_factory=lambda: [Project()])

    class Config:
        extra = "forbid"


class PortfolioContent(BaseModel):
    """Stored portfolio body produced from a draft."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    references: list[Reference] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    courses: list[Course] = Field(default_factory=list)
    technical_skills: list[TechnicalSkill] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)


class Portfolio(PortfolioContent):
    """Complete stored portfolio, keyed by its owner's user id."""

    user_id: str
    status: PortfolioStatus = PortfolioStatus.DRAFT
    is_public: bool = False
    visit_count: int = Field(0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PortfolioFilters(BaseModel):
    """Directory filters applied to published portfolios."""

    min_experience: Optional[int] = Field(None, ge=0)
    max_experience: Optional[int] = Field(None, ge=0)
    skills: list[str] = Field(default_factory=list)
    nationality: list[str] = Field(default_factory=list)
    designation: list[str] = Field(default_factory=list)
    search_term: Optional[str] = None
