"""Mapping between the flat form draft and the stored portfolio body."""

from ..models.portfolio import (
    Education,
    LanguageProficiency,
    PersonalInfo,
    PortfolioContent,
    PortfolioFormData,
    Project,
    Reference,
    TechnicalSkill,
    WorkExperience,
)

PERSONAL_INFO_FIELDS = tuple(PersonalInfo.model_fields)
SECTION_FIELDS = (
    "references",
    "education",
    "certifications",
    "courses",
    "technical_skills",
    "work_experience",
    "projects",
)

# Lists the editor keeps at one element or more
PLACEHOLDERS = {
    "language_proficiency": LanguageProficiency,
    "references": Reference,
    "education": Education,
    "technical_skills": TechnicalSkill,
    "work_experience": WorkExperience,
    "projects": Project,
}


def form_data_to_portfolio(draft: PortfolioFormData) -> PortfolioContent:
    """Assemble the stored body from a draft.

    Language entries with a blank name are dropped; every other list is
    copied as-is, blank entries included.
    """
    data = draft.model_dump()
    personal = {name: data[name] for name in PERSONAL_INFO_FIELDS}
    personal["language_proficiency"] = [
        lang for lang in personal["language_proficiency"] if lang["language"].strip()
    ]
    return PortfolioContent.model_validate(
        {"personal_info": personal, **{name: data[name] for name in SECTION_FIELDS}}
    )


def portfolio_to_form_data(portfolio: PortfolioContent) -> PortfolioFormData:
    """Flatten a stored portfolio back into an editable draft."""
    data = {
        **portfolio.personal_info.model_dump(),
        **{name: [item.model_dump() for item in getattr(portfolio, name)] for name in SECTION_FIELDS},
    }
    for name, model in PLACEHOLDERS.items():
        if not data[name]:
            data[name] = [model().model_dump()]
    return PortfolioFormData.model_validate(data)
