"""Section editors for the Skills & Experience step."""

from typing import Optional

from .field_array import array_controller, nested_array_controller
from .session import FormSession


class SkillsEditor:
    """Edits skill groups and the skills inside each group."""

    def __init__(self, session: FormSession) -> None:
        self.categories = array_controller(session, "technical_skills")
        self.skills = nested_array_controller(session, "technical_skills", "skills")

    def add_category(self, category: str = "", proficiency: str = "") -> list:
        return self.categories.append(
            {"category": category, "skills": [""], "proficiency": proficiency}
        )

    def remove_category(self, index: int) -> list:
        return self.categories.remove(index)

    def add_skill_to_category(self, category_index: int, skill: str = "") -> list:
        return self.skills.append(category_index, skill)

    def remove_skill_from_category(self, category_index: int, skill_index: int) -> list:
        return self.skills.remove(category_index, skill_index)


class WorkExperienceEditor:
    """Edits work experience entries and their nested lists."""

    def __init__(self, session: FormSession) -> None:
        self.experiences = array_controller(session, "work_experience")
        self.responsibilities = nested_array_controller(
            session, "work_experience", "responsibilities"
        )
        self.technologies = nested_array_controller(session, "work_experience", "technologies")

    def add_experience(self, item: Optional[dict] = None) -> list:
        return self.experiences.append(item)

    def remove_experience(self, index: int) -> list:
        return self.experiences.remove(index)

    def add_responsibility(self, experience_index: int, text: str = "") -> list:
        return self.responsibilities.append(experience_index, text)

    def remove_responsibility(self, experience_index: int, index: int) -> list:
        return self.responsibilities.remove(experience_index, index)

    def add_technology(self, experience_index: int, name: str = "") -> list:
        return self.technologies.append(experience_index, name)

    def remove_technology(self, experience_index: int, index: int) -> list:
        return self.technologies.remove(experience_index, index)
