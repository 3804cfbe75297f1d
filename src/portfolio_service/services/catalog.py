"""Skill category catalog."""

import logging
from typing import Optional

from ..errors import DuplicateEntityError, NotFoundError, ValidationError
from ..models.category import SkillCategory, SkillCategoryCreate, SkillCategoryUpdate
from ..repositories.category_repo import CategoryRepository
from .access import AccessPolicy

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    "Programming Languages",
    "Database Management",
    "Frameworks / Library",
    "Testing",
    "Tools",
    "Others",
]


def clean_skills(skills: list[str]) -> list[str]:
    """Trim skill names, dropping blanks and case-insensitive repeats."""
    seen: set[str] = set()
    cleaned = []
    for skill in skills:
        name = " ".join(skill.split())
        if name and name.lower() not in seen:
            seen.add(name.lower())
            cleaned.append(name)
    return cleaned


class CategoryCatalog:
    """Canonical skill categories shared by all portfolio authors."""

    def __init__(self, repository: CategoryRepository, access: AccessPolicy) -> None:
        self.repository = repository
        self.access = access

    async def list_categories(self, approved_only: bool = True) -> list[SkillCategory]:
        return await self.repository.list_all(approved_only=approved_only)

    async def get_category(self, category_id: str) -> SkillCategory:
        category = await self.repository.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Skill category not found: {category_id}")
        return category

    async def find_by_name(self, name: str) -> Optional[SkillCategory]:
        return await self.repository.get_by_name(name)

    async def create_category(
        self,
        actor_id: str,
        name: str,
        approved: bool = True,
        skills: Optional[list[str]] = None,
    ) -> SkillCategory:
        """Admin: add a category to the catalog."""
        await self.access.require_admin(actor_id)
        return await self._insert(name, approved, skills or [])

    async def update_category(
        self, actor_id: str, category_id: str, data: SkillCategoryUpdate
    ) -> SkillCategory:
        """Admin: rename, (un)approve or replace the skills of a category."""
        await self.access.require_admin(actor_id)
        if data.name is not None:
            if not data.name.strip():
                raise ValidationError("Category name is required")
            existing = await self.repository.get_by_name(data.name)
            if existing and existing.category_id != category_id:
                raise DuplicateEntityError(f"Skill category already exists: {existing.name}")
        if data.skills is not None:
            data = data.model_copy(update={"skills": clean_skills(data.skills)})

        category = await self.repository.update(category_id, data)
        if not category:
            raise NotFoundError(f"Skill category not found: {category_id}")
        logger.info(f"Skill category updated: {category_id} by admin_id={actor_id}")
        return category

    async def delete_category(self, actor_id: str, category_id: str) -> None:
        """Admin: remove a category. Portfolios referencing it by name are untouched."""
        await self.access.require_admin(actor_id)
        if not await self.repository.delete(category_id):
            raise NotFoundError(f"Skill category not found: {category_id}")
        logger.info(f"Skill category deleted: {category_id} by admin_id={actor_id}")

    async def merge_or_create(self, name: str, skills: list[str]) -> tuple[SkillCategory, bool]:
        """Return the category with this name, creating it if needed.

        Skills are merged into an existing entry and it is marked approved.
        The second element is True when a new entry was created.
        """
        existing = await self.repository.get_by_name(name)
        if existing is None:
            try:
                return await self._insert(name, True, skills), True
            except DuplicateEntityError:
                # Inserted concurrently under the unique name index
                existing = await self.repository.get_by_name(name)
                if existing is None:
                    raise
                logger.info(f"Skill category {existing.category_id} created concurrently; merging")

        merged = clean_skills(existing.skills + skills)
        if merged != existing.skills or not existing.approved:
            existing = await self.repository.update(
                existing.category_id, SkillCategoryUpdate(skills=merged, approved=True)
            )
        return existing, False

    async def add_skill(self, category_id: str, skill: str) -> tuple[SkillCategory, bool]:
        """Add one skill to a category; the second element is False if it was already listed."""
        category = await self.get_category(category_id)
        merged = clean_skills(category.skills + [skill])
        if merged == category.skills:
            return category, False
        updated = await self.repository.update(category_id, SkillCategoryUpdate(skills=merged))
        if updated is None:
            raise NotFoundError(f"Skill category not found: {category_id}")
        logger.info(f"Skill added to category {category_id}: {skill}")
        return updated, True

    async def seed_defaults(self) -> int:
        """Populate an empty catalog with the default categories."""
        if await self.repository.count() > 0:
            return 0
        for name in DEFAULT_CATEGORIES:
            await self._insert(name, True, [])
        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default skill categories")
        return len(DEFAULT_CATEGORIES)

    async def _insert(self, name: str, approved: bool, skills: list[str]) -> SkillCategory:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        existing = await self.repository.get_by_name(name)
        if existing:
            raise DuplicateEntityError(f"Skill category already exists: {existing.name}")
        category = await self.repository.create(
            SkillCategoryCreate(name=name.strip(), approved=approved, skills=clean_skills(skills))
        )
        logger.info(f"Skill category created: {category.category_id} ({category.name})")
        return category
