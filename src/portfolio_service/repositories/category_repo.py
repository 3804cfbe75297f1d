"""Skill category repository."""

from typing import Optional

from ..database import SKILL_CATEGORIES, PersistenceGateway
from ..errors import NotFoundError
from ..models.category import (
    SkillCategory,
    SkillCategoryCreate,
    SkillCategoryUpdate,
    category_key,
)


class CategoryRepository:
    """Repository for skill category documents."""

    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway

    @staticmethod
    def _to_model(doc: dict) -> SkillCategory:
        return SkillCategory(
            category_id=doc["id"],
            name=doc["name"],
            approved=doc.get("approved", True),
            skills=doc.get("skills") or [],
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    async def create(self, data: SkillCategoryCreate) -> SkillCategory:
        """Create a new skill category."""
        name = " ".join(data.name.split())
        now = self.gateway.server_timestamp()
        category_id = await self.gateway.create(
            SKILL_CATEGORIES,
            {
                "name": name,
                "name_key": category_key(name),
                "approved": data.approved,
                "skills": data.skills,
                "created_at": now,
                "updated_at": now,
            },
        )
        return await self.get_by_id(category_id)

    async def get_by_id(self, category_id: str) -> Optional[SkillCategory]:
        """Get a skill category by ID."""
        doc = await self.gateway.get(SKILL_CATEGORIES, category_id)
        if not doc:
            return None
        return self._to_model(doc)

    async def get_by_name(self, name: str) -> Optional[SkillCategory]:
        """Get a skill category by case-insensitive name."""
        docs = await self.gateway.list(SKILL_CATEGORIES, {"name_key": category_key(name)})
        if not docs:
            return None
        return self._to_model(docs[0])

    async def list_all(self, approved_only: bool = True) -> list[SkillCategory]:
        """List skill categories ordered by name."""
        filters = {"approved": True} if approved_only else None
        docs = await self.gateway.list(SKILL_CATEGORIES, filters, order_by="name")
        return [self._to_model(d) for d in docs]

    async def update(
        self, category_id: str, data: SkillCategoryUpdate
    ) -> Optional[SkillCategory]:
        """Update a skill category."""
        updates = {k: v for k, v in data.model_dump().items() if v is not None}
        if not updates:
            return await self.get_by_id(category_id)

        if "name" in updates:
            updates["name"] = " ".join(updates["name"].split())
            updates["name_key"] = category_key(updates["name"])
        updates["updated_at"] = self.gateway.server_timestamp()

        try:
            await self.gateway.update(SKILL_CATEGORIES, category_id, updates)
        except NotFoundError:
            return None
        return await self.get_by_id(category_id)

    async def delete(self, category_id: str) -> bool:
        """Delete a skill category."""
        if not await self.gateway.get(SKILL_CATEGORIES, category_id):
            return False
        await self.gateway.delete(SKILL_CATEGORIES, category_id)
        return True

    async def count(self) -> int:
        """Number of categories, approved or not."""
        return len(await self.gateway.list(SKILL_CATEGORIES))
