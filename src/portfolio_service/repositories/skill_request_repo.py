"""Skill request repository."""

from typing import Optional

from ..database import SKILL_REQUESTS
from ..models.category_request import RequestStatus
from ..models.skill_request import SkillRequest
from .category_request_repo import CategoryRequestRepository


class SkillRequestRepository(CategoryRequestRepository):
    """Repository for skill request documents.

    Status, comment, listing and deletion are shared with category requests.
    """

    collection = SKILL_REQUESTS

    @staticmethod
    def _to_model(doc: dict) -> SkillRequest:
        return SkillRequest(
            id=doc["id"],
            user_id=doc["user_id"],
            user_email=doc.get("user_email"),
            skill_name=doc["skill_name"],
            category_id=doc["category_id"],
            category_name=doc.get("category_name"),
            status=RequestStatus(doc.get("status", RequestStatus.PENDING.value)),
            admin_comment=doc.get("admin_comment"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    async def create(
        self,
        user_id: str,
        user_email: Optional[str],
        skill_name: str,
        category_id: str,
        category_name: Optional[str],
    ) -> str:
        """Create a pending skill request and return its id."""
        now = self.gateway.server_timestamp()
        return await self.gateway.create(
            self.collection,
            {
                "user_id": user_id,
                "user_email": user_email,
                "skill_name": skill_name,
                "category_id": category_id,
                "category_name": category_name,
                "status": RequestStatus.PENDING.value,
                "admin_comment": None,
                "created_at": now,
                "updated_at": now,
            },
        )
