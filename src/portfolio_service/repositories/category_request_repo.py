"""Category request repository."""

from typing import Optional

from ..database import CATEGORY_REQUESTS, PersistenceGateway
from ..models.category_request import CategoryRequest, RequestStatus


class CategoryRequestRepository:
    """Repository for category request documents."""

    collection = CATEGORY_REQUESTS

    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway

    @staticmethod
    def _to_model(doc: dict) -> CategoryRequest:
        return CategoryRequest(
            id=doc["id"],
            user_id=doc["user_id"],
            user_email=doc.get("user_email"),
            category_name=doc["category_name"],
            suggested_skills=doc.get("suggested_skills") or [],
            status=RequestStatus(doc.get("status", RequestStatus.PENDING.value)),
            admin_comment=doc.get("admin_comment"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    async def create(
        self,
        user_id: str,
        user_email: Optional[str],
        category_name: str,
        suggested_skills: list[str],
    ) -> str:
        """Create a pending request and return its id."""
        now = self.gateway.server_timestamp()
        return await self.gateway.create(
            self.collection,
            {
                "user_id": user_id,
                "user_email": user_email,
                "category_name": category_name,
                "suggested_skills": suggested_skills,
                "status": RequestStatus.PENDING.value,
                "admin_comment": None,
                "created_at": now,
                "updated_at": now,
            },
        )

    async def get_by_id(self, request_id: str) -> Optional[CategoryRequest]:
        """Get a request by ID."""
        doc = await self.gateway.get(self.collection, request_id)
        if not doc:
            return None
        return self._to_model(doc)

    async def list_requests(
        self,
        status: Optional[RequestStatus] = None,
        user_id: Optional[str] = None,
    ) -> list[CategoryRequest]:
        """List requests, newest first."""
        filters: dict = {}
        if status is not None:
            filters["status"] = RequestStatus(status).value
        if user_id is not None:
            filters["user_id"] = user_id
        docs = await self.gateway.list(
            self.collection, filters, order_by="created_at", descending=True
        )
        return [self._to_model(d) for d in docs]

    async def set_status(
        self,
        request_id: str,
        status: RequestStatus,
        admin_comment: Optional[str],
    ) -> None:
        """Move a request to a new status."""
        await self.gateway.update(
            self.collection,
            request_id,
            {
                "status": status.value,
                "admin_comment": admin_comment,
                "updated_at": self.gateway.server_timestamp(),
            },
        )

    async def set_comment(self, request_id: str, admin_comment: str) -> None:
        """Replace the admin comment."""
        await self.gateway.update(
            self.collection,
            request_id,
            {"admin_comment": admin_comment, "updated_at": self.gateway.server_timestamp()},
        )

    async def delete(self, request_id: str) -> bool:
        """Delete a request."""
        if not await self.gateway.get(self.collection, request_id):
            return False
        await self.gateway.delete(self.collection, request_id)
        return True
