"""Portfolio repository."""

from typing import Optional

from ..database import PORTFOLIOS, PersistenceGateway
from ..errors import NotFoundError
from ..models.portfolio import Portfolio, PortfolioContent, PortfolioStatus


class PortfolioRepository:
    """Repository for portfolio documents, one per user keyed by user id."""

    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway

    @staticmethod
    def _to_model(doc: dict) -> Portfolio:
        data = {k: v for k, v in doc.items() if k != "id"}
        data.setdefault("user_id", doc["id"])
        return Portfolio.model_validate(data)

    @staticmethod
    def _body(content: PortfolioContent, status: PortfolioStatus) -> dict:
        body = content.model_dump(mode="json")
        body["status"] = status.value
        body["is_public"] = status is PortfolioStatus.PUBLISHED
        return body

    async def create(
        self, user_id: str, content: PortfolioContent, status: PortfolioStatus
    ) -> Portfolio:
        """Create the user's portfolio document."""
        now = self.gateway.server_timestamp()
        document = {
            "user_id": user_id,
            **self._body(content, status),
            "visit_count": 0,
            "created_at": now,
            "updated_at": now,
        }
        await self.gateway.create(PORTFOLIOS, document, doc_id=user_id)
        return await self.get(user_id)

    async def get(self, user_id: str) -> Optional[Portfolio]:
        """Get a user's portfolio."""
        doc = await self.gateway.get(PORTFOLIOS, user_id)
        if not doc:
            return None
        return self._to_model(doc)

    async def update(
        self, user_id: str, content: PortfolioContent, status: PortfolioStatus
    ) -> Optional[Portfolio]:
        """Overwrite the portfolio body, keeping visit count and creation time."""
        updates = self._body(content, status)
        updates["updated_at"] = self.gateway.server_timestamp()
        try:
            await self.gateway.update(PORTFOLIOS, user_id, updates)
        except NotFoundError:
            return None
        return await self.get(user_id)

    async def delete(self, user_id: str) -> bool:
        """Delete a user's portfolio."""
        if not await self.gateway.get(PORTFOLIOS, user_id):
            return False
        await self.gateway.delete(PORTFOLIOS, user_id)
        return True

    async def increment_visits(self, user_id: str, delta: int = 1) -> None:
        """Atomically bump the visit counter."""
        await self.gateway.increment_field(PORTFOLIOS, user_id, "visit_count", delta)

    async def list_public(self) -> list[Portfolio]:
        """Published portfolios, most recently updated first."""
        docs = await self.gateway.list(
            PORTFOLIOS, {"is_public": True}, order_by="updated_at", descending=True
        )
        return [self._to_model(d) for d in docs]
