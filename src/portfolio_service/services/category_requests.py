"""Category request moderation workflow."""

import logging
from typing import Optional

from ..errors import ValidationError
from ..models.category_request import ApprovalResult, CategoryRequest
from ..models.user import User
from ..repositories.category_request_repo import CategoryRequestRepository
from .access import AccessPolicy
from .catalog import CategoryCatalog, clean_skills
from .moderation import APPROVED_COMMENT, REJECTED_COMMENT, ModerationWorkflow

logger = logging.getLogger(__name__)

__all__ = ["APPROVED_COMMENT", "REJECTED_COMMENT", "CategoryRequestWorkflow"]

MAX_CATEGORY_NAME = 100


class CategoryRequestWorkflow(ModerationWorkflow):
    """
    Moves user-proposed categories from Pending to Approved or Rejected.

    Approval writes the catalog entry before flipping the status, so a
    failure between the two leaves the request Pending and a retry reuses
    the entry instead of duplicating it.
    """

    label = "Category request"

    def __init__(
        self,
        repository: CategoryRequestRepository,
        catalog: CategoryCatalog,
        access: AccessPolicy,
    ) -> None:
        super().__init__(repository, access)
        self.catalog = catalog

    async def submit_request(
        self, actor: User, category_name: str, suggested_skills: Optional[list[str]] = None
    ) -> str:
        """
        Record a new category proposal.

        Args:
            actor: Requesting user
            category_name: Proposed category name
            suggested_skills: Skills the requester expects under the category

        Returns:
            The new request id

        Raises:
            ValidationError: Category name is blank or too long
        """
        name = " ".join((category_name or "").split())
        if not name:
            raise ValidationError("Category name is required")
        if len(name) > MAX_CATEGORY_NAME:
            raise ValidationError(f"Category name must be at most {MAX_CATEGORY_NAME} characters")

        request_id = await self.repository.create(
            user_id=actor.id,
            user_email=actor.email,
            category_name=name,
            suggested_skills=clean_skills(suggested_skills or []),
        )
        logger.info(f"Category request created: {request_id} ({name}) by user_id={actor.id}")
        return request_id

    async def _apply(self, request: CategoryRequest) -> tuple[str, bool]:
        category, created = await self.catalog.merge_or_create(
            request.category_name, request.suggested_skills
        )
        return category.category_id, created

    async def _existing_target(self, request: CategoryRequest) -> Optional[str]:
        existing = await self.catalog.find_by_name(request.category_name)
        return existing.category_id if existing else None

    def _result(
        self, request: CategoryRequest, category_id: Optional[str], changed: bool
    ) -> ApprovalResult:
        return ApprovalResult(request=request, category_id=category_id, created=changed)
