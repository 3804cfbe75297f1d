"""Skill request moderation workflow."""

import logging
from typing import Optional

from ..errors import ValidationError
from ..models.skill_request import SkillApprovalResult, SkillRequest
from ..models.user import User
from ..repositories.skill_request_repo import SkillRequestRepository
from .access import AccessPolicy
from .catalog import CategoryCatalog
from .moderation import ModerationWorkflow

logger = logging.getLogger(__name__)

MAX_SKILL_NAME = 100


class SkillRequestWorkflow(ModerationWorkflow):
    """
    Moves user-proposed skills for an existing category from Pending to
    Approved or Rejected. Approval adds the skill to the category's list.
    """

    label = "Skill request"

    def __init__(
        self,
        repository: SkillRequestRepository,
        catalog: CategoryCatalog,
        access: AccessPolicy,
    ) -> None:
        super().__init__(repository, access)
        self.catalog = catalog

    async def submit_request(self, actor: User, skill_name: str, category_id: str) -> str:
        """
        Record a new skill proposal.

        Raises:
            ValidationError: Skill name is blank or too long
            NotFoundError: Category does not exist
        """
        name = " ".join((skill_name or "").split())
        if not name:
            raise ValidationError("Skill name is required")
        if len(name) > MAX_SKILL_NAME:
            raise ValidationError(f"Skill name must be at most {MAX_SKILL_NAME} characters")
        category = await self.catalog.get_category(category_id)

        request_id = await self.repository.create(
            user_id=actor.id,
            user_email=actor.email,
            skill_name=name,
            category_id=category.category_id,
            category_name=category.name,
        )
        logger.info(
            f"Skill request created: {request_id} ({name} in {category.name}) by user_id={actor.id}"
        )
        return request_id

    async def _apply(self, request: SkillRequest) -> tuple[str, bool]:
        category, added = await self.catalog.add_skill(request.category_id, request.skill_name)
        return category.category_id, added

    async def _existing_target(self, request: SkillRequest) -> Optional[str]:
        return request.category_id

    def _result(
        self, request: SkillRequest, category_id: Optional[str], changed: bool
    ) -> SkillApprovalResult:
        return SkillApprovalResult(request=request, category_id=category_id, added=changed)
