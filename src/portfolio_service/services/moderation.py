"""Pending → Approved | Rejected moderation shared by category and skill requests."""

import logging
from typing import Any, Optional

from ..errors import AuthorizationError, InvalidTransitionError, NotFoundError, PersistenceError
from ..models.category_request import RequestStatus
from ..repositories.category_request_repo import CategoryRequestRepository
from .access import AccessPolicy

logger = logging.getLogger(__name__)

APPROVED_COMMENT = "Approved by admin"
REJECTED_COMMENT = "Rejected by admin"


class ModerationWorkflow:
    """
    Base workflow for user proposals reviewed by an admin.

    Pending is the only non-terminal state. Subclasses apply the catalog
    change of an approval in `_apply`; it runs before the status flip and
    must be idempotent, so a failure between the two leaves the request
    Pending and a retry converges.
    """

    label = "Request"

    def __init__(self, repository: CategoryRequestRepository, access: AccessPolicy) -> None:
        self.repository = repository
        self.access = access

    # ----- Hooks -----

    async def _apply(self, request: Any) -> tuple[str, bool]:
        """Write the approval into the catalog; returns (category_id, changed)."""
        raise NotImplementedError

    async def _existing_target(self, request: Any) -> Optional[str]:
        """Category id an already approved request maps to."""
        raise NotImplementedError

    def _result(self, request: Any, category_id: Optional[str], changed: bool) -> Any:
        raise NotImplementedError

    # ----- Reads -----

    async def get_request(self, request_id: str) -> Any:
        request = await self.repository.get_by_id(request_id)
        if not request:
            raise NotFoundError(f"{self.label} not found: {request_id}")
        return request

    async def list_requests(
        self,
        actor_id: str,
        status: Optional[RequestStatus] = None,
        user_id: Optional[str] = None,
    ) -> list:
        """
        List requests newest first.

        Admins see every request; other callers only their own.
        """
        if not await self.access.is_admin(actor_id):
            if user_id is not None and user_id != actor_id:
                raise AuthorizationError("Cannot list another user's requests")
            user_id = actor_id
        return await self.repository.list_requests(status=status, user_id=user_id)

    # ----- Transitions -----

    async def approve(self, actor_id: str, request_id: str) -> Any:
        """
        Admin: approve a request and apply it to the catalog.

        Approving an already approved request is a no-op.

        Raises:
            AuthorizationError: Caller is not an admin
            NotFoundError: Request does not exist
            InvalidTransitionError: Request was rejected
            PersistenceError: Status could not be stored; request stays Pending
        """
        await self.access.require_admin(actor_id)
        request = await self.get_request(request_id)

        if request.status is RequestStatus.APPROVED:
            logger.info(f"{self.label} already approved: {request_id}")
            return self._result(request, await self._existing_target(request), False)
        if request.status is RequestStatus.REJECTED:
            raise InvalidTransitionError(
                f"{self.label} {request_id} is {request.status.value}; cannot approve"
            )

        category_id, changed = await self._apply(request)

        try:
            await self.repository.set_status(request_id, RequestStatus.APPROVED, APPROVED_COMMENT)
        except PersistenceError:
            logger.error(
                f"Approval of {request_id} not recorded; catalog entry "
                f"{category_id} kept for retry"
            )
            raise

        logger.info(
            f"{self.label} approved: {request_id} -> category {category_id} "
            f"by admin_id={actor_id}"
        )
        return self._result(await self.get_request(request_id), category_id, changed)

    async def reject(self, actor_id: str, request_id: str, reason: Optional[str] = None) -> Any:
        """
        Admin: reject a pending request. The catalog is not touched.

        Raises:
            AuthorizationError: Caller is not an admin
            NotFoundError: Request does not exist
            InvalidTransitionError: Request was approved
        """
        await self.access.require_admin(actor_id)
        request = await self.get_request(request_id)

        if request.status is RequestStatus.REJECTED:
            return request
        if request.status is RequestStatus.APPROVED:
            raise InvalidTransitionError(
                f"{self.label} {request_id} is {request.status.value}; cannot reject"
            )

        comment = reason.strip() if reason and reason.strip() else REJECTED_COMMENT
        await self.repository.set_status(request_id, RequestStatus.REJECTED, comment)
        logger.info(f"{self.label} rejected: {request_id} by admin_id={actor_id} - {comment}")
        return await self.get_request(request_id)

    async def update_comment(self, actor_id: str, request_id: str, comment: str) -> Any:
        """Admin: replace the comment; allowed in every state."""
        await self.access.require_admin(actor_id)
        await self.get_request(request_id)
        await self.repository.set_comment(request_id, comment.strip())
        return await self.get_request(request_id)

    async def delete_request(self, actor_id: str, request_id: str) -> None:
        """Admins delete any request; owners may withdraw their own pending one."""
        request = await self.get_request(request_id)
        if not await self.access.is_admin(actor_id):
            if request.user_id != actor_id:
                raise AuthorizationError("Cannot delete another user's request")
            if request.status.is_terminal:
                raise InvalidTransitionError(
                    f"{self.label} {request_id} is {request.status.value}; cannot withdraw"
                )
        await self.repository.delete(request_id)
        logger.info(f"{self.label} deleted: {request_id} by user_id={actor_id}")
