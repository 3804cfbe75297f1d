"""Category request API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_current_user, get_workflow
from ..models.category_request import (
    ApprovalResult,
    CategoryRequest,
    CategoryRequestComment,
    CategoryRequestCreate,
    CategoryRequestReject,
    RequestStatus,
)
from ..models.user import User
from ..services.category_requests import CategoryRequestWorkflow

router = APIRouter(prefix="/category-requests", tags=["Category Requests"])


@router.post("", response_model=CategoryRequest, status_code=201)
async def submit_request(
    data: CategoryRequestCreate,
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> CategoryRequest:
    """Propose a new skill category."""
    request_id = await workflow.submit_request(user, data.category_name, data.suggested_skills)
    return await workflow.get_request(request_id)


@router.get("", response_model=list[CategoryRequest])
async def list_requests(
    status: Optional[RequestStatus] = Query(None),
    user_id: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> list[CategoryRequest]:
    """List requests newest first. Non-admins only see their own."""
    return await workflow.list_requests(user.id, status=status, user_id=user_id)


@router.get("/{request_id}", response_model=CategoryRequest)
async def get_request(
    request_id: str,
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> CategoryRequest:
    """Get a request by ID."""
    request = await workflow.get_request(request_id)
    if request.user_id != user.id:
        await workflow.access.require_admin(user.id)
    return request


@router.post("/{request_id}/approve", response_model=ApprovalResult)
async def approve_request(
    request_id: str,
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> ApprovalResult:
    """Admin: approve a request and add its category to the catalog."""
    return await workflow.approve(user.id, request_id)


@router.post("/{request_id}/reject", response_model=CategoryRequest)
async def reject_request(
    request_id: str,
    data: Optional[CategoryRequestReject] = None,
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> CategoryRequest:
    """Admin: reject a request."""
    return await workflow.reject(user.id, request_id, data.reason if data else None)


@router.put("/{request_id}/comment", response_model=CategoryRequest)
async def update_comment(
    request_id: str,
    data: CategoryRequestComment,
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> CategoryRequest:
    """Admin: edit the comment on a request."""
    return await workflow.update_comment(user.id, request_id, data.comment)


@router.delete("/{request_id}", status_code=204)
async def delete_request(
    request_id: str,
    user: User = Depends(get_current_user),
    workflow: CategoryRequestWorkflow = Depends(get_workflow),
) -> None:
    """Delete a request, or withdraw one's own pending request."""
    await workflow.delete_request(user.id, request_id)
