"""Skill request API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_current_user, get_skill_workflow
from ..models.category_request import CategoryRequestComment, CategoryRequestReject, RequestStatus
from ..models.skill_request import SkillApprovalResult, SkillRequest, SkillRequestCreate
from ..models.user import User
from ..services.skill_requests import SkillRequestWorkflow

router = APIRouter(prefix="/skill-requests", tags=["Skill Requests"])


@router.post("", response_model=SkillRequest, status_code=201)
async def submit_request(
    data: SkillRequestCreate,
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> SkillRequest:
    """Propose a skill for an existing category."""
    request_id = await workflow.submit_request(user, data.skill_name, data.category_id)
    return await workflow.get_request(request_id)


@router.get("", response_model=list[SkillRequest])
async def list_requests(
    status: Optional[RequestStatus] = Query(None),
    user_id: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> list[SkillRequest]:
    """List requests newest first. Non-admins only see their own."""
    return await workflow.list_requests(user.id, status=status, user_id=user_id)


@router.get("/{request_id}", response_model=SkillRequest)
async def get_request(
    request_id: str,
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> SkillRequest:
    request = await workflow.get_request(request_id)
    if request.user_id != user.id:
        await workflow.access.require_admin(user.id)
    return request


@router.post("/{request_id}/approve", response_model=SkillApprovalResult)
async def approve_request(
    request_id: str,
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> SkillApprovalResult:
    """Admin: approve a request and add the skill to its category."""
    return await workflow.approve(user.id, request_id)


@router.post("/{request_id}/reject", response_model=SkillRequest)
async def reject_request(
    request_id: str,
    data: Optional[CategoryRequestReject] = None,
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> SkillRequest:
    """Admin: reject a request."""
    return await workflow.reject(user.id, request_id, data.reason if data else None)


@router.put("/{request_id}/comment", response_model=SkillRequest)
async def update_comment(
    request_id: str,
    data: CategoryRequestComment,
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> SkillRequest:
    """Admin: edit the comment on a request."""
    return await workflow.update_comment(user.id, request_id, data.comment)


@router.delete("/{request_id}", status_code=204)
async def delete_request(
    request_id: str,
    user: User = Depends(get_current_user),
    workflow: SkillRequestWorkflow = Depends(get_skill_workflow),
) -> None:
    """Delete a request, or withdraw one's own pending request."""
    await workflow.delete_request(user.id, request_id)
