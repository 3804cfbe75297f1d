"""Tests for the skill request workflow."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from portfolio_service.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from portfolio_service.models.category_request import RequestStatus
from portfolio_service.models.user import User
from portfolio_service.services.moderation import APPROVED_COMMENT, REJECTED_COMMENT

ALICE = User(id="user-1", email="alice@example.com")
BOB = User(id="user-2", email="bob@example.com")


@pytest_asyncio.fixture
async def languages(catalog):
    return await catalog.create_category("admin-1", "Programming Languages", skills=["Python"])


@pytest.mark.asyncio
async def test_submit_records_category(skill_workflow, languages):
    """Test that a skill request stores the skill and its target category."""
    request_id = await skill_workflow.submit_request(ALICE, "  Rust ", languages.category_id)

    request = await skill_workflow.get_request(request_id)

    assert request.skill_name == "Rust"
    assert request.category_id == languages.category_id
    assert request.category_name == "Programming Languages"
    assert request.status is RequestStatus.PENDING
    assert request.user_email == "alice@example.com"


@pytest.mark.asyncio
async def test_submit_validation(skill_workflow, languages):
    """Test that blank skills and unknown categories are refused."""
    with pytest.raises(ValidationError):
        await skill_workflow.submit_request(ALICE, "  ", languages.category_id)
    with pytest.raises(NotFoundError):
        await skill_workflow.submit_request(ALICE, "Rust", "missing")

    assert await skill_workflow.list_requests("admin-1") == []


@pytest.mark.asyncio
async def test_approve_adds_skill_to_category(skill_workflow, catalog, languages):
    """Test that approval appends the skill to the category and marks the request."""
    request_id = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)

    result = await skill_workflow.approve("admin-1", request_id)

    assert result.added is True
    assert result.category_id == languages.category_id
    assert result.request.status is RequestStatus.APPROVED
    assert result.request.admin_comment == APPROVED_COMMENT
    assert (await catalog.get_category(languages.category_id)).skills == ["Python", "Rust"]


@pytest.mark.asyncio
async def test_approve_is_idempotent(skill_workflow, catalog, languages):
    """Test that approving twice lists the skill once."""
    request_id = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)

    await skill_workflow.approve("admin-1", request_id)
    second = await skill_workflow.approve("admin-1", request_id)

    assert second.added is False
    assert second.category_id == languages.category_id
    assert (await catalog.get_category(languages.category_id)).skills == ["Python", "Rust"]


@pytest.mark.asyncio
async def test_approve_known_skill_adds_nothing(skill_workflow, catalog, languages):
    """Test that a skill already in the category is approved without a duplicate."""
    request_id = await skill_workflow.submit_request(ALICE, "python", languages.category_id)

    result = await skill_workflow.approve("admin-1", request_id)

    assert result.added is False
    assert result.request.status is RequestStatus.APPROVED
    assert (await catalog.get_category(languages.category_id)).skills == ["Python"]


@pytest.mark.asyncio
async def test_approve_after_category_deleted(skill_workflow, catalog, languages):
    """Test that a request for a deleted category stays pending."""
    request_id = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)
    await catalog.delete_category("admin-1", languages.category_id)

    with pytest.raises(NotFoundError):
        await skill_workflow.approve("admin-1", request_id)

    assert (await skill_workflow.get_request(request_id)).status is RequestStatus.PENDING


@pytest.mark.asyncio
async def test_status_write_failure_is_retryable(skill_workflow, catalog, languages):
    """Test that a failed status write keeps the request pending and a retry converges."""
    request_id = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)
    set_status = skill_workflow.repository.set_status
    skill_workflow.repository.set_status = AsyncMock(side_effect=PersistenceError("down"))

    with pytest.raises(PersistenceError):
        await skill_workflow.approve("admin-1", request_id)

    assert (await skill_workflow.get_request(request_id)).status is RequestStatus.PENDING

    skill_workflow.repository.set_status = set_status
    result = await skill_workflow.approve("admin-1", request_id)

    assert result.request.status is RequestStatus.APPROVED
    assert (await catalog.get_category(languages.category_id)).skills == ["Python", "Rust"]


@pytest.mark.asyncio
async def test_reject_and_transitions(skill_workflow, catalog, languages):
    """Test that rejection leaves the catalog alone and blocks a later approval."""
    request_id = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)

    rejected = await skill_workflow.reject("admin-1", request_id)

    assert rejected.status is RequestStatus.REJECTED
    assert rejected.admin_comment == REJECTED_COMMENT
    with pytest.raises(InvalidTransitionError):
        await skill_workflow.approve("admin-1", request_id)
    assert (await catalog.get_category(languages.category_id)).skills == ["Python"]


@pytest.mark.asyncio
async def test_only_admins_moderate(skill_workflow, languages):
    """Test that non-admins cannot approve or reject skill requests."""
    request_id = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)

    with pytest.raises(AuthorizationError):
        await skill_workflow.approve("user-1", request_id)
    with pytest.raises(AuthorizationError):
        await skill_workflow.reject("user-2", request_id)

    assert (await skill_workflow.get_request(request_id)).status is RequestStatus.PENDING


@pytest.mark.asyncio
async def test_listing_and_withdrawal(skill_workflow, languages):
    """Test that users list only their own requests and can withdraw pending ones."""
    mine = await skill_workflow.submit_request(ALICE, "Rust", languages.category_id)
    theirs = await skill_workflow.submit_request(BOB, "Kotlin", languages.category_id)

    assert [r.id for r in await skill_workflow.list_requests("user-1")] == [mine]
    assert [r.id for r in await skill_workflow.list_requests("admin-1")] == [theirs, mine]

    with pytest.raises(AuthorizationError):
        await skill_workflow.delete_request("user-1", theirs)
    await skill_workflow.delete_request("user-1", mine)

    with pytest.raises(NotFoundError):
        await skill_workflow.get_request(mine)
