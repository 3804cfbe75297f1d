"""Skill category API endpoints."""

from fastapi import APIRouter, Depends, Query

from ..deps import get_catalog, get_current_user
from ..models.category import SkillCategory, SkillCategoryCreate, SkillCategoryUpdate
from ..models.user import User
from ..services.catalog import CategoryCatalog

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[SkillCategory])
async def list_categories(
    approved_only: bool = Query(True),
    catalog: CategoryCatalog = Depends(get_catalog),
) -> list[SkillCategory]:
    """List skill categories ordered by name."""
    return await catalog.list_categories(approved_only=approved_only)


@router.get("/{category_id}", response_model=SkillCategory)
async def get_category(
    category_id: str, catalog: CategoryCatalog = Depends(get_catalog)
) -> SkillCategory:
    """Get a skill category by ID."""
    return await catalog.get_category(category_id)


@router.post("", response_model=SkillCategory, status_code=201)
async def create_category(
    data: SkillCategoryCreate,
    user: User = Depends(get_current_user),
    catalog: CategoryCatalog = Depends(get_catalog),
) -> SkillCategory:
    """Admin: create a skill category."""
    return await catalog.create_category(user.id, data.name, data.approved, data.skills)


@router.put("/{category_id}", response_model=SkillCategory)
async def update_category(
    category_id: str,
    data: SkillCategoryUpdate,
    user: User = Depends(get_current_user),
    catalog: CategoryCatalog = Depends(get_catalog),
) -> SkillCategory:
    """Admin: update a skill category."""
    return await catalog.update_category(user.id, category_id, data)


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    user: User = Depends(get_current_user),
    catalog: CategoryCatalog = Depends(get_catalog),
) -> None:
    """Admin: delete a skill category."""
    await catalog.delete_category(user.id, category_id)
