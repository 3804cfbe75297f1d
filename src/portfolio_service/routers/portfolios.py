"""Portfolio API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_current_user, get_portfolio_service
from ..models.portfolio import Portfolio, PortfolioFilters
from ..models.user import User
from ..services.portfolios import PortfolioService

router = APIRouter(prefix="/portfolios", tags=["Portfolios"])


@router.get("", response_model=list[Portfolio])
async def list_portfolios(
    min_experience: Optional[int] = Query(None, ge=0),
    max_experience: Optional[int] = Query(None, ge=0),
    skills: list[str] = Query([]),
    nationality: list[str] = Query([]),
    designation: list[str] = Query([]),
    search_term: Optional[str] = Query(None),
    service: PortfolioService = Depends(get_portfolio_service),
) -> list[Portfolio]:
    """Directory of published portfolios, most recently updated first."""
    filters = PortfolioFilters(
        min_experience=min_experience,
        max_experience=max_experience,
        skills=skills,
        nationality=nationality,
        designation=designation,
        search_term=search_term,
    )
    return await service.list_public(filters)


@router.get("/me", response_model=Portfolio)
async def get_my_portfolio(
    user: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio:
    """Get the caller's own portfolio."""
    return await service.get_portfolio(user.id)


@router.delete("/me", status_code=204)
async def delete_my_portfolio(
    user: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
) -> None:
    """Delete the caller's portfolio and reset their form."""
    await service.delete_portfolio(user.id)


@router.get("/{owner_id}", response_model=Portfolio)
async def view_portfolio(
    owner_id: str,
    user: User = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Portfolio:
    """View a portfolio; visits by other users are counted."""
    return await service.get_public_portfolio(user.id, owner_id)
