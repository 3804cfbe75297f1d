"""Portfolio viewing, directory listing and deletion."""

import logging

from ..errors import NotFoundError
from ..forms.session import FormSessionRegistry
from ..models.portfolio import Portfolio, PortfolioFilters, PortfolioStatus
from ..repositories.portfolio_repo import PortfolioRepository

logger = logging.getLogger(__name__)


def _skill_names(portfolio: Portfolio) -> set[str]:
    return {
        skill.strip().lower()
        for group in portfolio.technical_skills
        for skill in group.skills
        if skill.strip()
    }


def matches_filters(portfolio: Portfolio, filters: PortfolioFilters) -> bool:
    """Directory filter: every given criterion must match."""
    info = portfolio.personal_info

    if filters.search_term and filters.search_term.strip():
        term = filters.search_term.strip().lower()
        haystack = [info.employee_code, info.designation, info.summary, *_skill_names(portfolio)]
        if not any(term in text.lower() for text in haystack):
            return False

    if filters.min_experience is not None and info.years_of_experience < filters.min_experience:
        return False
    if filters.max_experience is not None and info.years_of_experience > filters.max_experience:
        return False

    if filters.skills:
        wanted = {s.strip().lower() for s in filters.skills}
        if not wanted & _skill_names(portfolio):
            return False

    if filters.nationality and info.nationality not in filters.nationality:
        return False
    if filters.designation and info.designation not in filters.designation:
        return False
    return True


class PortfolioService:
    """Read side of portfolios plus owner deletion."""

    def __init__(self, repository: PortfolioRepository, sessions: FormSessionRegistry) -> None:
        self.repository = repository
        self.sessions = sessions

    async def get_portfolio(self, user_id: str) -> Portfolio:
        """The caller's own portfolio, draft or published."""
        portfolio = await self.repository.get(user_id)
        if portfolio is None:
            raise NotFoundError(f"Portfolio not found: {user_id}")
        return portfolio

    async def get_public_portfolio(self, viewer_id: str, owner_id: str) -> Portfolio:
        """
        View a portfolio, counting the visit when the viewer is not the owner.

        Drafts are visible to their owner only.
        """
        portfolio = await self.repository.get(owner_id)
        if portfolio is None:
            raise NotFoundError(f"Portfolio not found: {owner_id}")
        if viewer_id == owner_id:
            return portfolio
        if portfolio.status is not PortfolioStatus.PUBLISHED:
            raise NotFoundError(f"Portfolio not found: {owner_id}")

        await self.repository.increment_visits(owner_id)
        return await self.repository.get(owner_id) or portfolio

    async def list_public(self, filters: PortfolioFilters) -> list[Portfolio]:
        """Published portfolios matching the filters, most recently updated first."""
        portfolios = await self.repository.list_public()
        return [p for p in portfolios if matches_filters(p, filters)]

    async def delete_portfolio(self, user_id: str) -> None:
        """Delete the caller's portfolio and discard their form session."""
        if not await self.repository.delete(user_id):
            raise NotFoundError(f"Portfolio not found: {user_id}")
        self.sessions.discard(user_id)
        logger.info(f"Portfolio deleted for user_id={user_id}")
