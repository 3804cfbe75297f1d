"""FastAPI dependencies: gateway, caller identity and services."""

from typing import Optional

from fastapi import Depends, Header, Request

from .config import get_settings
from .database import Database, PersistenceGateway
from .forms.engine import MultiStepFormEngine
from .forms.session import FormSession, FormSessionRegistry
from .models.user import User
from .repositories import (
    CategoryRepository,
    CategoryRequestRepository,
    PortfolioRepository,
    SkillRequestRepository,
    UserRepository,
)
from .services import (
    AccessPolicy,
    CategoryCatalog,
    CategoryRequestWorkflow,
    PortfolioService,
    SkillRequestWorkflow,
)


def get_gateway() -> PersistenceGateway:
    return Database.get_gateway()


def get_access(gateway: PersistenceGateway = Depends(get_gateway)) -> AccessPolicy:
    return AccessPolicy(UserRepository(gateway), get_settings().admin_email_list)


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    access: AccessPolicy = Depends(get_access),
) -> User:
    """Caller identity set by the upstream auth proxy."""
    return await access.resolve(x_user_id, x_user_email)


def get_catalog(
    gateway: PersistenceGateway = Depends(get_gateway),
    access: AccessPolicy = Depends(get_access),
) -> CategoryCatalog:
    return CategoryCatalog(CategoryRepository(gateway), access)


def get_workflow(
    gateway: PersistenceGateway = Depends(get_gateway),
    catalog: CategoryCatalog = Depends(get_catalog),
    access: AccessPolicy = Depends(get_access),
) -> CategoryRequestWorkflow:
    return CategoryRequestWorkflow(CategoryRequestRepository(gateway), catalog, access)


def get_skill_workflow(
    gateway: PersistenceGateway = Depends(get_gateway),
    catalog: CategoryCatalog = Depends(get_catalog),
    access: AccessPolicy = Depends(get_access),
) -> SkillRequestWorkflow:
    return SkillRequestWorkflow(SkillRequestRepository(gateway), catalog, access)


def get_sessions(request: Request) -> FormSessionRegistry:
    return request.app.state.form_sessions


def get_form_session(
    user: User = Depends(get_current_user),
    sessions: FormSessionRegistry = Depends(get_sessions),
) -> FormSession:
    return sessions.get(user.id)


def get_form_engine(
    session: FormSession = Depends(get_form_session),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MultiStepFormEngine:
    return MultiStepFormEngine(session, PortfolioRepository(gateway))


def get_portfolio_service(
    gateway: PersistenceGateway = Depends(get_gateway),
    sessions: FormSessionRegistry = Depends(get_sessions),
) -> PortfolioService:
    return PortfolioService(PortfolioRepository(gateway), sessions)
