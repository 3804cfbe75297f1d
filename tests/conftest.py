"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portfolio_service.database import USERS, InMemoryGateway
from portfolio_service.deps import get_gateway
from portfolio_service.forms.engine import MultiStepFormEngine
from portfolio_service.forms.session import FormSession, FormSessionRegistry
from portfolio_service.main import app
from portfolio_service.repositories import (
    CategoryRepository,
    CategoryRequestRepository,
    PortfolioRepository,
    SkillRequestRepository,
    UserRepository,
)
from portfolio_service.services import (
    AccessPolicy,
    CategoryCatalog,
    CategoryRequestWorkflow,
    PortfolioService,
    SkillRequestWorkflow,
)

ADMIN_EMAILS = ["lead@portfolio-collection.com"]


@pytest_asyncio.fixture
async def gateway():
    """In-memory gateway seeded with users."""
    gw = InMemoryGateway()
    await gw.create(USERS, {"email": "admin@example.com", "role": "admin"}, doc_id="admin-1")
    await gw.create(USERS, {"email": "alice@example.com", "role": "user"}, doc_id="user-1")
    await gw.create(USERS, {"email": "bob@example.com", "role": "user"}, doc_id="user-2")
    # Admin through the configured email list, not the stored role
    await gw.create(
        USERS, {"email": "Lead@Portfolio-Collection.com", "role": "user"}, doc_id="lead-1"
    )
    yield gw


@pytest.fixture
def access(gateway):
    return AccessPolicy(UserRepository(gateway), ADMIN_EMAILS)


@pytest.fixture
def catalog(gateway, access):
    return CategoryCatalog(CategoryRepository(gateway), access)


@pytest.fixture
def workflow(gateway, catalog, access):
    return CategoryRequestWorkflow(CategoryRequestRepository(gateway), catalog, access)


@pytest.fixture
def skill_workflow(gateway, catalog, access):
    return SkillRequestWorkflow(SkillRequestRepository(gateway), catalog, access)


@pytest.fixture
def portfolio_repo(gateway):
    return PortfolioRepository(gateway)


@pytest.fixture
def sessions():
    return FormSessionRegistry()


@pytest.fixture
def session(sessions):
    return sessions.get("user-1")


@pytest.fixture
def engine(session, portfolio_repo):
    return MultiStepFormEngine(session, portfolio_repo)


@pytest.fixture
def portfolio_service(portfolio_repo, sessions):
    return PortfolioService(portfolio_repo, sessions)


@pytest.fixture
def valid_draft():
    """Draft data that passes every step."""
    return {
        "employee_code": "EMP-001",
        "designation": "Backend Engineer",
        "years_of_experience": 6,
        "nationality": "Bangladeshi",
        "language_proficiency": [{"language": "English", "proficiency": "Fluent"}],
        "email": "alice@example.com",
        "mobile_no": "+8801700000000",
        "summary": "Backend engineer focused on APIs, data pipelines and cloud infrastructure.",
        "references": [
            {"name": "John Smith", "contact_info": "john@example.com", "relationship": "Manager"}
        ],
        "education": [
            {"degree": "BSc in CSE", "institution": "BUET", "passing_year": 2017, "grade": "3.8"}
        ],
        "technical_skills": [
            {
                "category": "Programming Languages",
                "skills": ["Python", "Go"],
                "proficiency": "Expert",
            }
        ],
        "work_experience": [
            {
                "company": "Acme",
                "position": "Engineer",
                "start_date": "2019-01",
                "end_date": None,
                "is_current_role": True,
                "responsibilities": ["Build APIs"],
                "technologies": ["FastAPI"],
            }
        ],
        "projects": [
            {
                "name": "Portfolio Builder",
                "description": "A portfolio builder for engineering teams.",
                "contribution": "Lead developer",
                "technologies": ["Python"],
                "start_date": "2023-01",
                "end_date": None,
                "is_ongoing": True,
                "role": "Lead",
                "responsibilities": ["Design the API"],
                "outcomes": ["Shipped to 200 users"],
                "url": "https://example.com",
                "repository": "https://github.com/example/portfolio",
            }
        ],
    }


@pytest_asyncio.fixture
async def client(gateway):
    """HTTP client against the app, backed by the in-memory gateway."""
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.state.form_sessions = FormSessionRegistry()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
