"""Portfolio Service - FastAPI Application."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .database import Database, init_indexes
from .errors import PortfolioServiceError
from .forms.session import FormSessionRegistry
from .repositories import CategoryRepository, UserRepository
from .routers import (
    categories_router,
    category_requests_router,
    form_router,
    portfolios_router,
    skill_requests_router,
)
from .services import AccessPolicy, CategoryCatalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(f"Starting {settings.service_name} v{settings.service_version}")

    await Database.connect()
    gateway = Database.get_gateway()
    logger.info(f"Connected to {settings.storage_backend} storage")

    await init_indexes(gateway)
    logger.info("Database indexes initialized")

    if settings.seed_default_categories:
        access = AccessPolicy(UserRepository(gateway), settings.admin_email_list)
        await CategoryCatalog(CategoryRepository(gateway), access).seed_defaults()

    yield

    # Shutdown
    await Database.disconnect()
    logger.info("Disconnected from storage")


settings = get_settings()

app = FastAPI(
    title="Portfolio Service",
    description="Professional portfolios with a moderated skill category catalog",
    version=settings.service_version,
    lifespan=lifespan,
)
app.state.form_sessions = FormSessionRegistry(
    max_sessions=settings.form_session_limit,
    idle_timeout=settings.form_session_idle_seconds,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(categories_router, prefix="/api")
app.include_router(category_requests_router, prefix="/api")
app.include_router(skill_requests_router, prefix="/api")
app.include_router(portfolios_router, prefix="/api")
app.include_router(form_router, prefix="/api")


@app.exception_handler(PortfolioServiceError)
async def service_error_handler(request: Request, exc: PortfolioServiceError) -> JSONResponse:
    """Translate service errors into JSON responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio_service.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
