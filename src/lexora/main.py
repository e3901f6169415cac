"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from lexora.api.v1.router import router as api_router
from lexora.api.web.views import router as web_router
from lexora.config import get_settings
from lexora.domain.errors import LexoraError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


async def seed_default_prompts() -> None:
    """Make sure the built-in prompt templates exist."""
    from lexora.infrastructure.database import async_session_factory
    from lexora.repositories.prompt_repo import PromptRepository

    async with async_session_factory() as session:
        await PromptRepository(session).ensure_defaults()
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    from lexora.infrastructure.gmail_client import get_gmail_client

    logger.info("Starting Lexora application...")
    logger.info(f"Environment: {settings.environment}")

    await seed_default_prompts()

    yield

    await get_gmail_client().close()
    logger.info("Shutting down Lexora application...")


async def handle_lexora_error(request: Request, exc: LexoraError) -> JSONResponse:
    """Render domain errors as ``{"error": message}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="Lexora",
        description="Meeting transcript summaries with AI titles, refinement and sharing",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    app.add_exception_handler(LexoraError, handle_lexora_error)

    # Include routers
    app.include_router(api_router)
    app.include_router(web_router)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Lightweight health check with DB connectivity test."""
        from lexora.infrastructure.database import async_session_factory

        try:
            async with async_session_factory() as session:
                await session.execute(text("SELECT 1"))
            return JSONResponse({"status": "healthy", "database": "connected"})
        except Exception:
            return JSONResponse(
                {"status": "unhealthy", "database": "disconnected"},
                status_code=503,
            )

    return app


# Create app instance
app = create_app()
