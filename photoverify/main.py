"""FastAPI entry point for the photo verification service."""
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photoverify.api import router as api_v1_router
from photoverify.core.config import settings
from photoverify.core.container import container
from photoverify.core.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[Any, None]:
    """Build the verification services on startup and drop them on shutdown."""
    logger.info(
        "Photo verification service starting",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        vision_auth="api_key" if settings.GOOGLE_API_KEY else (
            "service_account" if settings.GOOGLE_APPLICATION_CREDENTIALS else "default"
        ),
    )
    await container.initialize()

    yield

    await container.cleanup()
    logger.info("Photo verification service stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Checks that progress check-in photos match the conditions of the calibration photo",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    application.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @application.get("/health")
    async def health_check() -> dict:
        """Liveness probe; reports whether the verification services are wired."""
        return {
            "status": "healthy",
            "services_initialized": container.is_initialized,
        }

    return application


app = create_app()
