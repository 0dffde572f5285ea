"""
Curriculum HTTP application.

Builds the FastAPI app: CORS, request logging and correlation middleware,
and the health, courses, lessons and dashboard routers under api_prefix.

Dependencies: fastapi, curriculum.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from curriculum import __version__
from curriculum.boundary.db import get_async_engine
from curriculum.configs import get_settings
from curriculum.observability import configure_logging
from curriculum.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    courses_router,
    dashboard_router,
    health_router,
    lessons_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup; release pooled connections on shutdown."""
    configure_logging(get_settings().log_level)
    logger = logging.getLogger("uvicorn")

    logger.info("Curriculum service starting")

    yield

    await get_async_engine().dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="Curriculum API",
        description="Course authoring, lesson ordering and learner progression",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers under the versioned API prefix
    for router in (health_router, courses_router, lessons_router, dashboard_router):
        app.include_router(router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "curriculum.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
