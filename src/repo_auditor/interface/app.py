"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repo_auditor.infrastructure.config import Settings, get_settings
from repo_auditor.interface.dependencies import shutdown, startup
from repo_auditor.interface.error_handlers import register_error_handlers
from repo_auditor.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup(app.state.settings)
    yield
    await shutdown()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="GitHub Repo Auditor",
        version="1.0.0",
        description=(
            "Takes a GitHub repository URL and returns its metadata, "
            "language breakdown, README and an AI-generated summary."
        ),
        lifespan=_lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    return app
