"""FastAPI application factory for the SafeSkill web API."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from safeskill import __version__
from safeskill.config import SafeSkillConfig
from safeskill.storage.db import get_db


def create_app(config: SafeSkillConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config or SafeSkillConfig.load()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db = await get_db(config.data_dir / "safeskill.db")
        try:
            yield
        finally:
            await app.state.db.close()

    app = FastAPI(
        title="SafeSkill",
        version=__version__,
        docs_url="/api/docs",
        lifespan=lifespan,
    )
    app.state.config = config

    from safeskill.web.api.scans import router as scans_router

    app.include_router(scans_router, prefix="/api")

    return app
