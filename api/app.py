"""FastAPI application factory.

Usage:
    python -m cli serve
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.errors import register_exception_handlers
from api.routers import categories, meta, tasks
from config import Config, get_version
from db.schema import init_db
from logger import get_logger
from services.base import Services

logger = get_logger()


def create_app(config: Config, services: Optional[Services] = None) -> FastAPI:
    """Build the tsk API application.

    The schema is brought up to date when the application starts, before
    the first request is served.

    Args:
        config: Application configuration.
        services: Optional services container (testing). If None, one is
            built from config.

    Returns:
        The configured FastAPI application.
    """
    services = services or Services(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting tsk {get_version()} with database {config.db_path}")
        applied = init_db(services.db_manager)
        if applied:
            logger.info(f"Applied {len(applied)} migration(s)")
        yield
        logger.info("Shutting down tsk")

    app = FastAPI(title="tsk", version=get_version(), lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(meta.router, prefix="/api", tags=["Meta"])
    app.include_router(categories.router, prefix="/api", tags=["Categories"])
    app.include_router(tasks.router, prefix="/api", tags=["Tasks"])

    # Mounted last so it only sees paths no API route matched
    if config.static_dir is not None:
        if config.static_dir.is_dir():
            app.mount(
                "/", StaticFiles(directory=config.static_dir, html=True), name="static"
            )
        else:
            logger.warning(f"Static directory not found, skipping: {config.static_dir}")

    return app
