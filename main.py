"""
Job board backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as service_router
from auth.notifications import NotificationSender, build_sender
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, create_tables
from jobs.routes import router as jobs_router

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiosqlite", "sqlalchemy.engine", "httpx", "httpcore"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    notifier: Optional[NotificationSender] = None,
) -> FastAPI:
    """
    Build the application with its own engine, session factory and
    notification sender. Pass ``settings``/``notifier`` to override the
    environment-derived defaults (tests do).
    """
    settings = settings or config

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Ensuring database tables exist…")
        await create_tables(engine)
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Job Board API",
        version="1.0.0",
        description="Signup, login, password reset and job postings.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.notifier = notifier or build_sender(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(service_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(jobs_router, prefix="/api/jobs")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
