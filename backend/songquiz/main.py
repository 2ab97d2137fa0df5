"""Song Quiz API — application factory and ASGI entry point.

Invariants:
    - Every router is listed in ROUTERS; nothing is auto-discovered
    - Logging and the database are set up in the lifespan, torn down after it
    - Error handlers are registered before the app serves a request

Run with: uvicorn songquiz.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from songquiz.api.error_handlers import register_error_handlers
from songquiz.api.routes import health, membership, quizzes, results, submissions
from songquiz.config import Settings, get_settings
from songquiz.infrastructure import database
from songquiz.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = (
    health.router,
    quizzes.router,
    membership.router,
    submissions.router,
    results.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    logger.info("Song Quiz API started")
    try:
        yield
    finally:
        if database.db_manager:
            await database.db_manager.dispose()
        logger.info("Song Quiz API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(title="Song Quiz API", version="1.0.0", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in ROUTERS:
        application.include_router(router)
    register_error_handlers(application)
    return application


app = create_app()
