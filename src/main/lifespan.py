from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from loggers import get_logger
from src.auth.dependencies import get_jwt_manager
from src.main.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    init_sentry()
    # Build the token manager up front so a bad secret fails at startup
    manager_factory = app.dependency_overrides.get(get_jwt_manager, get_jwt_manager)
    manager = manager_factory()
    logger.info("Token manager ready: %r", manager)

    yield

    get_jwt_manager.cache_clear()
