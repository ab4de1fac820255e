import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.asgi import SentryAsgiMiddleware

from loggers import get_logger
from src.auth.dependencies import get_jwt_manager
from src.auth.security import JWTManager
from src.core.middleware import register_middlewares
from src.main.config import config
from src.main.lifespan import lifespan
from src.main.presentation import include_exceptions_handlers, include_routers

logging.getLogger("uvicorn.access").disabled = True
logger = get_logger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Auth",
        "description": "Bearer session tokens and role checks.",
    },
    {"name": "System", "description": "Health and clock endpoints."},
]


def get_application(jwt_manager: JWTManager | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        jwt_manager: Token manager used by every guarded route instead of the
            one built from JWT_SECRET_KEY
    """
    application = FastAPI(
        title=config.app.PROJECT_NAME,
        debug=config.app.DEBUG,
        version=config.app.VERSION,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
        swagger_ui_parameters={"persistAuthorization": True},
    )

    if jwt_manager is not None:
        application.dependency_overrides[get_jwt_manager] = lambda: jwt_manager
        logger.info("Using supplied token manager: %r", jwt_manager)

    # Register custom middlewares
    register_middlewares(application)

    # CORS
    application.add_middleware(
        CORSMiddleware,  # noqa
        allow_origins=config.app.CORS_ALLOWED_ORIGINS,
        allow_credentials=config.app.CORS_ALLOW_CREDENTIALS,
        allow_methods=config.app.CORS_ALLOWED_METHODS,
        allow_headers=config.app.CORS_ALLOWED_HEADERS,
        expose_headers=config.app.CORS_EXPOSE_HEADERS,
    )

    # Custom exceptions
    include_exceptions_handlers(application)

    # Routers
    include_routers(application)
    logger.info("API endpoints registered: %s", len(application.routes))

    # Sentry middleware for error tracking
    application.add_middleware(SentryAsgiMiddleware)

    return application


app = get_application()
