from collections.abc import Awaitable, Callable
import time

from fastapi import FastAPI, Request
from starlette.responses import Response

from loggers import get_logger

timing_logger = get_logger("src.request.timing", plain_format=True)

SLOW_REQUEST_SECONDS = 0.5


def register_middlewares(app: FastAPI) -> None:
    """Registers all custom middlewares in proper order"""

    @app.middleware("http")
    async def security_headers_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Content-Security-Policy", "frame-ancestors 'none'")
        # Responses may echo token claims
        response.headers.setdefault("Cache-Control", "no-store")
        return response

    @app.middleware("http")
    async def request_timing_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        if process_time < SLOW_REQUEST_SECONDS:
            level = timing_logger.info
            category = "[FAST]"
        else:
            level = timing_logger.warning
            category = "[SLOW]"

        level(
            f"{category} {request.method} {request.url.path} "
            f"|{process_time:.3f}s|{response.status_code}"
        )

        return response
