# docsite/main.py
import re

from fastapi import FastAPI
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from .api.v1 import details, health
from .core.config import get_settings
from .core.logs import configure_logging


class NormalizePathMiddleware(BaseHTTPMiddleware):
    """Collapse repeated slashes so //fmt maps to /fmt."""

    async def dispatch(self, request, call_next):
        scope = request.scope
        original_path = scope.get("path", "")
        normalized_path = re.sub(r"/{2,}", "/", original_path)
        if normalized_path != original_path:
            logger.debug("Normalizing path from {} to {}", original_path, normalized_path)
            scope["path"] = normalized_path
        return await call_next(request)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.APP_NAME, version="1.0.0")
    app.add_middleware(NormalizePathMiddleware)

    # The details router ends in a catch-all route and must come last.
    app.include_router(health.router, tags=["health"])
    app.include_router(details.router, tags=["details"])
    logger.info("{} started (env={})", settings.APP_NAME, settings.ENV)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
