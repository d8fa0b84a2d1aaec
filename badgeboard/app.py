"""
Badgeboard API: FastAPI app factory.

Use: uvicorn badgeboard.app:app
Or:  from badgeboard import app
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ServerConfig, get_config
from .routes import register_routes
from .services import AccessDeniedError, AuthenticationError, MemberNotFoundError, PlatformError
from .state import get_state

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    """Map platform failures to HTTP statuses."""

    @app.exception_handler(AuthenticationError)
    async def _unauthenticated(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(AccessDeniedError)
    async def _forbidden(request: Request, exc: AccessDeniedError):
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(MemberNotFoundError)
    async def _not_found(request: Request, exc: MemberNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PlatformError)
    async def _platform_failure(request: Request, exc: PlatformError):
        logger.error(f"[platform] {request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=502, content={"detail": "Platform request failed"})


def create_app(config: Optional[ServerConfig] = None) -> FastAPI:
    """Build FastAPI app with CORS, routes, error handlers, and startup logging."""
    config = config or get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app = FastAPI(
        title="Badgeboard API",
        description="Company badges, assignments and leaderboards for embedded apps",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)
    register_routes(app)

    @app.on_event("startup")
    def _startup_logging():
        state = get_state()
        logger.info("[startup] Badgeboard API starting...")
        logger.info(f"[startup] Platform: {state.platform_name}")
        _, errors = state.config.validate()
        for error in errors:
            logger.warning(f"[startup] config: {error}")

    return app


app = create_app()
