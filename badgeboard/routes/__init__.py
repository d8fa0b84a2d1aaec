"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .assignments import router as assignments_router
from .badges import router as badges_router
from .leaderboard import router as leaderboard_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    # Assignment paths are literal and must be matched before /{badge_id}
    app.include_router(assignments_router, prefix="/api/badges", tags=["assignments"])
    app.include_router(badges_router, prefix="/api/badges", tags=["badges"])
    app.include_router(leaderboard_router, prefix="/api", tags=["leaderboard"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
