"""Root, health and stats endpoints."""

from fastapi import APIRouter, Depends

from ..state import AppState, get_state
from .deps import get_caller_id

router = APIRouter()

SERVICE_NAME = "Badgeboard API"
SERVICE_VERSION = "1.0.0"


@router.get("/")
def root(state: AppState = Depends(get_state)):
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "platform": state.platform_name,
        "endpoints": {
            "badges": ["/api/badges", "/api/badges/{badge_id}"],
            "assignments": ["/api/badges/assign", "/api/badges/assign-by-email"],
            "leaderboard": ["/api/leaderboard"],
            "users": ["/api/users/{user_id}/admin", "/api/users/{user_id}/badges"],
        },
    }


@router.get("/api/health")
def health(state: AppState = Depends(get_state)):
    ok, errors = state.config.validate()
    return {
        "status": "healthy",
        "platform": state.platform_name,
        "config": {"valid": ok, "errors": errors},
    }


@router.get("/api/stats")
def get_stats(
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Store sizes for this process. Requires a signed-in caller."""
    badges = state.badge_service.get_all_badges()
    return {
        "total_badges": len(badges),
        "total_assignments": state.badge_service.count_assignments(),
        "companies_with_badges": len({b.company_id for b in badges}),
    }
