"""Company leaderboard."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..models import LeaderboardResponse
from ..services import build_leaderboard
from ..state import AppState, get_state
from .deps import get_caller_id, require_access, require_company_id

router = APIRouter()


@router.get("/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(
    company_id: Optional[str] = Query(None, description="Company to rank"),
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """
    Every known member of the company, best badge holders first.
    Members without badges follow, alphabetically.
    """
    company_id = require_company_id(company_id)
    require_access(state, company_id, caller_id)
    entries = build_leaderboard(state.badge_service, state.platform, company_id, caller_id)
    return {"leaderboard": [entry.to_dict() for entry in entries]}
