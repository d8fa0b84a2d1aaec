"""Per-user endpoints: admin status and held badges."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import AdminStatusResponse, BadgeListResponse, badge_list
from ..state import AppState, get_state
from .deps import get_caller_id, require_access, require_company_id

router = APIRouter()


@router.get("/{user_id}/admin", response_model=AdminStatusResponse)
def get_admin_status(
    user_id: str,
    company_id: Optional[str] = Query(None),
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Whether the caller is an admin of the company. Callers may only ask about themselves."""
    company_id = require_company_id(company_id)
    if user_id != caller_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    access = state.platform.check_access(company_id, caller_id)
    return AdminStatusResponse(is_admin=access.is_admin, access_level=access.access_level)


@router.get("/{user_id}/badges", response_model=BadgeListResponse)
def get_user_badges(
    user_id: str,
    company_id: Optional[str] = Query(None),
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    company_id = require_company_id(company_id)
    require_access(state, company_id, caller_id)
    service = state.badge_service
    service.track_user_access(company_id, caller_id)
    service.track_user_access(company_id, user_id)
    return badge_list(service.get_user_badges(user_id.strip(), company_id))
