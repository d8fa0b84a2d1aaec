"""Shared route dependencies: caller identity and company access checks."""

from typing import List, Optional

from fastapi import Depends, HTTPException, Request

from ..services import AccessResult
from ..state import AppState, get_state
from ..utils import missing_fields


def get_caller_id(request: Request, state: AppState = Depends(get_state)) -> str:
    """Verified id of the calling user. AuthenticationError maps to 401 in the app."""
    return state.platform.verify_user_token(request.headers)


def require_fields(**fields: Optional[str]) -> None:
    missing: List[str] = missing_fields(fields)
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")


def require_company_id(company_id: Optional[str]) -> str:
    if not company_id or not company_id.strip():
        raise HTTPException(status_code=400, detail="company_id is required")
    return company_id.strip()


def require_access(state: AppState, company_id: str, user_id: str) -> AccessResult:
    access = state.platform.check_access(company_id, user_id)
    if not access.has_access:
        raise HTTPException(
            status_code=403,
            detail={"error": "You don't have access to this company", "access_level": access.access_level},
        )
    return access


def require_admin(state: AppState, company_id: str, user_id: str, action: str) -> AccessResult:
    access = state.platform.check_access(company_id, user_id)
    if not access.is_admin:
        raise HTTPException(
            status_code=403,
            detail={"error": f"Admin access required to {action}", "access_level": access.access_level},
        )
    return access
