"""Badge assignment: by user id, by email, and removal."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import (
    AssignBadgeRequest,
    AssignByEmailRequest,
    AssignedUser,
    AssignmentOut,
    AssignmentResponse,
)
from ..services import Badge
from ..state import AppState, get_state
from ..utils import is_valid_email
from .deps import get_caller_id, require_admin, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()


def _badge_for_company(state: AppState, badge_id: str, company_id: str) -> Badge:
    """The badge to assign, or 404 (unknown) / 403 (another company's badge)."""
    service = state.badge_service
    badge = service.get_by_id(badge_id)
    if badge is None:
        available = [
            {"id": b.id, "name": b.name, "emoji": b.emoji}
            for b in service.get_by_company(company_id)
        ]
        logger.warning(f"[assign] badge {badge_id.strip()!r} not found for company={company_id!r}")
        raise HTTPException(
            status_code=404,
            detail={"error": "Badge not found", "badge_id": badge_id.strip(), "available_badges": available},
        )
    if badge.company_id != company_id:
        raise HTTPException(
            status_code=403,
            detail={
                "error": "Badge does not belong to this company",
                "badge_company_id": badge.company_id,
                "requested_company_id": company_id,
            },
        )
    return badge


@router.post("/assign", response_model=AssignmentResponse, status_code=201)
def assign_badge(
    request: AssignBadgeRequest,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    require_fields(
        badge_id=request.badge_id,
        target_user_id=request.target_user_id,
        company_id=request.company_id,
    )
    company_id = request.company_id.strip()
    target_user_id = request.target_user_id.strip()
    require_admin(state, company_id, caller_id, "assign badges")
    service = state.badge_service
    service.track_user_access(company_id, caller_id)
    service.track_user_access(company_id, target_user_id)
    badge = _badge_for_company(state, request.badge_id, company_id)
    assignment = service.assign(badge.id, target_user_id, company_id, caller_id)
    return AssignmentResponse(assignment=AssignmentOut.from_record(assignment))


@router.delete("/assign")
def unassign_badge(
    badge_id: Optional[str] = Query(None),
    target_user_id: Optional[str] = Query(None),
    company_id: Optional[str] = Query(None),
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    require_fields(badge_id=badge_id, target_user_id=target_user_id, company_id=company_id)
    company_id = company_id.strip()
    require_admin(state, company_id, caller_id, "unassign badges")
    removed = state.badge_service.unassign(badge_id.strip(), target_user_id.strip(), company_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return {"success": True}


@router.post("/assign-by-email", response_model=AssignmentResponse, status_code=201)
def assign_badge_by_email(
    request: AssignByEmailRequest,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Assign a badge to the company member registered with an email address."""
    require_fields(badge_id=request.badge_id, email=request.email, company_id=request.company_id)
    email = request.email.strip()
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Invalid email format")
    company_id = request.company_id.strip()
    require_admin(state, company_id, caller_id, "assign badges")

    member = state.platform.find_by_email(company_id, email)
    if member is None:
        raise HTTPException(
            status_code=404,
            detail={
                "error": "User not found with the provided email in this company",
                "email": email,
            },
        )

    badge = _badge_for_company(state, request.badge_id, company_id)
    service = state.badge_service
    service.track_user_access(company_id, member.id)
    service.track_user_access(company_id, caller_id)
    assignment = service.assign(badge.id, member.id, company_id, caller_id)
    logger.info(f"[assign] badge={badge.id!r} assigned to {member.id!r} by email")
    return AssignmentResponse(
        assignment=AssignmentOut.from_record(assignment),
        user=AssignedUser(id=member.id, email=email, name=member.name or member.username),
    )
