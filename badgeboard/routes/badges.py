"""Badge definitions: list, create, reorder, read, update, delete."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import (
    BadgeListResponse,
    BadgeOut,
    BadgeResponse,
    CreateBadgeRequest,
    ReorderBadgesRequest,
    UpdateBadgeRequest,
    badge_list,
)
from ..services import Badge
from ..state import AppState, get_state
from .deps import get_caller_id, require_access, require_admin, require_company_id, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_badge_or_404(state: AppState, badge_id: str) -> Badge:
    badge = state.badge_service.get_by_id(badge_id)
    if badge is None:
        raise HTTPException(status_code=404, detail="Badge not found")
    return badge


@router.get("", response_model=BadgeListResponse)
def list_badges(
    company_id: Optional[str] = Query(None, description="Company to list badges for"),
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Badges for a company, best first. Records the caller as seen in the company."""
    company_id = require_company_id(company_id)
    require_access(state, company_id, caller_id)
    state.badge_service.track_user_access(company_id, caller_id)
    return badge_list(state.badge_service.get_by_company(company_id))


@router.post("", response_model=BadgeResponse, status_code=201)
def create_badge(
    request: CreateBadgeRequest,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    require_fields(
        company_id=request.company_id,
        name=request.name,
        emoji=request.emoji,
        color=request.color,
    )
    company_id = request.company_id.strip()
    require_admin(state, company_id, caller_id, "create badges")
    badge = state.badge_service.create(
        company_id=company_id,
        name=request.name,
        emoji=request.emoji,
        color=request.color,
        description=request.description or "",
        created_by=caller_id,
    )
    return BadgeResponse(badge=BadgeOut.from_record(badge))


@router.patch("", response_model=BadgeListResponse)
def reorder_badges(
    request: ReorderBadgesRequest,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Set the full badge ranking for a company. Every id must belong to the company."""
    if not request.company_id or not request.company_id.strip() or request.badge_ids is None:
        raise HTTPException(status_code=400, detail="Missing required fields: company_id, badge_ids (array)")
    company_id = request.company_id.strip()
    require_admin(state, company_id, caller_id, "update badge order")
    service = state.badge_service
    company_ids = {b.id for b in service.get_by_company(company_id)}
    invalid = [badge_id for badge_id in request.badge_ids if badge_id.strip() not in company_ids]
    if invalid:
        raise HTTPException(status_code=400, detail=f"Invalid badge IDs: {', '.join(invalid)}")
    service.update_order(request.badge_ids)
    logger.info(f"[badges] reordered {len(request.badge_ids)} badges for company={company_id!r}")
    return badge_list(service.get_by_company(company_id))


@router.get("/{badge_id}", response_model=BadgeResponse)
def get_badge(
    badge_id: str,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    badge = _get_badge_or_404(state, badge_id)
    require_access(state, badge.company_id, caller_id)
    return BadgeResponse(badge=BadgeOut.from_record(badge))


@router.patch("/{badge_id}", response_model=BadgeResponse)
def update_badge(
    badge_id: str,
    request: UpdateBadgeRequest,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Partial update of display fields (and optionally order)."""
    badge = _get_badge_or_404(state, badge_id)
    require_admin(state, badge.company_id, caller_id, "update badges")
    updated = state.badge_service.update(badge.id, request.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Badge not found")
    return BadgeResponse(badge=BadgeOut.from_record(updated))


@router.delete("/{badge_id}")
def delete_badge(
    badge_id: str,
    caller_id: str = Depends(get_caller_id),
    state: AppState = Depends(get_state),
):
    """Delete a badge and all of its assignments."""
    badge = _get_badge_or_404(state, badge_id)
    require_admin(state, badge.company_id, caller_id, "delete badges")
    if not state.badge_service.delete(badge.id):
        raise HTTPException(status_code=404, detail="Badge not found")
    return {"success": True}
