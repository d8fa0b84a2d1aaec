"""Badge request/response models."""

from typing import List, Optional

from pydantic import BaseModel

from ..services import Badge


class BadgeOut(BaseModel):
    id: str
    company_id: str
    name: str
    emoji: str
    color: str
    description: str
    created_at: str
    created_by: str
    order: int

    @classmethod
    def from_record(cls, badge: Badge) -> "BadgeOut":
        return cls(**badge.to_dict())


class CreateBadgeRequest(BaseModel):
    """Required fields are checked in the route so the error names every missing one."""

    company_id: Optional[str] = None
    name: Optional[str] = None
    emoji: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class UpdateBadgeRequest(BaseModel):
    """Partial update. Omitted fields keep their current value."""

    name: Optional[str] = None
    emoji: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None


class ReorderBadgesRequest(BaseModel):
    company_id: Optional[str] = None
    badge_ids: Optional[List[str]] = None


class BadgeResponse(BaseModel):
    badge: BadgeOut


class BadgeListResponse(BaseModel):
    badges: List[BadgeOut]


def badge_list(badges: List[Badge]) -> BadgeListResponse:
    return BadgeListResponse(badges=[BadgeOut.from_record(b) for b in badges])
