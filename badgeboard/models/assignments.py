"""Assignment request/response models."""

from typing import Optional

from pydantic import BaseModel

from ..services import BadgeAssignment


class AssignmentOut(BaseModel):
    id: str
    badge_id: str
    user_id: str
    company_id: str
    assigned_at: str
    assigned_by: str

    @classmethod
    def from_record(cls, assignment: BadgeAssignment) -> "AssignmentOut":
        return cls(**assignment.to_dict())


class AssignBadgeRequest(BaseModel):
    badge_id: Optional[str] = None
    target_user_id: Optional[str] = None
    company_id: Optional[str] = None


class AssignByEmailRequest(BaseModel):
    badge_id: Optional[str] = None
    email: Optional[str] = None
    company_id: Optional[str] = None


class AssignedUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None


class AssignmentResponse(BaseModel):
    assignment: AssignmentOut
    user: Optional[AssignedUser] = None
