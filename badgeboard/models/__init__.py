"""Pydantic request/response models for the API."""

from .assignments import (
    AssignBadgeRequest,
    AssignByEmailRequest,
    AssignedUser,
    AssignmentOut,
    AssignmentResponse,
)
from .badges import (
    BadgeListResponse,
    BadgeOut,
    BadgeResponse,
    CreateBadgeRequest,
    ReorderBadgesRequest,
    UpdateBadgeRequest,
    badge_list,
)
from .leaderboard import LeaderboardEntryOut, LeaderboardResponse
from .users import AdminStatusResponse

__all__ = [
    "AssignBadgeRequest",
    "AssignByEmailRequest",
    "AssignedUser",
    "AssignmentOut",
    "AssignmentResponse",
    "BadgeListResponse",
    "BadgeOut",
    "BadgeResponse",
    "CreateBadgeRequest",
    "ReorderBadgesRequest",
    "UpdateBadgeRequest",
    "badge_list",
    "LeaderboardEntryOut",
    "LeaderboardResponse",
    "AdminStatusResponse",
]
