"""Leaderboard response models."""

from typing import List, Optional

from pydantic import BaseModel

from .badges import BadgeOut


class LeaderboardEntryOut(BaseModel):
    user_id: str
    display_name: str
    username: Optional[str] = None
    avatar: Optional[str] = None
    badges: List[BadgeOut] = []
    total_badges: int = 0
    highest_badge: Optional[BadgeOut] = None
    highest_badge_order: Optional[int] = None  # None when the user holds no badges


class LeaderboardResponse(BaseModel):
    leaderboard: List[LeaderboardEntryOut]
