"""Backing logic: stores, badge service, ranking, platform adapter."""

from .access_store import AccessRepository, InMemoryAccessRepository
from .assignment_store import AssignmentRepository, InMemoryAssignmentRepository
from .badge_service import BadgeService
from .badge_store import BadgeRepository, InMemoryBadgeRepository
from .leaderboard import build_leaderboard, collect_user_ids
from .platform import (
    ACCESS_ADMIN,
    ACCESS_CUSTOMER,
    ACCESS_NONE,
    AccessDeniedError,
    AccessResult,
    AuthenticationError,
    LocalPlatform,
    MemberNotFoundError,
    MemberProfile,
    Platform,
    PlatformError,
    WhopPlatform,
)
from .ranking import LeaderboardEntry, rank_entries, rank_key
from .records import NO_BADGE_ORDER, Badge, BadgeAssignment, UserBadgeSummary

__all__ = [
    "AccessRepository",
    "InMemoryAccessRepository",
    "AssignmentRepository",
    "InMemoryAssignmentRepository",
    "BadgeRepository",
    "InMemoryBadgeRepository",
    "BadgeService",
    "build_leaderboard",
    "collect_user_ids",
    "ACCESS_ADMIN",
    "ACCESS_CUSTOMER",
    "ACCESS_NONE",
    "AccessDeniedError",
    "AccessResult",
    "AuthenticationError",
    "LocalPlatform",
    "MemberNotFoundError",
    "MemberProfile",
    "Platform",
    "PlatformError",
    "WhopPlatform",
    "LeaderboardEntry",
    "rank_entries",
    "rank_key",
    "NO_BADGE_ORDER",
    "Badge",
    "BadgeAssignment",
    "UserBadgeSummary",
]
