"""Stored record types for badges, assignments, and per-user summaries."""

import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional

# Sentinel for users holding no badges; sorts after every real order.
NO_BADGE_ORDER = math.inf

# Fields a badge update may change. id, company_id, created_at and created_by are fixed.
MUTABLE_BADGE_FIELDS = ("name", "emoji", "color", "description", "order")


@dataclass(frozen=True)
class Badge:
    id: str
    company_id: str
    name: str
    emoji: str
    color: str
    description: str
    created_at: str
    created_by: str
    order: int  # lower number = higher value

    def with_updates(self, updates: Dict[str, Any]) -> "Badge":
        """Return a copy with the mutable fields in `updates` applied.

        Unknown and immutable keys are ignored. A missing or None order keeps
        the current order.
        """
        changes = {
            key: value
            for key, value in updates.items()
            if key in MUTABLE_BADGE_FIELDS and value is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BadgeAssignment:
    id: str
    badge_id: str
    user_id: str
    company_id: str
    assigned_at: str
    assigned_by: str

    @property
    def key(self) -> tuple:
        return (self.badge_id, self.user_id, self.company_id)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserBadgeSummary:
    """One user's badges in a company, best badge first."""

    user_id: str
    badges: List[Badge] = field(default_factory=list)

    @property
    def total_badges(self) -> int:
        return len(self.badges)

    @property
    def highest_badge(self) -> Optional[Badge]:
        return self.badges[0] if self.badges else None

    @property
    def highest_badge_order(self) -> float:
        return self.badges[0].order if self.badges else NO_BADGE_ORDER


def badge_sort_key(badge: Badge) -> tuple:
    """Ascending order; equal orders fall back to creation time."""
    return (badge.order, badge.created_at)


def sort_badges(badges: List[Badge]) -> List[Badge]:
    # sorted() is stable, so badges created in the same instant keep insertion order
    return sorted(badges, key=badge_sort_key)
