"""
Leaderboard ordering.

Ranking keys, in priority order:
1. Users holding any badge come before users holding none.
2. Best badge (lowest order) ascending.
3. Total badge count descending.
4. Display name ascending (case-insensitive, then exact), then user id.

The last key makes the order total, so equal inputs always rank the same way.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .records import NO_BADGE_ORDER, Badge


@dataclass
class LeaderboardEntry:
    user_id: str
    display_name: str
    username: Optional[str] = None
    avatar: Optional[str] = None
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

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form; the no-badge sentinel is reported as None."""
        highest = self.highest_badge
        return {
            "user_id": self.user_id,
            "display_name": self.display_name,
            "username": self.username,
            "avatar": self.avatar,
            "badges": [b.to_dict() for b in self.badges],
            "total_badges": self.total_badges,
            "highest_badge": highest.to_dict() if highest else None,
            "highest_badge_order": highest.order if highest else None,
        }


def rank_key(entry: LeaderboardEntry) -> tuple:
    return (
        0 if entry.total_badges > 0 else 1,
        entry.highest_badge_order,
        -entry.total_badges,
        entry.display_name.casefold(),
        entry.display_name,
        entry.user_id,
    )


def rank_entries(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Return entries sorted best first."""
    return sorted(entries, key=rank_key)
