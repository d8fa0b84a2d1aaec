"""
Badge repository abstraction.

Holds badge definitions keyed by id. The in-memory implementation lives for
the process lifetime; a durable backend only needs to satisfy the protocol.
"""

from typing import Dict, List, Optional, Protocol

from .records import Badge


class BadgeRepository(Protocol):
    """Protocol for badge persistence."""

    def get(self, badge_id: str) -> Optional[Badge]:
        """Return the badge with this exact id, else None."""
        ...

    def put(self, badge: Badge) -> None:
        """Insert or replace a badge by id."""
        ...

    def remove(self, badge_id: str) -> bool:
        """Delete a badge. Returns True if it existed."""
        ...

    def list_all(self) -> List[Badge]:
        """All badges across companies, in insertion order."""
        ...

    def list_by_company(self, company_id: str) -> List[Badge]:
        """All badges for one company, in insertion order (unsorted)."""
        ...


class InMemoryBadgeRepository:
    """Badge repository backed by a dict, with a per-company id index."""

    def __init__(self):
        self._badges: Dict[str, Badge] = {}
        self._by_company: Dict[str, Dict[str, None]] = {}

    def get(self, badge_id: str) -> Optional[Badge]:
        return self._badges.get(badge_id)

    def put(self, badge: Badge) -> None:
        self._badges[badge.id] = badge
        self._by_company.setdefault(badge.company_id, {})[badge.id] = None

    def remove(self, badge_id: str) -> bool:
        badge = self._badges.pop(badge_id, None)
        if badge is None:
            return False
        self._by_company.get(badge.company_id, {}).pop(badge_id, None)
        return True

    def list_all(self) -> List[Badge]:
        return list(self._badges.values())

    def list_by_company(self, company_id: str) -> List[Badge]:
        ids = self._by_company.get(company_id, {})
        return [self._badges[badge_id] for badge_id in ids if badge_id in self._badges]

    def __len__(self) -> int:
        return len(self._badges)
