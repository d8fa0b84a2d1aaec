"""
Access-tracking repository.

Records which user ids have been seen per company so the leaderboard can
include members who hold no badges. Append-only.
"""

from typing import Dict, List, Protocol


class AccessRepository(Protocol):
    """Protocol for per-company observed-user sets."""

    def add(self, company_id: str, user_id: str) -> None:
        """Record a user for a company. Adding twice is a no-op."""
        ...

    def list_users(self, company_id: str) -> List[str]:
        """User ids recorded for a company, first-seen first."""
        ...


class InMemoryAccessRepository:
    """Access repository backed by insertion-ordered dicts used as sets."""

    def __init__(self):
        self._users: Dict[str, Dict[str, None]] = {}

    def add(self, company_id: str, user_id: str) -> None:
        self._users.setdefault(company_id, {})[user_id] = None

    def list_users(self, company_id: str) -> List[str]:
        return list(self._users.get(company_id, {}))
