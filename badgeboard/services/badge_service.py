"""
Badge service: the badge, assignment and access-tracking stores behind one facade.

Usage:
    service = BadgeService()
    badge = service.create("biz_1", "OG", "🏆", "#3B82F6", "Founding member", "user_admin")
    service.assign(badge.id, "user_42", "biz_1", "user_admin")
    service.get_user_badges("user_42", "biz_1")

Expected conditions (missing badge, missing assignment, blank id) are
reported through None / False return values, never raised. The caller is
trusted: authorization and tenant checks belong to the route layer.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from ..utils import clean_id, generate_id, utc_now_iso
from .access_store import AccessRepository, InMemoryAccessRepository
from .assignment_store import AssignmentRepository, InMemoryAssignmentRepository
from .badge_store import BadgeRepository, InMemoryBadgeRepository
from .records import Badge, BadgeAssignment, UserBadgeSummary, sort_badges

logger = logging.getLogger(__name__)


class BadgeService:
    """
    Badge, assignment and access-tracking operations for all companies.

    Each public method holds one re-entrant lock for its whole body, so an
    operation never interleaves with another inside this process.
    """

    def __init__(
        self,
        badges: Optional[BadgeRepository] = None,
        assignments: Optional[AssignmentRepository] = None,
        access: Optional[AccessRepository] = None,
    ):
        self._badges = badges if badges is not None else InMemoryBadgeRepository()
        self._assignments = assignments if assignments is not None else InMemoryAssignmentRepository()
        self._access = access if access is not None else InMemoryAccessRepository()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Badges
    # ------------------------------------------------------------------

    def create(
        self,
        company_id: str,
        name: str,
        emoji: str,
        color: str,
        description: str,
        created_by: str,
    ) -> Badge:
        """Create a badge ranked after every existing badge of the company."""
        with self._lock:
            existing = self._badges.list_by_company(company_id)
            next_order = max((b.order for b in existing), default=-1) + 1
            badge = Badge(
                id=generate_id(),
                company_id=company_id,
                name=name,
                emoji=emoji,
                color=color,
                description=description or "",
                created_at=utc_now_iso(),
                created_by=created_by,
                order=next_order,
            )
            self._badges.put(badge)
        logger.info(f"[badges] created {badge.id!r} ({badge.name!r}) for company={company_id!r} order={badge.order}")
        return badge

    def get_by_id(self, badge_id: Optional[str]) -> Optional[Badge]:
        key = clean_id(badge_id)
        if key is None:
            return None
        with self._lock:
            return self._badges.get(key)

    def get_all_badges(self) -> List[Badge]:
        with self._lock:
            return self._badges.list_all()

    def get_by_company(self, company_id: str) -> List[Badge]:
        """Badges for a company, best (lowest order) first."""
        with self._lock:
            return sort_badges(self._badges.list_by_company(company_id))

    def update(self, badge_id: Optional[str], updates: Dict[str, Any]) -> Optional[Badge]:
        """Merge mutable fields over a badge. Returns the updated badge or None."""
        key = clean_id(badge_id)
        if key is None:
            return None
        with self._lock:
            badge = self._badges.get(key)
            if badge is None:
                logger.warning(f"[badges] update skipped, badge not found: {key!r}")
                return None
            updated = badge.with_updates(updates)
            self._badges.put(updated)
        logger.info(f"[badges] updated {key!r} fields={sorted(updates)}")
        return updated

    def delete(self, badge_id: Optional[str]) -> bool:
        """Delete a badge and every assignment that references it."""
        key = clean_id(badge_id)
        if key is None:
            return False
        with self._lock:
            removed_assignments = 0
            for assignment in self._assignments.list_by_badge(key):
                if self._assignments.remove(assignment.id):
                    removed_assignments += 1
            existed = self._badges.remove(key)
        if existed or removed_assignments:
            logger.info(f"[badges] deleted {key!r} (existed={existed}, assignments removed={removed_assignments})")
        return existed

    def update_order(self, ordered_ids: List[str]) -> bool:
        """
        Reindex badges so each one's order is its position in `ordered_ids`.

        This is a full reindex: pass the complete ordering for the company.
        Ids that are not stored are skipped.
        """
        with self._lock:
            for index, raw_id in enumerate(ordered_ids):
                key = clean_id(raw_id)
                badge = self._badges.get(key) if key else None
                if badge is not None:
                    self._badges.put(badge.with_updates({"order": index}))
        return True

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def assign(self, badge_id: str, user_id: str, company_id: str, assigned_by: str) -> BadgeAssignment:
        """Assign a badge to a user. Re-assigning returns the existing record."""
        with self._lock:
            existing = self._assignments.find(badge_id, user_id, company_id)
            if existing is not None:
                return existing
            assignment = BadgeAssignment(
                id=generate_id(),
                badge_id=badge_id,
                user_id=user_id,
                company_id=company_id,
                assigned_at=utc_now_iso(),
                assigned_by=assigned_by,
            )
            self._assignments.put(assignment)
        logger.info(f"[badges] assigned badge={badge_id!r} user={user_id!r} company={company_id!r}")
        return assignment

    def unassign(self, badge_id: str, user_id: str, company_id: str) -> bool:
        with self._lock:
            assignment = self._assignments.find(badge_id, user_id, company_id)
            if assignment is None:
                return False
            removed = self._assignments.remove(assignment.id)
        if removed:
            logger.info(f"[badges] unassigned badge={badge_id!r} user={user_id!r} company={company_id!r}")
        return removed

    def get_user_assignments(self, user_id: str, company_id: str) -> List[BadgeAssignment]:
        with self._lock:
            return self._assignments.list_by_user(user_id, company_id)

    def get_assignments_by_badge(self, badge_id: str) -> List[BadgeAssignment]:
        with self._lock:
            return self._assignments.list_by_badge(badge_id)

    def get_user_badges(self, user_id: str, company_id: str) -> List[Badge]:
        """Badges a user holds in a company, best first. Stale assignments are skipped."""
        with self._lock:
            badges = []
            for assignment in self._assignments.list_by_user(user_id, company_id):
                badge = self._badges.get(assignment.badge_id)
                if badge is not None:
                    badges.append(badge)
            return sort_badges(badges)

    def get_all_users_with_badges(self, company_id: str) -> List[UserBadgeSummary]:
        """One summary per user holding at least one live badge in the company."""
        with self._lock:
            grouped: Dict[str, List[Badge]] = {}
            for assignment in self._assignments.list_by_company(company_id):
                badge = self._badges.get(assignment.badge_id)
                if badge is not None:
                    grouped.setdefault(assignment.user_id, []).append(badge)
            return [
                UserBadgeSummary(user_id=user_id, badges=sort_badges(badges))
                for user_id, badges in grouped.items()
            ]

    def count_assignments(self) -> int:
        with self._lock:
            return len(self._assignments.list_all())

    # ------------------------------------------------------------------
    # Access tracking
    # ------------------------------------------------------------------

    def track_user_access(self, company_id: Optional[str], user_id: Optional[str]) -> None:
        """Remember that a user was seen in a company. Blank ids are ignored."""
        company_key = clean_id(company_id)
        user_key = clean_id(user_id)
        if company_key is None or user_key is None:
            return
        with self._lock:
            self._access.add(company_key, user_key)

    def get_tracked_users(self, company_id: str) -> List[str]:
        with self._lock:
            return self._access.list_users(company_id)
