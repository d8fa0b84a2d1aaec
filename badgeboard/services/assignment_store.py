"""
Assignment repository abstraction.

Links (badge, user, company) with attribution. The triple is the logical key:
at most one assignment per triple is stored.
"""

from typing import Dict, List, Optional, Protocol, Tuple

from .records import BadgeAssignment

AssignmentKey = Tuple[str, str, str]


class AssignmentRepository(Protocol):
    """Protocol for assignment persistence."""

    def find(self, badge_id: str, user_id: str, company_id: str) -> Optional[BadgeAssignment]:
        """Return the assignment for this exact triple, else None."""
        ...

    def put(self, assignment: BadgeAssignment) -> None:
        ...

    def remove(self, assignment_id: str) -> bool:
        """Delete by assignment id. Returns True if it existed."""
        ...

    def list_all(self) -> List[BadgeAssignment]:
        ...

    def list_by_company(self, company_id: str) -> List[BadgeAssignment]:
        ...

    def list_by_user(self, user_id: str, company_id: str) -> List[BadgeAssignment]:
        ...

    def list_by_badge(self, badge_id: str) -> List[BadgeAssignment]:
        """Assignments referencing a badge, across all companies."""
        ...


class InMemoryAssignmentRepository:
    """Assignment repository backed by a dict plus a triple -> id index."""

    def __init__(self):
        self._assignments: Dict[str, BadgeAssignment] = {}
        self._by_key: Dict[AssignmentKey, str] = {}

    def find(self, badge_id: str, user_id: str, company_id: str) -> Optional[BadgeAssignment]:
        assignment_id = self._by_key.get((badge_id, user_id, company_id))
        return self._assignments.get(assignment_id) if assignment_id else None

    def put(self, assignment: BadgeAssignment) -> None:
        previous_id = self._by_key.get(assignment.key)
        if previous_id and previous_id != assignment.id:
            self._assignments.pop(previous_id, None)
        self._assignments[assignment.id] = assignment
        self._by_key[assignment.key] = assignment.id

    def remove(self, assignment_id: str) -> bool:
        assignment = self._assignments.pop(assignment_id, None)
        if assignment is None:
            return False
        self._by_key.pop(assignment.key, None)
        return True

    def list_all(self) -> List[BadgeAssignment]:
        return list(self._assignments.values())

    def list_by_company(self, company_id: str) -> List[BadgeAssignment]:
        return [a for a in self._assignments.values() if a.company_id == company_id]

    def list_by_user(self, user_id: str, company_id: str) -> List[BadgeAssignment]:
        return [
            a
            for a in self._assignments.values()
            if a.user_id == user_id and a.company_id == company_id
        ]

    def list_by_badge(self, badge_id: str) -> List[BadgeAssignment]:
        return [a for a in self._assignments.values() if a.badge_id == badge_id]

    def __len__(self) -> int:
        return len(self._assignments)
