# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Rota assignment data access.
Pure CRUD over the assignments in-memory store; overlap is not policed here.
"""

import itertools
from datetime import datetime, timezone
from typing import Any, Optional


class AssignmentRepository:
    """In-memory assignment storage."""

    def __init__(self) -> None:
        self._store: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    # ── Read ──

    def get_all(self) -> list[dict[str, Any]]:
        return sorted(self._store.values(), key=lambda a: a["id"])

    def get_by_id(self, assignment_id: int) -> Optional[dict[str, Any]]:
        return self._store.get(assignment_id)

    def references_member(self, member_id: int) -> bool:
        return any(
            a["us_member_id"] == member_id or a["uk_member_id"] == member_id
            for a in self._store.values()
        )

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        assignment = {
            "id": next(self._ids),
            "start_date": data["start_date"],
            "end_date": data["end_date"],
            "us_member_id": data.get("us_member_id"),
            "uk_member_id": data.get("uk_member_id"),
            "notes": data.get("notes"),
            "is_manual": data.get("is_manual", False),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._store[assignment["id"]] = assignment
        return assignment

    def update(self, assignment_id: int, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        assignment = self._store.get(assignment_id)
        if assignment is None:
            return None
        assignment.update(changes)
        return assignment

    def delete(self, assignment_id: int) -> Optional[dict[str, Any]]:
        return self._store.pop(assignment_id, None)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
        self._ids = itertools.count(1)
