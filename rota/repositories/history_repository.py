# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Assignment history data access.
Append-only rows, one per (assignment, member, region); removed only
together with their parent assignment.
"""

import itertools
from typing import Any, Optional

from rota.core.config import settings


class HistoryRepository:
    """In-memory assignment history rows."""

    def __init__(self) -> None:
        self._rows: list[dict[str, Any]] = []
        self._ids = itertools.count(1)

    # ── Read ──

    def get_all(
        self,
        member_id: Optional[int] = None,
        region: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        effective_limit = limit or settings.DEFAULT_HISTORY_LIMIT
        result = list(self._rows)
        if member_id is not None:
            result = [r for r in result if r["member_id"] == member_id]
        if region:
            result = [r for r in result if r["region"] == region]
        return result[-effective_limit:]

    def list_all(self) -> list[dict[str, Any]]:
        """Every row, unbounded; fairness snapshots need the full history."""
        return list(self._rows)

    def list_by_member(self, member_id: int) -> list[dict[str, Any]]:
        return [r for r in self._rows if r["member_id"] == member_id]

    def list_by_assignment(self, assignment_id: int) -> list[dict[str, Any]]:
        return [r for r in self._rows if r["assignment_id"] == assignment_id]

    def count_for_member(self, member_id: int, region: Optional[str] = None) -> int:
        return sum(
            1
            for r in self._rows
            if r["member_id"] == member_id and (region is None or r["region"] == region)
        )

    def count(self) -> int:
        return len(self._rows)

    # ── Write ──

    def record(
        self,
        assignment_id: int,
        member_id: int,
        region: str,
        start_date,
        end_date,
    ) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": next(self._ids),
            "assignment_id": assignment_id,
            "member_id": member_id,
            "region": region,
            "start_date": start_date,
            "end_date": end_date,
        }
        self._rows.append(row)
        return row

    def delete_by_assignment(self, assignment_id: int) -> int:
        before = len(self._rows)
        self._rows = [r for r in self._rows if r["assignment_id"] != assignment_id]
        return before - len(self._rows)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._rows.clear()
        self._ids = itertools.count(1)
