# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Holiday data access.
Manages the in-memory store of member holidays.
"""

import itertools
from datetime import datetime, timezone
from typing import Any, Optional


class HolidayRepository:
    """In-memory holiday storage."""

    def __init__(self) -> None:
        self._store: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    # ── Read ──

    def get_all(self) -> list[dict[str, Any]]:
        return sorted(self._store.values(), key=lambda h: h["id"])

    def get_by_id(self, holiday_id: int) -> Optional[dict[str, Any]]:
        return self._store.get(holiday_id)

    def list_by_member(self, member_id: int) -> list[dict[str, Any]]:
        return [h for h in self.get_all() if h["member_id"] == member_id]

    def group_by_member(self) -> dict[int, list[dict[str, Any]]]:
        """Every holiday, bucketed by owning member id."""
        grouped: dict[int, list[dict[str, Any]]] = {}
        for holiday in self.get_all():
            grouped.setdefault(holiday["member_id"], []).append(holiday)
        return grouped

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        holiday = {
            "id": next(self._ids),
            **data,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._store[holiday["id"]] = holiday
        return holiday

    def update(self, holiday_id: int, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        holiday = self._store.get(holiday_id)
        if holiday is None:
            return None
        holiday.update(changes)
        return holiday

    def delete(self, holiday_id: int) -> Optional[dict[str, Any]]:
        return self._store.pop(holiday_id, None)

    def delete_by_member(self, member_id: int) -> int:
        ids = [h["id"] for h in self._store.values() if h["member_id"] == member_id]
        for holiday_id in ids:
            del self._store[holiday_id]
        return len(ids)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
        self._ids = itertools.count(1)
