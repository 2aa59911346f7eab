# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team member data access.
Encapsulates all read/write operations on the members in-memory store.
NO business rules here — pure CRUD.
"""

import itertools
from typing import Any, Optional


class MemberRepository:
    """In-memory member storage keyed by integer id."""

    def __init__(self) -> None:
        self._store: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    # ── Read ──

    def get_all(self) -> list[dict[str, Any]]:
        return sorted(self._store.values(), key=lambda m: m["id"])

    def get_by_id(self, member_id: int) -> Optional[dict[str, Any]]:
        return self._store.get(member_id)

    def get_by_email(self, email: str) -> Optional[dict[str, Any]]:
        email = email.lower()
        for member in self._store.values():
            if member["email"].lower() == email:
                return member
        return None

    def list_by_region(self, region: str) -> list[dict[str, Any]]:
        return [m for m in self.get_all() if m["region"] == region]

    def exists(self, member_id: int) -> bool:
        return member_id in self._store

    def count(self) -> int:
        return len(self._store)

    def count_by_region(self) -> dict[str, int]:
        regions: dict[str, int] = {}
        for m in self._store.values():
            regions[m["region"]] = regions.get(m["region"], 0) + 1
        return regions

    # ── Write ──

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        member = {"id": next(self._ids), **data}
        self._store[member["id"]] = member
        return member

    def update(self, member_id: int, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        member = self._store.get(member_id)
        if member is None:
            return None
        member.update(changes)
        return member

    def delete(self, member_id: int) -> Optional[dict[str, Any]]:
        return self._store.pop(member_id, None)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
        self._ids = itertools.count(1)
