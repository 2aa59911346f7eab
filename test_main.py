# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the Rota Service HTTP API.
Exercises every router through TestClient against the in-memory stores.
"""

import json
import logging
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from main import app
from rota.core.config import settings
from rota.core.dependencies import (
    get_assignment_repo,
    get_history_repo,
    get_holiday_repo,
    get_member_repo,
    get_member_service,
    get_rota_service,
)
from rota.core.logging import JSONFormatter
from rota.services.notification_client import NotificationClient

client = TestClient(app)

TODAY = date(2024, 12, 4)  # a Wednesday

ALICE, BOB, CAROL, DAN = 1, 2, 3, 4


# ============================================
# Fixtures
# ============================================
@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    """Empty every store, pin today's date and load a four-person roster."""
    get_member_repo().clear()
    get_holiday_repo().clear()
    get_assignment_repo().clear()
    get_history_repo().clear()
    monkeypatch.setattr(get_rota_service(), "_today", lambda: TODAY)

    members = get_member_service()
    members.create_member({"name": "Alice Martin", "email": "alice@company.com", "region": "us"})
    members.create_member({"name": "Bob Dupont", "email": "bob@company.com", "region": "us"})
    members.create_member({"name": "Carol Chen", "email": "carol@company.com", "region": "uk"})
    members.create_member({"name": "Dan Evans", "email": "dan@company.com", "region": "uk"})
    yield


def add_holiday(member_id, start, end, description=None):
    response = client.post("/api/v1/holidays", json={
        "member_id": member_id,
        "start_date": start,
        "end_date": end,
        "description": description,
    })
    assert response.status_code == 201, response.text
    return response.json()


def add_assignment(start, end, us=None, uk=None, **extra):
    body = {"start_date": start, "end_date": end, "us_member_id": us, "uk_member_id": uk}
    body.update(extra)
    return client.post("/api/v1/assignments", json=body)


# ============================================
# Health & Metrics
# ============================================
class TestHealth:
    def test_health_returns_ok(self):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.SERVICE_NAME
        assert data["version"] == settings.SERVICE_VERSION

    def test_health_includes_counts(self):
        add_assignment("2024-12-02", "2024-12-02", us=ALICE)
        data = client.get("/health").json()
        assert data["members_count"] == 4
        assert data["assignments_count"] == 1

    def test_ready_when_both_regions_staffed(self):
        data = client.get("/health/ready").json()
        assert data["status"] == "ready"
        assert data["roster_loaded"] is True

    def test_not_loaded_without_uk_members(self):
        client.delete(f"/api/v1/members/{CAROL}")
        client.delete(f"/api/v1/members/{DAN}")
        assert client.get("/health/ready").json()["roster_loaded"] is False

    def test_metrics_endpoint(self):
        client.get("/api/v1/members")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "rota_requests_total" in response.text
        assert "rota_team_members" in response.text

    def test_request_id_is_generated(self):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")

    def test_request_id_is_propagated(self):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


# ============================================
# Members
# ============================================
class TestMembers:
    def test_list_members(self):
        data = client.get("/api/v1/members").json()
        assert [m["name"] for m in data] == ["Alice Martin", "Bob Dupont", "Carol Chen", "Dan Evans"]

    def test_list_by_region_is_case_insensitive(self):
        data = client.get("/api/v1/members", params={"region": "UK"}).json()
        assert [m["id"] for m in data] == [CAROL, DAN]

    def test_list_unknown_region(self):
        assert client.get("/api/v1/members", params={"region": "eu"}).status_code == 400

    def test_create_member(self):
        response = client.post("/api/v1/members", json={
            "name": "Erin Walsh", "email": "erin@company.com", "region": "UK",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 5
        assert data["region"] == "uk"
        assert data["is_available"] is True

    def test_create_member_duplicate_email(self):
        response = client.post("/api/v1/members", json={
            "name": "Alice Again", "email": "ALICE@company.com", "region": "us",
        })
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_create_member_invalid_region(self):
        response = client.post("/api/v1/members", json={
            "name": "Pierre", "email": "pierre@company.com", "region": "fr",
        })
        assert response.status_code == 422

    def test_create_member_half_legacy_range(self):
        response = client.post("/api/v1/members", json={
            "name": "Erin", "email": "erin@company.com", "region": "us",
            "unavailable_start": "2024-12-02",
        })
        assert response.status_code == 422

    def test_get_member(self):
        assert client.get(f"/api/v1/members/{BOB}").json()["email"] == "bob@company.com"

    def test_get_member_not_found(self):
        response = client.get("/api/v1/members/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Team member 999 not found"

    def test_update_member(self):
        response = client.patch(f"/api/v1/members/{BOB}", json={"is_available": False})
        assert response.status_code == 200
        assert response.json()["is_available"] is False
        assert response.json()["name"] == "Bob Dupont"

    def test_update_member_legacy_range_strips_time(self):
        response = client.patch(f"/api/v1/members/{BOB}", json={
            "unavailable_start": "2024-12-02T00:00:00.000Z",
            "unavailable_end": "2024-12-03",
        })
        assert response.status_code == 200
        assert response.json()["unavailable_start"] == "2024-12-02"

    def test_update_member_email_taken(self):
        response = client.patch(f"/api/v1/members/{BOB}", json={"email": "alice@company.com"})
        assert response.status_code == 400

    def test_update_member_not_found(self):
        assert client.patch("/api/v1/members/999", json={"name": "X"}).status_code == 404

    @pytest.mark.parametrize("field", ["name", "email", "region", "is_available"])
    def test_update_member_rejects_null_required_field(self, field):
        response = client.patch(f"/api/v1/members/{BOB}", json={field: None})
        assert response.status_code == 422
        assert client.get(f"/api/v1/members/{BOB}").status_code == 200
        assert len(client.get("/api/v1/members").json()) == 4

    def test_update_member_clears_legacy_range_with_null(self):
        client.patch(f"/api/v1/members/{BOB}", json={
            "unavailable_start": "2024-12-02", "unavailable_end": "2024-12-03",
        })
        response = client.patch(f"/api/v1/members/{BOB}", json={
            "unavailable_start": None, "unavailable_end": None,
        })
        assert response.status_code == 200
        assert response.json()["unavailable_start"] is None

    def test_update_member_region_is_case_insensitive(self):
        response = client.patch(f"/api/v1/members/{BOB}", json={"region": "UK"})
        assert response.status_code == 200
        assert response.json()["region"] == "uk"

    def test_update_member_region_blocked_while_assigned(self):
        add_assignment("2024-12-02", "2024-12-02", us=ALICE)
        response = client.patch(f"/api/v1/members/{ALICE}", json={"region": "uk"})
        assert response.status_code == 400
        assert "region cannot change" in response.json()["detail"]
        assert client.get(f"/api/v1/members/{ALICE}").json()["region"] == "us"

    def test_update_member_same_region_allowed_while_assigned(self):
        add_assignment("2024-12-02", "2024-12-02", us=ALICE)
        response = client.patch(f"/api/v1/members/{ALICE}", json={"region": "US", "name": "Alice M."})
        assert response.status_code == 200
        assert response.json()["name"] == "Alice M."

    def test_delete_member_removes_holidays(self):
        add_holiday(DAN, "2024-12-10", "2024-12-12")
        response = client.delete(f"/api/v1/members/{DAN}")
        assert response.status_code == 200
        assert response.json() == {"status": "deleted", "member_id": DAN}
        assert client.get("/api/v1/holidays").json() == []
        assert client.get(f"/api/v1/members/{DAN}").status_code == 404

    def test_delete_member_referenced_by_assignment(self):
        add_assignment("2024-12-02", "2024-12-02", us=ALICE)
        response = client.delete(f"/api/v1/members/{ALICE}")
        assert response.status_code == 409

    def test_delete_member_not_found(self):
        assert client.delete("/api/v1/members/999").status_code == 404


# ============================================
# Holidays
# ============================================
class TestHolidays:
    def test_create_holiday(self):
        data = add_holiday(CAROL, "2024-12-10", "2024-12-20", "Winter leave")
        assert data["member_id"] == CAROL
        assert data["start_date"] == "2024-12-10"
        assert data["description"] == "Winter leave"
        assert data["created_at"]

    def test_timestamp_input_keeps_calendar_day(self):
        data = add_holiday(CAROL, "2024-12-10T00:00:00.000Z", "2024-12-11T23:30:00Z")
        assert data["start_date"] == "2024-12-10"
        assert data["end_date"] == "2024-12-11"

    def test_single_day_holiday(self):
        data = add_holiday(CAROL, "2024-12-10", "2024-12-10")
        assert data["start_date"] == data["end_date"]

    def test_reversed_holiday_rejected(self):
        response = client.post("/api/v1/holidays", json={
            "member_id": CAROL, "start_date": "2024-12-20", "end_date": "2024-12-10",
        })
        assert response.status_code == 422

    def test_malformed_date_rejected(self):
        response = client.post("/api/v1/holidays", json={
            "member_id": CAROL, "start_date": "10/12/2024", "end_date": "2024-12-12",
        })
        assert response.status_code == 422

    def test_unknown_member_rejected(self):
        response = client.post("/api/v1/holidays", json={
            "member_id": 999, "start_date": "2024-12-10", "end_date": "2024-12-12",
        })
        assert response.status_code == 400

    def test_list_member_holidays(self):
        add_holiday(CAROL, "2024-12-10", "2024-12-12")
        add_holiday(DAN, "2024-12-10", "2024-12-12")
        add_holiday(CAROL, "2025-01-02", "2025-01-03")
        data = client.get(f"/api/v1/holidays/member/{CAROL}").json()
        assert len(data) == 2
        assert all(h["member_id"] == CAROL for h in data)

    def test_list_member_holidays_unknown_member(self):
        assert client.get("/api/v1/holidays/member/999").status_code == 404

    def test_update_holiday(self):
        holiday = add_holiday(CAROL, "2024-12-10", "2024-12-12")
        response = client.patch(f"/api/v1/holidays/{holiday['id']}", json={"end_date": "2024-12-14"})
        assert response.status_code == 200
        assert response.json()["end_date"] == "2024-12-14"

    def test_update_holiday_reversed(self):
        holiday = add_holiday(CAROL, "2024-12-10", "2024-12-12")
        response = client.patch(f"/api/v1/holidays/{holiday['id']}", json={"end_date": "2024-12-01"})
        assert response.status_code == 400

    def test_delete_holiday(self):
        holiday = add_holiday(CAROL, "2024-12-10", "2024-12-12")
        assert client.delete(f"/api/v1/holidays/{holiday['id']}").status_code == 200
        assert client.delete(f"/api/v1/holidays/{holiday['id']}").status_code == 404


# ============================================
# Manual assignments
# ============================================
class TestAssignments:
    def test_create_assignment(self):
        response = add_assignment("2024-12-02", "2024-12-06", us=ALICE, uk=CAROL, notes="Cover")
        assert response.status_code == 201
        data = response.json()
        assert data["start_date"] == "2024-12-02"
        assert data["end_date"] == "2024-12-06"
        assert data["is_manual"] is True
        assert data["notes"] == "Cover"

    def test_create_assignment_writes_history(self):
        add_assignment("2024-12-02", "2024-12-06", us=ALICE, uk=CAROL)
        rows = client.get("/api/v1/history").json()
        assert {(r["member_id"], r["region"]) for r in rows} == {(ALICE, "us"), (CAROL, "uk")}

    def test_single_region_assignment_writes_one_row(self):
        add_assignment("2024-12-02", "2024-12-02", uk=DAN)
        assert len(client.get("/api/v1/history").json()) == 1

    def test_requires_a_member(self):
        assert add_assignment("2024-12-02", "2024-12-02").status_code == 400

    def test_region_mismatch_rejected(self):
        response = add_assignment("2024-12-02", "2024-12-02", us=CAROL)
        assert response.status_code == 400
        assert "US" in response.json()["detail"]

    def test_unknown_member_rejected(self):
        assert add_assignment("2024-12-02", "2024-12-02", us=999).status_code == 400

    def test_reversed_range_rejected(self):
        assert add_assignment("2024-12-06", "2024-12-02", us=ALICE).status_code == 422

    def test_holiday_conflict_blocks(self):
        add_holiday(CAROL, "2024-12-10", "2024-12-20")
        response = add_assignment("2024-12-15", "2024-12-16", us=ALICE, uk=CAROL)
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert [m["id"] for m in detail["conflicting_members"]] == [CAROL]
        assert detail["conflicting_members"][0]["holiday_start"] == "2024-12-10"
        assert client.get("/api/v1/assignments").json() == []

    def test_holiday_conflict_can_be_overridden(self):
        add_holiday(CAROL, "2024-12-10", "2024-12-20")
        response = add_assignment(
            "2024-12-15", "2024-12-16", us=ALICE, uk=CAROL, allow_conflicts=True
        )
        assert response.status_code == 201

    def test_get_assignment(self):
        created = add_assignment("2024-12-02", "2024-12-02", us=ALICE).json()
        assert client.get(f"/api/v1/assignments/{created['id']}").json() == created

    def test_get_assignment_not_found(self):
        assert client.get("/api/v1/assignments/999").status_code == 404

    def test_update_only_touches_notes_and_flag(self):
        created = add_assignment("2024-12-02", "2024-12-02", us=ALICE).json()
        response = client.patch(f"/api/v1/assignments/{created['id']}", json={
            "notes": "Swapped on request", "start_date": "2025-01-01",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["notes"] == "Swapped on request"
        assert data["start_date"] == "2024-12-02"

    def test_update_rejects_null_manual_flag(self):
        created = add_assignment("2024-12-02", "2024-12-02", us=ALICE).json()
        response = client.patch(f"/api/v1/assignments/{created['id']}", json={"is_manual": None})
        assert response.status_code == 422
        listed = client.get("/api/v1/assignments")
        assert listed.status_code == 200
        assert listed.json()[0]["is_manual"] is True

    def test_update_clears_notes_with_null(self):
        created = add_assignment("2024-12-02", "2024-12-02", us=ALICE, notes="Cover").json()
        response = client.patch(f"/api/v1/assignments/{created['id']}", json={"notes": None})
        assert response.status_code == 200
        assert response.json()["notes"] is None

    def test_delete_assignment_removes_history(self):
        created = add_assignment("2024-12-02", "2024-12-06", us=ALICE, uk=CAROL).json()
        add_assignment("2024-12-09", "2024-12-09", us=BOB)
        response = client.delete(f"/api/v1/assignments/{created['id']}")
        assert response.status_code == 200
        rows = client.get("/api/v1/history").json()
        assert [r["member_id"] for r in rows] == [BOB]

    def test_delete_assignment_not_found(self):
        assert client.delete("/api/v1/assignments/999").status_code == 404


class TestAssignmentLookup:
    def test_current_prefers_single_day(self):
        add_assignment("2024-12-02", "2024-12-08", us=ALICE, uk=CAROL)
        day = add_assignment("2024-12-04", "2024-12-04", us=BOB).json()
        response = client.get("/api/v1/assignments/current")
        assert response.status_code == 200
        assert response.json()["id"] == day["id"]

    def test_current_not_found(self):
        add_assignment("2024-12-09", "2024-12-13", us=ALICE)
        assert client.get("/api/v1/assignments/current").status_code == 404

    def test_on_day(self):
        week = add_assignment("2024-12-02", "2024-12-08", us=ALICE, uk=CAROL).json()
        add_assignment("2024-12-04", "2024-12-04", us=BOB)
        assert client.get("/api/v1/assignments/on/2024-12-05").json()["id"] == week["id"]

    def test_on_day_malformed(self):
        assert client.get("/api/v1/assignments/on/not-a-date").status_code == 400

    def test_upcoming(self):
        add_assignment("2024-12-02", "2024-12-06", us=ALICE)
        later = add_assignment("2024-12-16", "2024-12-16", us=BOB).json()
        sooner = add_assignment("2024-12-09", "2024-12-09", uk=DAN).json()
        data = client.get("/api/v1/assignments/upcoming").json()
        assert [a["id"] for a in data] == [sooner["id"], later["id"]]


# ============================================
# Conflict check
# ============================================
class TestConflictCheck:
    def test_overlap_reports_member_once(self):
        add_holiday(CAROL, "2024-12-10", "2024-12-20")
        add_holiday(CAROL, "2024-12-14", "2024-12-18")
        response = client.post("/api/v1/assignments/check-conflicts", json={
            "start_date": "2024-12-15", "end_date": "2024-12-16",
            "us_member_id": ALICE, "uk_member_id": CAROL,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["has_conflict"] is True
        assert [m["id"] for m in data["conflicting_members"]] == [CAROL]

    def test_no_conflict(self):
        add_holiday(CAROL, "2024-12-10", "2024-12-20")
        data = client.post("/api/v1/assignments/check-conflicts", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06", "uk_member_id": CAROL,
        }).json()
        assert data == {"has_conflict": False, "conflicting_members": []}

    def test_no_members_is_clear(self):
        data = client.post("/api/v1/assignments/check-conflicts", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06",
        }).json()
        assert data["has_conflict"] is False

    def test_unknown_member(self):
        response = client.post("/api/v1/assignments/check-conflicts", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06", "us_member_id": 999,
        })
        assert response.status_code == 400


# ============================================
# Auto-assign & planning
# ============================================
class TestAutoAssign:
    def test_explicit_week_full_period(self):
        response = client.post("/api/v1/assignments/auto-assign", json={
            "start_date": "2024-12-02", "end_date": "2024-12-08",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["mode"] == "full_period"
        assert data["strategy"] == "load_balancing"
        assert data["period"] == {"start_date": "2024-12-02", "end_date": "2024-12-08"}
        assert len(data["assignments"]) == 5
        assert {(a["us_member"], a["uk_member"]) for a in data["assignments"]} == {
            ("Alice Martin", "Carol Chen")
        }
        assert data["skipped_days"] == []

        stored = client.get("/api/v1/assignments").json()
        assert len(stored) == 5
        assert all(not a["is_manual"] for a in stored)
        assert all(a["start_date"] == a["end_date"] for a in stored)

    def test_partial_week_skips_day(self):
        add_holiday(ALICE, "2024-12-04", "2024-12-04")
        add_holiday(BOB, "2024-12-04", "2024-12-04")
        response = client.post("/api/v1/assignments/auto-assign", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["mode"] == "day_by_day"
        assert len(data["assignments"]) == 4
        assert data["skipped_days"] == [
            {"date": "2024-12-04", "reason": "No US members available"}
        ]
        assert data["message"] == "Partial assignment completed: 4 days assigned, 1 days skipped"

    def test_everyone_away_is_conflict(self):
        for member_id in (ALICE, BOB, CAROL, DAN):
            add_holiday(member_id, "2024-11-30", "2024-12-08")
        response = client.post("/api/v1/assignments/auto-assign", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06",
        })
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["error"] == "No days could be assigned - conflicts on all days"
        assert {c["member_id"] for c in detail["conflicts"]} == {ALICE, BOB, CAROL, DAN}
        assert len(detail["skipped_days"]) == 5
        assert client.get("/api/v1/assignments").json() == []

    def test_without_range_uses_next_week(self):
        response = client.post("/api/v1/assignments/auto-assign", json={})
        assert response.status_code == 201
        assert response.json()["period"] == {"start_date": "2024-12-09", "end_date": "2024-12-15"}

    def test_without_range_skips_blocked_week(self):
        add_holiday(CAROL, "2024-12-13", "2024-12-13")
        add_holiday(DAN, "2024-12-09", "2024-12-09")
        data = client.post("/api/v1/assignments/auto-assign", json={}).json()
        assert data["period"]["start_date"] == "2024-12-16"

    def test_horizon_exhausted(self):
        add_holiday(ALICE, "2024-12-01", "2025-03-31")
        add_holiday(BOB, "2024-12-01", "2025-03-31")
        response = client.post("/api/v1/assignments/auto-assign", json={})
        assert response.status_code == 409
        assert "assign manually" in response.json()["detail"]["error"]

    def test_half_range_rejected(self):
        response = client.post("/api/v1/assignments/auto-assign", json={"start_date": "2024-12-02"})
        assert response.status_code == 422

    def test_unknown_strategy_rejected(self):
        response = client.post("/api/v1/assignments/auto-assign", json={"strategy": "random"})
        assert response.status_code == 422

    def test_recency_strategy(self):
        response = client.post("/api/v1/assignments/auto-assign", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06", "strategy": "recency_weighted",
        })
        assert response.status_code == 201
        assert response.json()["strategy"] == "recency_weighted"

    def test_second_week_rotates_to_other_pair(self):
        client.post("/api/v1/assignments/plan", json={
            "start_date": "2024-12-02", "end_date": "2024-12-08",
        })
        data = client.post("/api/v1/assignments/plan", json={
            "start_date": "2024-12-09", "end_date": "2024-12-15",
        }).json()
        assert data["assignments"][0]["us_member_id"] == BOB
        assert data["assignments"][0]["uk_member_id"] == DAN

    def test_plan_weekend_only_rejected(self):
        response = client.post("/api/v1/assignments/plan", json={
            "start_date": "2024-12-07", "end_date": "2024-12-08",
        })
        assert response.status_code == 400

    def test_plan_requires_dates(self):
        assert client.post("/api/v1/assignments/plan", json={}).status_code == 422


# ============================================
# History, reports & sync
# ============================================
class TestReports:
    def test_fairness_report(self):
        client.post("/api/v1/assignments/plan", json={
            "start_date": "2024-12-02", "end_date": "2024-12-06",
        })
        data = {r["id"]: r for r in client.get("/api/v1/reports/fairness").json()}
        assert data[ALICE]["assignment_count"] == 5
        assert data[ALICE]["last_assigned"] == "2024-12-06"
        assert data[BOB]["assignment_count"] == 0
        assert data[BOB]["last_assigned"] is None
        assert data[CAROL]["region"] == "uk"
        assert data[CAROL]["assignment_count"] == 5

    def test_history_filters(self):
        add_assignment("2024-12-02", "2024-12-02", us=ALICE, uk=CAROL)
        add_assignment("2024-12-03", "2024-12-03", us=BOB, uk=CAROL)
        assert len(client.get("/api/v1/history").json()) == 4
        assert len(client.get("/api/v1/history", params={"member_id": CAROL}).json()) == 2
        assert len(client.get("/api/v1/history", params={"region": "us"}).json()) == 2
        assert len(client.get("/api/v1/history", params={"limit": 1}).json()) == 1

    def test_roster_sync_not_implemented(self):
        response = client.post("/api/v1/sync/roster", json={"provider_url": "https://roster.example"})
        assert response.status_code == 501


# ============================================
# Seed roster
# ============================================
class TestSeed:
    def test_seed_on_empty_roster(self):
        get_member_repo().clear()
        get_member_service().seed_defaults()
        members = client.get("/api/v1/members").json()
        assert len(members) == 6
        assert sum(1 for m in members if m["region"] == "uk") == 3
        david = next(m for m in members if m["name"] == "David Parker")
        holidays = client.get(f"/api/v1/holidays/member/{david['id']}").json()
        assert holidays[0]["start_date"] == "2024-12-10"
        assert holidays[0]["end_date"] == "2024-12-20"

    def test_seed_skipped_when_roster_present(self):
        get_member_service().seed_defaults()
        assert len(client.get("/api/v1/members").json()) == 4


# ============================================
# Notification client & logging
# ============================================
class TestNotificationClient:
    def test_disabled_without_url(self):
        notifier = NotificationClient(base_url="")
        assert notifier.enabled is False
        with patch("rota.services.notification_client.httpx.Client") as mock_client:
            notifier.send("alice@company.com", "hello", assignment_id=1)
        mock_client.assert_not_called()

    def test_posts_to_notification_service(self):
        notifier = NotificationClient(base_url="http://notify:8004")
        with patch("rota.services.notification_client.httpx.Client") as mock_client:
            http = MagicMock()
            http.post.return_value.status_code = 200
            mock_client.return_value.__enter__.return_value = http
            notifier.notify_assignment(
                7, {"email": "alice@company.com"}, "us", date(2024, 12, 2), date(2024, 12, 6)
            )
        url = http.post.call_args.args[0]
        body = http.post.call_args.kwargs["json"]
        assert url == "http://notify:8004/api/v1/notify"
        assert body["recipient"] == "alice@company.com"
        assert body["message"] == "You are on US support on 2024-12-02 to 2024-12-06"
        assert body["incident_id"] == "rota-assignment-7"

    def test_assignment_creation_notifies_with_assignment_id(self, monkeypatch):
        sent = []
        notifier = get_rota_service()._notifications
        monkeypatch.setattr(notifier, "send", lambda **kwargs: sent.append(kwargs))
        created = add_assignment("2024-12-02", "2024-12-02", us=ALICE, uk=CAROL).json()
        assert [s["recipient"] for s in sent] == ["alice@company.com", "carol@company.com"]
        assert {s["assignment_id"] for s in sent} == {created["id"]}

    def test_failure_is_swallowed(self):
        notifier = NotificationClient(base_url="http://notify:8004")
        with patch(
            "rota.services.notification_client.httpx.Client",
            side_effect=RuntimeError("connection refused"),
        ):
            notifier.send("alice@company.com", "hello", assignment_id=1)


class TestLogging:
    def test_json_formatter(self):
        record = logging.LogRecord(
            "rota.test", logging.INFO, __file__, 1, "Assigned %d days", (5,), None
        )
        record.request_id = "req-1"
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Assigned 5 days"
        assert data["level"] == "INFO"
        assert data["service"] == settings.SERVICE_NAME
        assert data["request_id"] == "req-1"
