# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from rota.repositories.member_repository import MemberRepository
from rota.repositories.holiday_repository import HolidayRepository
from rota.repositories.assignment_repository import AssignmentRepository
from rota.repositories.history_repository import HistoryRepository
from rota.services.member_service import MemberService
from rota.services.rota_service import RotaService
from rota.services.notification_client import NotificationClient

# ── Singleton repository instances (in-memory stores) ──
_member_repo = MemberRepository()
_holiday_repo = HolidayRepository()
_assignment_repo = AssignmentRepository()
_history_repo = HistoryRepository()
_notification_client = NotificationClient()

# ── Service instances (with injected dependencies) ──
_member_service = MemberService(
    member_repo=_member_repo,
    holiday_repo=_holiday_repo,
    assignment_repo=_assignment_repo,
)
_rota_service = RotaService(
    member_repo=_member_repo,
    holiday_repo=_holiday_repo,
    assignment_repo=_assignment_repo,
    history_repo=_history_repo,
    notification_client=_notification_client,
)


# ── FastAPI dependency functions ──
def get_member_service() -> MemberService:
    return _member_service


def get_rota_service() -> RotaService:
    return _rota_service


def get_member_repo() -> MemberRepository:
    return _member_repo


def get_holiday_repo() -> HolidayRepository:
    return _holiday_repo


def get_assignment_repo() -> AssignmentRepository:
    return _assignment_repo


def get_history_repo() -> HistoryRepository:
    return _history_repo
