# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from rota.core.config import settings
from rota.core.dependencies import get_member_repo, get_assignment_repo

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe for Docker and orchestration."""
    member_repo = get_member_repo()
    assignment_repo = get_assignment_repo()
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "members_count": member_repo.count(),
        "assignments_count": assignment_repo.count(),
    }


@router.get("/health/ready")
def readiness_check():
    """Readiness probe: ready once both regions have at least one member."""
    by_region = get_member_repo().count_by_region()
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "roster_loaded": by_region.get("us", 0) > 0 and by_region.get("uk", 0) > 0,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
