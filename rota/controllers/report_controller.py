# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: History, fairness report and roster-sync stub.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rota.schemas.rota import RosterSyncRequest
from rota.services.rota_service import RotaService
from rota.core.dependencies import get_rota_service

router = APIRouter(prefix="/api/v1", tags=["Reports"])


@router.get("/history")
def list_history(
    member_id: Optional[int] = Query(default=None, ge=1),
    region: Optional[str] = Query(default=None, pattern="^(us|uk)$"),
    limit: Optional[int] = Query(default=None, ge=1, description="Max results"),
    service: RotaService = Depends(get_rota_service),
):
    """Assignment history rows, newest last."""
    return service.list_history(member_id=member_id, region=region, limit=limit)


@router.get("/reports/fairness")
def fairness_report(service: RotaService = Depends(get_rota_service)):
    """Per-member assignment counts within their own region."""
    return service.fairness_report()


@router.post("/sync/roster", status_code=501)
def sync_roster(payload: RosterSyncRequest):
    """Third-party roster sync is not implemented."""
    raise HTTPException(
        status_code=501,
        detail=f"Roster sync with {payload.provider_url} is not implemented",
    )
