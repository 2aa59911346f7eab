# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Holiday endpoints.
Thin HTTP layer — delegates ALL logic to MemberService.
"""

from fastapi import APIRouter, Depends, HTTPException

from rota.schemas.rota import HolidayCreateRequest, HolidayResponse, HolidayUpdateRequest
from rota.services.member_service import MemberService
from rota.core.dependencies import get_member_service

router = APIRouter(prefix="/api/v1", tags=["Holidays"])


@router.get("/holidays", response_model=list[HolidayResponse])
def list_holidays(service: MemberService = Depends(get_member_service)):
    return service.list_holidays()


@router.get("/holidays/member/{member_id}", response_model=list[HolidayResponse])
def list_member_holidays(
    member_id: int,
    service: MemberService = Depends(get_member_service),
):
    """All holidays of one member."""
    try:
        return service.list_member_holidays(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/holidays", status_code=201, response_model=HolidayResponse)
def create_holiday(
    payload: HolidayCreateRequest,
    service: MemberService = Depends(get_member_service),
):
    """Record a holiday for a member."""
    try:
        return service.create_holiday(payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/holidays/{holiday_id}", response_model=HolidayResponse)
def update_holiday(
    holiday_id: int,
    payload: HolidayUpdateRequest,
    service: MemberService = Depends(get_member_service),
):
    try:
        return service.update_holiday(holiday_id, payload.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/holidays/{holiday_id}")
def delete_holiday(
    holiday_id: int,
    service: MemberService = Depends(get_member_service),
):
    try:
        return service.delete_holiday(holiday_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
