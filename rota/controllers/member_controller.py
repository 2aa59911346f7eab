# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team member CRUD endpoints.
Thin HTTP layer — delegates ALL logic to MemberService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rota.schemas.rota import MemberCreateRequest, MemberResponse, MemberUpdateRequest
from rota.services.member_service import MemberService
from rota.core.dependencies import get_member_service

router = APIRouter(prefix="/api/v1", tags=["Members"])


@router.get("/members", response_model=list[MemberResponse])
def list_members(
    region: Optional[str] = Query(default=None, description="Filter by region (us|uk)"),
    service: MemberService = Depends(get_member_service),
):
    """List team members, optionally restricted to one region."""
    try:
        return service.list_members(region=region.lower() if region else None)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/members", status_code=201, response_model=MemberResponse)
def create_member(
    payload: MemberCreateRequest,
    service: MemberService = Depends(get_member_service),
):
    """Add a member to the roster."""
    try:
        return service.create_member(payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/members/{member_id}", response_model=MemberResponse)
def get_member(
    member_id: int,
    service: MemberService = Depends(get_member_service),
):
    try:
        return service.get_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/members/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: int,
    payload: MemberUpdateRequest,
    service: MemberService = Depends(get_member_service),
):
    """Partially update a member; only fields present in the body change."""
    try:
        return service.update_member(member_id, payload.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/members/{member_id}")
def delete_member(
    member_id: int,
    service: MemberService = Depends(get_member_service),
):
    """Delete a member and their holidays."""
    try:
        return service.delete_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
