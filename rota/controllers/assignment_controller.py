# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Rota assignment, conflict check and auto-assign endpoints.
Thin HTTP layer — delegates ALL logic to RotaService.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from rota.core.exceptions import AssignmentConflictError, HorizonExhausted, NoCandidateError
from rota.schemas.rota import (
    AssignmentCreateRequest,
    AssignmentResponse,
    AssignmentUpdateRequest,
    AutoAssignRequest,
    ConflictCheckRequest,
    PlanPeriodRequest,
)
from rota.services.rota_service import RotaService
from rota.core.dependencies import get_rota_service

router = APIRouter(prefix="/api/v1", tags=["Assignments"])


# ── Assignment CRUD ──

@router.get("/assignments", response_model=list[AssignmentResponse])
def list_assignments(service: RotaService = Depends(get_rota_service)):
    return service.list_assignments()


@router.post("/assignments", status_code=201, response_model=AssignmentResponse)
def create_assignment(
    payload: AssignmentCreateRequest,
    service: RotaService = Depends(get_rota_service),
):
    """Create a manual assignment; blocked on holiday conflicts unless allowed."""
    try:
        return service.create_assignment(
            payload.model_dump(exclude={"allow_conflicts"}),
            allow_conflicts=payload.allow_conflicts,
        )
    except AssignmentConflictError as e:
        raise HTTPException(
            status_code=409,
            detail=jsonable_encoder({
                "error": str(e),
                "conflicting_members": e.conflicting_members,
            }),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/assignments/current", response_model=AssignmentResponse)
def get_current_assignment(service: RotaService = Depends(get_rota_service)):
    """The assignment covering today; a single-day one beats a week-long one."""
    try:
        return service.current_assignment()
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/assignments/upcoming", response_model=list[AssignmentResponse])
def get_upcoming_assignments(service: RotaService = Depends(get_rota_service)):
    return service.upcoming_assignments()


@router.get("/assignments/on/{day}", response_model=AssignmentResponse)
def get_assignment_on(
    day: str,
    service: RotaService = Depends(get_rota_service),
):
    """Resolve which assignment applies on a given date."""
    try:
        return service.assignment_for_date(day)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Conflicts & planning ──

@router.post("/assignments/check-conflicts")
def check_conflicts(
    payload: ConflictCheckRequest,
    service: RotaService = Depends(get_rota_service),
):
    """Report members on the assignment whose holidays overlap its span."""
    try:
        return service.check_conflicts(payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _run_plan(plan):
    try:
        return plan()
    except NoCandidateError as e:
        raise HTTPException(status_code=409, detail=jsonable_encoder(e.to_dict()))
    except HorizonExhausted as e:
        raise HTTPException(status_code=409, detail={"error": str(e)})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/assignments/auto-assign", status_code=201)
def auto_assign(
    payload: AutoAssignRequest,
    service: RotaService = Depends(get_rota_service),
):
    """Auto-assign a range, or the next workable week when no range is given."""
    return _run_plan(
        lambda: service.auto_assign(payload.start_date, payload.end_date, payload.strategy)
    )


@router.post("/assignments/plan", status_code=201)
def plan_period(
    payload: PlanPeriodRequest,
    service: RotaService = Depends(get_rota_service),
):
    """Auto-assign an explicit period."""
    return _run_plan(
        lambda: service.plan_period(payload.start_date, payload.end_date, payload.strategy)
    )


# ── Single assignment ──

@router.get("/assignments/{assignment_id}", response_model=AssignmentResponse)
def get_assignment(
    assignment_id: int,
    service: RotaService = Depends(get_rota_service),
):
    try:
        return service.get_assignment(assignment_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/assignments/{assignment_id}", response_model=AssignmentResponse)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdateRequest,
    service: RotaService = Depends(get_rota_service),
):
    """Edit notes or the manual flag; dates and members are fixed once created."""
    try:
        return service.update_assignment(assignment_id, payload.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/assignments/{assignment_id}")
def delete_assignment(
    assignment_id: int,
    service: RotaService = Depends(get_rota_service),
):
    """Delete an assignment and its history rows."""
    try:
        return service.delete_assignment(assignment_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
