"""
Vacations Router

Time-off events and windowed ledger queries. Business rules live in
LedgerService and the aggregator; this module only maps HTTP to them.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.schemas import ApiResponse
from app.database import get_db
from app.routers.auth_deps import get_employee_directory, get_ledger_service, require_admin
from app.schemas.ledger import EmployeeName, MergedSummary, TimeOffCreate, WindowResult, WriteAck
from app.services import aggregator
from app.services.employee_directory import EmployeeDirectory
from app.services.ledger_service import LedgerService

router = APIRouter(
    prefix="/admin/vacations",
    tags=["vacations"],
    dependencies=[Depends(require_admin)]
)


@router.get("/employees", response_model=ApiResponse[List[EmployeeName]])
def list_employees(directory: EmployeeDirectory = Depends(get_employee_directory)):
    """Employee names from the users module, ascending."""
    return ApiResponse.ok([EmployeeName(name=n) for n in directory.list_names()])


@router.get("", response_model=ApiResponse[WindowResult])
def query_window(
    month: Optional[str] = Query(None, description="YYYY-MM"),
    year: Optional[int] = Query(None),
    employee: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    result = aggregator.query_window(db, month=month, year=year, employee_name=employee)
    return ApiResponse.ok(
        result,
        metadata={"time_events": len(result.time_events), "comp_events": len(result.comp_events)}
    )


@router.get("/summary/{year}", response_model=ApiResponse[List[MergedSummary]])
def year_summary(year: int, employee: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Combined yearly view: time-off and compensation per employee."""
    employee = (employee or "").strip() or None
    return ApiResponse.ok(aggregator.year_summary(db, year, employee))


@router.post("", response_model=ApiResponse[WriteAck])
def create_time_off(
    request: TimeOffCreate,
    actor: str = Depends(require_admin),
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Vacation can be a single day or a period (dayFrom/dayTo, max 62 days);
    short is always exactly one day with 1..12 hoursOff (default 4).
    """
    written = service.create_time_off(
        employee_name=request.employee_name,
        kind=request.kind,
        day=request.day,
        day_from=request.day_from,
        day_to=request.day_to,
        hours_off=request.hours_off,
        note=request.note,
        actor=actor,
    )
    return ApiResponse.ok(WriteAck(days_written=written))


@router.delete("/{event_id}", response_model=ApiResponse[WriteAck])
def delete_time_event(event_id: str, service: LedgerService = Depends(get_ledger_service)):
    service.delete_time_event(event_id)
    return ApiResponse.ok(WriteAck(id=event_id))
