from fastapi import APIRouter, Depends

from app.core.schemas import ApiResponse
from app.routers.auth_deps import get_ledger_service, require_admin
from app.schemas.ledger import CompEventCreate, WriteAck
from app.services.ledger_service import LedgerService

router = APIRouter(
    prefix="/admin/comp",
    tags=["compensation"],
    dependencies=[Depends(require_admin)]
)


@router.post("", response_model=ApiResponse[WriteAck])
def create_comp_event(
    request: CompEventCreate,
    actor: str = Depends(require_admin),
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Append a compensation line. Positive amount: owed to the employee;
    negative: settled. Not idempotent, do not retry blindly.
    """
    event_id = service.create_comp_event(
        employee_name=request.employee_name,
        day=request.day,
        unit=request.unit,
        amount=request.amount,
        note=request.note,
        actor=actor,
    )
    return ApiResponse.ok(WriteAck(id=event_id))


@router.delete("/{event_id}", response_model=ApiResponse[WriteAck])
def delete_comp_event(event_id: str, service: LedgerService = Depends(get_ledger_service)):
    service.delete_comp_event(event_id)
    return ApiResponse.ok(WriteAck(id=event_id))
