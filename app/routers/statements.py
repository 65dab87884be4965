from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.schemas import ApiResponse
from app.database import get_db
from app.routers.auth_deps import require_admin
from app.schemas.ledger import AllEmployeesStatement, EmployeeStatement
from app.services.statement_builder import build_statement

router = APIRouter(
    prefix="/admin/statements",
    tags=["statements"],
    dependencies=[Depends(require_admin)]
)


@router.get("/{year}", response_model=ApiResponse[Union[EmployeeStatement, AllEmployeesStatement]])
def get_statement(year: int, employee: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Statement data for the document renderer: one employee in detail, or everyone summarized."""
    return ApiResponse.ok(build_statement(db, year, employee))
