"""
Statement Data Builder

Assembles the yearly statement data handed to the document renderer. The
output is plain data: no layout, pages or signatures live here.
"""
from datetime import datetime, timezone
from typing import Optional, Union

from sqlalchemy.orm import Session

from app.schemas.ledger import (
    AllEmployeesStatement,
    CompEventOut,
    EmployeeStatement,
    MergedSummary,
    StatementRow,
    StatementTotals,
    TimeEventOut,
)
from app.services import event_store
from app.services.aggregator import year_summary
from app.services.calendar import year_window


def build_employee_statement(db: Session, year, employee_name: str) -> EmployeeStatement:
    date_from, date_to = year_window(year)
    rows = year_summary(db, year, employee_name)
    totals = rows[0] if rows else MergedSummary(employee_name=employee_name)

    time_events = event_store.list_time_events(db, date_from, date_to, employee_name, ascending=True)
    comp_events = event_store.list_comp_events(db, date_from, date_to, employee_name, ascending=True)

    return EmployeeStatement(
        year=date_from.year,
        employee_name=employee_name,
        generated_at=datetime.now(timezone.utc),
        totals=totals,
        time_events=[TimeEventOut.model_validate(e) for e in time_events],
        comp_events=[CompEventOut.model_validate(e) for e in comp_events],
    )


def build_all_employees_statement(db: Session, year) -> AllEmployeesStatement:
    date_from, _ = year_window(year)
    rows = [
        StatementRow(
            employee_name=m.employee_name,
            vacation_days=m.vacation_days,
            short_days=m.short_days,
            short_hours=m.short_hours,
            balance_days=m.balance_days,
            balance_hours=m.balance_hours,
        )
        for m in year_summary(db, year)
    ]
    totals = StatementTotals(
        vacation_days=sum(r.vacation_days for r in rows),
        short_days=sum(r.short_days for r in rows),
        short_hours=sum(r.short_hours for r in rows),
        balance_days=sum(r.balance_days for r in rows),
        balance_hours=sum(r.balance_hours for r in rows),
    )
    return AllEmployeesStatement(
        year=date_from.year,
        generated_at=datetime.now(timezone.utc),
        rows=rows,
        totals=totals,
    )


def build_statement(
    db: Session, year, employee_name: Optional[str] = None
) -> Union[EmployeeStatement, AllEmployeesStatement]:
    """Detail packet for one employee, or the all-employees summary packet."""
    employee = str(employee_name or "").strip()
    if employee:
        return build_employee_statement(db, year, employee)
    return build_all_employees_statement(db, year)
