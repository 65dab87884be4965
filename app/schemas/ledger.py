from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Requests ---

class TimeOffCreate(CamelModel):
    employee_name: str = ""
    kind: str = ""
    day: Optional[str] = None
    day_from: Optional[str] = None
    day_to: Optional[str] = None
    # Kept loose on purpose: blank strings mean "use the default"
    hours_off: Optional[Union[int, float, str]] = None
    note: Optional[str] = None


class CompEventCreate(CamelModel):
    employee_name: str = ""
    day: Optional[str] = None
    unit: str = ""
    amount: Optional[Union[int, float, str]] = None
    note: Optional[str] = None


# --- Events ---

class TimeEventOut(CamelModel):
    id: str
    employee_name: str
    day: date
    kind: str
    hours_off: Optional[int] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None


class CompEventOut(CamelModel):
    id: str
    employee_name: str
    day: date
    unit: str
    amount: int
    note: str
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None


# --- Derived summaries ---

class EmployeeSummary(CamelModel):
    employee_name: str
    vacation_days: int = 0
    short_days: int = 0
    short_hours: int = 0


class CompSummary(CamelModel):
    employee_name: str
    credit_days: int = 0
    debit_days: int = 0
    balance_days: int = 0
    credit_hours: int = 0
    debit_hours: int = 0
    balance_hours: int = 0


class MergedSummary(EmployeeSummary, CompSummary):
    """Outer join of EmployeeSummary and CompSummary on employee_name."""


class Window(CamelModel):
    date_from: Optional[date] = None
    date_to: Optional[date] = None  # exclusive


class WindowResult(CamelModel):
    window: Window
    time_events: List[TimeEventOut]
    comp_events: List[CompEventOut]
    summary: List[EmployeeSummary]
    comp_summary: List[CompSummary]
    merged: List[MergedSummary]


# --- Write acknowledgements ---

class WriteAck(CamelModel):
    ok: bool = True
    days_written: int = 0
    id: Optional[str] = None


# --- Statements ---

class EmployeeStatement(CamelModel):
    kind: Literal["employee"] = "employee"
    year: int
    employee_name: str
    generated_at: datetime
    totals: MergedSummary
    time_events: List[TimeEventOut]
    comp_events: List[CompEventOut]


class StatementRow(CamelModel):
    employee_name: str
    vacation_days: int = 0
    short_days: int = 0
    short_hours: int = 0
    balance_days: int = 0
    balance_hours: int = 0


class StatementTotals(CamelModel):
    vacation_days: int = 0
    short_days: int = 0
    short_hours: int = 0
    balance_days: int = 0
    balance_hours: int = 0


class AllEmployeesStatement(CamelModel):
    kind: Literal["all"] = "all"
    year: int
    generated_at: datetime
    rows: List[StatementRow]
    totals: StatementTotals


class EmployeeName(CamelModel):
    name: str
