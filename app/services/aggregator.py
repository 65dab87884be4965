"""
Aggregator

Answers windowed queries over the ledger: raw events, per-employee time-off
summaries, compensation summaries and their merge. Nothing is cached; each
call recomputes from the stored events.
"""
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import InvalidInputError
from app.schemas.ledger import (
    CompEventOut,
    CompSummary,
    EmployeeSummary,
    MergedSummary,
    TimeEventOut,
    Window,
    WindowResult,
)
from app.services import event_store
from app.services.calendar import month_window, year_window

_TIME_FIELDS = ("vacation_days", "short_days", "short_hours")
_COMP_FIELDS = ("credit_days", "debit_days", "balance_days", "credit_hours", "debit_hours", "balance_hours")


def resolve_window(month: Optional[str] = None, year=None) -> Tuple[Optional[date], Optional[date]]:
    """Month token or year -> [from, to); neither -> unbounded."""
    has_month = bool(str(month or "").strip())
    has_year = year is not None and str(year).strip() != ""
    if has_month and has_year:
        raise InvalidInputError("Use either month or year, not both")
    if has_month:
        return month_window(month)
    if has_year:
        return year_window(year)
    return None, None


def merge_summaries(summary: List[EmployeeSummary], comp_summary: List[CompSummary]) -> List[MergedSummary]:
    """
    Outer join on employee_name.

    Time-off employees come first, comp-only employees are appended with
    zeroed time-off fields, then the whole list is sorted by name.
    """
    comp_by_name: Dict[str, CompSummary] = {c.employee_name: c for c in comp_summary}
    merged: List[MergedSummary] = []
    seen = set()

    for s in summary:
        comp = comp_by_name.get(s.employee_name)
        row = {"employee_name": s.employee_name}
        row.update({f: getattr(s, f) for f in _TIME_FIELDS})
        row.update({f: getattr(comp, f) if comp else 0 for f in _COMP_FIELDS})
        merged.append(MergedSummary(**row))
        seen.add(s.employee_name)

    for c in comp_summary:
        if c.employee_name in seen:
            continue
        row = {"employee_name": c.employee_name}
        row.update({f: 0 for f in _TIME_FIELDS})
        row.update({f: getattr(c, f) for f in _COMP_FIELDS})
        merged.append(MergedSummary(**row))

    merged.sort(key=lambda m: m.employee_name)
    return merged


def query_window(
    db: Session,
    month: Optional[str] = None,
    year=None,
    employee_name: Optional[str] = None,
    limit: Optional[int] = None,
) -> WindowResult:
    """
    Raw events (newest day first, capped) plus summaries over the full
    window, optionally restricted to one employee.
    """
    date_from, date_to = resolve_window(month, year)
    employee = str(employee_name or "").strip() or None
    limit = limit or settings.event_page_limit

    time_events = event_store.list_time_events(db, date_from, date_to, employee, limit=limit)
    comp_events = event_store.list_comp_events(db, date_from, date_to, employee, limit=limit)
    summary = event_store.summarize_time_events(db, date_from, date_to, employee)
    comp_summary = event_store.summarize_comp_events(db, date_from, date_to, employee)

    return WindowResult(
        window=Window(date_from=date_from, date_to=date_to),
        time_events=[TimeEventOut.model_validate(e) for e in time_events],
        comp_events=[CompEventOut.model_validate(e) for e in comp_events],
        summary=summary,
        comp_summary=comp_summary,
        merged=merge_summaries(summary, comp_summary),
    )


def year_summary(db: Session, year, employee_name: Optional[str] = None) -> List[MergedSummary]:
    date_from, date_to = year_window(year)
    summary = event_store.summarize_time_events(db, date_from, date_to, employee_name)
    comp_summary = event_store.summarize_comp_events(db, date_from, date_to, employee_name)
    return merge_summaries(summary, comp_summary)
