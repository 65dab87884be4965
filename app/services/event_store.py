"""
Event Store

Data access for the two ledger tables. Functions here never commit; the
caller owns the transaction (see `app.database.unit_of_work`).

- time_events: upsert on (employee_name, day, kind)
- comp_events: plain insert, append-only
- windowed reads use a half-open [date_from, date_to) interval
"""
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import and_, case, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceError
from app.models.comp_event import CompEvent, CompUnit
from app.models.time_event import TimeEvent, TimeEventKind
from app.schemas.ledger import CompSummary, EmployeeSummary

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        raise PersistenceError(f"Upsert not supported for dialect '{dialect}'")


def _window_filters(model, date_from: Optional[date], date_to: Optional[date], employee_name: Optional[str]):
    filters = []
    if date_from is not None:
        filters.append(model.day >= date_from)
    if date_to is not None:
        filters.append(model.day < date_to)
    if employee_name:
        filters.append(model.employee_name == employee_name)
    return filters


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def upsert_time_event(
    db: Session,
    *,
    employee_name: str,
    day: date,
    kind: str,
    hours_off: Optional[int],
    note: Optional[str],
    created_by: Optional[str],
) -> None:
    """
    Insert the (employee_name, day, kind) row or update it in place.
    Only hours_off (short rows) and note are overwritten on conflict.
    """
    insert = _dialect_insert(db)
    table = TimeEvent.__table__
    stmt = insert(table).values(
        id=str(uuid.uuid4()),
        employee_name=employee_name,
        day=day,
        kind=kind,
        hours_off=hours_off,
        note=note,
        created_by=created_by,
    )
    set_ = {"note": stmt.excluded.note}
    if kind == TimeEventKind.SHORT.value:
        set_["hours_off"] = stmt.excluded.hours_off
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.employee_name, table.c.day, table.c.kind],
        set_=set_,
    )
    db.execute(stmt)


def insert_comp_event(
    db: Session,
    *,
    employee_name: str,
    day: date,
    unit: str,
    amount: int,
    note: str,
    created_by: Optional[str],
) -> CompEvent:
    event = CompEvent(
        id=str(uuid.uuid4()),
        employee_name=employee_name,
        day=day,
        unit=unit,
        amount=amount,
        note=note,
        created_by=created_by,
    )
    db.add(event)
    db.flush()
    return event


def delete_time_event(db: Session, event_id: str) -> bool:
    deleted = db.query(TimeEvent).filter(TimeEvent.id == event_id).delete(synchronize_session=False)
    return deleted > 0


def delete_comp_event(db: Session, event_id: str) -> bool:
    deleted = db.query(CompEvent).filter(CompEvent.id == event_id).delete(synchronize_session=False)
    return deleted > 0


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def list_time_events(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    employee_name: Optional[str] = None,
    limit: Optional[int] = None,
    ascending: bool = False,
) -> List[TimeEvent]:
    query = db.query(TimeEvent).filter(*_window_filters(TimeEvent, date_from, date_to, employee_name))
    if ascending:
        query = query.order_by(TimeEvent.day.asc(), TimeEvent.kind.asc())
    else:
        query = query.order_by(TimeEvent.day.desc(), TimeEvent.employee_name.asc(), TimeEvent.kind.asc())
    if limit:
        query = query.limit(limit)
    return query.all()


def list_comp_events(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    employee_name: Optional[str] = None,
    limit: Optional[int] = None,
    ascending: bool = False,
) -> List[CompEvent]:
    query = db.query(CompEvent).filter(*_window_filters(CompEvent, date_from, date_to, employee_name))
    if ascending:
        query = query.order_by(CompEvent.day.asc(), CompEvent.unit.asc(), CompEvent.created_at.asc())
    else:
        query = query.order_by(
            CompEvent.day.desc(), CompEvent.employee_name.asc(), CompEvent.unit.asc(), CompEvent.created_at.asc()
        )
    if limit:
        query = query.limit(limit)
    return query.all()


def summarize_time_events(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    employee_name: Optional[str] = None,
) -> List[EmployeeSummary]:
    is_vacation = TimeEvent.kind == TimeEventKind.VACATION.value
    is_short = TimeEvent.kind == TimeEventKind.SHORT.value
    rows = (
        db.query(
            TimeEvent.employee_name,
            func.sum(case((is_vacation, 1), else_=0)).label("vacation_days"),
            func.sum(case((is_short, 1), else_=0)).label("short_days"),
            func.sum(case((is_short, func.coalesce(TimeEvent.hours_off, 0)), else_=0)).label("short_hours"),
        )
        .filter(*_window_filters(TimeEvent, date_from, date_to, employee_name))
        .group_by(TimeEvent.employee_name)
        .order_by(TimeEvent.employee_name.asc())
        .all()
    )
    return [
        EmployeeSummary(
            employee_name=row.employee_name,
            vacation_days=int(row.vacation_days or 0),
            short_days=int(row.short_days or 0),
            short_hours=int(row.short_hours or 0),
        )
        for row in rows
    ]


def summarize_comp_events(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    employee_name: Optional[str] = None,
) -> List[CompSummary]:
    def _sums(unit: str):
        of_unit = CompEvent.unit == unit
        credit = func.sum(case((and_(of_unit, CompEvent.amount > 0), CompEvent.amount), else_=0))
        debit = func.sum(case((and_(of_unit, CompEvent.amount < 0), -CompEvent.amount), else_=0))
        balance = func.sum(case((of_unit, CompEvent.amount), else_=0))
        return credit, debit, balance

    credit_days, debit_days, balance_days = _sums(CompUnit.DAY.value)
    credit_hours, debit_hours, balance_hours = _sums(CompUnit.HOUR.value)

    rows = (
        db.query(
            CompEvent.employee_name,
            credit_days.label("credit_days"),
            debit_days.label("debit_days"),
            balance_days.label("balance_days"),
            credit_hours.label("credit_hours"),
            debit_hours.label("debit_hours"),
            balance_hours.label("balance_hours"),
        )
        .filter(*_window_filters(CompEvent, date_from, date_to, employee_name))
        .group_by(CompEvent.employee_name)
        .order_by(CompEvent.employee_name.asc())
        .all()
    )
    return [
        CompSummary(
            employee_name=row.employee_name,
            credit_days=int(row.credit_days or 0),
            debit_days=int(row.debit_days or 0),
            balance_days=int(row.balance_days or 0),
            credit_hours=int(row.credit_hours or 0),
            debit_hours=int(row.debit_hours or 0),
            balance_hours=int(row.balance_hours or 0),
        )
        for row in rows
    ]
