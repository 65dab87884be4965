"""
Ledger Service Layer

Validates time-off and compensation requests and writes them through the
event store. Every write runs inside one unit of work: a multi-day vacation
is committed as a whole or not at all.

Architecture:
- Router -> LedgerService (this module) -> event_store -> Models
- All guardrails are enforced here, before any statement reaches the store
- Store errors roll back and surface as PersistenceError; nothing is retried
"""
import math
from datetime import date
from typing import Any, Callable, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.exceptions import InvalidInputError, NotFoundError, PersistenceError
from app.database import unit_of_work
from app.models.comp_event import CompUnit
from app.models.time_event import TimeEventKind
from app.services import event_store
from app.services.base import BaseService
from app.services.calendar import expand_range, parse_day

T = TypeVar("T")

# Guardrails
SHORT_HOURS_DEFAULT = 4
SHORT_HOURS_MIN = 1
SHORT_HOURS_MAX = 12
COMP_MAX_DAYS = 62
COMP_MAX_HOURS = 24

TIME_EVENT_KINDS = {k.value for k in TimeEventKind}
COMP_UNITS = {u.value for u in CompUnit}
COMP_LIMITS = {CompUnit.DAY.value: COMP_MAX_DAYS, CompUnit.HOUR.value: COMP_MAX_HOURS}


def _norm(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _present(value: Any) -> bool:
    return _norm(value) != ""


def _to_int(value: Any, field: str, default: Optional[int] = None) -> Optional[int]:
    """Blank -> default; numeric -> truncated int; anything else is rejected."""
    if not _present(value):
        return default
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number", details={"field": field})
    try:
        number = float(_norm(value))
    except ValueError:
        raise InvalidInputError(f"{field} must be a number", details={"field": field, "value": value})
    if not math.isfinite(number):
        raise InvalidInputError(f"{field} must be a number", details={"field": field, "value": value})
    return math.trunc(number)


class LedgerService(BaseService):

    def _actor(self, actor: Optional[str]) -> str:
        return _norm(actor) or settings.default_actor

    def _write(self, operation: str, work: Callable[[], T]) -> T:
        try:
            with unit_of_work(self.db):
                return work()
        except SQLAlchemyError as e:
            self._logger.error(f"{operation} failed, transaction rolled back: {e}", exc_info=True)
            raise PersistenceError(str(getattr(e, "orig", None) or e)) from e

    # ------------------------------------------------------------------
    # Time off
    # ------------------------------------------------------------------

    def create_time_off(
        self,
        employee_name: Any,
        kind: Any,
        day: Any = None,
        day_from: Any = None,
        day_to: Any = None,
        hours_off: Any = None,
        note: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> int:
        """
        Record vacation (single day or period) or a short absence.

        Each day is upserted on (employee_name, day, kind), so repeating a
        request updates hours/note instead of duplicating rows.

        Returns:
            Number of day rows written.
        """
        employee = _norm(employee_name)
        kind = _norm(kind)
        if not employee:
            raise InvalidInputError("employeeName required", details={"field": "employeeName"})
        if kind not in TIME_EVENT_KINDS:
            raise InvalidInputError("kind must be vacation|short", details={"field": "kind", "value": kind})

        # The period wins over the single day when both are sent
        if _present(day_from):
            start = parse_day(day_from, "dayFrom")
        else:
            start = parse_day(day, "day")

        hours: Optional[int] = None
        if kind == TimeEventKind.SHORT.value:
            days: List[date] = [start]
            hours = _to_int(hours_off, "hoursOff", default=SHORT_HOURS_DEFAULT)
            if not SHORT_HOURS_MIN <= hours <= SHORT_HOURS_MAX:
                raise InvalidInputError(
                    f"hoursOff must be between {SHORT_HOURS_MIN} and {SHORT_HOURS_MAX}",
                    details={"field": "hoursOff", "value": hours},
                )
        else:
            end = parse_day(day_to, "dayTo") if _present(day_to) else start
            days = expand_range(start, end)

        note = _norm(note) or None
        created_by = self._actor(actor)

        def work() -> int:
            for d in days:
                event_store.upsert_time_event(
                    self.db,
                    employee_name=employee,
                    day=d,
                    kind=kind,
                    hours_off=hours,
                    note=note,
                    created_by=created_by,
                )
            return len(days)

        written = self._write("create_time_off", work)
        self.log_info(
            f"Time off saved: {employee} {kind} x{written}",
            employee_name=employee,
            kind=kind,
            day_from=days[0].isoformat(),
            day_to=days[-1].isoformat(),
            actor=created_by,
        )
        return written

    def delete_time_event(self, event_id: Any) -> None:
        event_id = _norm(event_id)
        if not event_id:
            raise InvalidInputError("id required", details={"field": "id"})

        def work() -> None:
            if not event_store.delete_time_event(self.db, event_id):
                raise NotFoundError("Time event not found")

        self._write("delete_time_event", work)
        self.log_info(f"Time event deleted: {event_id}", event_id=event_id)

    # ------------------------------------------------------------------
    # Compensation
    # ------------------------------------------------------------------

    def create_comp_event(
        self,
        employee_name: Any,
        day: Any,
        unit: Any,
        amount: Any,
        note: Optional[str],
        actor: Optional[str] = None,
    ) -> str:
        """
        Append one compensation ledger line. Never upserts: every call is a
        new line, so callers must not blindly retry an unacknowledged write.

        Returns:
            The new event id.
        """
        employee = _norm(employee_name)
        unit = _norm(unit)
        if not employee:
            raise InvalidInputError("employeeName required", details={"field": "employeeName"})
        when = parse_day(day, "day")
        if unit not in COMP_UNITS:
            raise InvalidInputError("unit must be day|hour", details={"field": "unit", "value": unit})

        value = _to_int(amount, "amount")
        if value is None:
            raise InvalidInputError("amount required", details={"field": "amount"})
        if value == 0:
            raise InvalidInputError("amount must be nonzero", details={"field": "amount"})
        limit = COMP_LIMITS[unit]
        if abs(value) > limit:
            raise InvalidInputError(
                f"amount must be between -{limit} and {limit} for unit '{unit}'",
                details={"field": "amount", "value": value, "max": limit},
            )

        reason = _norm(note)
        if not reason:
            raise InvalidInputError("note required", details={"field": "note"})
        created_by = self._actor(actor)

        def work() -> str:
            event = event_store.insert_comp_event(
                self.db,
                employee_name=employee,
                day=when,
                unit=unit,
                amount=value,
                note=reason,
                created_by=created_by,
            )
            return event.id

        event_id = self._write("create_comp_event", work)
        self.log_info(
            f"Comp event saved: {employee} {value:+d} {unit}",
            employee_name=employee,
            unit=unit,
            amount=value,
            actor=created_by,
        )
        return event_id

    def delete_comp_event(self, event_id: Any) -> None:
        # Physical delete; corrections should normally be an offsetting entry
        event_id = _norm(event_id)
        if not event_id:
            raise InvalidInputError("id required", details={"field": "id"})

        def work() -> None:
            if not event_store.delete_comp_event(self.db, event_id):
                raise NotFoundError("Comp event not found")

        self._write("delete_comp_event", work)
        self.log_info(f"Comp event deleted: {event_id}", event_id=event_id)
