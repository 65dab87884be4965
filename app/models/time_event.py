"""
Time Event Model.
One employee's absence on one calendar day; (employee_name, day, kind) is the natural key.
"""
import enum
import uuid

from sqlalchemy import Column, String, Integer, Date, DateTime, Text, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.sql import func
from app.database import Base


class TimeEventKind(str, enum.Enum):
    VACATION = "vacation"  # full day off
    SHORT = "short"        # partial day, hours_off set


class TimeEvent(Base):
    __tablename__ = "time_events"
    __table_args__ = (
        UniqueConstraint("employee_name", "day", "kind", name="time_events_unique"),
        CheckConstraint("kind IN ('vacation','short')", name="time_events_kind_check"),
        Index("time_events_day", "day"),
        Index("time_events_employee", "employee_name"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_name = Column(Text, nullable=False)
    day = Column(Date, nullable=False)
    kind = Column(String(16), nullable=False)  # Using String to store enum value for simplicity with SQLite
    hours_off = Column(Integer, nullable=True)  # only for kind=short
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by = Column(Text, nullable=True)

    def __repr__(self):
        return f"<TimeEvent {self.employee_name} {self.day} {self.kind}>"
