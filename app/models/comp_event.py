import enum
import uuid

from sqlalchemy import Column, String, Integer, Date, DateTime, Text, CheckConstraint, Index
from sqlalchemy.sql import func
from app.database import Base


class CompUnit(str, enum.Enum):
    DAY = "day"
    HOUR = "hour"


class CompEvent(Base):
    """
    Compensation ledger line. Positive amount: the organization owes the
    employee; negative: a debt was settled. Append-only, no natural key.
    """
    __tablename__ = "comp_events"
    __table_args__ = (
        CheckConstraint("unit IN ('day','hour')", name="comp_events_unit_check"),
        CheckConstraint("amount <> 0", name="comp_events_amount_nonzero"),
        Index("comp_events_day", "day"),
        Index("comp_events_employee", "employee_name"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_name = Column(Text, nullable=False)
    day = Column(Date, nullable=False)
    unit = Column(String(8), nullable=False)
    amount = Column(Integer, nullable=False)
    note = Column(Text, nullable=False)  # audit justification
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by = Column(Text, nullable=True)
