"""
Employee directory used by the ledger UI pickers.

Names are owned by the users module (login_codes); the ledger only reads
them and never validates event names against this list.
"""
from typing import List, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.login_code import LoginCode


class EmployeeDirectory(Protocol):
    def list_names(self) -> List[str]:
        ...


class SqlEmployeeDirectory:
    def __init__(self, db: Session):
        self.db = db

    def list_names(self) -> List[str]:
        name = func.trim(LoginCode.name)
        rows = (
            self.db.query(name.label("name"))
            .filter(LoginCode.name.isnot(None), name != "")
            .distinct()
            .order_by(name.asc())
            .all()
        )
        return [row.name for row in rows]
