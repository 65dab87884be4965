"""
Admin gate and caller identity for the ledger endpoints.

Identity is owned by the host application; this module only checks the
shared admin secret (when configured) and reads the actor string that ends
up in created_by.
"""
import hmac
import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.database import get_db
from app.services.employee_directory import SqlEmployeeDirectory
from app.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def require_admin(request: Request) -> str:
    """
    Rejects the request when ADMIN_SECRET is set and the X-Admin-Secret
    header does not match. Returns the caller identity (X-Actor or the
    configured default).
    """
    secret = settings.admin_secret
    if secret:
        supplied = request.headers.get(settings.admin_secret_header, "")
        if not hmac.compare_digest(supplied.encode(), secret.encode()):
            logger.warning("Authentication failed: bad or missing admin secret", extra={"path": request.url.path})
            raise AuthenticationError("Not authorized")
    actor = (request.headers.get(settings.actor_header) or "").strip()
    return actor or settings.default_actor


def get_ledger_service(db: Session = Depends(get_db)) -> LedgerService:
    return LedgerService(db)


def get_employee_directory(db: Session = Depends(get_db)) -> SqlEmployeeDirectory:
    return SqlEmployeeDirectory(db)
