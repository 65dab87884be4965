from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from app.database import Base

class LoginCode(Base):
    """
    Shop login codes created by the users module. The ledger only reads
    `name` from here to build the employee directory.
    """
    __tablename__ = "login_codes"

    code = Column(String(16), primary_key=True)
    shop_id = Column(String, nullable=True)
    name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
