import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from app.core.config import settings

logger = logging.getLogger(__name__)

# Support both PostgreSQL and SQLite via centralized settings
DATABASE_URL = settings.database_url

if DATABASE_URL.startswith("postgresql"):
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)
else:
    # SQLite configuration for local development/testing
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """
    Session Provider: Provides a database session per request.
    Transaction management is handled explicitly in the Service Layer.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Atomicity boundary for a multi-row write.

    Everything executed against ``db`` inside the block is committed together
    when the block exits normally, and rolled back as a whole if it raises.
    The caller must not commit inside the block.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise

def init_db(bind=None):
    """
    Registers all ledger models and creates the schema.
    Runs once at process startup (lifespan or scripts/init_db.py), never
    from the request path.
    """
    from app.models import time_event, comp_event, login_code  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Schema ready", extra={"tables": sorted(Base.metadata.tables)})
