import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.pop("ADMIN_SECRET", None)

from app.database import Base, get_db
from app.main import app
from app.models.comp_event import CompEvent
from app.models.time_event import TimeEvent
from app.services.ledger_service import LedgerService
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="function", autouse=True)
def setup_database():
    """Fresh schema per test: the ledger commits and rolls back for real."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    session = TestingSessionLocal()
    yield session
    session.close()

@pytest.fixture(scope="function")
def ledger(db_session):
    return LedgerService(db_session)

@pytest.fixture(scope="function")
def time_events(db_session):
    """Current TimeEvent rows, ascending by employee then day."""
    def _rows(**filters):
        query = db_session.query(TimeEvent).filter_by(**filters)
        return query.order_by(TimeEvent.employee_name, TimeEvent.day, TimeEvent.kind).all()
    return _rows

@pytest.fixture(scope="function")
def comp_events(db_session):
    def _rows(**filters):
        return db_session.query(CompEvent).filter_by(**filters).order_by(CompEvent.day).all()
    return _rows

@pytest.fixture(scope="function")
def vacation(ledger):
    """Shortcut: vacation(name, "2025-03-01", "2025-03-05")."""
    def _create(name, day_from, day_to=None, note=None):
        return ledger.create_time_off(name, "vacation", day_from=day_from, day_to=day_to, note=note)
    return _create

@pytest.fixture(scope="function")
def short(ledger):
    def _create(name, day, hours=None, note=None):
        return ledger.create_time_off(name, "short", day=day, hours_off=hours, note=note)
    return _create

@pytest.fixture(scope="function")
def comp(ledger):
    def _create(name, day, unit, amount, note="overtime"):
        return ledger.create_comp_event(name, day, unit, amount, note)
    return _create

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
