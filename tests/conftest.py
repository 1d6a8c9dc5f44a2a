import random
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from timesheet_generator.main import app
from timesheet_generator.db.session import Base, get_db
from timesheet_generator.api.dependencies import get_rng
from timesheet_generator.core.reference_data import DEFAULT_REFERENCE_DATA

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database tables"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def rng():
    """Seeded random source so generated hours are reproducible"""
    return random.Random(1234)


@pytest.fixture
def client(db_session, rng):
    """Create test client with database and random source overrides"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rng] = lambda: rng
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def reference():
    return DEFAULT_REFERENCE_DATA


@pytest.fixture
def week_dates():
    """Monday 2026-02-02 to Friday 2026-02-06, no holidays"""
    return {"from_date": "2026-02-02", "to_date": "2026-02-06"}
