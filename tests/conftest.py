"""
Test configuration and fixtures for the TinyLink service.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from main import app
from tinylink_app.database.connection import Base, get_db
from tinylink_app.dependencies import get_base_url

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
TEST_BASE_URL = "http://sho.rt"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        # Cleanup
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def base_url():
    """Public base URL the API builds short_url from during tests"""
    return TEST_BASE_URL


@pytest.fixture(scope="function")
def session_factory():
    """Open extra sessions on the test database (caller closes them)"""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database dependency overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    # Override the database dependency and the public base URL
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_base_url] = lambda: TEST_BASE_URL

    # Create test client
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def concurrent_client():
    """
    Test client that opens a separate session per request,
    so requests running in parallel threads don't share one.
    """
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_base_url] = lambda: TEST_BASE_URL

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
