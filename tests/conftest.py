"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- FastAPI test client
- Seeded companies c1-c3 and jobs j1-j3
- Tokens for a regular user and an admin
"""

import os

# Must be set before jobly.core.config is imported anywhere
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["SECRET_KEY"] = "secret-test"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.models.company import Company
from jobly.models.job import Job
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _sqlite_pragmas(dbapi_connection, connection_record):
    """Match PostgreSQL: enforce foreign keys, case-sensitive LIKE."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped again after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Companies c1-c3 (1-3 employees) and jobs j1-j3.

    Returns a dict of job title -> job id.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db_session.commit()

    jobs = [
        Job(title="j1", salary=20000, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="j2", salary=500000, equity=Decimal("0.2"), company_handle="c3"),
        Job(title="j3", salary=205000, equity=Decimal("0"), company_handle="c3"),
    ]
    db_session.add_all(jobs)
    db_session.commit()

    return {j.title: j.id for j in jobs}


@pytest.fixture
def u1_token():
    """Token for a logged-in, non-admin user"""
    return app.state.authenticator.create_token("u1", is_admin=False)


@pytest.fixture
def admin_token():
    """Token for an admin user"""
    return app.state.authenticator.create_token("admin", is_admin=True)


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}
