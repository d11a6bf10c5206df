"""
Classroom Service - Pytest Configuration and Fixtures
Shared fixtures for all test modules
"""
import os
import pytest
from unittest.mock import MagicMock
from typing import Any, Dict

# Set test environment before importing settings - use in-memory DB
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("DEBUG", "false")


# ================== Database Fixtures ==================

@pytest.fixture
def test_db_session():
    """
    Create a test database session with isolated SQLite.
    StaticPool keeps the single in-memory connection alive for the session.
    """
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool
    from src.database.models import Base

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    yield session

    # Cleanup
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def users(test_db_session):
    """Teacher T1 and students S1-S3 in the users table."""
    from src.database.models import User

    rows = [
        User(id="T1", name="Alice"),
        User(id="S1", name="Bob"),
        User(id="S2", name="Carol"),
        User(id="S3", name="Dave"),
    ]
    test_db_session.add_all(rows)
    test_db_session.commit()
    return {user.id: user for user in rows}


# ================== FastAPI Test Client Fixtures ==================

@pytest.fixture
def test_client(test_db_session):
    """
    FastAPI TestClient backed by the isolated test session.
    Lifespan is not entered, so no file database is created.
    """
    from fastapi.testclient import TestClient
    from api.main import app
    from src.database.db import get_db

    # MUST yield the SAME session so tests can inspect what routes wrote
    def override_get_db():
        yield test_db_session

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app, raise_server_exceptions=False)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def broken_session():
    """Session whose every query fails like an unreachable database."""
    from sqlalchemy.exc import OperationalError

    failure = OperationalError("SELECT 1", {}, Exception("unable to open database file"))
    session = MagicMock()
    session.query.side_effect = failure
    session.execute.side_effect = failure
    session.commit.side_effect = failure
    return session


@pytest.fixture
def broken_store_client(broken_session):
    """TestClient whose store raises on every call."""
    from fastapi.testclient import TestClient
    from api.main import app
    from src.database.db import get_db

    def override_get_db():
        yield broken_session

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app, raise_server_exceptions=False)
    yield client

    app.dependency_overrides.clear()


# ================== Utility Functions ==================

def create_classroom(
    client,
    classroom_name: str = "Math101",
    teacher_id: str = "T1",
    teacher_name: str = "Alice"
) -> Dict[str, Any]:
    """Create a classroom through the API and return its JSON."""
    response = client.post(
        "/api/classrooms/create",
        json={
            "classroomName": classroom_name,
            "teacherId": teacher_id,
            "teacherName": teacher_name
        }
    )
    assert response.status_code == 200, response.text
    return response.json()["classroom"]


def join_classroom(client, user_id: str, classroom_code: str):
    return client.post(
        "/api/classrooms/join",
        json={"userId": user_id, "classroomCode": classroom_code}
    )


def leave_classroom(client, user_id: str, classroom_id: str):
    return client.post(
        "/api/classrooms/leave",
        json={"userId": user_id, "classroomId": classroom_id}
    )


@pytest.fixture
def classroom(test_client) -> Dict[str, Any]:
    """A fresh classroom owned by T1."""
    return create_classroom(test_client)
