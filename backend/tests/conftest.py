"""
Configuration partagée pour tous les tests.
Override get_db et get_current_user pour éviter toute connexion réelle à PostgreSQL.
"""

import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from tuitiondesk.database import get_db
from tuitiondesk.main import app
from tuitiondesk.security import get_current_user


def fake_user():
    return SimpleNamespace(id=uuid.uuid4(), name="Admin", email="admin@centre.my", role="admin")


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée et une session ouverte."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = fake_user
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(mock_db):
    """Client HTTP sans session (get_current_user non surchargé)."""
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_subject(code="MMF4", name="Matematik F4", standard="F4", type="Classroom", subject=None):
    return SimpleNamespace(code=code, name=name, standard=standard, type=type, subject=subject or name)


def make_slot(subject_code="MMF4", day="Monday", start_time="20:15", end_time="21:15",
              teacher_name="Cikgu Aminah", student_id=None, student_name=None):
    return SimpleNamespace(
        timeslot_id=uuid.uuid4(),
        subject_code=subject_code,
        day=day,
        start_time=start_time,
        end_time=end_time,
        teacher_name=teacher_name,
        student_id=student_id,
        student_name=student_name,
    )
