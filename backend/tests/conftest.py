"""
Test fixtures for the student planner API.

Each test gets a fresh in-memory SQLite database and a fake tutor provider,
wired into the app through FastAPI dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import build_engine, get_db, init_db
from main import app
from planner_client import PlannerAPI, QueryCache
from providers.base import BaseProvider
from services.tutor_service import TutorService, get_tutor_service


class FakeProvider(BaseProvider):
    """Records every prompt and answers with a canned reply or error."""

    name = "gemini"

    def __init__(self, text: str | None = "Let's work through it together.", error: str | None = None):
        super().__init__(api_key="test-key", model="fake-model")
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> dict:
        self.prompts.append(prompt)
        if self.error:
            return self._result(self.model, error=self.error)
        return self._result(self.model, text=self.text)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """One session shared by the test body and every request it makes."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def tutor(provider):
    return TutorService(provider)


@pytest.fixture
def client(db, tutor):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tutor_service] = lambda: tutor
    # No context manager: the lifespan would initialise the on-disk database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api(client):
    return PlannerAPI(client)


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def subject(client):
    resp = client.post("/api/subjects", json={
        "name": "Physics",
        "color": "#3b82f6",
        "ai_category": "math_science",
    })
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def conversation(client, subject):
    resp = client.post("/api/study/conversations", json={
        "subject_id": subject["id"],
        "title": "Kinematics",
    })
    assert resp.status_code == 201
    return resp.json()
