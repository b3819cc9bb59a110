import json
import random

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from evrecharge import auth, models
from evrecharge.config import Settings
from evrecharge.main import create_app


class FakeModel:
    """Stands in for the generateContent endpoint of the generative language API."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.reply = {
            "suggestedChargingTimes": "11:00 AM",
            "reasoning": "11:00 AM sits between your morning meeting and lunch.",
        }
        self.error = None

    def set_reply_text(self, text):
        self.reply = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "quota exceeded"}})
        text = self.reply if isinstance(self.reply, str) else json.dumps(self.reply)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})

    @property
    def last_prompt(self):
        body = json.loads(self.requests[-1].content)
        return body["contents"][0]["parts"][0]["text"]


def make_settings(**overrides):
    values = dict(
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        GOOGLE_GENAI_API_KEY="test-genai-key",
        GOOGLE_MAPS_API_KEY="test-maps-key",
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def app(settings, fake_model):
    return create_app(settings, advisor_transport=httpx.MockTransport(fake_model), rng=random.Random(7))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    session = app.state.database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db, settings):
    def _make_user(email, role="user", password="secret123", full_name="Test Driver"):
        user = models.User(
            full_name=full_name,
            email=email,
            password_hash=auth.get_password_hash(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        token = auth.create_access_token({"sub": user.id}, settings)
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest.fixture
def user_headers(make_user):
    return make_user("driver@example.com")[1]


@pytest.fixture
def admin_headers(make_user):
    return make_user("admin@example.com", role="admin")[1]


@pytest.fixture
def make_station(db):
    def _make_station(name="EcoCharge Central", city="Pune", country="India", address="12 FC Road", slots=None):
        station = models.Station(
            name=name,
            address=address,
            city=city,
            country=country,
            latitude=18.52,
            longitude=73.85,
            mobile_number="+91 20 1234 5678",
            amenities=["Wi-Fi"],
            slots=slots if slots is not None else [
                {"time": "01:00 PM", "available": True},
                {"time": "09:00 AM", "available": True},
                {"time": "10:00 AM", "available": False},
                {"time": "12:00 PM", "available": True},
            ],
            rating=4.0,
            review_count=10,
            bunks=[{"id": "bunk-1", "name": "Bunk 1", "status": "available"}],
        )
        db.add(station)
        db.commit()
        db.refresh(station)
        return station

    return _make_station


@pytest.fixture
def failing_commits(monkeypatch):
    """Make every session commit fail as if the database went away.

    Create users and stations before requesting the patch.
    """
    def _failing_commits():
        def commit(self):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(Session, "commit", commit)

    return _failing_commits
