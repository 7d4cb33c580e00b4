"""
Pytest configuration and fixtures for the Timekeeper tests.

Provides:
- API fixtures (FastAPI TestClient over an in-memory SQLite database)
- Registered users and auth headers
- A manual clock to drive the timer session tick by tick
"""

import os

# Must be set before timekeeper.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from timekeeper.database.base import Base
from timekeeper.database.session import engine
from timekeeper.main import app
from timekeeper.timer.client import TimekeeperClient
from timekeeper.timer.session import TimerSession


# ============ API Fixtures ============

@pytest.fixture
def client():
    """TestClient with a fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)


def auth(firebase_uid: str) -> dict:
    return {"Authorization": f"Bearer {firebase_uid}"}


def register(client, firebase_uid: str, email: str, **extra) -> dict:
    body = {"firebase_uid": firebase_uid, "email": email, **extra}
    response = client.post("/users", json=body)
    assert response.status_code == 200, response.text
    return response.json()["user"]


@pytest.fixture
def alice(client):
    return register(client, "alice-uid", "alice@example.com", display_name="Alice")


@pytest.fixture
def bob(client):
    return register(client, "bob-uid", "bob@example.com", display_name="Bob")


@pytest.fixture
def alice_headers(alice):
    return auth(alice["firebase_uid"])


@pytest.fixture
def bob_headers(bob):
    return auth(bob["firebase_uid"])


@pytest.fixture
def alice_project(client, alice_headers):
    response = client.post(
        "/projects",
        json={"name": "Website", "color": "#F4D03F"},
        headers=alice_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["project"]


@pytest.fixture
def alice_api(client, alice):
    """Typed API client acting as Alice, sharing the TestClient transport."""
    return TimekeeperClient(firebase_uid=alice["firebase_uid"], http=client)


# ============ Timer Fixtures ============

class ManualClock:
    """Tick source driven by the test instead of a background thread."""

    def __init__(self):
        self.callback = None
        self.starts = 0
        self.stops = 0

    @property
    def running(self):
        return self.callback is not None

    def start(self, callback):
        if self.callback is not None:
            return
        self.callback = callback
        self.starts += 1

    def stop(self):
        self.callback = None
        self.stops += 1

    def advance(self, seconds: int = 1):
        for _ in range(seconds):
            if self.callback is not None:
                self.callback()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def session(clock):
    return TimerSession(clock=clock)
