"""
Shared fixtures: in-memory SQLite per test, a pinned clock and API helpers.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_PATH", os.path.join(tempfile.gettempdir(), "tripplanner-tests", "api.log"))

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.User import User
from services.clock import FixedClock, get_clock
from services import trips as trip_service

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
PITCH_DEADLINE = NOW + timedelta(days=1)
VOTING_DEADLINE = PITCH_DEADLINE + timedelta(days=7)

ORGANIZER = "alice"
GOING = ("bob", "carol")
INTERESTED = "dave"
OUTSIDER = "erin"


def auth(user_id: str) -> dict:
    return {"X-User-Id": user_id}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def users(client):
    ids = [ORGANIZER, *GOING, INTERESTED, OUTSIDER]
    for user_id in ids:
        resp = client.post("/users/", json={"id": user_id, "username": user_id, "email": f"{user_id}@mail.com"})
        assert resp.status_code == 201, resp.text
    return ids


@pytest.fixture
def trip(client, users):
    """DATES-phase trip: alice organizes, bob and carol are going, dave is interested."""
    resp = client.post("/trips/", json={"title": "Lisbon 2026"}, headers=auth(ORGANIZER))
    assert resp.status_code == 201, resp.text
    data = resp.json()
    for user_id in GOING:
        joined = client.post(f"/trips/join/{data['join_token']}", json={"rsvp_status": "GOING"}, headers=auth(user_id))
        assert joined.status_code == 200, joined.text
    joined = client.post(f"/trips/join/{data['join_token']}", json={"rsvp_status": "INTERESTED"}, headers=auth(INTERESTED))
    assert joined.status_code == 200, joined.text
    return data


@pytest.fixture
def scheduled_trip(client, trip):
    """Trip with the pitch deadline one day after NOW and a 7 day voting window."""
    resp = client.put(
        f"/trips/{trip['id']}/date-pitch-settings",
        json={"date_pitch_deadline": PITCH_DEADLINE.isoformat(), "voting_deadline_duration_days": 7},
        headers=auth(ORGANIZER),
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def june_pitch(client, scheduled_trip):
    resp = client.post(
        f"/trips/{scheduled_trip['id']}/date-pitches/",
        json={"start_date": "2026-06-01", "end_date": "2026-06-05", "description": "Early June"},
        headers=auth(GOING[0]),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def seeded(db_session):
    """Service-level setup without HTTP: users plus a trip with two going participants."""
    for user_id in (ORGANIZER, *GOING, INTERESTED):
        db_session.add(User(id=user_id, username=user_id, email=f"{user_id}@mail.com"))
    db_session.commit()
    actors = {u.id: u for u in db_session.query(User).all()}

    trip = trip_service.create_trip(db_session, "Service trip", None, actors[ORGANIZER])
    for user_id in GOING:
        trip_service.join_trip(db_session, trip.join_token, "GOING", actors[user_id])
    trip_service.join_trip(db_session, trip.join_token, "INTERESTED", actors[INTERESTED])
    return trip, actors
