"""Shared test fixtures."""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from lets_hang.core.database import get_session
from lets_hang.hangs import store
from lets_hang.main import app
from lets_hang.models import Hang
from lets_hang.view.session import view_states, vote_ledger


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(autouse=True)
def reset_client_state():
    """Forget per-client view state and vote locks between tests."""
    yield
    view_states.clear()
    vote_ledger.clear()


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="sample_hang")
def sample_hang_fixture(session: Session) -> Hang:
    """Create an upcoming hang hosted by Alex."""
    return store.create_hang(
        session,
        title="Board Games",
        date=date.today() + timedelta(days=7),
        time="19:30",
        location="Alex's flat",
        description="Bring snacks",
        max_attendees="6",
        host_name="Alex",
        host_email="alex@example.com",
    )


@pytest.fixture(name="hang_with_suggestions")
def hang_with_suggestions_fixture(session: Session, sample_hang: Hang) -> Hang:
    """An upcoming hang with three suggestions."""
    store.add_suggestion(session, sample_hang.id, "time", "Start at 8 instead?")
    store.add_suggestion(session, sample_hang.id, "location", "The park if it's sunny")
    store.add_suggestion(session, sample_hang.id, "general", "Potluck")
    session.refresh(sample_hang)
    return sample_hang


@pytest.fixture(name="past_hang")
def past_hang_fixture(session: Session) -> Hang:
    """A hang from last month that has already been archived."""
    hang = store.create_hang(
        session,
        title="Picnic",
        date=date.today() - timedelta(days=30),
        time="12:00",
        location="Riverside",
        host_name="Sam",
    )
    hang.status = "past"
    session.add(hang)
    session.commit()
    session.refresh(hang)
    return hang
