"""SQLite engine and sessions for the hang store.

Writes come from two places: request handlers, each committing one change
through its own session, and the interval job that archives past hangs.
``DATABASE_URL=sqlite://`` gives a throwaway in-memory store.

Every new connection gets:
    - ``journal_mode=WAL`` so page loads keep reading while the archival
      job or another request is writing.
    - ``foreign_keys=ON`` so attendees and suggestions always belong to a
      stored hang.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from lets_hang.core.config import settings

# Sessions cross threads between FastAPI's worker pool and the scheduler
connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Apply the per-connection pragmas listed above."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create the hang, attendee, suggestion and user tables if missing."""
    import lets_hang.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Request-scoped session dependency."""
    with Session(engine) as session:
        yield session
