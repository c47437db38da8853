"""
database.py — SQLAlchemy engine and session management for Trail Scout.

Provides:
  engine       — the shared SQLAlchemy engine
  SessionLocal — sessionmaker bound to the engine
  get_db()     — FastAPI dependency that yields a session per request
  init_db()    — create tables, optionally seed the sample trails

All SQLAlchemy calls are synchronous. Route handlers wrap them in
starlette.concurrency.run_in_threadpool so the event loop is never blocked.
"""

import os
import logging
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from models import db, Trail
from sample_data import SAMPLE_TRAILS

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = 'sqlite:///trail_scout.db'


def database_url() -> str:
    """DATABASE_URL with the postgres:// scheme some hosts hand out rewritten."""
    url = os.getenv('DATABASE_URL', DEFAULT_DATABASE_URL)
    if url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


def make_engine(url: str):
    """
    Build the engine for `url`. SQLite connections are shared with the
    threadpool that runs route handlers, and each one is switched to WAL so
    the API can read while the CLI writes.
    """
    if not url.startswith('sqlite'):
        return create_engine(url, pool_pre_ping=True)

    sqlite_engine = create_engine(
        url,
        connect_args={'timeout': 15, 'check_same_thread': False},
        pool_pre_ping=True,
    )

    @event.listens_for(sqlite_engine, 'connect')
    def _use_wal(dbapi_conn, _connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute('PRAGMA journal_mode=WAL')
        cursor.close()

    return sqlite_engine


engine = make_engine(database_url())
logger.info("Database engine ready: %s", engine.url.render_as_string(hide_password=True))

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,   # rows are serialised after commit in async handlers
)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for `Depends(get_db)`; closed once the handler returns."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# ── Schema + seed ─────────────────────────────────────────────────────────────

def seed_sample_trails(session: Session) -> int:
    """Insert the sample trails if the table is empty. Returns rows added."""
    if session.query(Trail.id).first() is not None:
        return 0
    session.add_all(Trail(**row) for row in SAMPLE_TRAILS)
    session.commit()
    logger.info("Seeded %d sample trail(s)", len(SAMPLE_TRAILS))
    return len(SAMPLE_TRAILS)


def init_db(seed: bool = False) -> None:
    """Create all tables. Called once at startup and by `manage.py init-db`."""
    db.metadata.create_all(engine)
    if seed:
        with SessionLocal() as session:
            seed_sample_trails(session)
