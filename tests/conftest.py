"""Shared fixtures. The database URL must be set before app/database are imported."""

import os
import tempfile

_tmpdir = tempfile.mkdtemp(prefix='trail-scout-tests-')
os.environ['DATABASE_URL'] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ['SEED_SAMPLE_TRAILS'] = '0'

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app import app  # noqa: E402
from database import SessionLocal, init_db  # noqa: E402
from models import Trail  # noqa: E402

ANGELS_LANDING = {
    'name':        'Angels Landing',
    'description': 'One of the most famous and thrilling hikes in Zion National Park',
    'difficulty':  'Strenuous',
    'distance':    '5.4 miles',
    'elevation':   '1,488 feet',
    'duration':    '4-6 hours',
    'location':    'Zion National Park, Utah',
    'coordinates': '37.2690,-112.9469',
}


@pytest.fixture(autouse=True)
def clean_trails():
    init_db()
    yield
    with SessionLocal() as session:
        session.query(Trail).delete()
        session.commit()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def add_trail():
    """Insert a trail straight into the database; returns its id."""
    def _add(**overrides):
        with SessionLocal() as session:
            trail = Trail(**{**ANGELS_LANDING, **overrides})
            session.add(trail)
            session.commit()
            return trail.id
    return _add
