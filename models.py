"""
SQLAlchemy ORM models for Trail Scout.

One model:
  Trail  — a hiking trail; also remembers which trails looked like
           duplicates of it at the time it was last saved

Default database: SQLite (trail_scout.db).
Production: set DATABASE_URL env var to a PostgreSQL connection string and the
app will use that instead — no code changes required.
"""

import json
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base


def _utcnow():
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


# db is kept as a module-level name so external imports (database.py, manage.py)
# can reference db.metadata for table creation.
db = declarative_base()


# ---------------------------------------------------------------------------
# Trail
# ---------------------------------------------------------------------------

class Trail(db):
    __tablename__ = 'trails'

    id          = Column(Integer, primary_key=True)
    name        = Column(String(255), nullable=False, index=True)
    description = Column(Text,        nullable=False, default='')
    difficulty  = Column(String(50),  nullable=False)   # e.g. 'Easy', 'Moderate to Strenuous'
    distance    = Column(String(50),  nullable=False)   # free text, e.g. '5.4 miles'
    elevation   = Column(String(50),  nullable=False, default='')
    duration    = Column(String(50),  nullable=False, default='')
    location    = Column(String(255), nullable=False)
    coordinates = Column(String(100), nullable=False)   # 'lat,lng'

    path_coordinates = Column(Text,        nullable=True)   # JSON [[lat, lng], ...] as sent by the map editor
    image_url        = Column(String(500), nullable=True)
    best_season      = Column(String(150), nullable=True)
    parking_info     = Column(String(500), nullable=True)

    similar_trail_ids = Column(Text, nullable=True)   # JSON [1, 4, ...]

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            'id':               self.id,
            'name':             self.name,
            'description':      self.description,
            'difficulty':       self.difficulty,
            'distance':         self.distance,
            'elevation':        self.elevation,
            'duration':         self.duration,
            'location':         self.location,
            'coordinates':      self.coordinates,
            'path_coordinates': self.path_coordinates,
            'image_url':        self.image_url,
            'best_season':      self.best_season,
            'parking_info':     self.parking_info,
            'similar_trail_ids': json.loads(self.similar_trail_ids) if self.similar_trail_ids else [],
            'created_at':       self.created_at.isoformat() if self.created_at else None,
            'updated_at':       self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Trail #{self.id} {self.name!r}>'
