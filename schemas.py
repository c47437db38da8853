"""
schemas.py — Pydantic v2 request models for Trail Scout.

Validation errors return HTTP 422. A custom exception handler in app.py
maps these to {'error': '...'} so every error response has the same shape.
"""

import re

from pydantic import BaseModel, Field, field_validator

from dedup import parse_coordinates


# ── Shared validator helpers ──────────────────────────────────────────────────

def _collapse(v: str | None) -> str | None:
    """Collapse all whitespace (tabs, newlines, multiple spaces) to a single
    space, strip ends. Returns None if the result is empty."""
    if v is None:
        return None
    s = re.sub(r'\s+', ' ', str(v)).strip()
    return s or None


def _strip_only(v: str | None) -> str | None:
    """Strip leading/trailing whitespace only — preserve internal newlines.
    Returns None if the result is empty."""
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _normalise_coordinates(v: str | None) -> str | None:
    """Reject strings that are not "lat,lng"; store them without padding."""
    if v is None:
        return None
    parse_coordinates(v)          # MalformedCoordinate is a ValueError → 422
    return ','.join(part.strip() for part in v.split(','))


# ── Duplicate check ───────────────────────────────────────────────────────────

class TrailCandidate(BaseModel):
    """
    The part of a trail the duplicate check looks at. Every field is
    optional and unbounded: the check is advisory and answers "no similar
    trails" when it has nothing usable to compare. Coordinates are not
    validated here.
    """
    id:          int | None = None
    name:        str | None = None
    coordinates: str | None = None
    difficulty:  str | None = None
    distance:    str | None = None

    @field_validator('name', 'difficulty', 'distance', mode='before')
    @classmethod
    def collapse_single_line(cls, v: str | None) -> str | None:
        return _collapse(v)


# ── Trails ────────────────────────────────────────────────────────────────────

class TrailCreate(BaseModel):
    name:             str        = Field(..., min_length=1, max_length=255)
    description:      str        = Field(default='', max_length=5000)
    difficulty:       str        = Field(..., min_length=1, max_length=50)
    distance:         str        = Field(..., min_length=1, max_length=50)
    elevation:        str        = Field(default='', max_length=50)
    duration:         str        = Field(default='', max_length=50)
    location:         str        = Field(..., min_length=1, max_length=255)
    coordinates:      str        = Field(..., min_length=3, max_length=100)
    path_coordinates: str | None = None
    image_url:        str | None = Field(default=None, max_length=500)
    best_season:      str | None = Field(default=None, max_length=150)
    parking_info:     str | None = Field(default=None, max_length=500)

    @field_validator('name', 'difficulty', 'distance', 'location', mode='before')
    @classmethod
    def collapse_required(cls, v: str | None) -> str:
        return _collapse(v) or ''

    @field_validator('elevation', 'duration', mode='before')
    @classmethod
    def collapse_optional(cls, v: str | None) -> str:
        return _collapse(v) or ''

    @field_validator('description', mode='before')
    @classmethod
    def strip_description(cls, v: str | None) -> str:
        return _strip_only(v) or ''

    @field_validator('image_url', 'best_season', 'parking_info', mode='before')
    @classmethod
    def collapse_extras(cls, v: str | None) -> str | None:
        return _collapse(v)

    @field_validator('coordinates')
    @classmethod
    def coordinates_must_parse(cls, v: str) -> str:
        return _normalise_coordinates(v)

    def candidate(self) -> TrailCandidate:
        return TrailCandidate(
            name=self.name, coordinates=self.coordinates,
            difficulty=self.difficulty, distance=self.distance,
        )


class TrailUpdate(BaseModel):
    """All fields optional — supports partial update semantics."""
    name:             str | None = Field(default=None, min_length=1, max_length=255)
    description:      str | None = Field(default=None, max_length=5000)
    difficulty:       str | None = Field(default=None, min_length=1, max_length=50)
    distance:         str | None = Field(default=None, min_length=1, max_length=50)
    elevation:        str | None = Field(default=None, max_length=50)
    duration:         str | None = Field(default=None, max_length=50)
    location:         str | None = Field(default=None, min_length=1, max_length=255)
    coordinates:      str | None = Field(default=None, min_length=3, max_length=100)
    path_coordinates: str | None = None
    image_url:        str | None = Field(default=None, max_length=500)
    best_season:      str | None = Field(default=None, max_length=150)
    parking_info:     str | None = Field(default=None, max_length=500)

    @field_validator('name', 'difficulty', 'distance', 'location', 'elevation',
                     'duration', 'image_url', 'best_season', 'parking_info',
                     mode='before')
    @classmethod
    def collapse_single_line(cls, v: str | None) -> str | None:
        return _collapse(v)

    @field_validator('description', mode='before')
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return _strip_only(v)

    @field_validator('coordinates')
    @classmethod
    def coordinates_must_parse(cls, v: str | None) -> str | None:
        return _normalise_coordinates(v)
