"""
dedup.py — Trail similarity detection for Trail Scout.

Used by the trail repository (trails.py) and the CLI (manage.py) to warn
when a trail being created or edited looks like one that already exists.

A trail is "similar" to the candidate when it lies within
SIMILARITY_RADIUS_M of the candidate's coordinates AND at least one of:
  - its name contains the candidate's name (case-insensitive)
  - its difficulty equals the candidate's difficulty
  - its distance string equals the candidate's distance string

The check is advisory. Nothing in here raises for bad data: a missing or
unparseable candidate coordinate means "nothing to compare", and an
existing trail with a broken coordinate string is skipped with a warning.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple

logger = logging.getLogger(__name__)

EARTH_RADIUS_M      = 6_371_000
SIMILARITY_RADIUS_M = 1000

# Plain decimal degrees; float() alone would also take "1_0", "nan" and "inf".
_DECIMAL = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)\s*")


class MalformedCoordinate(ValueError):
    """Coordinate string did not parse into two finite numbers."""


class Coordinate(NamedTuple):
    lat: float
    lng: float


@dataclass
class SimilarityResult:
    similar_trails: list = field(default_factory=list)
    warning:        str | None = None

    @property
    def count(self) -> int:
        return len(self.similar_trails)

    def to_dict(self) -> dict:
        return {
            'duplicates': {
                'count': self.count,
                'ids':   [t.id for t in self.similar_trails],
                'names': [t.name for t in self.similar_trails],
            },
            'warning': self.warning,
        }


# ── Geometry ──────────────────────────────────────────────────────────────────

def parse_coordinates(value: str) -> Coordinate:
    """
    Parse a "<lat>,<lng>" string. Surrounding whitespace on either part is
    allowed; anything else (wrong number of parts, exponents, digit
    separators, NaN, inf) raises MalformedCoordinate. Ranges are not checked.
    """
    if not isinstance(value, str):
        raise MalformedCoordinate(f'Expected a "lat,lng" string, got {type(value).__name__}')

    parts = value.split(',')
    if len(parts) != 2:
        raise MalformedCoordinate(f'Expected "lat,lng", got {value!r}')

    if not all(_DECIMAL.fullmatch(part) for part in parts):
        raise MalformedCoordinate(f'Non-numeric coordinate {value!r}')
    lat, lng = float(parts[0]), float(parts[1])

    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise MalformedCoordinate(f'Non-finite coordinate {value!r}')
    return Coordinate(lat, lng)


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in metres on a spherical Earth."""
    φ1, φ2 = math.radians(a.lat), math.radians(b.lat)
    Δφ = math.radians(b.lat - a.lat)
    Δλ = math.radians(b.lng - a.lng)
    h = math.sin(Δφ / 2) ** 2 + math.cos(φ1) * math.cos(φ2) * math.sin(Δλ / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


# ── Similarity ────────────────────────────────────────────────────────────────

def _attributes_overlap(candidate, trail) -> bool:
    # A blank name is a substring of every name; it never counts as a match.
    name = (getattr(candidate, 'name', None) or '').strip().lower()
    if name and name in (trail.name or '').lower():
        return True

    difficulty = getattr(candidate, 'difficulty', None)
    if difficulty is not None and trail.difficulty == difficulty:
        return True

    distance = getattr(candidate, 'distance', None)
    return distance is not None and trail.distance == distance


def find_similar_trails(candidate, existing_trails: Iterable) -> list:
    """
    Return the existing trails similar to `candidate`, in their original order.

    `candidate` only needs `coordinates`; `id`, `name`, `difficulty` and
    `distance` are consulted when present. Existing trails are anything
    with `id`, `name`, `difficulty`, `distance` and `coordinates` attributes
    (Trail rows, or any object carrying the same fields).
    """
    existing_trails = list(existing_trails)
    raw = (getattr(candidate, 'coordinates', None) or '').strip()
    if not raw or not existing_trails:
        return []

    try:
        origin = parse_coordinates(raw)
    except MalformedCoordinate as exc:
        logger.warning('Duplicate check skipped, candidate coordinates unusable: %s', exc)
        return []

    candidate_id = getattr(candidate, 'id', None)
    similar = []
    for trail in existing_trails:
        if candidate_id is not None and trail.id == candidate_id:
            continue
        try:
            point = parse_coordinates(trail.coordinates)
        except MalformedCoordinate as exc:
            logger.warning('Trail id=%s skipped in duplicate check: %s', trail.id, exc)
            continue
        if haversine_m(origin, point) <= SIMILARITY_RADIUS_M and _attributes_overlap(candidate, trail):
            similar.append(trail)
    return similar


def generate_similarity_warning(similar_trails: list) -> str | None:
    """Format the "Found N similar trail(s) nearby:" message, or None if there are none."""
    if not similar_trails:
        return None
    n = len(similar_trails)
    lines = [f"Found {n} similar trail{'s' if n != 1 else ''} nearby:"]
    lines += [f'- {t.name} ({t.distance}, {t.difficulty})' for t in similar_trails]
    return '\n'.join(lines)


def check_similarity(candidate, existing_trails: Iterable) -> SimilarityResult:
    similar = find_similar_trails(candidate, existing_trails)
    return SimilarityResult(similar_trails=similar, warning=generate_similarity_warning(similar))
