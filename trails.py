"""
trails.py — Trail repository and router for Trail Scout (FastAPI)

Routes:
  GET    /api/trails                   — list trails
  GET    /api/trails/search?q=...      — substring search on name, location, description
  GET    /api/trails/{id}              — get one trail
  POST   /api/trails/check-duplicates  — advisory duplicate check for a draft trail
  POST   /api/trails                   — create a trail
  PUT    /api/trails/{id}              — partial update
  DELETE /api/trails/{id}              — delete a trail

Duplicate detection never blocks a write. The creation form calls
check-duplicates first and asks the user to confirm when anything comes
back; create and update re-run the check and report what they found
alongside the saved trail.
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db
from dedup import SimilarityResult, check_similarity
from models import Trail
from schemas import TrailCandidate, TrailCreate, TrailUpdate

logger = logging.getLogger(__name__)

trails_router = APIRouter(prefix='/api/trails', tags=['trails'])


# ── Repository ────────────────────────────────────────────────────────────────

def list_trails(db: Session) -> list[Trail]:
    return db.query(Trail).order_by(Trail.id).all()


def get_trail(db: Session, trail_id: int) -> Trail | None:
    return db.get(Trail, trail_id)


def search_trails(db: Session, query: str) -> list[Trail]:
    query = (query or '').strip()
    if not query:
        return list_trails(db)
    pattern = f'%{query}%'
    return (
        db.query(Trail)
        .filter(or_(
            Trail.name.ilike(pattern),
            Trail.location.ilike(pattern),
            Trail.description.ilike(pattern),
        ))
        .order_by(Trail.id)
        .all()
    )


def check_for_duplicate_trails(db: Session, candidate: TrailCandidate) -> SimilarityResult:
    """Compare `candidate` against every stored trail."""
    return check_similarity(candidate, list_trails(db))


# ── Helpers ───────────────────────────────────────────────────────────────────

def _trail_or_404(db: Session, trail_id: int) -> Trail:
    trail = get_trail(db, trail_id)
    if not trail:
        raise HTTPException(status_code=404, detail='Trail not found')
    return trail


def _forget_similar_id(db: Session, trail_id: int) -> None:
    """Drop a deleted trail's id from every other trail's similar_trail_ids."""
    for other in db.query(Trail).filter(Trail.similar_trail_ids.isnot(None)):
        ids = json.loads(other.similar_trail_ids)
        if trail_id in ids:
            other.similar_trail_ids = json.dumps([i for i in ids if i != trail_id])


def _similarity_payload(result: SimilarityResult) -> dict:
    return {
        'similar_trails': [t.to_dict() for t in result.similar_trails],
        'warning':        result.warning,
    }


# ── Routes ────────────────────────────────────────────────────────────────────

@trails_router.get('')
async def get_trails(db: Session = Depends(get_db)):
    """GET /api/trails — every trail, oldest first."""
    trails = await run_in_threadpool(lambda: list_trails(db))
    return [t.to_dict() for t in trails]


@trails_router.get('/search')
async def search(
    q: str = Query(default='', max_length=200),
    db: Session = Depends(get_db),
):
    """GET /api/trails/search?q=... — case-insensitive, blank query returns everything."""
    trails = await run_in_threadpool(lambda: search_trails(db, q))
    return [t.to_dict() for t in trails]


@trails_router.post('/check-duplicates')
async def check_duplicates(body: TrailCandidate, db: Session = Depends(get_db)):
    """
    POST /api/trails/check-duplicates

    Returns:
        { duplicates: { count, ids, names },
          similar_trails: [trail, ...],
          warning: str | null }
    """
    result = await run_in_threadpool(lambda: check_for_duplicate_trails(db, body))
    if result.count:
        logger.info('Duplicate check for %r: %d similar trail(s)', body.name, result.count)
    return {**result.to_dict(), 'similar_trails': [t.to_dict() for t in result.similar_trails]}


@trails_router.get('/{trail_id}')
async def get_one(trail_id: int, db: Session = Depends(get_db)):
    """GET /api/trails/{id}"""
    trail = await run_in_threadpool(lambda: _trail_or_404(db, trail_id))
    return trail.to_dict()


@trails_router.post('', status_code=201)
async def create_trail(body: TrailCreate, db: Session = Depends(get_db)):
    """POST /api/trails — saved even when similar trails exist."""
    def _create():
        result = check_for_duplicate_trails(db, body.candidate())
        trail = Trail(
            **body.model_dump(),
            similar_trail_ids=json.dumps([t.id for t in result.similar_trails]),
        )
        db.add(trail)
        db.commit()
        db.refresh(trail)
        return trail, result

    trail, result = await run_in_threadpool(_create)
    logger.info('Trail created: id=%d %r (%d similar)', trail.id, trail.name, result.count)
    return {'trail': trail.to_dict(), **_similarity_payload(result)}


@trails_router.put('/{trail_id}')
async def update_trail(trail_id: int, body: TrailUpdate, db: Session = Depends(get_db)):
    """PUT /api/trails/{id} — partial update; the trail is never compared with itself."""
    def _update():
        trail = _trail_or_404(db, trail_id)
        for field in body.model_fields_set:
            value = getattr(body, field)
            if value is None and field not in ('path_coordinates', 'image_url',
                                               'best_season', 'parking_info'):
                continue
            setattr(trail, field, value)

        candidate = TrailCandidate(
            id=trail.id, name=trail.name, coordinates=trail.coordinates,
            difficulty=trail.difficulty, distance=trail.distance,
        )
        result = check_for_duplicate_trails(db, candidate)
        trail.similar_trail_ids = json.dumps([t.id for t in result.similar_trails])
        db.commit()
        db.refresh(trail)
        return trail, result

    trail, result = await run_in_threadpool(_update)
    logger.info('Trail updated: id=%d (%d similar)', trail.id, result.count)
    return {'trail': trail.to_dict(), **_similarity_payload(result)}


@trails_router.delete('/{trail_id}')
async def delete_trail(trail_id: int, db: Session = Depends(get_db)):
    """DELETE /api/trails/{id}"""
    def _delete():
        trail = _trail_or_404(db, trail_id)
        db.delete(trail)
        _forget_similar_id(db, trail.id)
        db.commit()
        return trail

    trail = await run_in_threadpool(_delete)
    logger.info('Trail deleted: id=%d %r', trail.id, trail.name)
    return {'status': 'ok', 'message': f'Trail #{trail.id} deleted'}
