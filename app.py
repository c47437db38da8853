#!/usr/bin/env python3
"""
Trail Scout — Backend API (FastAPI, async)

- Trail CRUD and search under /api/trails (trails.py)
- Advisory duplicate detection on create/update (dedup.py)
- Pydantic v2 schemas for every request body (schemas.py)
- run_in_threadpool wraps synchronous SQLAlchemy calls
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------

# Loaded before the local imports below so DATABASE_URL from .env reaches database.py
load_dotenv(os.path.join(os.path.dirname(__file__), '.env'), override=True)

from database import init_db  # noqa: E402
from trails import trails_router  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
)
logger = logging.getLogger(__name__)

SEED_SAMPLE_TRAILS = os.getenv('SEED_SAMPLE_TRAILS', '1').strip().lower() not in ('0', 'false', 'no', '')

# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title='Trail Scout API', docs_url=None, redoc_url=None)

# ── CORS ─────────────────────────────────────────────────────────────────────
_cors_origins = [
    o.strip()
    for o in os.getenv(
        'CORS_ORIGINS', 'http://localhost:5000,http://127.0.0.1:5000'
    ).split(',')
    if o.strip()
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


# ── Security headers ──────────────────────────────────────────────────────────
@app.middleware('http')
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options']        = 'DENY'
    response.headers['Referrer-Policy']        = 'strict-origin-when-cross-origin'
    if os.getenv('APP_ENV') == 'production':
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


# ── Map errors → { "error": "..." } ───────────────────────────────────────────
# FastAPI's default shape is { "detail": ... }; the frontend expects "error".
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = '.'.join(str(p) for p in first.get('loc', ()) if p != 'body')
        message = f"{where}: {first.get('msg')}" if where else first.get('msg')
    else:
        message = 'Invalid request'
    return JSONResponse(status_code=422, content={'error': message})


# ── Router registration ───────────────────────────────────────────────────────
app.include_router(trails_router)


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------

@app.on_event('startup')
async def startup():
    await run_in_threadpool(lambda: init_db(seed=SEED_SAMPLE_TRAILS))
    logger.info('Database ready (sample trail seeding %s)',
                'enabled' if SEED_SAMPLE_TRAILS else 'disabled')


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get('/health')
async def health():
    return {'status': 'ok', 'message': 'Trail Scout API is running'}


if __name__ == '__main__':
    import uvicorn
    uvicorn.run(app, host='0.0.0.0', port=int(os.getenv('PORT', '5000')))
