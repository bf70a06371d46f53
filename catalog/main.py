from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional
import httpx
from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine
from .clients.catalog_client import (
    clear_movies,
    get_suggestions,
    list_movies,
    search_movies,
    seed_movies,
)
from .clients.youtube_client import get_video_details
from .config import limits
from .db.engine import create_schema, dispose_engine, get_engine
from .logging_config import configure_logging
from .schemas.catalog_schemas import (
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    MovieRecord,
    SearchResponse,
    Suggestion,
    VideoDetails,
)
from .utils.criteria import build_search_criteria, suggestion_prefix

INTERNAL_ERROR = {'error': 'Internal server error'}
ERROR_RESPONSES = {500: {'model': ErrorResponse}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await create_schema(get_engine())
    logger.info("Catalog service started")
    yield
    await dispose_engine()


app = FastAPI(title="Movie Catalog", lifespan=lifespan)


def internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@app.get('/health', response_model=HealthResponse)
async def health():
    return HealthResponse(
        status='OK', timestamp=datetime.now(timezone.utc).isoformat())


@app.get('/movies', response_model=List[MovieRecord], responses=ERROR_RESPONSES)
async def all_movies(engine: AsyncEngine = Depends(get_engine)):
    try:
        return await list_movies(engine)
    except Exception:
        logger.exception("Listing movies failed")
        return internal_error()


@app.post('/movies/seed', response_model=MessageResponse, responses=ERROR_RESPONSES)
async def seed(engine: AsyncEngine = Depends(get_engine)):
    try:
        await seed_movies(engine)
    except Exception:
        logger.exception("Seeding movies failed")
        return internal_error()
    return MessageResponse(message='Database seeded successfully')


@app.post('/movies/clear', response_model=MessageResponse, responses=ERROR_RESPONSES)
async def clear(engine: AsyncEngine = Depends(get_engine)):
    try:
        await clear_movies(engine)
    except Exception:
        logger.exception("Clearing movies failed")
        return internal_error()
    return MessageResponse(message='Database cleared successfully')


@app.get('/search', response_model=SearchResponse, responses=ERROR_RESPONSES)
async def search(
    q: Optional[str] = None,
    genres: Optional[str] = None,
    year_min: Optional[str] = Query(None, alias='yearMin'),
    year_max: Optional[str] = Query(None, alias='yearMax'),
    rating_min: Optional[str] = Query(None, alias='ratingMin'),
    rating_max: Optional[str] = Query(None, alias='ratingMax'),
    duration_min: Optional[str] = Query(None, alias='durationMin'),
    duration_max: Optional[str] = Query(None, alias='durationMax'),
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    engine: AsyncEngine = Depends(get_engine),
):
    # all parameters arrive as raw strings; bad values degrade to absent
    criteria = build_search_criteria(
        q=q,
        genres=genres,
        year_min=year_min,
        year_max=year_max,
        rating_min=rating_min,
        rating_max=rating_max,
        duration_min=duration_min,
        duration_max=duration_max,
        limit=limit,
        offset=offset,
        limits=limits,
    )
    try:
        result = await search_movies(engine, criteria)
    except Exception:
        logger.exception("Search failed for {}", criteria)
        return internal_error()
    return SearchResponse(results=result.records, pagination=result.pagination)


@app.get('/suggestions', response_model=List[Suggestion], responses=ERROR_RESPONSES)
async def suggestions(
    q: Optional[str] = None,
    engine: AsyncEngine = Depends(get_engine),
):
    prefix = suggestion_prefix(q, limits)
    if prefix is None:
        return []
    try:
        return await get_suggestions(engine, prefix, limits.suggestion_limit)
    except Exception:
        logger.exception("Suggestions failed for {!r}", prefix)
        return internal_error()


@app.get('/videos/{video_id}', response_model=VideoDetails)
async def video_details(video_id: str):
    async with httpx.AsyncClient(timeout=10.0) as client:
        return await get_video_details(client, video_id)
