import asyncio
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional, Sequence
from loguru import logger
from sqlalchemy import Select, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from ..config import settings
from ..db.tables import movie_cast, movie_genres, movies
from ..schemas.catalog_schemas import (
    MovieRecord,
    PaginationMeta,
    SearchCriteria,
    SearchResult,
    Suggestion,
)
from ..utils.seed_data import SAMPLE_MOVIES
from ..utils.query_composer import compose_listing, compose_search
from ..utils.suggestions import compose_suggestions, to_suggestions

STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class CatalogStoreError(Exception):
    """
    Raised when the catalog store cannot answer a query.
    """


async def _load_children(
    conn: AsyncConnection,
    ids: List[int]
) -> tuple:
    """
    Fetch genres and cast for the given movie ids.

    :return: Tuple of (genres by movie id, cast by movie id).
    """
    genres: Dict[int, List[str]] = defaultdict(list)
    cast: Dict[int, List[str]] = defaultdict(list)
    if not ids:
        return genres, cast

    genre_rows = await conn.execute(
        select(movie_genres.c.movie_id, movie_genres.c.genre)
        .where(movie_genres.c.movie_id.in_(ids))
        .order_by(movie_genres.c.movie_id, movie_genres.c.genre)
    )
    for movie_id, genre in genre_rows:
        genres[movie_id].append(genre)

    cast_rows = await conn.execute(
        select(movie_cast.c.movie_id, movie_cast.c.actor)
        .where(movie_cast.c.movie_id.in_(ids))
        .order_by(movie_cast.c.movie_id, movie_cast.c.position)
    )
    for movie_id, actor in cast_rows:
        cast[movie_id].append(actor)
    return genres, cast


def _to_record(
    row: Mapping[str, Any],
    genres: List[str],
    cast: List[str]
) -> MovieRecord:
    return MovieRecord(
        id=row['id'],
        title=row['title'],
        description=row['description'],
        genres=genres,
        release_year=row['release_year'],
        rating=row['rating'],
        duration_minutes=row['duration_minutes'],
        director=row['director'],
        cast=cast,
        image_url=row['image_url'],
        video_url=row['video_url'],
    )


async def fetch_records(engine: AsyncEngine, stmt: Select) -> List[MovieRecord]:
    """
    Run a `movies` select and return full records in the statement's order.
    The connection is held only for this call.
    """
    async with engine.connect() as conn:
        rows = (await conn.execute(stmt)).mappings().all()
        genres, cast = await _load_children(conn, [r['id'] for r in rows])
    return [_to_record(r, genres[r['id']], cast[r['id']]) for r in rows]


async def fetch_total(engine: AsyncEngine, stmt: Select) -> int:
    async with engine.connect() as conn:
        total = (await conn.execute(stmt)).scalar_one()
    return int(total)


async def search_movies(
    engine: AsyncEngine,
    criteria: SearchCriteria,
    timeout: Optional[float] = settings.QUERY_TIMEOUT_SECONDS
) -> SearchResult:
    """
    Execute a search: the page query and the count query run concurrently
    on separate connections, bounded together by `timeout`.

    :param engine: Async engine of the catalog store.
    :param criteria: Normalized search criteria.
    :param timeout: Seconds allowed for both queries, None for no deadline.
    :return: SearchResult with the page and pagination metadata.
    :raises CatalogStoreError: if either query fails in the store or the
        deadline passes. Any other error propagates unchanged.
    """
    composed = compose_search(criteria)
    logger.debug("Search with {} active predicate(s): {}",
                 len(composed.predicates), composed.predicates)
    page = asyncio.ensure_future(fetch_records(engine, composed.result))
    count = asyncio.ensure_future(fetch_total(engine, composed.count))
    try:
        records, total = await asyncio.wait_for(
            asyncio.gather(page, count), timeout=timeout)
    except STORE_ERRORS as e:
        raise CatalogStoreError(f"search failed: {e!r}") from e
    finally:
        # both queries are finished, with connections released, on every exit
        for task in (page, count):
            if not task.done():
                task.cancel()
        await asyncio.gather(page, count, return_exceptions=True)

    return SearchResult(
        records=records,
        pagination=PaginationMeta.build(total, criteria.pagination),
    )


async def get_suggestions(
    engine: AsyncEngine,
    prefix: str,
    limit: int,
    timeout: Optional[float] = settings.QUERY_TIMEOUT_SECONDS
) -> List[Suggestion]:
    """
    Look up typeahead candidates for a prefix that already passed the
    minimum-length gate.
    """
    stmt = compose_suggestions(prefix, limit)

    async def _run() -> Sequence[Mapping[str, Any]]:
        async with engine.connect() as conn:
            return (await conn.execute(stmt)).mappings().all()

    try:
        rows = await asyncio.wait_for(_run(), timeout=timeout)
    except STORE_ERRORS as e:
        raise CatalogStoreError(f"suggestions failed: {e!r}") from e
    return to_suggestions(rows)


async def list_movies(engine: AsyncEngine) -> List[MovieRecord]:
    try:
        return await fetch_records(engine, compose_listing())
    except STORE_ERRORS as e:
        raise CatalogStoreError(f"listing failed: {e!r}") from e


async def clear_movies(engine: AsyncEngine) -> None:
    try:
        async with engine.begin() as conn:
            await conn.execute(delete(movie_cast))
            await conn.execute(delete(movie_genres))
            await conn.execute(delete(movies))
    except STORE_ERRORS as e:
        raise CatalogStoreError(f"clear failed: {e!r}") from e


async def insert_movies(engine: AsyncEngine, records: List[MovieRecord]) -> None:
    """
    Write records in one transaction, replacing any rows with the same ids.
    """
    if not records:
        return
    ids = [r.id for r in records]
    movie_rows = [
        r.model_dump(exclude={'genres', 'cast'}, by_alias=False)
        for r in records
    ]
    genre_rows = [
        {'movie_id': r.id, 'genre': g} for r in records for g in set(r.genres)
    ]
    cast_rows = [
        {'movie_id': r.id, 'position': i, 'actor': a}
        for r in records for i, a in enumerate(r.cast)
    ]
    try:
        async with engine.begin() as conn:
            await conn.execute(delete(movie_cast).where(movie_cast.c.movie_id.in_(ids)))
            await conn.execute(delete(movie_genres).where(movie_genres.c.movie_id.in_(ids)))
            await conn.execute(delete(movies).where(movies.c.id.in_(ids)))
            await conn.execute(insert(movies), movie_rows)
            if genre_rows:
                await conn.execute(insert(movie_genres), genre_rows)
            if cast_rows:
                await conn.execute(insert(movie_cast), cast_rows)
    except STORE_ERRORS as e:
        raise CatalogStoreError(f"insert failed: {e!r}") from e
    logger.info("Stored {} movie(s)", len(records))


async def seed_movies(engine: AsyncEngine) -> None:
    await insert_movies(engine, SAMPLE_MOVIES)
