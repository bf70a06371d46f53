import asyncio
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from catalog.clients.catalog_client import insert_movies
from catalog.db.engine import create_schema
from catalog.schemas.catalog_schemas import MovieRecord


def _movie(id, title, genres, year, rating, duration, director, cast):
    return MovieRecord(
        id=id, title=title, genres=genres, release_year=year,
        rating=rating, duration_minutes=duration,
        director=director, cast=cast,
    )


CATALOG = [
    _movie(1, "Batman Begins", ["Action", "Crime"], 2005, 8.2, 140,
           "Christopher Nolan", ["Christian Bale", "Michael Caine"]),
    _movie(2, "The Dark Knight", ["Action", "Crime", "Drama"], 2008, 9.0, 152,
           "Christopher Nolan", ["Christian Bale", "Heath Ledger"]),
    _movie(3, "Movie A", ["Drama"], 1999, 9.5, 100,
           "Jane Doe", ["Ann Smith"]),
    _movie(4, "Movie B", ["Comedy"], 2001, 8.0, 90,
           "John Roe", ["Bob Stone"]),
    _movie(5, "Batman Returns", ["Action", "Fantasy"], 1992, 7.0, 126,
           "Tim Burton", ["Michael Keaton", "Michelle Pfeiffer"]),
    _movie(6, "100% Laughs", ["Comedy"], 2015, 7.0, 95,
           "Ann Lee", ["Bob Stone"]),
    _movie(7, "Quiet Night", ["Drama"], 2020, 8.0, 180,
           None, []),
    _movie(8, "Edge of Tomorrow", ["Sci-Fi", "Action"], 2014, 7.9, 113,
           "Doug Liman", ["Tom Cruise", "Emily Blunt"]),
]

# rating desc, id asc
RELEVANCE_ORDER = [3, 2, 1, 4, 7, 8, 5, 6]


def _engine_for(tmp_path):
    # NullPool: every checkout opens a fresh connection on the running loop
    return create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", poolclass=NullPool)


@pytest.fixture
def catalog():
    return list(CATALOG)


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = _engine_for(tmp_path)
    await create_schema(eng)
    await insert_movies(eng, CATALOG)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def empty_engine(tmp_path):
    eng = _engine_for(tmp_path)
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def sync_engine(tmp_path):
    """
    Seeded engine for tests that drive the app through TestClient,
    which runs its own event loop.
    """
    eng = _engine_for(tmp_path)

    async def _setup():
        await create_schema(eng)
        await insert_movies(eng, CATALOG)

    asyncio.run(_setup())
    yield eng
    asyncio.run(eng.dispose())
