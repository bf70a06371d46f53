import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

import catalog.clients.youtube_client as yt
import catalog.main as main
from catalog.clients.catalog_client import insert_movies
from catalog.db.engine import create_schema, get_engine
from catalog.schemas.catalog_schemas import (
    MovieRecord,
    PaginationMeta,
    SearchResult,
)

from conftest import CATALOG, RELEVANCE_ORDER

INTERNAL_ERROR = {"error": "Internal server error"}


class FakeResult:
    def __init__(self, rows):
        self.rows = rows

    def mappings(self):
        return self

    def all(self):
        return self.rows


class FakeConnection:
    def __init__(self, engine):
        self.engine = engine

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.engine.released += 1
        return False

    async def execute(self, stmt):
        self.engine.queries.append(stmt)
        if isinstance(self.engine.rows, Exception):
            raise self.engine.rows
        return FakeResult(self.engine.rows)


class FakeEngine:
    """
    Stands in for AsyncEngine: records every query and answers with `rows`.
    """

    def __init__(self, rows=None):
        self.rows = rows if rows is not None else []
        self.queries = []
        self.released = 0

    def connect(self):
        return FakeConnection(self)


def _client_for(engine):
    main.app.dependency_overrides[get_engine] = lambda: engine
    return TestClient(main.app)


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    main.app.dependency_overrides.clear()


@pytest.fixture
def client(sync_engine):
    return _client_for(sync_engine)


@pytest.fixture
def captured(monkeypatch):
    """
    Replace search_movies with a fake that records the criteria it gets
    and answers with one record and a configurable total.
    """
    seen = {"total": 1}

    async def fake_search_movies(engine, criteria):
        seen["criteria"] = criteria
        return SearchResult(
            records=[MovieRecord(id=1, title="Batman", rating=8.0)],
            pagination=PaginationMeta.build(seen["total"], criteria.pagination),
        )

    monkeypatch.setattr(main, "search_movies", fake_search_movies)
    return seen


# --- /health ---------------------------------------------------------------


def test_health():
    resp = TestClient(main.app).get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert "timestamp" in body


# --- /search -----------------------------------------------------------------


def test_search_without_filters_orders_by_rating(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'two.db'}", poolclass=NullPool)

    async def _setup():
        await create_schema(engine)
        await insert_movies(engine, [
            MovieRecord(id=2, title="Movie B", rating=8.0),
            MovieRecord(id=1, title="Movie A", rating=9.5),
        ])

    asyncio.run(_setup())
    resp = _client_for(engine).get("/search")
    assert resp.status_code == 200
    body = resp.json()
    assert [m["id"] for m in body["results"]] == [1, 2]
    assert body["pagination"] == {
        "total": 2, "limit": 20, "offset": 0, "hasMore": False}


def test_search_all_movies(client):
    body = client.get("/search").json()
    assert [m["id"] for m in body["results"]] == RELEVANCE_ORDER
    assert body["pagination"]["total"] == len(CATALOG)


def test_search_text_query_with_single_match(captured):
    resp = _client_for(object()).get("/search", params={"q": "Batman"})
    assert resp.status_code == 200
    body = resp.json()
    assert [m["title"] for m in body["results"]] == ["Batman"]
    assert body["pagination"]["total"] == 1
    assert captured["criteria"].text == "Batman"


def test_search_passes_every_filter(captured):
    resp = _client_for(object()).get("/search", params={
        "q": "Batman", "genres": "Action", "yearMin": "2000", "yearMax": "2020",
        "ratingMin": "8.0", "ratingMax": "10.0",
        "durationMin": "120", "durationMax": "180",
    })
    assert resp.status_code == 200
    assert resp.json()["pagination"] is not None
    criteria = captured["criteria"]
    assert criteria.genres == frozenset({"Action"})
    assert (criteria.year_range.min, criteria.year_range.max) == (2000, 2020)
    assert (criteria.rating_range.min, criteria.rating_range.max) == (8.0, 10.0)
    assert (criteria.duration_range.min, criteria.duration_range.max) == (120, 180)


def test_search_pagination_parameters(captured):
    captured["total"] = 100
    resp = _client_for(object()).get(
        "/search", params={"limit": "10", "offset": "20"})
    pagination = resp.json()["pagination"]
    assert pagination == {
        "total": 100, "limit": 10, "offset": 20, "hasMore": True}


def test_search_limit_is_capped(captured):
    resp = _client_for(object()).get("/search", params={"limit": "1000"})
    assert resp.json()["pagination"]["limit"] == 100


def test_search_malformed_numbers_are_ignored(captured):
    resp = _client_for(object()).get("/search", params={
        "yearMin": "nineteen", "ratingMax": "ten", "limit": "x", "offset": "-3"})
    assert resp.status_code == 200
    criteria = captured["criteria"]
    assert criteria.year_range is None
    assert criteria.rating_range is None
    assert resp.json()["pagination"]["limit"] == 20
    assert resp.json()["pagination"]["offset"] == 0


def test_search_empty_genres_same_as_omitted(client):
    assert client.get("/search", params={"genres": ""}).json() == \
        client.get("/search").json()


def test_search_whitespace_query_same_as_omitted(client):
    assert client.get("/search", params={"q": "   "}).json() == \
        client.get("/search").json()


def test_search_no_match_is_not_an_error(client):
    resp = client.get("/search", params={"q": "no such movie"})
    assert resp.status_code == 200
    assert resp.json() == {
        "results": [],
        "pagination": {"total": 0, "limit": 20, "offset": 0, "hasMore": False},
    }


def test_search_oversized_numbers_do_not_fail(client):
    resp = client.get("/search", params={
        "offset": "99999999999999999999", "yearMax": "99999999999999999999"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["results"] == []
    assert body["pagination"]["total"] == len(CATALOG)
    assert body["pagination"]["hasMore"] is False


def test_search_results_use_camel_case_fields(client):
    body = client.get("/search", params={"q": "dark knight"}).json()
    movie = body["results"][0]
    assert movie["releaseYear"] == 2008
    assert movie["durationMinutes"] == 152
    assert movie["cast"] == ["Christian Bale", "Heath Ledger"]
    assert movie["genres"] == ["Action", "Crime", "Drama"]


def test_search_store_failure_is_500(monkeypatch):
    async def boom(engine, criteria):
        raise RuntimeError("Search failed")

    monkeypatch.setattr(main, "search_movies", boom)
    resp = _client_for(object()).get("/search", params={"q": "Batman"})
    assert resp.status_code == 500
    assert resp.json() == INTERNAL_ERROR


def test_search_database_error_is_500(tmp_path):
    # schema never created, so the query itself fails
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'bare.db'}", poolclass=NullPool)
    resp = _client_for(engine).get("/search", params={"q": "Batman"})
    assert resp.status_code == 500
    assert resp.json() == INTERNAL_ERROR


# --- /suggestions --------------------------------------------------------


def test_suggestions_for_valid_query():
    engine = FakeEngine(rows=[
        {"suggestion": "Batman", "type": "title", "frequency": "5"},
        {"suggestion": "Christopher Nolan", "type": "director", "frequency": "3"},
    ])
    resp = _client_for(engine).get("/suggestions", params={"q": "Bat"})
    assert resp.status_code == 200
    assert resp.json() == [
        {"text": "Batman", "type": "title", "frequency": 5},
        {"text": "Christopher Nolan", "type": "director", "frequency": 3},
    ]
    assert len(engine.queries) == 1
    assert engine.released == 1


@pytest.mark.parametrize("params", [{"q": "B"}, {}, {"q": "  "}, {"q": " B "}])
def test_suggestions_short_query_skips_store(params):
    engine = FakeEngine()
    resp = _client_for(engine).get("/suggestions", params=params)
    assert resp.status_code == 200
    assert resp.json() == []
    assert engine.queries == []


def test_suggestions_store_failure_is_500():
    engine = FakeEngine(rows=RuntimeError("Suggestions failed"))
    resp = _client_for(engine).get("/suggestions", params={"q": "Batman"})
    assert resp.status_code == 500
    assert resp.json() == INTERNAL_ERROR
    assert engine.released == 1


def test_suggestions_against_store(client):
    resp = client.get("/suggestions", params={"q": "batman"})
    assert resp.json() == [
        {"text": "Batman Begins", "type": "title", "frequency": 1},
        {"text": "Batman Returns", "type": "title", "frequency": 1},
    ]


# --- /movies ---------------------------------------------------------------


def test_list_movies(client):
    resp = client.get("/movies")
    assert resp.status_code == 200
    assert [m["id"] for m in resp.json()] == RELEVANCE_ORDER


def test_list_movies_failure_is_500(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'bare.db'}", poolclass=NullPool)
    resp = _client_for(engine).get("/movies")
    assert resp.status_code == 500
    assert resp.json() == INTERNAL_ERROR


def test_seed_and_clear(client):
    resp = client.post("/movies/clear")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Database cleared successfully"}
    assert client.get("/movies").json() == []

    resp = client.post("/movies/seed")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Database seeded successfully"}
    assert client.get("/movies").json()[0]["title"] == "The Shawshank Redemption"


def test_seed_and_clear_failures_are_500(monkeypatch):
    async def boom(engine):
        raise RuntimeError("Seed failed")

    monkeypatch.setattr(main, "seed_movies", boom)
    monkeypatch.setattr(main, "clear_movies", boom)
    client = _client_for(object())
    for path in ("/movies/seed", "/movies/clear"):
        resp = client.post(path)
        assert resp.status_code == 500
        assert resp.json() == INTERNAL_ERROR


# --- /videos -------------------------------------------------------------


def test_video_details_fallback_when_not_configured(monkeypatch):
    monkeypatch.setattr(yt, "YOUTUBE_API_KEY", None)
    resp = TestClient(main.app).get("/videos/abc123")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == "abc123"
    assert body["duration"] == 180
    assert body["title"] == "Video Title Unavailable"
    assert body["thumbnails"]["high"]["url"] == \
        "https://img.youtube.com/vi/abc123/hqdefault.jpg"
