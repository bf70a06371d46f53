from typing import Any, Iterable, List, Mapping
from sqlalchemy import Select, distinct, func, literal_column, select, union_all
from ..db.tables import movie_cast, movie_genres, movies
from ..schemas.catalog_schemas import Suggestion
from .predicates import icontains


def _category_query(text_column, movie_id_column, kind: str, prefix: str) -> Select:
    """
    Distinct values of one column containing `prefix`, each with the
    number of movies it appears in.
    """
    return (
        select(
            text_column.label('suggestion'),
            literal_column(f"'{kind}'").label('type'),
            func.count(distinct(movie_id_column)).label('frequency'),
        )
        .where(text_column.is_not(None), icontains(text_column, prefix))
        .group_by(text_column)
    )


def compose_suggestions(prefix: str, limit: int) -> Select:
    """
    Union the per-category candidates for `prefix`, ranked by frequency.

    :param prefix: Trimmed text that already passed the length gate.
    :param limit: Maximum number of candidates to return.
    :return: Select yielding (suggestion, type, frequency) rows.
    """
    candidates = union_all(
        _category_query(movies.c.title, movies.c.id, 'title', prefix),
        _category_query(movies.c.director, movies.c.id, 'director', prefix),
        _category_query(movie_genres.c.genre, movie_genres.c.movie_id,
                        'genre', prefix),
        _category_query(movie_cast.c.actor, movie_cast.c.movie_id,
                        'actor', prefix),
    ).subquery('candidates')
    return (
        select(candidates)
        .order_by(
            candidates.c.frequency.desc(),
            candidates.c.suggestion.asc(),
            candidates.c.type.asc(),
        )
        .limit(limit)
    )


def coerce_frequency(value: Any) -> int:
    """
    Counts come back as int, Decimal or numeric text depending on the driver.
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(float(value))


def to_suggestions(rows: Iterable[Mapping[str, Any]]) -> List[Suggestion]:
    """
    Turn candidate rows into Suggestions, keeping the order and the cut made
    by compose_suggestions. The same text under two categories stays two
    entries.
    """
    return [
        Suggestion(
            text=row['suggestion'],
            type=row['type'],
            frequency=coerce_frequency(row['frequency']),
        )
        for row in rows
    ]
