from dataclasses import dataclass
from typing import FrozenSet, List
from sqlalchemy import ColumnElement, String, and_, func, or_, select
from ..db.tables import movie_cast, movie_genres, movies
from ..schemas.catalog_schemas import NumericRange, SearchCriteria


def icontains(column, text: str) -> ColumnElement[bool]:
    """
    Case-insensitive substring match; LIKE wildcards in `text` match literally.
    """
    return func.lower(column, type_=String).contains(text.lower(), autoescape=True)


class Predicate:
    """
    One filter condition derived from a single search parameter.
    Subclasses render themselves as a boolean clause over `movies`.
    """

    def render(self) -> ColumnElement[bool]:
        raise NotImplementedError


@dataclass(frozen=True)
class TextPredicate(Predicate):
    text: str

    def render(self) -> ColumnElement[bool]:
        in_cast = select(movie_cast.c.movie_id).where(
            movie_cast.c.movie_id == movies.c.id,
            icontains(movie_cast.c.actor, self.text),
        ).exists()
        in_genres = select(movie_genres.c.movie_id).where(
            movie_genres.c.movie_id == movies.c.id,
            icontains(movie_genres.c.genre, self.text),
        ).exists()
        return or_(
            icontains(movies.c.title, self.text),
            icontains(movies.c.director, self.text),
            in_cast,
            in_genres,
        )


@dataclass(frozen=True)
class GenrePredicate(Predicate):
    genres: FrozenSet[str]

    def render(self) -> ColumnElement[bool]:
        wanted = sorted({g.lower() for g in self.genres})
        return select(movie_genres.c.movie_id).where(
            movie_genres.c.movie_id == movies.c.id,
            func.lower(movie_genres.c.genre).in_(wanted),
        ).exists()


@dataclass(frozen=True)
class RangePredicate(Predicate):
    column_name: str
    bounds: NumericRange

    def render(self) -> ColumnElement[bool]:
        column = movies.c[self.column_name]
        clauses = []
        if self.bounds.min is not None:
            clauses.append(column >= self.bounds.min)
        if self.bounds.max is not None:
            clauses.append(column <= self.bounds.max)
        return and_(*clauses)


def active_predicates(criteria: SearchCriteria) -> List[Predicate]:
    """
    Build one predicate per criterion that is present. Absent criteria
    contribute nothing, so empty criteria yield an empty list.
    """
    predicates: List[Predicate] = []
    if criteria.text:
        predicates.append(TextPredicate(criteria.text))
    if criteria.genres:
        predicates.append(GenrePredicate(criteria.genres))
    for column_name, bounds in (
        ('release_year', criteria.year_range),
        ('rating', criteria.rating_range),
        ('duration_minutes', criteria.duration_range),
    ):
        if bounds is not None and not bounds.is_empty:
            predicates.append(RangePredicate(column_name, bounds))
    return predicates
