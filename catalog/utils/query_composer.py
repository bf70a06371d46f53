from dataclasses import dataclass
from typing import List
from sqlalchemy import Select, and_, func, select, true
from ..db.tables import movies
from ..schemas.catalog_schemas import SearchCriteria
from .predicates import Predicate, active_predicates
from .ranking import apply_ranking, relevance_order


@dataclass(frozen=True)
class ComposedQuery:
    """
    A bounded, ordered result statement and an unbounded count statement
    that share the exact same WHERE clause.
    """
    predicates: List[Predicate]
    result: Select
    count: Select


def where_clause(predicates: List[Predicate]):
    if not predicates:
        return true()
    return and_(*(p.render() for p in predicates))


def compose_search(criteria: SearchCriteria) -> ComposedQuery:
    """
    Fold the active predicates of `criteria` with AND into the page query
    and the matching total-count query.

    :param criteria: Normalized search criteria.
    :return: ComposedQuery holding both statements.
    """
    predicates = active_predicates(criteria)
    condition = where_clause(predicates)

    result = apply_ranking(
        select(movies).where(condition),
        criteria.pagination,
    )
    count = select(func.count()).select_from(movies).where(condition)
    return ComposedQuery(predicates=predicates, result=result, count=count)


def compose_listing() -> Select:
    """
    Every movie in relevance order, unbounded.
    """
    return select(movies).order_by(*relevance_order())
