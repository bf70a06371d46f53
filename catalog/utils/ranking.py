from typing import Tuple
from sqlalchemy import Select, UnaryExpression
from ..db.tables import movies
from ..schemas.catalog_schemas import Pagination


def relevance_order() -> Tuple[UnaryExpression, ...]:
    """
    Rating descending, then id ascending as a stable tie-break so that
    consecutive pages never overlap or skip rows.

    Text match strength does not affect the order; a stronger relevance
    score would be added here.
    """
    return (movies.c.rating.desc().nulls_last(), movies.c.id.asc())


def apply_ranking(stmt: Select, pagination: Pagination) -> Select:
    return (
        stmt.order_by(*relevance_order())
        .limit(pagination.limit)
        .offset(pagination.offset)
    )

