import math
from typing import Callable, FrozenSet, Optional
from ..config import CatalogLimits, limits as default_limits
from ..schemas.catalog_schemas import (
    Number,
    NumericRange,
    Pagination,
    SearchCriteria,
)

GENRE_DELIMITER = ','

# release_year and duration_minutes are INTEGER columns; OFFSET takes a BIGINT
INT32_MIN, INT32_MAX = -2 ** 31, 2 ** 31 - 1
INT64_MAX = 2 ** 63 - 1


def normalize_text(raw: Optional[str]) -> Optional[str]:
    """
    Trim free text; blank input counts as no text at all.
    """
    if raw is None:
        return None
    text = raw.strip()
    return text or None


def parse_genres(raw: Optional[str]) -> Optional[FrozenSet[str]]:
    """
    Split a comma-delimited genre list, dropping blank entries.

    :param raw: Raw query string value, e.g. "Action, Drama".
    :return: Set of genre names, or None when nothing usable remains.
    """
    if not raw:
        return None
    genres = frozenset(
        g.strip() for g in raw.split(GENRE_DELIMITER) if g.strip()
    )
    return genres or None


def parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        return None


def parse_column_int(raw: Optional[str]) -> Optional[int]:
    """
    Parse an integer bound for an INTEGER column. Values the column
    cannot hold are treated as absent.
    """
    value = parse_int(raw)
    if value is None or not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def build_range(
    raw_min: Optional[str],
    raw_max: Optional[str],
    parse: Callable[[Optional[str]], Optional[Number]]
) -> Optional[NumericRange]:
    """
    Build an inclusive range whose bounds are parsed independently.
    A bound that does not parse is dropped, not reported.
    """
    rng = NumericRange(min=parse(raw_min), max=parse(raw_max))
    return None if rng.is_empty else rng


def build_pagination(
    raw_limit: Optional[str],
    raw_offset: Optional[str],
    limits: CatalogLimits = default_limits
) -> Pagination:
    limit = parse_int(raw_limit)
    if limit is None or limit < 1:
        limit = limits.default_limit
    limit = min(limit, limits.max_limit)

    offset = parse_int(raw_offset)
    if offset is None or offset < 0:
        offset = 0
    # past the end of any real table: the page is simply empty
    offset = min(offset, INT64_MAX)
    return Pagination(limit=limit, offset=offset)


def build_search_criteria(
    q: Optional[str] = None,
    genres: Optional[str] = None,
    year_min: Optional[str] = None,
    year_max: Optional[str] = None,
    rating_min: Optional[str] = None,
    rating_max: Optional[str] = None,
    duration_min: Optional[str] = None,
    duration_max: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    limits: CatalogLimits = default_limits
) -> SearchCriteria:
    """
    Normalize raw search parameters into SearchCriteria.

    Lenient by field: any optional value that is blank or malformed is
    treated as absent and the rest of the request still goes through.
    This function never raises on user input.
    """
    return SearchCriteria(
        text=normalize_text(q),
        genres=parse_genres(genres),
        year_range=build_range(year_min, year_max, parse_column_int),
        rating_range=build_range(rating_min, rating_max, parse_float),
        duration_range=build_range(duration_min, duration_max, parse_column_int),
        pagination=build_pagination(limit, offset, limits),
    )


def suggestion_prefix(
    raw: Optional[str],
    limits: CatalogLimits = default_limits
) -> Optional[str]:
    """
    Gate for the typeahead path. Returns the trimmed prefix, or None when
    it is shorter than the configured minimum and no lookup should happen.
    """
    text = normalize_text(raw)
    if text is None or len(text) < limits.suggestion_min_length:
        return None
    return text
