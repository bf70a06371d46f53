from typing import Dict, FrozenSet, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]
SuggestionType = Literal['title', 'director', 'genre', 'actor']


class MovieRecord(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    genres: List[str] = []
    release_year: Optional[int] = Field(default=None, alias='releaseYear')
    rating: Optional[float] = None
    duration_minutes: Optional[int] = Field(
        default=None, alias='durationMinutes')
    director: Optional[str] = None
    cast: List[str] = []
    image_url: Optional[str] = Field(default=None, alias='imageUrl')
    video_url: Optional[str] = Field(default=None, alias='videoUrl')

    model_config = ConfigDict(populate_by_name=True)


class NumericRange(BaseModel):
    min: Optional[Number] = None
    max: Optional[Number] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None


class Pagination(BaseModel):
    limit: int = 20
    offset: int = 0

    model_config = ConfigDict(frozen=True)


class SearchCriteria(BaseModel):
    """
    Normalized, immutable search request. Every field is optional and
    an instance with nothing set matches the whole catalog.
    """
    text: Optional[str] = None
    genres: Optional[FrozenSet[str]] = None
    year_range: Optional[NumericRange] = None
    rating_range: Optional[NumericRange] = None
    duration_range: Optional[NumericRange] = None
    pagination: Pagination = Pagination()

    model_config = ConfigDict(frozen=True)


class PaginationMeta(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool = Field(alias='hasMore')

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def build(cls, total: int, pagination: Pagination) -> "PaginationMeta":
        return cls(
            total=total,
            limit=pagination.limit,
            offset=pagination.offset,
            has_more=pagination.offset + pagination.limit < total,
        )


class SearchResult(BaseModel):
    records: List[MovieRecord]
    pagination: PaginationMeta


class SearchResponse(BaseModel):
    results: List[MovieRecord]
    pagination: PaginationMeta


class Suggestion(BaseModel):
    text: str
    type: SuggestionType
    frequency: int = Field(ge=1)


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str


class Thumbnail(BaseModel):
    url: str


class VideoDetails(BaseModel):
    id: str
    title: str
    description: str
    duration: int
    published_at: str
    channel_title: str
    view_count: int = 0
    like_count: int = 0
    thumbnails: Dict[str, Thumbnail] = {}
