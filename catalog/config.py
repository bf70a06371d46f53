from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import BaseModel, ConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./catalog.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    YOUTUBE_API_KEY: Optional[str] = None

    DEFAULT_LIMIT: int = 20
    MAX_LIMIT: int = 100
    SUGGESTION_MIN_LENGTH: int = 2
    SUGGESTION_LIMIT: int = 10
    QUERY_TIMEOUT_SECONDS: Optional[float] = 10.0

    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"
    )


class CatalogLimits(BaseModel):
    """
    Paging and typeahead bounds shared by the criteria builder,
    the query composer and the suggestion engine.
    """
    default_limit: int = 20
    max_limit: int = 100
    suggestion_min_length: int = 2
    suggestion_limit: int = 10

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, s: "Settings") -> "CatalogLimits":
        return cls(
            default_limit=s.DEFAULT_LIMIT,
            max_limit=s.MAX_LIMIT,
            suggestion_min_length=s.SUGGESTION_MIN_LENGTH,
            suggestion_limit=s.SUGGESTION_LIMIT,
        )


settings = Settings()
limits = CatalogLimits.from_settings(settings)
