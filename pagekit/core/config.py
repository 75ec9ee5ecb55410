"""Library settings loaded from environment."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagekit.core.enums import SortEnum


class Settings(BaseSettings):
    """Runtime pagination settings."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "INFO"

    default_limit: int = 10
    max_limit: int = Field(default=100, ge=1)
    allow_unlimited_limit: bool = False
    default_sort: SortEnum = SortEnum.ASC
    default_page_window: int = 5
    page_arg: str = Field(default="page", min_length=1)

    database_url: str = "sqlite:///./pagekit.db"

    @field_validator("default_sort", mode="before")
    @classmethod
    def normalize_default_sort(cls, value: object) -> object:
        """Accept ASC/DESC tokens in any case."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("default_page_window")
    @classmethod
    def validate_page_window(cls, value: int) -> int:
        """Page window of zero means unlimited, negatives are meaningless."""
        if value < 0:
            raise ValueError("PAGEKIT_DEFAULT_PAGE_WINDOW must be >= 0")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
