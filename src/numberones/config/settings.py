"""Application settings loaded from environment variables and .env."""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChartSourceSettings(BaseModel):
    """Where and how we scrape the live chart pages."""

    base_url: str = Field(
        default="https://www.officialcharts.com",
        description="Chart provider base URL (no trailing slash)",
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/123.0 Safari/537.36"
        ),
        description="User-Agent header sent to the chart provider",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class CacheSettings(BaseModel):
    """Durable chart cache location."""

    path: Path = Field(
        default=Path("data/number-ones.json"),
        description="JSON document holding every cached chart entry",
    )


class BackfillSettings(BaseModel):
    """Bulk backfill tuning."""

    # Hey future me, 100 in-flight fetches has run full backfills without getting blocked.
    # It's a fixed knob, not something we derive at runtime.
    max_concurrency: int = Field(
        default=100, ge=1, description="Max simultaneous chart fetches"
    )
    api_enabled: bool = Field(
        default=False, description="Expose POST /api/number-ones/backfill"
    )


class ObservabilitySettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)
    access_log_path: Path | None = Field(
        default=None, description="Append-only access log; disabled when unset"
    )


class Settings(BaseSettings):
    """Root settings.

    Environment variables use the NUMBERONES_ prefix and "__" for nesting, e.g.
    NUMBERONES_BACKFILL__MAX_CONCURRENCY=50.
    """

    model_config = SettingsConfigDict(
        env_prefix="NUMBERONES_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "numberones"
    chart_source: ChartSourceSettings = Field(default_factory=ChartSourceSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    backfill: BackfillSettings = Field(default_factory=BackfillSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
