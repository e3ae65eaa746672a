"""
Configuration and settings for the counter admin service.

The settings are loaded from environment variables using pydantic-settings.
A `.env` file in the working directory is honoured as well.
"""
from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    # Metric store backend: an in-process dict or a SQL table
    metric_store: Literal["memory", "sql"] = Field(default="memory", alias="METRIC_STORE")
    sql_database_uri: str = Field(default="sqlite:///data/metrics.db", alias="SQLALCHEMY_DATABASE_URI")

    # Metrics whose name starts with this prefix are exposed as counters
    counter_prefix: str = Field(default="counter.", alias="COUNTER_PREFIX")

    # Paging defaults for the counters listing
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=1000, alias="MAX_PAGE_SIZE")

    # Count every handled request into the store as counter.status.<code>.<path>
    record_request_metrics: bool = Field(default=True, alias="RECORD_REQUEST_METRICS")

    logs_dir: str = Field(default="logs", alias="LOGS_DIR")

    # CORS settings (comma-separated list)
    allowed_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080,http://127.0.0.1:8080",
        alias="ALLOWED_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
