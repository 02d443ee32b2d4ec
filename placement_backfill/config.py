"""Backfill configuration using Pydantic Settings."""

import os
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Backfill settings loaded from environment variables."""

    # Database Configuration
    db_host: Optional[str] = Field(
        default=None,
        description="Database server host"
    )
    db_port: int = Field(
        default=3306,
        ge=1,
        le=65535,
        description="Database server port"
    )
    db_user: Optional[str] = Field(
        default=None,
        description="Database user"
    )
    db_password: str = Field(
        default="",
        description="Database password"
    )
    db_database: Optional[str] = Field(
        default=None,
        description="Database (schema) name holding location_l10n"
    )
    db_driver: str = Field(
        default="mysql+aiomysql",
        description="Async SQLAlchemy driver name"
    )
    database_url: Optional[str] = Field(
        default=None,
        description="Full database URL, overrides the individual DB_* values"
    )

    # Places API Configuration
    lite_api_key: str = Field(
        ...,
        min_length=1,
        description="API key sent in the X-API-Key header"
    )
    lite_api_url: str = Field(
        default="https://api.liteapi.travel/v3.0/data/places",
        description="Places lookup endpoint"
    )
    places_search_type: str = Field(
        default="geocode",
        description="Place type requested from the lookup endpoint"
    )
    places_language: str = Field(
        default="en",
        description="Language requested from the lookup endpoint"
    )
    http_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="Places request timeout in seconds"
    )

    # Application Configuration
    debug: bool = Field(
        default=False,
        description="Echo SQL statements"
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level"
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("TESTING") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("db_driver")
    @classmethod
    def validate_db_driver(cls, v: str) -> str:
        """Validate that the driver name carries an async dialect driver."""
        if "+" not in v:
            raise ValueError(
                "DB_DRIVER must name an async driver (e.g. mysql+aiomysql)"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the logging level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}"
            )
        return level

    @model_validator(mode="after")
    def validate_database_target(self) -> "Settings":
        """Require either DATABASE_URL or the host, user and database parts."""
        if self.database_url:
            return self
        missing = [
            name.upper()
            for name in ("db_host", "db_user", "db_database")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                f"Missing database configuration: {', '.join(missing)} "
                "(or set DATABASE_URL)"
            )
        return self

    @property
    def sqlalchemy_url(self) -> URL:
        """Database URL handed to the async engine."""
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )
