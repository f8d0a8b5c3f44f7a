"""Application configuration and settings management."""

from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPUSCOFFEE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "CampusCoffee API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    osm_source: Literal["stub", "http"] = Field(
        default="stub",
        description="Where OSM nodes are fetched from: the built-in stub or the public OSM API.",
    )
    osm_api_base_url: str = Field(
        default="https://www.openstreetmap.org/api/0.6",
        description="Base URL of the OpenStreetMap editing API.",
    )
    osm_user_agent: str = Field(
        default="CampusCoffee/0.0.1 (+https://github.com/se-ubt/ise25-26_campus-coffee)",
        description="User-Agent sent to the OSM API (required by its usage policy).",
    )
    osm_connect_timeout_seconds: float = Field(default=5.0, gt=0.0)
    osm_request_timeout_seconds: float = Field(default=10.0, gt=0.0)

    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    supabase_pos_table: str = Field(default="pos", description="Table holding point-of-sale rows.")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value).strip().upper() or "INFO"

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


settings = Settings()
