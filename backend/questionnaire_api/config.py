import json
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["*"]


def _parse_cors_origins(value: str | None) -> List[str]:
    """Accept a comma-separated list or a JSON array of origins."""
    stripped = (value or "").strip()
    if not stripped:
        return []

    if stripped.startswith("["):
        loaded = json.loads(stripped)
        return [str(origin).strip() for origin in loaded if str(origin).strip()]

    return [origin.strip() for origin in stripped.split(",") if origin.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "SRE Maturity Assessment"
    api_prefix: str = "/api"
    database_url: str = "sqlite+aiosqlite:///./questionnaire.db"
    database_echo: bool = False
    cors_origins_raw: str | None = Field(default=None, alias="CORS_ORIGINS")
    static_dir: str | None = None
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    shutdown_grace_seconds: float = 10.0

    @field_validator("database_url")
    @classmethod
    def ensure_async_driver(cls, value: str) -> str:
        """
        Plain ``sqlite://`` URLs are rewritten to the aiosqlite driver so the
        async engine can open them.
        """
        if not value:
            return value

        if value.startswith("sqlite://"):
            return "sqlite+aiosqlite://" + value[len("sqlite://") :]

        return value

    @property
    def cors_origins(self) -> List[str]:
        parsed = _parse_cors_origins(self.cors_origins_raw)
        if not parsed:
            return DEFAULT_CORS_ORIGINS
        return parsed


@lru_cache
def get_settings() -> Settings:
    return Settings()
