from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_FILE = Path(__file__).resolve().parents[1] / "data" / "seed_events.json"
DEFAULT_TIMEZONE = "Europe/Stockholm"


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and an optional .env file.

    An empty ``database_url`` means the API and CLI serve the bundled seed
    document from memory instead of a database.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = ""
    reference_timezone: str = DEFAULT_TIMEZONE
    seed_file: Path = DEFAULT_SEED_FILE
    frontend_origin: str = "http://localhost:3000"
    environment: str = "development"
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("reference_timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @property
    def reference_tz(self) -> ZoneInfo:
        return ZoneInfo(self.reference_timezone)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
