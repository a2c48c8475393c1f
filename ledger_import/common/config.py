"""
Runtime settings read from ``LEDGER_IMPORT_*`` environment variables.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",  # Vite Default
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LEDGER_IMPORT_", extra="ignore")

    log_level: int = logging.INFO
    log_file: Optional[str] = None
    # None keeps import history in memory only
    history_dir: Optional[Path] = None
    history_max: int = Field(default=100, ge=1)
    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    session_timeout_hours: int = Field(default=4, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v):
        if isinstance(v, str) and not v.strip().isdigit():
            level = logging.getLevelName(v.strip().upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown log level: {v}")
            return level
        return v

    @field_validator("log_file", "history_dir", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            origins = [o.strip() for o in v.split(",") if o.strip()]
            return origins or list(DEFAULT_CORS_ORIGINS)
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for the running process, read once."""
    return Settings()
