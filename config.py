# config.py
"""
Settings loaded from environment variables, after an optional .env file.

    KANBAN_DATA_FILE   snapshot path              (default: data.json)
    KANBAN_HOST        bind address               (default: 0.0.0.0)
    KANBAN_PORT        bind port                  (default: 8080)
    KANBAN_LOG_LEVEL   DEBUG/INFO/WARNING/ERROR   (default: INFO)
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "KANBAN"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    data_file: Path = field(default_factory=lambda: Path("data.json"))
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"


def _env(suffix: str, default: str) -> str:
    value = os.getenv(f"{ENV_PREFIX}_{suffix}")
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_int(suffix: str, default: int) -> int:
    try:
        return int(_env(suffix, str(default)))
    except ValueError:
        return default


def _env_log_level(suffix: str, default: str) -> str:
    level = _env(suffix, default).upper()
    return level if level in LOG_LEVELS else default


def load_settings() -> Settings:
    """Reads .env from the working directory (without overriding the real environment) and builds Settings."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    defaults = Settings()
    return Settings(
        data_file=Path(_env("DATA_FILE", str(defaults.data_file))).expanduser(),
        host=_env("HOST", defaults.host),
        port=_env_int("PORT", defaults.port),
        log_level=_env_log_level("LOG_LEVEL", defaults.log_level),
    )
