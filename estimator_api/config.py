"""
config.py – Load and validate runtime settings from the environment.

Settings come from environment variables (or a .env file at the repo root
or inside the package directory).  Call `get_config()` to obtain a
validated Config object; nothing here is required.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Package root: estimator_api/
_PACKAGE_ROOT = Path(__file__).resolve().parent
# Repo root, so .env can live next to pyproject.toml
_REPO_ROOT = _PACKAGE_ROOT.parent

for _env_path in (_REPO_ROOT / ".env", _PACKAGE_ROOT / ".env"):
    if _env_path.exists():
        load_dotenv(_env_path)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class Config:
    """Validated runtime configuration."""

    response_delay_ms: int = 0
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def response_delay_seconds(self) -> float:
        return self.response_delay_ms / 1000.0


def _parse_delay(raw: str) -> int:
    try:
        delay = int(raw)
    except ValueError as exc:
        raise EnvironmentError(
            f"ESTIMATOR_RESPONSE_DELAY_MS must be a whole number of milliseconds, got {raw!r}"
        ) from exc
    if delay < 0:
        raise EnvironmentError(f"ESTIMATOR_RESPONSE_DELAY_MS must be >= 0, got {delay}")
    return delay


def get_config() -> Config:
    """
    Read environment variables and return a Config.

    Raises
    ------
    EnvironmentError
        If a variable is set to an invalid value.
    """
    cfg = Config()

    raw_delay = os.environ.get("ESTIMATOR_RESPONSE_DELAY_MS", "").strip()
    if raw_delay:
        cfg.response_delay_ms = _parse_delay(raw_delay)

    raw_origins = os.environ.get("ESTIMATOR_CORS_ORIGINS", "").strip()
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    if origins:
        cfg.cors_origins = origins

    raw_level = os.environ.get("LOG_LEVEL", "").strip().upper()
    if raw_level:
        if raw_level not in _LOG_LEVELS:
            raise EnvironmentError(
                f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {raw_level!r}"
            )
        cfg.log_level = raw_level

    return cfg
