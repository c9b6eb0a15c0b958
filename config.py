"""
Runtime settings — read from the environment (and a local .env, if present).

  PORTFOLIO_REFRESH_INTERVAL    seconds between automatic refreshes   (15)
  PORTFOLIO_CACHE_TTL           quote freshness window in seconds     (30)
  PORTFOLIO_BATCH_SIZE          lookups issued together per batch     (5)
  PORTFOLIO_BATCH_PAUSE         pause between batches in seconds      (1.0)
  PORTFOLIO_FAILURE_RATE        chance a simulated lookup fails       (0.0)
  PORTFOLIO_REFRESH_FINANCIALS  also refresh P/E + earnings each cycle (false)
  LOG_LEVEL                     DEBUG / INFO / WARNING / ERROR        (INFO)
"""
from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    refresh_interval: float = Field(15.0, gt=0)
    cache_ttl: float = Field(30.0, ge=0)
    batch_size: int = Field(5, ge=1)
    batch_pause: float = Field(1.0, ge=0)
    failure_rate: float = Field(0.0, ge=0, le=1)
    refresh_financials: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


_ENV_MAP = {
    "refresh_interval":   "PORTFOLIO_REFRESH_INTERVAL",
    "cache_ttl":          "PORTFOLIO_CACHE_TTL",
    "batch_size":         "PORTFOLIO_BATCH_SIZE",
    "batch_pause":        "PORTFOLIO_BATCH_PAUSE",
    "failure_rate":       "PORTFOLIO_FAILURE_RATE",
    "refresh_financials": "PORTFOLIO_REFRESH_FINANCIALS",
    "log_level":          "LOG_LEVEL",
}


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment, then apply non-None overrides
    (CLI flags win over env vars).

    Raises:
        ValueError: if any value fails validation.
    """
    load_dotenv(find_dotenv(usecwd=True))

    values: dict = {}
    for field, env_var in _ENV_MAP.items():
        raw = os.getenv(env_var)
        if raw is None or raw == "":
            continue
        if field == "refresh_financials":
            values[field] = raw.strip().lower() in _TRUTHY
        else:
            values[field] = raw.strip()

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ValueError(f"Invalid portfolio settings: {e}") from e
