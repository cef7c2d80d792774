"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_PREFIX = "PACK_PLANNER_"


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


class Settings(BaseModel):
    """Knobs shared by the CLI and the API."""

    log_level: str = Field(default="WARNING", description="Root logging level")
    weight_precision: int = Field(default=2, ge=0, description="Decimals used when printing pack weights")
    weight_tolerance: float = Field(default=0.0, ge=0, description="Allowed overshoot of max_weight")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(environ: Mapping[str, str] | None = None, *, dotenv: bool = True) -> Settings:
    """
    Build Settings from PACK_PLANNER_* variables.

    A .env file in the working directory is loaded first when `dotenv` is set;
    it never overrides variables that are already set.
    """
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    values: dict[str, str] = {}
    for name in Settings.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip() != "":
            values[name] = raw.strip()

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid {ENV_PREFIX}* configuration: {e}") from e
