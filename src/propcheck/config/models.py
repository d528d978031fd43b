"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, propcheck.toml only contains
overrides. An empty file (or no file) is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    validation_results: bool = True


class BatchConfig(BaseModel):
    """[batch] section."""

    model_config = {"frozen": True}

    max_batch_size: int = Field(default=1000, gt=0)


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    level: LogLevel = "WARNING"
