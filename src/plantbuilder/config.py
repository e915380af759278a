"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from .models import DEFAULT_SIZE_CEILING


@dataclass(frozen=True)
class Settings:
    generator_url: Optional[str] = field(
        default_factory=lambda: os.getenv("PLANTBUILDER_GENERATOR_URL") or None
    )
    generator_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("PLANTBUILDER_GENERATOR_API_KEY") or None
    )
    generator_timeout: float = field(
        default_factory=lambda: float(os.getenv("PLANTBUILDER_GENERATOR_TIMEOUT", "30"))
    )
    generator_max_retries: int = field(
        default_factory=lambda: int(os.getenv("PLANTBUILDER_GENERATOR_MAX_RETRIES", "2"))
    )
    size_ceiling: float = field(
        default_factory=lambda: float(os.getenv("PLANTBUILDER_SIZE_CEILING", str(DEFAULT_SIZE_CEILING)))
    )
    log_level: Optional[str] = field(default_factory=lambda: os.getenv("PLANTBUILDER_LOG_LEVEL"))
    allowed_origins: list = field(
        default_factory=lambda: os.getenv("PLANTBUILDER_ALLOWED_ORIGINS", "*").split(",")
    )
