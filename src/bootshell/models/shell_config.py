"""Configuration model for bootshell."""

import logging
from typing import Literal

from pydantic import BaseModel, field_validator

DEFAULT_APPLICATION = "root"
DEFAULT_USER = "bootshell"


class ShellConfig(BaseModel):
    """Runtime configuration for bootshell."""

    application: str = DEFAULT_APPLICATION
    user: str = DEFAULT_USER
    term: str | None = None
    multi_scope_mode: bool = True
    discovery_policy: Literal["fail-fast", "best-effort"] = "fail-fast"
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level
