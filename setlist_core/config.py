"""
Runtime configuration and logging setup.

Settings come from environment variables:

  SETLIST_LOG_LEVEL     loguru level for the stderr sink (default INFO)
  SETLIST_DEFAULT_NAME  name given to setlists built without one
  SETLIST_MAX_STORED    how many generated setlists the engine keeps
"""

import os
import sys
from typing import Optional

from loguru import logger
from pydantic import BaseModel, field_validator

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SETLIST_NAME = "Setlist"
DEFAULT_MAX_STORED = 100


class Settings(BaseModel):
    log_level: str = DEFAULT_LOG_LEVEL
    default_name: str = DEFAULT_SETLIST_NAME
    max_stored: int = DEFAULT_MAX_STORED

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() or DEFAULT_LOG_LEVEL

    @field_validator("max_stored")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_stored must be at least 1")
        return v

    @classmethod
    def from_env(cls) -> "Settings":
        max_stored = os.environ.get("SETLIST_MAX_STORED", "")
        return cls(
            log_level=os.environ.get("SETLIST_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            default_name=os.environ.get("SETLIST_DEFAULT_NAME", "") or DEFAULT_SETLIST_NAME,
            max_stored=int(max_stored) if max_stored.strip() else DEFAULT_MAX_STORED,
        )


def configure_logging(level: Optional[str] = None) -> int:
    """Replace loguru's default sink with a stderr sink at ``level``.

    Returns the new sink id.
    """
    level = (level or Settings.from_env().log_level).upper()
    logger.remove()
    return logger.add(sys.stderr, level=level)
