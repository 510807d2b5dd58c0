from __future__ import annotations
from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


DEFAULT_FILE_NAME = ".timesheet"


class HomeDirectoryError(RuntimeError):
    """Raised when the current user's home directory cannot be resolved."""


class Settings(BaseSettings):
    # Unset means ~/.timesheet
    timesheet_file: Optional[str] = Field(default=None, alias="TIMESHEET_FILE")

    daily_quota_hours: float = Field(
        default=8.0, gt=0, alias="TIMESHEET_DAILY_QUOTA_HOURS"
    )

    log_level: str = Field(default="WARNING", alias="TIMESHEET_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def daily_quota(self) -> timedelta:
        return timedelta(hours=self.daily_quota_hours)


def resolve_timesheet_path(cfg: Settings, override: Optional[str] = None) -> Path:
    """Pick the timesheet file: explicit override, then config, then ~/.timesheet."""
    if override:
        return Path(override).expanduser()
    if cfg.timesheet_file:
        return Path(cfg.timesheet_file).expanduser()
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError(f"Couldn't determine current user: {e}") from e
    return home / DEFAULT_FILE_NAME

