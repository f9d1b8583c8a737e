"""Pydantic models for the JSON API."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GenerateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_input: str | None = Field(default=None, alias="userInput")
    # Any JSON value; unknown themes fall back to the default.
    theme: Any = None


class GenerateOut(BaseModel):
    success: bool = True
    poem: str
    theme: str
    timestamp: str = Field(default_factory=utc_timestamp)


class HealthOut(BaseModel):
    status: str = "ok"
    message: str
    timestamp: str = Field(default_factory=utc_timestamp)
