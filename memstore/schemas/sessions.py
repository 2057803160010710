"""Schemas for stored session records and store configuration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

SessionRecord = dict[str, Any]

NEVER_EXPIRES = -1

_DATETIME = TypeAdapter(datetime)

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Construction-time options, immutable for the life of a store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_ticks: int = Field(default=NEVER_EXPIRES, description="Sweep cycles an idle session survives")
    sweep_interval: float = Field(default=60.0, gt=0, description="Seconds between sweep cycles")

    @property
    def sweep_enabled(self) -> bool:
        return self.timeout_ticks >= 0


@dataclass(slots=True, frozen=True)
class SweepReport:
    """Outcome of a single sweep cycle."""

    checked: int
    evicted: int
    remaining: int


def cookie_expires(record: Mapping[str, Any]) -> datetime | None:
    """Return the record's ``cookie.expires`` as an aware UTC datetime.

    Missing cookies, missing or null ``expires`` and values that cannot be
    parsed all mean the record carries no explicit deadline.
    """

    cookie = record.get("cookie")
    if not isinstance(cookie, Mapping):
        return None
    raw = cookie.get("expires")
    if raw is None or isinstance(raw, bool):
        return None
    # Large numbers are read as epoch milliseconds, as JavaScript clients send them.
    try:
        value = _DATETIME.validate_python(raw)
    except ValidationError:
        logger.debug("Ignoring unparseable cookie.expires value %r", raw)
        return None
    return _ensure_tz(value)


def is_expired(record: Mapping[str, Any], now: datetime | None = None) -> bool:
    """Return True when the record's deadline is at or before ``now``."""

    expires = cookie_expires(record)
    if expires is None:
        return False
    current = _ensure_tz(now) if now is not None else datetime.now(timezone.utc)
    return expires <= current


def _ensure_tz(value: datetime) -> datetime:
    """Ensure the provided datetime is timezone-aware in UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
