"""In-memory session storage with lazy and sweep-driven expiration."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from ..core.config import Settings
from ..schemas.sessions import NEVER_EXPIRES, SessionRecord, StoreConfig, SweepReport, is_expired
from . import codec
from .base import SessionStore
from .sweeper import Sweeper

logger = logging.getLogger(__name__)


class MemoryStore(SessionStore):
    """Session store holding serialized records in process memory.

    Two clocks expire records independently. ``cookie.expires`` inside the
    record is an absolute deadline checked whenever the record is read. The
    timer table holds an idle countdown per session that the sweeper
    decrements once per cycle; reads and writes reset it to ``timeout_ticks``
    and a session whose countdown is already zero is destroyed on the next
    cycle. A negative ``timeout_ticks`` disables the countdown.
    """

    def __init__(self, timeout_ticks: int = NEVER_EXPIRES, sweep_interval: float = 60.0) -> None:
        self._config = StoreConfig(timeout_ticks=timeout_ticks, sweep_interval=sweep_interval)
        self._sessions: Dict[str, str] = {}
        self._timers: Dict[str, int] = {}
        self._lock = asyncio.Lock()
        self._sweeper: Optional[Sweeper] = None
        if self._config.sweep_enabled:
            self._sweeper = Sweeper(self.sweep, self._config.sweep_interval)
        logger.debug("Session timeout is set to %d tick(s)", self._config.timeout_ticks)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MemoryStore":
        config = settings.store_config()
        return cls(timeout_ticks=config.timeout_ticks, sweep_interval=config.sweep_interval)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def sweeper(self) -> Optional[Sweeper]:
        return self._sweeper

    def start(self) -> None:
        """Start the background sweeper if countdown expiration is enabled."""

        if self._sweeper is not None:
            self._sweeper.start()

    async def close(self) -> None:
        if self._sweeper is not None:
            await self._sweeper.stop()

    async def __aenter__(self) -> "MemoryStore":
        self.start()
        return self

    async def get(self, session_id: str) -> SessionRecord | None:
        async with self._lock:
            return self._load(session_id)

    async def set(self, session_id: str, record: Mapping[str, Any]) -> None:
        payload = codec.encode(record)
        async with self._lock:
            if session_id not in self._sessions:
                logger.debug("Session %s created", session_id)
            self._timers[session_id] = self._config.timeout_ticks
            self._sessions[session_id] = payload

    async def touch(self, session_id: str, record: Mapping[str, Any]) -> None:
        async with self._lock:
            current = self._load(session_id)
            if current is None or "cookie" not in record:
                return
            current["cookie"] = record["cookie"]
            self._sessions[session_id] = codec.encode(current)

    async def destroy(self, session_id: str) -> None:
        async with self._lock:
            self._remove(session_id)

    async def all(self) -> dict[str, SessionRecord]:
        async with self._lock:
            sessions: dict[str, SessionRecord] = {}
            for session_id in list(self._sessions):
                record = self._load(session_id)
                if record is not None:
                    sessions[session_id] = record
            return sessions

    async def clear(self) -> None:
        async with self._lock:
            self._sessions = {}
            self._timers = {}

    async def sweep(self) -> SweepReport:
        """Run one countdown cycle: evict sessions at zero, decrement the rest."""

        async with self._lock:
            checked = evicted = 0
            for session_id, remaining in list(self._timers.items()):
                if remaining < 0:
                    continue
                checked += 1
                if remaining == 0:
                    logger.debug("Session %s timed out, destroying it", session_id)
                    self._remove(session_id)
                    evicted += 1
                else:
                    self._timers[session_id] = remaining - 1
            return SweepReport(checked=checked, evicted=evicted, remaining=len(self._sessions))

    def _load(self, session_id: str) -> SessionRecord | None:
        """Decode a stored record, evicting it if expired or unreadable.

        Callers must hold the lock.
        """

        payload = self._sessions.get(session_id)
        if payload is None:
            return None

        try:
            record = codec.decode(payload)
        except codec.CodecError as exc:
            logger.warning("Evicting unreadable session %s: %s", session_id, exc)
            self._remove(session_id)
            return None

        if is_expired(record):
            logger.debug("Session %s expired", session_id)
            self._remove(session_id)
            return None

        logger.debug("Prolonging life for session %s", session_id)
        self._timers[session_id] = self._config.timeout_ticks
        return record

    def _remove(self, session_id: str) -> None:
        self._timers.pop(session_id, None)
        self._sessions.pop(session_id, None)
