"""Session store contract shared by every backend."""
from __future__ import annotations

import abc
from typing import Any, Mapping

from ..schemas.sessions import SessionRecord


class SessionStore(abc.ABC):
    """Operations a session middleware expects from its backing store.

    Every operation is a coroutine. Backends that never wait on I/O still
    expose coroutines so callers can swap in a persistent backend unchanged.
    """

    @abc.abstractmethod
    async def get(self, session_id: str) -> SessionRecord | None:
        """Return the live record for ``session_id`` or ``None``."""

    @abc.abstractmethod
    async def set(self, session_id: str, record: Mapping[str, Any]) -> None:
        """Create or overwrite the record for ``session_id``."""

    @abc.abstractmethod
    async def touch(self, session_id: str, record: Mapping[str, Any]) -> None:
        """Refresh the stored cookie of an existing session; never creates one."""

    @abc.abstractmethod
    async def destroy(self, session_id: str) -> None:
        """Remove ``session_id``. Removing an unknown id is not an error."""

    @abc.abstractmethod
    async def all(self) -> dict[str, SessionRecord]:
        """Return every live record keyed by session id."""

    @abc.abstractmethod
    async def clear(self) -> None:
        """Remove every record."""

    async def length(self) -> int:
        """Count live records."""

        return len(await self.all())

    async def close(self) -> None:
        """Release background resources held by the store."""

    async def __aenter__(self) -> "SessionStore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
