"""Expose the session store API."""
from .core.config import Settings, get_settings
from .schemas.sessions import SessionRecord, StoreConfig, SweepReport
from .services.base import SessionStore
from .services.codec import CodecError
from .services.memory import MemoryStore
from .services.sweeper import Sweeper

__all__ = [
    "CodecError",
    "MemoryStore",
    "SessionRecord",
    "SessionStore",
    "Settings",
    "StoreConfig",
    "Sweeper",
    "SweepReport",
    "get_settings",
]
