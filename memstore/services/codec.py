"""JSON codec for stored session records."""
from __future__ import annotations

import json
from typing import Any, Mapping

from pydantic_core import PydanticSerializationError, to_json

from ..schemas.sessions import SessionRecord


class CodecError(ValueError):
    """Raised when a session record cannot be encoded or decoded."""


def encode(record: Mapping[str, Any]) -> str:
    """Serialize a record to its stored JSON form.

    Datetimes are written as ISO-8601 strings, so a ``cookie.expires`` set as a
    ``datetime`` comes back from :func:`decode` as a string.
    """

    if not isinstance(record, Mapping):
        raise CodecError(f"Session record must be a mapping, got {type(record).__name__}")
    try:
        return to_json(dict(record)).decode("utf-8")
    except (PydanticSerializationError, ValueError, TypeError) as exc:
        raise CodecError(f"Cannot encode session record: {exc}") from exc


def decode(payload: str) -> SessionRecord:
    try:
        record = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise CodecError(f"Cannot decode session record: {exc}") from exc
    if not isinstance(record, dict):
        raise CodecError(f"Stored session record is a {type(record).__name__}, not an object")
    return record
