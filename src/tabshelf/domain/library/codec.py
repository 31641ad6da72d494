"""
Sidecar codec: SongMetadata <-> JSON bytes.

Pure functions, no I/O. The encoding is pretty-printed JSON with sorted keys
so sidecar files diff cleanly and two encodes of the same record are
byte-identical.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any

from .models import SongMetadata, SongStatus


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class DecodeError(ValueError):
    """Raised when sidecar bytes cannot be turned into a SongMetadata."""

    pass


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with microseconds and a Z suffix.

    Raises:
        ValueError: If the datetime is naive
    """
    if value.tzinfo is None:
        raise ValueError("Timestamps must be timezone-aware")
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts both our own microsecond format and the second-precision
    `2026-01-06T10:00:00Z` form. Naive values are read as UTC.

    Raises:
        ValueError: If the text is not a valid ISO-8601 timestamp
        OverflowError: If the value falls outside the datetime range once
            shifted to UTC
    """
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def metadata_to_dict(record: SongMetadata) -> dict[str, Any]:
    data: dict[str, Any] = {
        "version": record.version,
        "songId": str(record.song_id).upper(),
        "createdAt": format_timestamp(record.created_at),
        "lastModified": format_timestamp(record.last_modified),
    }
    if record.status is not SongStatus.NONE:
        data["status"] = record.status.token
    return data


def encode_metadata(record: SongMetadata) -> bytes:
    """Encode a record as UTF-8 JSON bytes."""
    text = json.dumps(metadata_to_dict(record), indent=2, sort_keys=True, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def _require_str(data: dict[str, Any], key: str) -> str:
    if key not in data:
        raise DecodeError(f"Missing field: {key}")
    value = data[key]
    if not isinstance(value, str):
        raise DecodeError(f"Field {key} must be a string, got {type(value).__name__}")
    return value


def decode_metadata(data: bytes) -> SongMetadata:
    """Decode sidecar bytes into a SongMetadata.

    Either a fully populated record is returned or DecodeError is raised.

    Raises:
        DecodeError: On any malformed input
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"Sidecar is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DecodeError(f"Sidecar is not valid JSON: {e}") from e
    except (ValueError, RecursionError) as e:
        # Oversized integers, nesting deeper than the parser can follow
        raise DecodeError(f"Sidecar JSON cannot be parsed: {e}") from e

    if not isinstance(payload, dict):
        raise DecodeError("Sidecar top level must be a JSON object")

    version = _require_str(payload, "version")

    raw_id = _require_str(payload, "songId")
    try:
        song_id = uuid.UUID(raw_id)
    except ValueError as e:
        raise DecodeError(f"Invalid songId {raw_id!r}: {e}") from e

    raw_status = payload.get("status")
    if raw_status is not None and not isinstance(raw_status, str):
        raise DecodeError("Field status must be a string or null")
    try:
        status = SongStatus.from_token(raw_status)
    except ValueError as e:
        raise DecodeError(str(e)) from e

    timestamps = {}
    for key in ("createdAt", "lastModified"):
        text = _require_str(payload, key)
        try:
            timestamps[key] = parse_timestamp(text)
        except (ValueError, OverflowError) as e:
            raise DecodeError(f"Invalid {key} timestamp {text!r}: {e}") from e

    return SongMetadata(
        version=version,
        song_id=song_id,
        status=status,
        created_at=timestamps["createdAt"],
        last_modified=timestamps["lastModified"],
    )
