"""Tagged JSON codec for persisted snapshots.

Every payload is a JSON object carrying a format tag and a version next to
the snapshot fields, which are stored under short identifiers to keep the
sorted-set members small. Readers check the tag structurally, so payloads
written by other tools or by older releases under the same key are told
apart from native ones without parsing their content.
"""

import json
from typing import Any

from cachestats.core.errors import IncompatiblePayloadError, MalformedPayloadError
from cachestats.core.models import Snapshot

FORMAT_TAG = "cachestats.snapshot"
FORMAT_VERSION = 1
SUPPORTED_VERSIONS = frozenset({FORMAT_VERSION})

# Snapshot field -> short identifier in the payload
FIELD_MAP = {
    "id": "i",
    "hits": "h",
    "misses": "m",
    "ratio": "r",
    "bytes": "b",
    "time": "t",
    "calls": "c",
    "timestamp": "ts",
}

_INT_FIELDS = ("hits", "misses", "bytes", "calls", "timestamp")


def encode_snapshot(snapshot: Snapshot) -> str:
    """Encode a snapshot to its persisted payload.

    Args:
        snapshot: The snapshot to encode.

    Returns:
        Compact JSON string with format tag, version and short field names.
    """
    obj: dict[str, Any] = {"fmt": FORMAT_TAG, "v": FORMAT_VERSION}
    for name, short in FIELD_MAP.items():
        obj[short] = getattr(snapshot, name)
    return json.dumps(obj, separators=(",", ":"))


def _load_envelope(payload: str | bytes) -> dict[str, Any]:
    """Parse a payload and return its envelope if it is a native one.

    Raises:
        IncompatiblePayloadError: If the payload is not a native envelope.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise IncompatiblePayloadError("payload is not UTF-8") from e
    try:
        obj = json.loads(payload)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deep nesting exhausts the parser stack.
        raise IncompatiblePayloadError("payload is not JSON") from e
    if not isinstance(obj, dict) or obj.get("fmt") != FORMAT_TAG:
        raise IncompatiblePayloadError("payload has no snapshot format tag")
    if obj.get("v") not in SUPPORTED_VERSIONS:
        raise IncompatiblePayloadError(f"unsupported payload version {obj.get('v')!r}")
    return obj


def is_native_payload(payload: str | bytes) -> bool:
    """Return True if the payload carries the native tag and a supported version."""
    try:
        _load_envelope(payload)
    except IncompatiblePayloadError:
        return False
    return True


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_int(value) or isinstance(value, float)


def decode_snapshot(payload: str | bytes) -> Snapshot:
    """Decode a persisted payload into a snapshot.

    Args:
        payload: Payload as read from the store (str, or bytes from Redis).

    Returns:
        The decoded Snapshot.

    Raises:
        IncompatiblePayloadError: Foreign or legacy payload.
        MalformedPayloadError: Native tag, but missing or mistyped fields.
    """
    obj = _load_envelope(payload)
    missing = [short for short in FIELD_MAP.values() if short not in obj]
    if missing:
        raise MalformedPayloadError(f"payload is missing fields {missing}")

    values = {name: obj[short] for name, short in FIELD_MAP.items()}
    for name in _INT_FIELDS:
        if not _is_int(values[name]):
            raise MalformedPayloadError(f"field {name!r} is not an integer")
    if not _is_number(values["time"]):
        raise MalformedPayloadError("field 'time' is not a number")
    if values["ratio"] is not None and not _is_number(values["ratio"]):
        raise MalformedPayloadError("field 'ratio' is not a number")
    if not isinstance(values["id"], str):
        raise MalformedPayloadError("field 'id' is not a string")
    for name in (*_INT_FIELDS, "time"):
        if values[name] < 0:
            raise MalformedPayloadError(f"field {name!r} is negative")
    if values["ratio"] is not None and not 0 <= values["ratio"] <= 1:
        raise MalformedPayloadError("field 'ratio' is outside [0, 1]")

    return Snapshot(
        id=values["id"],
        hits=values["hits"],
        misses=values["misses"],
        ratio=values["ratio"],
        bytes=values["bytes"],
        time=values["time"],
        calls=values["calls"],
        timestamp=values["timestamp"],
    )
