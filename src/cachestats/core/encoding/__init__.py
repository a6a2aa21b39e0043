"""Payload encoders for persisted snapshots."""

from cachestats.core.encoding.snapshot import (
    decode_snapshot,
    encode_snapshot,
    is_native_payload,
)

__all__ = ["decode_snapshot", "encode_snapshot", "is_native_payload"]
