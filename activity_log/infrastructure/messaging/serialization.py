"""Encoders used for Kafka record keys and values."""

from __future__ import annotations

import json
from typing import Any


def json_serializer(value: Any) -> bytes:
    # Datetimes and other non JSON types fall back to their string form.
    return json.dumps(value, default=str, separators=(",", ":")).encode("utf-8")


def key_serializer(key: str | None) -> bytes | None:
    if key is None:
        return None
    return key.encode("utf-8")


__all__ = ["json_serializer", "key_serializer"]
