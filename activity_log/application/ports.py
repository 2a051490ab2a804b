"""Outbound channel contract used by the publish pipeline."""

from __future__ import annotations

from typing import Any, Protocol


class ActivityLogPublisher(Protocol):
    """Hands a wire message to the channel, routed by ``key``."""

    def send(self, message: dict[str, Any], *, key: str) -> None:
        ...


__all__ = ["ActivityLogPublisher"]
