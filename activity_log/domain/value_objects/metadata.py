"""Value object carrying free-form details about an activity."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from activity_log.domain.errors import ValidationError


@dataclass(frozen=True, eq=False)
class Metadata:
    """Read-only mapping of string keys to arbitrary JSON values."""

    value: Mapping[str, Any] | None = field(default=None)

    def __post_init__(self) -> None:
        raw = self.value
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ValidationError(
                f"Invalid metadata: expected an object, got {type(raw).__name__}",
                field="metadata",
                value=raw,
            )
        bad_keys = [key for key in raw if not isinstance(key, str)]
        if bad_keys:
            raise ValidationError(
                f"Invalid metadata keys: {bad_keys!r}", field="metadata", value=raw
            )
        object.__setattr__(self, "value", MappingProxyType(copy.deepcopy(dict(raw))))

    def to_dict(self) -> dict[str, Any]:
        """Return a detached copy of the metadata."""

        return copy.deepcopy(dict(self.value or {}))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return dict(self.value or {}) == dict(other.value or {})

    def __len__(self) -> int:
        return len(self.value or {})


__all__ = ["Metadata"]
