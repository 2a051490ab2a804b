"""Value object for the client address an activity came from."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from activity_log.domain.errors import ValidationError


@dataclass(frozen=True)
class IpAddress:
    """IPv4 or IPv6 address, kept in the form it was supplied."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(
                f"Invalid IP address: {self.value!r}", field="ipAddress", value=self.value
            )
        try:
            ipaddress.ip_address(self.value)
        except ValueError as exc:
            raise ValidationError(
                f"Invalid IP address: {self.value}", field="ipAddress", value=self.value
            ) from exc

    def __str__(self) -> str:
        return self.value


__all__ = ["IpAddress"]
