"""Vendor ID payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .types import PayloadType


@dataclass
class VendorID:
    """The Vendor ID payload: opaque vendor data."""

    data: bytes = b""

    payload_type: ClassVar[PayloadType] = PayloadType.V

    def marshal(self) -> bytes:
        """Encode the payload body."""
        return bytes(self.data)

    @classmethod
    def unmarshal(cls, data: bytes) -> VendorID:
        """Decode a payload body."""
        return cls(bytes(data))