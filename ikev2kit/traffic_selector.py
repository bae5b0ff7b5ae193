"""Traffic Selector payloads (TSi and TSr)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Tuple, TypeVar

from .types import TS_IPV4_ADDR_RANGE, TS_IPV6_ADDR_RANGE, MessageError, PayloadType

_PAYLOAD_HEADER_LENGTH = 4
_SELECTOR_HEADER_LENGTH = 8

# Traffic selector type -> (address length in bytes, family name for messages)
_ADDRESS_FORMATS: Dict[int, Tuple[int, str]] = {
    TS_IPV4_ADDR_RANGE: (4, "IPv4"),
    TS_IPV6_ADDR_RANGE: (16, "IPv6"),
}

_TS = TypeVar("_TS", bound="TrafficSelector")


@dataclass
class IndividualTrafficSelector:
    """One address and port range with its IP protocol."""

    ts_type: int = 0
    ip_protocol_id: int = 0
    start_port: int = 0
    end_port: int = 0
    start_address: bytes = b""
    end_address: bytes = b""

    def _encode(self) -> bytes:
        address_format = _ADDRESS_FORMATS.get(self.ts_type)
        if address_format is None:
            raise MessageError("TrafficSelector: Unsupported traffic selector type")
        address_length, family = address_format
        start = bytes(self.start_address)
        end = bytes(self.end_address)
        if len(start) != address_length:
            raise MessageError(f"TrafficSelector: Start {family} address length is not correct")
        if len(end) != address_length:
            raise MessageError(f"TrafficSelector: End {family} address length is not correct")
        length = _SELECTOR_HEADER_LENGTH + 2 * address_length
        try:
            header = struct.pack(
                ">BBHHH",
                self.ts_type,
                self.ip_protocol_id,
                length,
                self.start_port,
                self.end_port,
            )
        except struct.error as exc:
            raise MessageError(f"TrafficSelector: field out of range: {exc}") from exc
        return header + start + end

    @classmethod
    def _decode(cls, data: bytes) -> Tuple[IndividualTrafficSelector, bytes]:
        """Decode one selector from the front of ``data``; return it and the rest."""
        if len(data) < 4:
            raise MessageError(
                "TrafficSelector: No sufficient bytes to decode next individual "
                "traffic selector length in header"
            )
        ts_type = data[0]
        address_format = _ADDRESS_FORMATS.get(ts_type)
        if address_format is None:
            raise MessageError("TrafficSelector: Unsupported traffic selector type")
        address_length, family = address_format
        expected = _SELECTOR_HEADER_LENGTH + 2 * address_length
        length = struct.unpack_from(">H", data, 2)[0]
        if length != expected:
            kind = "TS_IPV4_ADDR_RANGE" if ts_type == TS_IPV4_ADDR_RANGE else "TS_IPV6_ADDR_RANGE"
            raise MessageError(
                f"TrafficSelector: A {kind} type traffic selector should has length {expected} bytes"
            )
        if len(data) < length:
            raise MessageError(
                "TrafficSelector: No sufficient bytes to decode next individual traffic selector"
            )
        start_port, end_port = struct.unpack_from(">HH", data, 4)
        middle = _SELECTOR_HEADER_LENGTH + address_length
        selector = cls(
            ts_type=ts_type,
            ip_protocol_id=data[1],
            start_port=start_port,
            end_port=end_port,
            start_address=bytes(data[_SELECTOR_HEADER_LENGTH:middle]),
            end_address=bytes(data[middle:length]),
        )
        return selector, data[length:]


@dataclass
class TrafficSelector:
    """A traffic selector payload body: a list of individual selectors."""

    traffic_selectors: List[IndividualTrafficSelector] = field(default_factory=list)

    def marshal(self) -> bytes:
        """Encode the payload body."""
        if not self.traffic_selectors:
            raise MessageError(
                "TrafficSelector: Contains no traffic selector for marshaling message"
            )
        count = len(self.traffic_selectors)
        if count > 0xFF:
            raise MessageError(f"TrafficSelector: too many traffic selectors: {count}")
        return bytes([count, 0, 0, 0]) + b"".join(
            selector._encode() for selector in self.traffic_selectors
        )

    @classmethod
    def unmarshal(cls: type[_TS], data: bytes) -> _TS:
        """Decode a payload body; an empty body gives no selectors."""
        data = bytes(data)
        payload = cls()
        if not data:
            return payload
        if len(data) < _PAYLOAD_HEADER_LENGTH:
            raise MessageError(
                "TrafficSelector: No sufficient bytes to get number of traffic selector in header"
            )
        count = data[0]
        remaining = data[_PAYLOAD_HEADER_LENGTH:]
        for _ in range(count):
            selector, remaining = IndividualTrafficSelector._decode(remaining)
            payload.traffic_selectors.append(selector)
        return payload


@dataclass
class TrafficSelectorInitiator(TrafficSelector):
    """The TSi payload."""

    payload_type: ClassVar[PayloadType] = PayloadType.TSI


@dataclass
class TrafficSelectorResponder(TrafficSelector):
    """The TSr payload."""

    payload_type: ClassVar[PayloadType] = PayloadType.TSR