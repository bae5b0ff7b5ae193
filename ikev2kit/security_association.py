"""Security Association payload: proposals and their transforms."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, List

from .types import ATTRIBUTE_FORMAT_USE_TLV, MessageError, PayloadType, TransformType

_LAST = 0
_MORE_PROPOSALS = 2
_MORE_TRANSFORMS = 3
_HEADER_LENGTH = 8


def _u16(value: int, what: str) -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise MessageError(f"{what} exceeds uint16 limit: {value}")
    return struct.pack(">H", value)


def _u8(value: int, what: str) -> bytes:
    if not 0 <= value <= 0xFF:
        raise MessageError(f"{what} exceeds uint8 limit: {value}")
    return bytes([value])


@dataclass
class Transform:
    """A single transform inside a proposal."""

    transform_type: int
    transform_id: int
    attribute_present: bool = False
    attribute_format: int = 0
    attribute_type: int = 0
    attribute_value: int = 0
    variable_length_attribute_value: bytes = b""

    def _encode_attribute(self) -> bytes:
        if not self.attribute_present:
            return b""
        format_and_type = ((self.attribute_format & 0x1) << 15) | self.attribute_type
        if self.attribute_format == ATTRIBUTE_FORMAT_USE_TLV:
            value = bytes(self.variable_length_attribute_value)
            if not value:
                raise MessageError("Attribute of one transform not specified")
            return (
                _u16(format_and_type, "Attribute format and type")
                + _u16(len(value), "VariableLengthAttributeValue length")
                + value
            )
        return _u16(format_and_type, "Attribute format and type") + _u16(
            self.attribute_value, "Attribute value"
        )

    def _encode(self, last: bool) -> bytes:
        attribute = self._encode_attribute()
        length = _HEADER_LENGTH + len(attribute)
        return (
            bytes([_LAST if last else _MORE_TRANSFORMS, 0])
            + _u16(length, "Transform: transformData length")
            + _u8(self.transform_type, "Transform type")
            + b"\x00"
            + _u16(self.transform_id, "Transform ID")
            + attribute
        )

    @classmethod
    def _decode(cls, data: bytes) -> Transform:
        """Decode one transform; ``data`` is exactly its bytes."""
        length = len(data)
        transform = cls(transform_type=data[4], transform_id=struct.unpack_from(">H", data, 6)[0])
        if length > _HEADER_LENGTH:
            if length < _HEADER_LENGTH + 4:
                raise MessageError(
                    f"Transform: length {length} too short to hold an attribute"
                )
            format_and_type, field_value = struct.unpack_from(">HH", data, 8)
            transform.attribute_present = True
            transform.attribute_format = (format_and_type & 0x8000) >> 15
            transform.attribute_type = format_and_type & 0x7FFF
            if transform.attribute_format == ATTRIBUTE_FORMAT_USE_TLV:
                if 12 + field_value != length:
                    raise MessageError(
                        f"Illegal attribute length {field_value} not satisfies "
                        f"the transform length {length}"
                    )
                transform.variable_length_attribute_value = bytes(data[12 : 12 + field_value])
            else:
                transform.attribute_value = field_value
        return transform


@dataclass
class Proposal:
    """A proposal, grouping transforms by their type."""

    proposal_number: int = 0
    protocol_id: int = 0
    spi: bytes = b""
    encryption_algorithm: List[Transform] = field(default_factory=list)
    pseudorandom_function: List[Transform] = field(default_factory=list)
    integrity_algorithm: List[Transform] = field(default_factory=list)
    diffie_hellman_group: List[Transform] = field(default_factory=list)
    extended_sequence_numbers: List[Transform] = field(default_factory=list)

    def transforms(self) -> List[Transform]:
        """All transforms, in wire order: ENCR, PRF, INTEG, DH, ESN."""
        return [
            *self.encryption_algorithm,
            *self.pseudorandom_function,
            *self.integrity_algorithm,
            *self.diffie_hellman_group,
            *self.extended_sequence_numbers,
        ]

    def _add(self, transform: Transform) -> None:
        buckets = {
            TransformType.ENCRYPTION_ALGORITHM: self.encryption_algorithm,
            TransformType.PSEUDORANDOM_FUNCTION: self.pseudorandom_function,
            TransformType.INTEGRITY_ALGORITHM: self.integrity_algorithm,
            TransformType.DIFFIE_HELLMAN_GROUP: self.diffie_hellman_group,
            TransformType.EXTENDED_SEQUENCE_NUMBERS: self.extended_sequence_numbers,
        }
        bucket = buckets.get(transform.transform_type)
        if bucket is not None:
            bucket.append(transform)

    def _encode(self, last: bool) -> bytes:
        spi = bytes(self.spi)
        if len(spi) > 0xFF:
            raise MessageError(f"Proposal: Too many SPI: {len(spi)}")
        transforms = self.transforms()
        if not transforms:
            raise MessageError("One proposal has no any transform")
        if len(transforms) > 0xFF:
            raise MessageError(f"Transform: Too many transform: {len(transforms)}")
        body = b"".join(
            transform._encode(index == len(transforms) - 1)
            for index, transform in enumerate(transforms)
        )
        length = _HEADER_LENGTH + len(spi) + len(body)
        return (
            bytes([_LAST if last else _MORE_PROPOSALS, 0])
            + _u16(length, "Proposal: proposalData length")
            + _u8(self.proposal_number, "Proposal number")
            + _u8(self.protocol_id, "Protocol ID")
            + bytes([len(spi), len(transforms)])
            + spi
            + body
        )

    @classmethod
    def _decode(cls, data: bytes) -> Proposal:
        """Decode one proposal; ``data`` starts at it and may run past it."""
        length = struct.unpack_from(">H", data, 2)[0]
        proposal = cls(proposal_number=data[4], protocol_id=data[5])
        spi_size = data[6]
        spi_end = _HEADER_LENGTH + spi_size
        if spi_size > 0:
            if len(data) < spi_end:
                raise MessageError("Proposal: No sufficient bytes for unmarshalling SPI of proposal")
            proposal.spi = bytes(data[_HEADER_LENGTH:spi_end])
        if spi_end > length:
            raise MessageError("Proposal: SPI exceeds the proposal length")

        remaining = data[spi_end:length]
        while remaining:
            if len(remaining) < _HEADER_LENGTH:
                raise MessageError("Transform: No sufficient bytes to decode next transform")
            transform_length = struct.unpack_from(">H", remaining, 2)[0]
            if transform_length < _HEADER_LENGTH:
                raise MessageError(
                    f"Transform: Illegal payload length {transform_length} < header length 8"
                )
            if len(remaining) < transform_length:
                raise MessageError(
                    "Transform: The length of received message not matchs the length specified in header"
                )
            proposal._add(Transform._decode(remaining[:transform_length]))
            remaining = remaining[transform_length:]
        return proposal


@dataclass
class SecurityAssociation:
    """The SA payload: an ordered list of proposals."""

    proposals: List[Proposal] = field(default_factory=list)

    payload_type: ClassVar[PayloadType] = PayloadType.SA

    def marshal(self) -> bytes:
        """Encode the payload body."""
        return b"".join(
            proposal._encode(index == len(self.proposals) - 1)
            for index, proposal in enumerate(self.proposals)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> SecurityAssociation:
        """Decode a payload body."""
        data = bytes(data)
        association = cls()
        while data:
            if len(data) < _HEADER_LENGTH:
                raise MessageError("Proposal: No sufficient bytes to decode next proposal")
            length = struct.unpack_from(">H", data, 2)[0]
            if length < _HEADER_LENGTH:
                raise MessageError(f"Proposal: Illegal payload length {length} < header length 8")
            if len(data) < length:
                raise MessageError(
                    "Proposal: The length of received message not matchs the length specified in header"
                )
            association.proposals.append(Proposal._decode(data))
            data = data[length:]
        return association