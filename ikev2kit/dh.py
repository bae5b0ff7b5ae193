"""MODP Diffie-Hellman groups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from . import types as ike
from .security_association import Transform
from .types import TransformType

DH_1024_BIT_MODP = "DH_1024_BIT_MODP"
DH_2048_BIT_MODP = "DH_2048_BIT_MODP"

GROUP2_PRIME_HEX = (
    "FFFFFFFFFFFFFFFFC90FDAA22168C234"
    "C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6"
    "F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE6"
    "49286651ECE65381FFFFFFFFFFFFFFFF"
)
GROUP2_GENERATOR = 2

GROUP14_PRIME_HEX = (
    "FFFFFFFFFFFFFFFFC90FDAA22168C234"
    "C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6"
    "F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE6"
    "49286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F"
    "83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804"
    "F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28F"
    "B5C55DF06F4C52C9DE2BCBF695581718"
    "3995497CEA956AE515D2261898FA0510"
    "15728E5A8AACAA68FFFFFFFFFFFFFFFF"
)
GROUP14_GENERATOR = 2


@dataclass(frozen=True)
class DHGroup:
    """A MODP group: prime modulus and generator."""

    name: str
    transform_id: int
    prime: int
    generator: int

    @property
    def byte_length(self) -> int:
        """Length in bytes of the prime, and so of every public value."""
        return (self.prime.bit_length() + 7) // 8

    def _encode(self, value: int) -> bytes:
        return value.to_bytes(self.byte_length, "big")

    def public_value(self, secret: int) -> bytes:
        """Return g^secret mod p, left-padded to the prime's length."""
        return self._encode(pow(self.generator, secret, self.prime))

    def shared_key(self, secret: int, peer_public_value: Union[int, bytes]) -> bytes:
        """Return peer^secret mod p, left-padded to the prime's length."""
        if isinstance(peer_public_value, (bytes, bytearray)):
            peer_public_value = int.from_bytes(peer_public_value, "big")
        return self._encode(pow(peer_public_value, secret, self.prime))


_GROUPS: Dict[str, DHGroup] = {
    DH_1024_BIT_MODP: DHGroup(
        name=DH_1024_BIT_MODP,
        transform_id=ike.DH_1024_BIT_MODP,
        prime=int(GROUP2_PRIME_HEX, 16),
        generator=GROUP2_GENERATOR,
    ),
    DH_2048_BIT_MODP: DHGroup(
        name=DH_2048_BIT_MODP,
        transform_id=ike.DH_2048_BIT_MODP,
        prime=int(GROUP14_PRIME_HEX, 16),
        generator=GROUP14_GENERATOR,
    ),
}

_NAME_BY_ID: Dict[int, str] = {
    ike.DH_1024_BIT_MODP: DH_1024_BIT_MODP,
    ike.DH_2048_BIT_MODP: DH_2048_BIT_MODP,
}


def from_name(name: str) -> Optional[DHGroup]:
    """Look a group up by name; None if it is not supported."""
    return _GROUPS.get(name)


def decode_transform(transform: Transform) -> Optional[DHGroup]:
    """Return the group a transform selects, or None if it is not supported."""
    name = _NAME_BY_ID.get(transform.transform_id)
    return _GROUPS.get(name) if name else None


def to_transform(group: DHGroup) -> Transform:
    """Build the proposal transform for ``group``."""
    return Transform(
        transform_type=TransformType.DIFFIE_HELLMAN_GROUP,
        transform_id=group.transform_id,
    )