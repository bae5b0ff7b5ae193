"""Integrity algorithms negotiated for IKE and child SAs."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Dict, Optional

from . import types as ike
from .lib import SecurityError
from .security_association import Transform
from .types import TransformType

AUTH_HMAC_MD5_96 = "AUTH_HMAC_MD5_96"
AUTH_HMAC_SHA1_96 = "AUTH_HMAC_SHA1_96"
AUTH_HMAC_SHA2_256_128 = "AUTH_HMAC_SHA2_256_128"


@dataclass(frozen=True)
class IntegrityAlgorithm:
    """An HMAC-based integrity algorithm with a truncated output."""

    name: str
    transform_id: int
    key_length: int
    output_length: int
    digest: str

    def new(self, key: bytes) -> hmac.HMAC:
        """Return a keyed HMAC in its initial state.

        The key must be exactly ``key_length`` bytes long.
        """
        key = bytes(key)
        if len(key) != self.key_length:
            raise SecurityError(
                f"{self.name}: key length {len(key)} does not match {self.key_length}"
            )
        return hmac.new(key, digestmod=self.digest)


_ALGORITHMS: Dict[str, IntegrityAlgorithm] = {
    AUTH_HMAC_MD5_96: IntegrityAlgorithm(
        AUTH_HMAC_MD5_96, ike.AUTH_HMAC_MD5_96, 16, 12, "md5"
    ),
    AUTH_HMAC_SHA1_96: IntegrityAlgorithm(
        AUTH_HMAC_SHA1_96, ike.AUTH_HMAC_SHA1_96, 20, 12, "sha1"
    ),
    AUTH_HMAC_SHA2_256_128: IntegrityAlgorithm(
        AUTH_HMAC_SHA2_256_128, ike.AUTH_HMAC_SHA2_256_128, 32, 16, "sha256"
    ),
}

_NAME_BY_ID: Dict[int, str] = {
    algorithm.transform_id: name for name, algorithm in _ALGORITHMS.items()
}


def from_name(name: str) -> Optional[IntegrityAlgorithm]:
    """Look an integrity algorithm up by name; None if it is not supported."""
    return _ALGORITHMS.get(name)


def decode_transform(transform: Transform) -> Optional[IntegrityAlgorithm]:
    """Return the algorithm a transform selects, or None if it is not supported."""
    name = _NAME_BY_ID.get(transform.transform_id)
    return _ALGORITHMS.get(name) if name else None


def to_transform(algorithm: IntegrityAlgorithm) -> Transform:
    """Build the proposal transform for ``algorithm``."""
    return Transform(
        transform_type=TransformType.INTEGRITY_ALGORITHM,
        transform_id=algorithm.transform_id,
    )