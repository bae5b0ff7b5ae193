"""Pseudorandom functions negotiated for an IKE SA."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Dict, Optional

from . import types as ike
from .security_association import Transform
from .types import TransformType

PRF_HMAC_MD5 = "PRF_HMAC_MD5"
PRF_HMAC_SHA1 = "PRF_HMAC_SHA1"
PRF_HMAC_SHA2_256 = "PRF_HMAC_SHA2_256"


@dataclass(frozen=True)
class PRFAlgorithm:
    """An HMAC-based pseudorandom function."""

    name: str
    transform_id: int
    key_length: int
    output_length: int
    digest: str

    def new(self, key: bytes) -> hmac.HMAC:
        """Return a keyed HMAC in its initial state."""
        return hmac.new(bytes(key), digestmod=self.digest)


_ALGORITHMS: Dict[str, PRFAlgorithm] = {
    PRF_HMAC_MD5: PRFAlgorithm(PRF_HMAC_MD5, ike.PRF_HMAC_MD5, 16, 16, "md5"),
    PRF_HMAC_SHA1: PRFAlgorithm(PRF_HMAC_SHA1, ike.PRF_HMAC_SHA1, 20, 20, "sha1"),
    PRF_HMAC_SHA2_256: PRFAlgorithm(
        PRF_HMAC_SHA2_256, ike.PRF_HMAC_SHA2_256, 32, 32, "sha256"
    ),
}

_NAME_BY_ID: Dict[int, str] = {
    algorithm.transform_id: name for name, algorithm in _ALGORITHMS.items()
}


def from_name(name: str) -> Optional[PRFAlgorithm]:
    """Look a PRF up by name; None if it is not supported."""
    return _ALGORITHMS.get(name)


def decode_transform(transform: Transform) -> Optional[PRFAlgorithm]:
    """Return the PRF a transform selects, or None if it is not supported."""
    name = _NAME_BY_ID.get(transform.transform_id)
    return _ALGORITHMS.get(name) if name else None


def to_transform(algorithm: PRFAlgorithm) -> Transform:
    """Build the proposal transform for ``algorithm``."""
    return Transform(
        transform_type=TransformType.PSEUDORANDOM_FUNCTION,
        transform_id=algorithm.transform_id,
    )