"""Helpers shared by the IKE security algorithms: padding and prf+."""

from __future__ import annotations

import secrets
from typing import Protocol


class SecurityError(ValueError):
    """Raised when keying material or a security transform cannot be handled."""


class _KeyedHash(Protocol):
    def copy(self) -> "_KeyedHash": ...

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


def pkcs7_padding(plaintext: bytes, block_size: int) -> bytes:
    """Pad ``plaintext`` to a whole number of blocks.

    The padding is random except for its last byte, which holds the number
    of padding bytes before it. A full block is added when the input is
    already aligned.
    """
    if not 1 <= block_size <= 0x100:
        raise SecurityError(f"pkcs7_padding: unsupported block size {block_size}")
    padding = block_size - (len(plaintext) % block_size)
    filler = secrets.token_bytes(padding - 1)
    return bytes(plaintext) + filler + bytes([padding - 1])


def prf_plus(prf: _KeyedHash, seed: bytes, length: int) -> bytes:
    """Expand ``seed`` to ``length`` bytes with the keyed ``prf`` (RFC 7296 2.13).

    ``prf`` is a keyed hash in its initial state, such as an ``hmac`` object;
    it is copied for every block and left untouched.
    """
    if length < 0:
        raise SecurityError(f"prf_plus: negative stream length {length}")
    seed = bytes(seed)
    stream = bytearray()
    block = b""
    counter = 1
    while len(stream) < length:
        mac = prf.copy()
        mac.update(block + seed + bytes([counter & 0xFF]))
        block = mac.digest()
        stream += block
        counter += 1
    return bytes(stream[:length])