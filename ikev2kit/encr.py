"""Encryption algorithms and the ciphers they create."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from cryptography.hazmat.primitives.ciphers import Cipher as _BlockCipher
from cryptography.hazmat.primitives.ciphers import algorithms, modes

from . import types as ike
from .lib import SecurityError, pkcs7_padding
from .security_association import Transform
from .types import ATTRIBUTE_FORMAT_USE_TV, ATTRIBUTE_TYPE_KEY_LENGTH, TransformType

ENCR_NULL = "ENCR_NULL"
ENCR_AES_CBC_128 = "ENCR_AES_CBC_128"
ENCR_AES_CBC_192 = "ENCR_AES_CBC_192"
ENCR_AES_CBC_256 = "ENCR_AES_CBC_256"

AES_BLOCK_SIZE = 16


class Cipher(ABC):
    """Encrypts and decrypts IKE message bodies."""

    @abstractmethod
    def encrypt(self, plaintext: bytes) -> bytes:
        """Return the ciphertext for ``plaintext``."""

    @abstractmethod
    def decrypt(self, ciphertext: bytes) -> bytes:
        """Return the plaintext for ``ciphertext``."""


class NullCrypto(Cipher):
    """The null cipher: data passes through unchanged."""

    def encrypt(self, plaintext: bytes) -> bytes:
        return bytes(plaintext)

    def decrypt(self, ciphertext: bytes) -> bytes:
        return bytes(ciphertext)


class AesCbcCrypto(Cipher):
    """AES in CBC mode, with the IV carried in front of the ciphertext.

    ``iv`` and ``padding`` fix what is otherwise chosen at random on each
    encryption; they exist for reproducible output.
    """

    def __init__(
        self,
        key: bytes,
        iv: Optional[bytes] = None,
        padding: Optional[bytes] = None,
    ) -> None:
        key = bytes(key)
        if len(key) not in (16, 24, 32):
            raise SecurityError(f"AesCbcCrypto: invalid AES key length {len(key)}")
        if iv is not None and len(iv) != AES_BLOCK_SIZE:
            raise SecurityError(f"AesCbcCrypto: IV must be {AES_BLOCK_SIZE} bytes")
        self._algorithm = algorithms.AES(key)
        self.iv = None if iv is None else bytes(iv)
        self.padding = None if padding is None else bytes(padding)

    def _cbc(self, iv: bytes) -> _BlockCipher:
        return _BlockCipher(self._algorithm, modes.CBC(iv))

    def encrypt(self, plaintext: bytes) -> bytes:
        if self.padding is None:
            padded = pkcs7_padding(bytes(plaintext), AES_BLOCK_SIZE)
        else:
            padded = bytes(plaintext) + self.padding
        if len(padded) % AES_BLOCK_SIZE:
            raise SecurityError("AesCbcCrypto: padded plain text is not a multiple of block size")
        iv = self.iv if self.iv is not None else os.urandom(AES_BLOCK_SIZE)
        encryptor = self._cbc(iv).encryptor()
        return iv + encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, ciphertext: bytes) -> bytes:
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < AES_BLOCK_SIZE:
            raise SecurityError("AesCbcCrypto: Length of cipher text is too short to decrypt")
        iv = self.iv if self.iv is not None else ciphertext[:AES_BLOCK_SIZE]
        encrypted = ciphertext[AES_BLOCK_SIZE:]
        if len(encrypted) % AES_BLOCK_SIZE:
            raise SecurityError("AesCbcCrypto: Cipher text is not a multiple of block size")
        if not encrypted:
            raise SecurityError("AesCbcCrypto: Cipher text holds no encrypted block")
        decryptor = self._cbc(iv).decryptor()
        plaintext = decryptor.update(encrypted) + decryptor.finalize()
        padding = plaintext[-1] + 1
        if padding > len(plaintext):
            raise SecurityError("AesCbcCrypto: Padding length exceeds the decrypted text")
        return plaintext[: len(plaintext) - padding]


@dataclass(frozen=True)
class EncryptionAlgorithm:
    """An encryption transform with a fixed key length in bytes."""

    name: str
    transform_id: int
    key_length: int

    def new_crypto(self, key: bytes) -> Cipher:
        """Return a cipher keyed with ``key``."""
        if self.transform_id == ike.ENCR_NULL:
            return NullCrypto()
        key = bytes(key)
        if len(key) != self.key_length:
            raise SecurityError("EncrAesCbc init error: Get unexpected key length")
        return AesCbcCrypto(key)


_ALGORITHMS: Dict[str, EncryptionAlgorithm] = {
    ENCR_NULL: EncryptionAlgorithm(ENCR_NULL, ike.ENCR_NULL, 0),
    ENCR_AES_CBC_128: EncryptionAlgorithm(ENCR_AES_CBC_128, ike.ENCR_AES_CBC, 16),
    ENCR_AES_CBC_192: EncryptionAlgorithm(ENCR_AES_CBC_192, ike.ENCR_AES_CBC, 24),
    ENCR_AES_CBC_256: EncryptionAlgorithm(ENCR_AES_CBC_256, ike.ENCR_AES_CBC, 32),
}

_AES_CBC_BY_BITS: Dict[int, str] = {
    128: ENCR_AES_CBC_128,
    192: ENCR_AES_CBC_192,
    256: ENCR_AES_CBC_256,
}


def from_name(name: str) -> Optional[EncryptionAlgorithm]:
    """Look an encryption algorithm up by name; None if it is not supported."""
    return _ALGORITHMS.get(name)


def decode_transform(transform: Transform) -> Optional[EncryptionAlgorithm]:
    """Return the algorithm a transform selects, or None if it is not supported."""
    if transform.transform_id == ike.ENCR_NULL:
        return _ALGORITHMS[ENCR_NULL]
    if transform.transform_id == ike.ENCR_AES_CBC:
        if transform.attribute_type != ATTRIBUTE_TYPE_KEY_LENGTH:
            return None
        name = _AES_CBC_BY_BITS.get(transform.attribute_value)
        return _ALGORITHMS[name] if name else None
    return None


def to_transform(algorithm: EncryptionAlgorithm) -> Transform:
    """Build the proposal transform for ``algorithm``, key length as a TV attribute."""
    key_length_bits = algorithm.key_length * 8
    if not 0 <= key_length_bits <= 0xFFFF:
        raise SecurityError(f"key length exceeds uint16 maximum value: {key_length_bits}")
    return Transform(
        transform_type=TransformType.ENCRYPTION_ALGORITHM,
        transform_id=algorithm.transform_id,
        attribute_present=True,
        attribute_format=ATTRIBUTE_FORMAT_USE_TV,
        attribute_type=ATTRIBUTE_TYPE_KEY_LENGTH,
        attribute_value=key_length_bits,
    )