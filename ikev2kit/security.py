"""IKE and child SA keying: proposal handling and key derivation."""

from __future__ import annotations

import hmac
import secrets
import struct
from dataclasses import dataclass, field
from typing import Optional, Tuple

from . import dh, encr, esn, integ, prf
from .dh import DHGroup
from .encr import Cipher, EncryptionAlgorithm
from .esn import ESN
from .integ import IntegrityAlgorithm
from .lib import SecurityError, prf_plus
from .prf import PRFAlgorithm
from .security_association import Proposal
from .types import X509_CERTIFICATE_SIGNATURE, ProtocolID

_RANDOM_NUMBER_MAXIMUM = int("F" * 512, 16)
_RANDOM_NUMBER_MINIMUM = int("F" * 32, 16)


def generate_random_number() -> int:
    """Return a random number above 2**128 - 1 and below 2**2048 - 1."""
    while True:
        number = secrets.randbelow(_RANDOM_NUMBER_MAXIMUM)
        if number > _RANDOM_NUMBER_MINIMUM:
            return number


def generate_random_uint8() -> int:
    """Return a random byte value."""
    return secrets.randbelow(0x100)


def concatenate_nonce_and_spi(nonce: bytes, spi_initiator: int, spi_responder: int) -> bytes:
    """Return the nonce followed by both SPIs as 64-bit big-endian integers."""
    try:
        spis = struct.pack(">QQ", spi_initiator, spi_responder)
    except struct.error as exc:
        raise SecurityError(f"SPI out of range: {exc}") from exc
    return bytes(nonce) + spis


@dataclass
class IKESAKey:
    """Negotiated algorithms and derived keys of an IKE SA."""

    dh_info: Optional[DHGroup] = None
    encr_info: Optional[EncryptionAlgorithm] = None
    integ_info: Optional[IntegrityAlgorithm] = None
    prf_info: Optional[PRFAlgorithm] = None

    prf_d: Optional[hmac.HMAC] = field(default=None, repr=False)
    integ_i: Optional[hmac.HMAC] = field(default=None, repr=False)
    integ_r: Optional[hmac.HMAC] = field(default=None, repr=False)
    encr_i: Optional[Cipher] = field(default=None, repr=False)
    encr_r: Optional[Cipher] = field(default=None, repr=False)
    prf_i: Optional[hmac.HMAC] = field(default=None, repr=False)
    prf_r: Optional[hmac.HMAC] = field(default=None, repr=False)

    sk_d: bytes = field(default=b"", repr=False)
    sk_ai: bytes = field(default=b"", repr=False)
    sk_ar: bytes = field(default=b"", repr=False)
    sk_ei: bytes = field(default=b"", repr=False)
    sk_er: bytes = field(default=b"", repr=False)
    sk_pi: bytes = field(default=b"", repr=False)
    sk_pr: bytes = field(default=b"", repr=False)

    def __str__(self) -> str:
        encr_id = self.encr_info.transform_id if self.encr_info else 0
        integ_id = self.integ_info.transform_id if self.integ_info else 0
        return (
            f"\nEncryption Algorithm: {encr_id}"
            f"\nSK_ei: {self.sk_ei.hex()}"
            f"\nSK_er: {self.sk_er.hex()}"
            f"\nIntegrity Algorithm: {integ_id}"
            f"\nSK_ai: {self.sk_ai.hex()}"
            f"\nSK_ar: {self.sk_ar.hex()}"
            f"\nSK_pi: {self.sk_pi.hex()}"
            f"\nSK_pr: {self.sk_pr.hex()}"
            f"\nSK_d : {self.sk_d.hex()}\n"
        )

    def to_proposal(self) -> Proposal:
        """Build an IKE proposal announcing the negotiated algorithms."""
        if self.dh_info is None:
            raise SecurityError("IKESAKey to_proposal: no Diffie-Hellman group")
        if self.prf_info is None:
            raise SecurityError("IKESAKey to_proposal: no pseudorandom function")
        if self.encr_info is None:
            raise SecurityError("IKESAKey to_proposal: no encryption algorithm")
        if self.integ_info is None:
            raise SecurityError("IKESAKey to_proposal: no integrity algorithm")
        return Proposal(
            protocol_id=ProtocolID.IKE,
            diffie_hellman_group=[dh.to_transform(self.dh_info)],
            pseudorandom_function=[prf.to_transform(self.prf_info)],
            encryption_algorithm=[encr.to_transform(self.encr_info)],
            integrity_algorithm=[integ.to_transform(self.integ_info)],
        )

    @classmethod
    def from_proposal(
        cls,
        proposal: Optional[Proposal],
        key_exchange_data: bytes,
        concatenated_nonce: bytes,
        initiator_spi: int,
        responder_spi: int,
    ) -> Tuple[IKESAKey, bytes]:
        """Create keys from a chosen proposal; return them and the local public value."""
        if proposal is None:
            raise SecurityError("IKESAKey from_proposal: proposal is missing")
        if not proposal.diffie_hellman_group:
            raise SecurityError("IKESAKey from_proposal: DiffieHellmanGroup is empty")
        if not proposal.encryption_algorithm:
            raise SecurityError("IKESAKey from_proposal: EncryptionAlgorithm is empty")
        if not proposal.integrity_algorithm:
            raise SecurityError("IKESAKey from_proposal: IntegrityAlgorithm is empty")
        if not proposal.pseudorandom_function:
            raise SecurityError("IKESAKey from_proposal: PseudorandomFunction is empty")

        key = cls()
        key.dh_info = dh.decode_transform(proposal.diffie_hellman_group[0])
        if key.dh_info is None:
            raise SecurityError(
                "IKESAKey from_proposal: unsupported DiffieHellmanGroup"
                f"[{proposal.diffie_hellman_group[0].transform_id}]"
            )
        key.encr_info = encr.decode_transform(proposal.encryption_algorithm[0])
        if key.encr_info is None:
            raise SecurityError(
                "IKESAKey from_proposal: unsupported EncryptionAlgorithm"
                f"[{proposal.encryption_algorithm[0].transform_id}]"
            )
        key.integ_info = integ.decode_transform(proposal.integrity_algorithm[0])
        if key.integ_info is None:
            raise SecurityError(
                "IKESAKey from_proposal: unsupported IntegrityAlgorithm"
                f"[{proposal.integrity_algorithm[0].transform_id}]"
            )
        key.prf_info = prf.decode_transform(proposal.pseudorandom_function[0])
        if key.prf_info is None:
            raise SecurityError(
                "IKESAKey from_proposal: unsupported PseudorandomFunction"
                f"[{proposal.pseudorandom_function[0].transform_id}]"
            )

        local_public_value, shared_key = calculate_diffie_hellman_materials(
            key, key_exchange_data
        )
        key.generate_keys(concatenated_nonce, shared_key, initiator_spi, responder_spi)
        return key, local_public_value

    def generate_keys(
        self,
        concatenated_nonce: Optional[bytes],
        shared_key: Optional[bytes],
        initiator_spi: int,
        responder_spi: int,
    ) -> None:
        """Derive SK_d, SK_a*, SK_e*, SK_p* as in RFC 7296 sections 1.3 and 1.4."""
        if self.encr_info is None:
            raise SecurityError("No encryption algorithm specified")
        if self.integ_info is None:
            raise SecurityError("No integrity algorithm specified")
        if self.prf_info is None:
            raise SecurityError("No pseudorandom function specified")
        if self.dh_info is None:
            raise SecurityError("No Diffie-hellman group algorithm specified")
        if not concatenated_nonce:
            raise SecurityError("No concatenated nonce data")
        if not shared_key:
            raise SecurityError("No Diffie-Hellman shared key")

        prf_length = self.prf_info.key_length
        integ_length = self.integ_info.key_length
        encr_length = self.encr_info.key_length
        lengths = [
            prf_length,
            integ_length,
            integ_length,
            encr_length,
            encr_length,
            prf_length,
            prf_length,
        ]

        seed_mac = self.prf_info.new(concatenated_nonce)
        seed_mac.update(bytes(shared_key))
        skeyseed = seed_mac.digest()
        seed = concatenate_nonce_and_spi(concatenated_nonce, initiator_spi, responder_spi)
        stream = prf_plus(self.prf_info.new(skeyseed), seed, sum(lengths))

        keys = []
        offset = 0
        for length in lengths:
            keys.append(stream[offset : offset + length])
            offset += length
        (
            self.sk_d,
            self.sk_ai,
            self.sk_ar,
            self.sk_ei,
            self.sk_er,
            self.sk_pi,
            self.sk_pr,
        ) = keys

        self.prf_d = self.prf_info.new(self.sk_d)
        self.integ_i = self.integ_info.new(self.sk_ai)
        self.integ_r = self.integ_info.new(self.sk_ar)
        self.encr_i = self.encr_info.new_crypto(self.sk_ei)
        self.encr_r = self.encr_info.new_crypto(self.sk_er)
        self.prf_i = self.prf_info.new(self.sk_pi)
        self.prf_r = self.prf_info.new(self.sk_pr)


def calculate_diffie_hellman_materials(
    ike_sa_key: IKESAKey, peer_public_value: bytes
) -> Tuple[bytes, bytes]:
    """Pick a secret; return the local public value and the shared key."""
    if ike_sa_key.dh_info is None:
        raise SecurityError("No Diffie-hellman group algorithm specified")
    secret = generate_random_number()
    group = ike_sa_key.dh_info
    peer = int.from_bytes(bytes(peer_public_value), "big")
    return group.public_value(secret), group.shared_key(secret, peer)


@dataclass
class ChildSAKey:
    """Negotiated algorithms and derived keys of a child SA."""

    spi: int = 0
    dh_info: Optional[DHGroup] = None
    encr_k_info: Optional[EncryptionAlgorithm] = None
    integ_k_info: Optional[IntegrityAlgorithm] = None
    esn_info: ESN = field(default_factory=ESN)

    initiator_to_responder_encryption_key: bytes = field(default=b"", repr=False)
    responder_to_initiator_encryption_key: bytes = field(default=b"", repr=False)
    initiator_to_responder_integrity_key: bytes = field(default=b"", repr=False)
    responder_to_initiator_integrity_key: bytes = field(default=b"", repr=False)

    def to_proposal(self) -> Proposal:
        """Build an ESP proposal announcing the negotiated algorithms."""
        if self.encr_k_info is None:
            raise SecurityError("ChildSAKey to_proposal: no encryption algorithm")
        proposal = Proposal(protocol_id=ProtocolID.ESP)
        if self.dh_info is not None:
            proposal.diffie_hellman_group.append(dh.to_transform(self.dh_info))
        proposal.encryption_algorithm.append(encr.to_transform(self.encr_k_info))
        if self.integ_k_info is not None:
            proposal.integrity_algorithm.append(integ.to_transform(self.integ_k_info))
        proposal.extended_sequence_numbers.append(esn.to_transform(self.esn_info))
        return proposal

    @classmethod
    def from_proposal(cls, proposal: Optional[Proposal]) -> ChildSAKey:
        """Create a child SA key holder from a chosen proposal."""
        if proposal is None:
            raise SecurityError("ChildSAKey from_proposal: proposal is missing")
        if not proposal.encryption_algorithm:
            raise SecurityError("ChildSAKey from_proposal: EncryptionAlgorithm is empty")
        if not proposal.integrity_algorithm:
            raise SecurityError("ChildSAKey from_proposal: IntegrityAlgorithm is empty")
        if not proposal.extended_sequence_numbers:
            raise SecurityError("ChildSAKey from_proposal: ExtendedSequenceNumbers is empty")

        key = cls()
        if len(proposal.diffie_hellman_group) == 1:
            key.dh_info = dh.decode_transform(proposal.diffie_hellman_group[0])
            if key.dh_info is None:
                raise SecurityError(
                    "ChildSAKey from_proposal: unsupported DiffieHellmanGroup"
                    f"[{proposal.diffie_hellman_group[0].transform_id}]"
                )
        key.encr_k_info = encr.decode_transform(proposal.encryption_algorithm[0])
        if key.encr_k_info is None:
            raise SecurityError(
                "ChildSAKey from_proposal: unsupported EncryptionAlgorithm"
                f"[{proposal.encryption_algorithm[0].transform_id}]"
            )
        if len(proposal.integrity_algorithm) == 1:
            key.integ_k_info = integ.decode_transform(proposal.integrity_algorithm[0])
            if key.integ_k_info is None:
                raise SecurityError(
                    "ChildSAKey from_proposal: unsupported IntegrityAlgorithm"
                    f"[{proposal.integrity_algorithm[0].transform_id}]"
                )
        key.esn_info = esn.decode_transform(proposal.extended_sequence_numbers[0])
        return key

    def generate_keys(
        self, ike_sa_key: Optional[IKESAKey], concatenated_nonce: Optional[bytes]
    ) -> None:
        """Derive the IPsec keys as in RFC 7296 section 2.17."""
        if ike_sa_key is None:
            raise SecurityError("IKE SA is missing")
        if ike_sa_key.prf_info is None:
            raise SecurityError("No pseudorandom function specified")
        if self.encr_k_info is None:
            raise SecurityError("No encryption algorithm specified")
        if ike_sa_key.prf_d is None:
            raise SecurityError("No key deriving key")

        encr_length = self.encr_k_info.key_length
        integ_length = self.integ_k_info.key_length if self.integ_k_info else 0
        stream = prf_plus(
            ike_sa_key.prf_d,
            bytes(concatenated_nonce or b""),
            (encr_length + integ_length) * 2,
        )

        offset = 0

        def take(length: int) -> bytes:
            nonlocal offset
            chunk = stream[offset : offset + length]
            offset += length
            return chunk

        self.initiator_to_responder_encryption_key = take(encr_length)
        self.initiator_to_responder_integrity_key = take(integ_length)
        self.responder_to_initiator_encryption_key = take(encr_length)
        self.responder_to_initiator_integrity_key = take(integ_length)


def compare_root_certificate(
    ca: bytes, certificate_encoding: int, requested_hash: bytes
) -> bool:
    """True if ``ca`` is a non-empty X.509 signature hash equal to the requested one."""
    if certificate_encoding != X509_CERTIFICATE_SIGNATURE:
        return False
    if not ca:
        return False
    return bytes(ca) == bytes(requested_hash)