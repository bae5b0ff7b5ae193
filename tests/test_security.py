import pytest

from ikev2kit import dh, encr, esn, integ, prf
from ikev2kit.lib import SecurityError
from ikev2kit.security import (
    ChildSAKey,
    IKESAKey,
    calculate_diffie_hellman_materials,
    compare_root_certificate,
    concatenate_nonce_and_spi,
    generate_random_number,
    generate_random_uint8,
)
from ikev2kit.security_association import Proposal, SecurityAssociation, Transform
from ikev2kit.types import (
    ENCR_AES_CBC,
    PKCS7_WRAPPED_X509_CERTIFICATE,
    ProtocolID,
    TransformType,
    X509_CERTIFICATE_SIGNATURE,
)

NONCE = bytes([0x01, 0x02, 0x03, 0x04])
SHARED = bytes([0x05, 0x06, 0x07, 0x08])
SK_D = bytes.fromhex("276e1a8f0d65dae5309da66277ff7c82d39a8956")


def _ike_proposal():
    proposal = Proposal()
    proposal.diffie_hellman_group.append(dh.to_transform(dh.from_name("DH_1024_BIT_MODP")))
    proposal.encryption_algorithm.append(encr.to_transform(encr.from_name("ENCR_AES_CBC_256")))
    proposal.integrity_algorithm.append(integ.to_transform(integ.from_name("AUTH_HMAC_MD5_96")))
    proposal.pseudorandom_function.append(prf.to_transform(prf.from_name("PRF_HMAC_SHA1")))
    return proposal


def _child_proposal():
    proposal = Proposal()
    proposal.diffie_hellman_group.append(dh.to_transform(dh.from_name("DH_1024_BIT_MODP")))
    proposal.encryption_algorithm.append(encr.to_transform(encr.from_name("ENCR_AES_CBC_256")))
    proposal.integrity_algorithm.append(integ.to_transform(integ.from_name("AUTH_HMAC_MD5_96")))
    proposal.extended_sequence_numbers.append(esn.to_transform(esn.from_name("ESN_ENABLE")))
    return proposal


def test_generate_random_number_range():
    for _ in range(100):
        number = generate_random_number()
        assert int("F" * 32, 16) < number < int("F" * 512, 16)


def test_generate_random_uint8_range():
    values = [generate_random_uint8() for _ in range(100)]
    assert all(0 <= value <= 255 for value in values)


def test_concatenate_nonce_and_spi():
    result = concatenate_nonce_and_spi(NONCE, 0x0506070809000102, 0x0304050607080900)
    assert result == bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 0])


def test_concatenate_rejects_oversized_spi():
    with pytest.raises(SecurityError):
        concatenate_nonce_and_spi(NONCE, 1 << 64, 0)


def test_ike_to_proposal():
    key = IKESAKey(
        dh_info=dh.from_name("DH_1024_BIT_MODP"),
        encr_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_info=integ.from_name("AUTH_HMAC_MD5_96"),
        prf_info=prf.from_name("PRF_HMAC_SHA1"),
    )
    proposal = key.to_proposal()
    assert proposal.protocol_id == ProtocolID.IKE
    assert len(proposal.diffie_hellman_group) == 1
    assert len(proposal.encryption_algorithm) == 1
    assert len(proposal.integrity_algorithm) == 1
    assert len(proposal.pseudorandom_function) == 1
    assert len(proposal.extended_sequence_numbers) == 0
    assert proposal.encryption_algorithm[0].attribute_value == 256


def test_ike_to_proposal_missing_algorithm():
    with pytest.raises(SecurityError):
        IKESAKey(prf_info=prf.from_name("PRF_HMAC_SHA1")).to_proposal()


def test_ike_set_proposal():
    key, public_value = IKESAKey.from_proposal(_ike_proposal(), SHARED, NONCE, 0x123, 0x456)
    assert key.dh_info == dh.from_name("DH_1024_BIT_MODP")
    assert key.encr_info == encr.from_name("ENCR_AES_CBC_256")
    assert key.integ_info == integ.from_name("AUTH_HMAC_MD5_96")
    assert key.prf_info == prf.from_name("PRF_HMAC_SHA1")
    assert len(public_value) == 128
    assert len(key.sk_ei) == 32
    assert len(key.sk_ai) == 16
    assert len(key.sk_d) == 20


def test_ike_proposal_survives_wire_round_trip():
    wire = SecurityAssociation([_ike_proposal()]).marshal()
    decoded = SecurityAssociation.unmarshal(wire).proposals[0]
    key, _ = IKESAKey.from_proposal(decoded, SHARED, NONCE, 1, 2)
    assert key.encr_info == encr.from_name("ENCR_AES_CBC_256")


def test_ike_from_proposal_missing_proposal():
    with pytest.raises(SecurityError):
        IKESAKey.from_proposal(None, SHARED, NONCE, 1, 2)


@pytest.mark.parametrize(
    "attribute",
    [
        "diffie_hellman_group",
        "encryption_algorithm",
        "integrity_algorithm",
        "pseudorandom_function",
    ],
)
def test_ike_from_proposal_missing_transforms(attribute):
    proposal = _ike_proposal()
    setattr(proposal, attribute, [])
    with pytest.raises(SecurityError):
        IKESAKey.from_proposal(proposal, SHARED, NONCE, 1, 2)


def test_ike_from_proposal_unsupported_dh():
    proposal = _ike_proposal()
    proposal.diffie_hellman_group = [Transform(TransformType.DIFFIE_HELLMAN_GROUP, 5)]
    with pytest.raises(SecurityError):
        IKESAKey.from_proposal(proposal, SHARED, NONCE, 1, 2)


def test_ike_from_proposal_unsupported_encryption():
    proposal = _ike_proposal()
    proposal.encryption_algorithm = [Transform(TransformType.ENCRYPTION_ALGORITHM, ENCR_AES_CBC)]
    with pytest.raises(SecurityError):
        IKESAKey.from_proposal(proposal, SHARED, NONCE, 1, 2)


def test_ike_from_proposal_empty_nonce():
    with pytest.raises(SecurityError):
        IKESAKey.from_proposal(_ike_proposal(), SHARED, b"", 1, 2)


def test_calculate_diffie_hellman_materials_agree():
    group = dh.from_name("DH_2048_BIT_MODP")
    key = IKESAKey(dh_info=group)
    peer_secret = generate_random_number()
    peer_public = group.public_value(peer_secret)
    local_public, shared = calculate_diffie_hellman_materials(key, peer_public)
    assert len(local_public) == 256
    assert group.shared_key(peer_secret, local_public) == shared


def test_generate_key_for_ike_sa_checks():
    key = IKESAKey()
    with pytest.raises(SecurityError):
        key.generate_keys(NONCE, SHARED, 0x456, 0x123)
    key.encr_info = encr.from_name("ENCR_AES_CBC_256")
    with pytest.raises(SecurityError):
        key.generate_keys(NONCE, SHARED, 0x456, 0x123)
    key.integ_info = integ.from_name("AUTH_HMAC_SHA1_96")
    with pytest.raises(SecurityError):
        key.generate_keys(NONCE, SHARED, 0x456, 0x123)
    key.prf_info = prf.from_name("PRF_HMAC_SHA1")
    with pytest.raises(SecurityError):
        key.generate_keys(NONCE, SHARED, 0x456, 0x123)
    key.dh_info = dh.from_name("DH_2048_BIT_MODP")
    with pytest.raises(SecurityError):
        key.generate_keys(None, SHARED, 0x456, 0x123)
    with pytest.raises(SecurityError):
        key.generate_keys(NONCE, None, 0x456, 0x123)


def test_generate_key_for_ike_sa_values():
    key = IKESAKey(
        encr_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_info=integ.from_name("AUTH_HMAC_SHA1_96"),
        prf_info=prf.from_name("PRF_HMAC_SHA1"),
        dh_info=dh.from_name("DH_2048_BIT_MODP"),
    )
    key.generate_keys(NONCE, SHARED, 0x456, 0x123)
    assert key.sk_ai.hex() == "58a17edd463b4b5062359c1c98b1736d80219691"
    assert key.sk_ar.hex() == "eb2e18e9a8f9643ea0d0107a28cf5947ecd1597e"
    assert key.sk_ei.hex() == "3dcbcbb2d71d1806d5e5356a5600727eb482101de1868ae9cf71c4117d22cddb"
    assert key.sk_er.hex() == "ba3b43cf173435c449f3098c01944f2d9a66c2ca1d967f06a69f36e945a4754b"
    assert key.sk_pi.hex() == "aff4def6c9113c6942f31fa2d8b74f6c054e0e73"
    assert key.sk_pr.hex() == "c06bd0c0dd3e0b3f9c5b4cbe35c88fdd3948430f"
    assert key.sk_d == SK_D

    expected_prf_d = key.prf_info.new(SK_D)
    expected_prf_d.update(b"data")
    prf_d = key.prf_d.copy()
    prf_d.update(b"data")
    assert prf_d.digest() == expected_prf_d.digest()

    expected_integ = key.integ_info.new(key.sk_ai)
    expected_integ.update(b"data")
    integ_i = key.integ_i.copy()
    integ_i.update(b"data")
    assert integ_i.digest() == expected_integ.digest()

    assert key.encr_r.decrypt(key.encr_i.encrypt(b"payload")) != b"payload"
    assert key.encr_i.decrypt(key.encr_i.encrypt(b"payload")) == b"payload"


def test_ike_sa_key_string():
    key = IKESAKey(
        encr_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_info=integ.from_name("AUTH_HMAC_SHA1_96"),
        prf_info=prf.from_name("PRF_HMAC_SHA1"),
        dh_info=dh.from_name("DH_2048_BIT_MODP"),
    )
    key.generate_keys(NONCE, SHARED, 0x456, 0x123)
    text = str(key)
    assert text.startswith("\nEncryption Algorithm: 12\nSK_ei: 3dcbcbb2")
    assert "\nIntegrity Algorithm: 2\n" in text
    assert text.endswith("\nSK_d : 276e1a8f0d65dae5309da66277ff7c82d39a8956\n")


def test_generate_key_for_child_sa_checks():
    child = ChildSAKey()
    with pytest.raises(SecurityError):
        child.generate_keys(None, None)
    ike = IKESAKey()
    with pytest.raises(SecurityError):
        child.generate_keys(ike, None)
    ike.prf_info = prf.from_name("PRF_HMAC_SHA1")
    with pytest.raises(SecurityError):
        child.generate_keys(ike, None)
    child.encr_k_info = encr.from_name("ENCR_AES_CBC_256")
    child.integ_k_info = integ.from_name("AUTH_HMAC_SHA1_96")
    with pytest.raises(SecurityError):
        child.generate_keys(ike, None)


def test_generate_key_for_child_sa_values():
    ike = IKESAKey(prf_info=prf.from_name("PRF_HMAC_SHA1"))
    ike.prf_d = ike.prf_info.new(SK_D)
    child = ChildSAKey(
        encr_k_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_k_info=integ.from_name("AUTH_HMAC_SHA1_96"),
    )
    child.generate_keys(ike, None)
    assert child.initiator_to_responder_encryption_key.hex() == (
        "8adf11fb9c3d575f9aff5ce58c4891533c44026dc537d68dcc8c08d453e9e6df"
    )
    assert child.initiator_to_responder_integrity_key.hex() == (
        "1a04be51ae650581a546411d2dbe09507e49329f"
    )
    assert child.responder_to_initiator_encryption_key.hex() == (
        "103318186d2f7837e2d8a28cf375c2552634bd610f5142f30dfb223892cdca13"
    )
    assert child.responder_to_initiator_integrity_key.hex() == (
        "f3e8e1d3b1e0e1ce731b0d4f84dc05ac9456454c"
    )


def test_child_keys_from_full_ike_derivation_match_sk_d():
    ike = IKESAKey(
        encr_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_info=integ.from_name("AUTH_HMAC_SHA1_96"),
        prf_info=prf.from_name("PRF_HMAC_SHA1"),
        dh_info=dh.from_name("DH_2048_BIT_MODP"),
    )
    ike.generate_keys(NONCE, SHARED, 0x456, 0x123)
    child = ChildSAKey(
        encr_k_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_k_info=integ.from_name("AUTH_HMAC_SHA1_96"),
    )
    child.generate_keys(ike, b"")
    assert child.responder_to_initiator_integrity_key.hex() == (
        "f3e8e1d3b1e0e1ce731b0d4f84dc05ac9456454c"
    )


def test_child_keys_without_integrity():
    ike = IKESAKey(prf_info=prf.from_name("PRF_HMAC_SHA1"))
    ike.prf_d = ike.prf_info.new(SK_D)
    child = ChildSAKey(encr_k_info=encr.from_name("ENCR_AES_CBC_128"))
    child.generate_keys(ike, NONCE)
    assert len(child.initiator_to_responder_encryption_key) == 16
    assert len(child.responder_to_initiator_encryption_key) == 16
    assert child.initiator_to_responder_integrity_key == b""
    assert child.responder_to_initiator_integrity_key == b""


def test_child_to_proposal():
    child = ChildSAKey(
        dh_info=dh.from_name("DH_1024_BIT_MODP"),
        encr_k_info=encr.from_name("ENCR_AES_CBC_256"),
        integ_k_info=integ.from_name("AUTH_HMAC_MD5_96"),
        esn_info=esn.from_name("ESN_ENABLE"),
    )
    proposal = child.to_proposal()
    assert proposal.protocol_id == ProtocolID.ESP
    assert len(proposal.diffie_hellman_group) == 1
    assert len(proposal.encryption_algorithm) == 1
    assert len(proposal.integrity_algorithm) == 1
    assert len(proposal.pseudorandom_function) == 0
    assert len(proposal.extended_sequence_numbers) == 1
    assert proposal.extended_sequence_numbers[0].transform_id == 1


def test_child_to_proposal_optional_parts():
    child = ChildSAKey(encr_k_info=encr.from_name("ENCR_NULL"))
    proposal = child.to_proposal()
    assert proposal.diffie_hellman_group == []
    assert proposal.integrity_algorithm == []
    assert proposal.extended_sequence_numbers[0].transform_id == 0


def test_child_to_proposal_missing_encryption():
    with pytest.raises(SecurityError):
        ChildSAKey().to_proposal()


def test_child_set_proposal():
    child = ChildSAKey.from_proposal(_child_proposal())
    assert child.dh_info == dh.from_name("DH_1024_BIT_MODP")
    assert child.encr_k_info == encr.from_name("ENCR_AES_CBC_256")
    assert child.integ_k_info == integ.from_name("AUTH_HMAC_MD5_96")
    assert child.esn_info.need_esn is True


def test_child_from_proposal_without_dh():
    proposal = _child_proposal()
    proposal.diffie_hellman_group = []
    child = ChildSAKey.from_proposal(proposal)
    assert child.dh_info is None
    assert child.encr_k_info == encr.from_name("ENCR_AES_CBC_256")


@pytest.mark.parametrize(
    "attribute",
    ["encryption_algorithm", "integrity_algorithm", "extended_sequence_numbers"],
)
def test_child_from_proposal_missing_transforms(attribute):
    proposal = _child_proposal()
    setattr(proposal, attribute, [])
    with pytest.raises(SecurityError):
        ChildSAKey.from_proposal(proposal)


def test_child_from_proposal_bad_esn():
    proposal = _child_proposal()
    proposal.extended_sequence_numbers = [
        Transform(TransformType.EXTENDED_SEQUENCE_NUMBERS, 7)
    ]
    with pytest.raises(SecurityError):
        ChildSAKey.from_proposal(proposal)


def test_child_from_proposal_missing():
    with pytest.raises(SecurityError):
        ChildSAKey.from_proposal(None)


def test_compare_root_certificate():
    ca = bytes(range(20))
    assert compare_root_certificate(ca, X509_CERTIFICATE_SIGNATURE, bytes(range(20))) is True
    assert compare_root_certificate(ca, X509_CERTIFICATE_SIGNATURE, bytes(20)) is False
    assert compare_root_certificate(ca, PKCS7_WRAPPED_X509_CERTIFICATE, ca) is False
    assert compare_root_certificate(b"", X509_CERTIFICATE_SIGNATURE, b"") is False