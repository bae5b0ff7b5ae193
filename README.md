# ikev2kit

Building blocks for IKEv2 (RFC 7296):

- encoding and decoding of the bodies of Security Association, Traffic
  Selector (TSi and TSr) and Vendor ID payloads;
- the supported transforms: Diffie-Hellman MODP groups 2 (1024 bit) and
  14 (2048 bit), HMAC pseudorandom functions (MD5, SHA-1, SHA2-256), HMAC
  integrity algorithms (MD5-96, SHA1-96, SHA2-256-128), AES-CBC (128, 192,
  256 bit keys) and NULL encryption, and extended sequence numbers;
- IKE SA and Child SA key derivation with `prf+`.

Python 3.10 or later is required. AES comes from the `cryptography` package;
everything else uses the standard library.

## Installation

From a checkout of the project:

```
pip install .
```

## Modules

| Module | Contents |
| --- | --- |
| `ikev2kit.types` | `MessageError`, the enums `PayloadType`, `EAPType`, `TransformType`, `ProtocolID`, and the protocol number constants (transform IDs, notify types, traffic selector types, ...) |
| `ikev2kit.security_association` | `Transform`, `Proposal`, `SecurityAssociation` |
| `ikev2kit.traffic_selector` | `IndividualTrafficSelector`, `TrafficSelectorInitiator`, `TrafficSelectorResponder` |
| `ikev2kit.vendor_id` | `VendorID` |
| `ikev2kit.lib` | `SecurityError`, `pkcs7_padding`, `prf_plus` |
| `ikev2kit.dh` | `DHGroup`, `from_name`, `decode_transform`, `to_transform` |
| `ikev2kit.prf` | `PRFAlgorithm`, `from_name`, `decode_transform`, `to_transform` |
| `ikev2kit.integ` | `IntegrityAlgorithm`, `from_name`, `decode_transform`, `to_transform` |
| `ikev2kit.encr` | `Cipher`, `NullCrypto`, `AesCbcCrypto`, `EncryptionAlgorithm`, `from_name`, `decode_transform`, `to_transform` |
| `ikev2kit.esn` | `ESN`, `from_name`, `decode_transform`, `to_transform` |
| `ikev2kit.security` | `IKESAKey`, `ChildSAKey`, `generate_random_number`, `generate_random_uint8`, `concatenate_nonce_and_spi`, `calculate_diffie_hellman_materials`, `compare_root_certificate` |

## Payloads

Each payload class has `marshal()`, which returns the payload body as
bytes, and the class method `unmarshal(data)`, which builds the payload
from a body.

```python
from ikev2kit import dh, encr, esn, integ, prf
from ikev2kit.security_association import Proposal, SecurityAssociation
from ikev2kit.types import ProtocolID

proposal = Proposal(
    proposal_number=1,
    protocol_id=ProtocolID.IKE,
    encryption_algorithm=[encr.to_transform(encr.from_name("ENCR_AES_CBC_256"))],
    pseudorandom_function=[prf.to_transform(prf.from_name("PRF_HMAC_SHA1"))],
    integrity_algorithm=[integ.to_transform(integ.from_name("AUTH_HMAC_SHA1_96"))],
    diffie_hellman_group=[dh.to_transform(dh.from_name("DH_2048_BIT_MODP"))],
)
wire = SecurityAssociation([proposal]).marshal()

decoded = SecurityAssociation.unmarshal(wire)
for transform in decoded.proposals[0].transforms():
    print(transform.transform_type, transform.transform_id)
```

`Proposal.transforms()` lists the transforms in wire order: encryption,
PRF, integrity, Diffie-Hellman, extended sequence numbers. On decoding,
transforms of an unknown type are skipped.

```python
from ikev2kit.traffic_selector import IndividualTrafficSelector, TrafficSelectorInitiator
from ikev2kit.types import TS_IPV4_ADDR_RANGE

tsi = TrafficSelectorInitiator([
    IndividualTrafficSelector(
        ts_type=TS_IPV4_ADDR_RANGE,
        start_port=0,
        end_port=65535,
        start_address=bytes([10, 0, 0, 1]),
        end_address=bytes([10, 0, 0, 1]),
    )
])
assert TrafficSelectorInitiator.unmarshal(tsi.marshal()) == tsi
```

Only `TS_IPV4_ADDR_RANGE` and `TS_IPV6_ADDR_RANGE` selectors are supported.
Malformed input and values that cannot be encoded raise `MessageError`
from `ikev2kit.types`.

## Transforms

`from_name` in `dh`, `prf`, `integ` and `encr` returns the algorithm for a
name such as `"DH_1024_BIT_MODP"`, `"PRF_HMAC_SHA2_256"`,
`"AUTH_HMAC_SHA2_256_128"` or `"ENCR_AES_CBC_128"`, or `None` if it is not
supported; `decode_transform` does the same for a received `Transform`.
`esn.from_name` and `esn.decode_transform` raise `SecurityError` instead.

```python
from ikev2kit import encr

algorithm = encr.from_name("ENCR_AES_CBC_128")
cipher = algorithm.new_crypto(bytes(16))
ciphertext = cipher.encrypt(b"payload")   # random IV in front, random padding
assert cipher.decrypt(ciphertext) == b"payload"
```

`AesCbcCrypto(key, iv=..., padding=...)` fixes the IV and the padding for
reproducible output.

## Key derivation

```python
from ikev2kit import dh, encr, integ, prf
from ikev2kit.security import ChildSAKey, IKESAKey

key = IKESAKey(
    dh_info=dh.from_name("DH_2048_BIT_MODP"),
    encr_info=encr.from_name("ENCR_AES_CBC_256"),
    integ_info=integ.from_name("AUTH_HMAC_SHA1_96"),
    prf_info=prf.from_name("PRF_HMAC_SHA1"),
)
key.generate_keys(b"\x01\x02\x03\x04", b"\x05\x06\x07\x08", 0x456, 0x123)
print(key)   # algorithms and SK_* values in hex
```

`IKESAKey.generate_keys` fills `sk_d`, `sk_ai`, `sk_ar`, `sk_ei`, `sk_er`,
`sk_pi`, `sk_pr` and the keyed objects built from them (`prf_d`,
`integ_i`, `integ_r`, `encr_i`, `encr_r`, `prf_i`, `prf_r`).

`IKESAKey.from_proposal(proposal, key_exchange_data, concatenated_nonce,
initiator_spi, responder_spi)` takes the first transform of each kind from
a proposal, runs the Diffie-Hellman exchange with a fresh random secret
and returns the key together with the local public value.
`IKESAKey.to_proposal()` builds the proposal for the chosen algorithms.

For a Child SA, `ChildSAKey.from_proposal(proposal)` picks the algorithms
and `generate_keys(ike_sa_key, concatenated_nonce)` derives the
encryption and integrity keys for both directions from the IKE SA's
`prf_d`. Missing algorithms or input raise `SecurityError` from
`ikev2kit.lib`.

## What it does not do

The package handles payload bodies and keys only. It does not encode or
decode the IKE message header or the generic payload header, has no
encoders for the other payload kinds (key exchange, nonce, notify,
identification, authentication, certificates, configuration, EAP), and
does not send or receive anything over the network or run an IKE
exchange.

## Running the tests

```
pip install -e ".[test]"
pytest
```