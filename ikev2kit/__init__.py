"""IKEv2 payload encoding, transforms and SA key derivation."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "security_association",
    "traffic_selector",
    "vendor_id",
    "lib",
    "dh",
    "prf",
    "esn",
    "integ",
    "encr",
    "security",
]