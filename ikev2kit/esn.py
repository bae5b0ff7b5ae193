"""Extended Sequence Numbers transform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from . import types as ike
from .lib import SecurityError
from .security_association import Transform
from .types import TransformType

ESN_ENABLE = "ESN_ENABLE"
ESN_DISABLE = "ESN_DISABLE"


@dataclass(frozen=True)
class ESN:
    """Whether extended sequence numbers are in use."""

    need_esn: bool = False

    def transform_id(self) -> int:
        """The transform ID announcing this setting."""
        return ike.ESN_ENABLE if self.need_esn else ike.ESN_DISABLE


_SETTINGS: Dict[str, ESN] = {
    ESN_ENABLE: ESN(need_esn=True),
    ESN_DISABLE: ESN(need_esn=False),
}

_NAME_BY_ID: Dict[int, str] = {
    ike.ESN_ENABLE: ESN_ENABLE,
    ike.ESN_DISABLE: ESN_DISABLE,
}


def from_name(name: str) -> ESN:
    """Look an ESN setting up by name."""
    try:
        return _SETTINGS[name]
    except KeyError:
        raise SecurityError("ESN from_name got an unsupported string") from None


def decode_transform(transform: Transform) -> ESN:
    """Return the ESN setting a transform selects."""
    name = _NAME_BY_ID.get(transform.transform_id)
    if name is None:
        raise SecurityError("ESN decode_transform got an unsupported transform")
    return from_name(name)


def to_transform(esn: ESN) -> Transform:
    """Build the proposal transform for ``esn``."""
    return Transform(
        transform_type=TransformType.EXTENDED_SEQUENCE_NUMBERS,
        transform_id=esn.transform_id(),
    )