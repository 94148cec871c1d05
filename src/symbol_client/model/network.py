"""Network types."""

from __future__ import annotations
from enum import IntEnum


class NetworkType(IntEnum):
    """Network identifiers; the value is the first byte of a raw address."""

    MAIN_NET = 0x68
    TEST_NET = 0x98
    MIJIN = 0x60
    MIJIN_TEST = 0x90
    PRIVATE = 0x78
    PRIVATE_TEST = 0xA8

    @classmethod
    def from_address_prefix(cls, prefix: str) -> "NetworkType":
        """Map the first character of a plain address to its network."""
        try:
            return _PREFIXES[prefix.upper()]
        except KeyError:
            raise ValueError(f"Address network prefix {prefix!r} is not supported") from None


_PREFIXES = {
    "N": NetworkType.MAIN_NET,
    "T": NetworkType.TEST_NET,
    "M": NetworkType.MIJIN,
    "S": NetworkType.MIJIN_TEST,
    "P": NetworkType.PRIVATE,
    "V": NetworkType.PRIVATE_TEST,
}
