"""
Conversion helpers for hex strings and unsigned 64-bit values.
"""

from __future__ import annotations
import re
from typing import Union

UINT64_MAX = (1 << 64) - 1

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def is_hex(value: str, length: int = 0) -> bool:
    """Check that value is an even-length hex string (of the given length when non-zero)."""
    if not isinstance(value, str) or len(value) % 2 != 0 or not _HEX_RE.match(value):
        return False
    return length == 0 or len(value) == length


def hex_to_bytes(value: str) -> bytes:
    if not is_hex(value):
        raise ValueError(f"Input string is not in valid hexadecimal notation: {value!r}")
    return bytes.fromhex(value)


def bytes_to_hex(value: bytes) -> str:
    return value.hex().upper()


def to_uint64(value: Union[int, str]) -> int:
    """
    Coerce a numeric string or int into a uint64.

    REST payloads encode 64-bit values as decimal strings (e.g. heights).

    Args:
        value: Integer or decimal string

    Returns:
        The integer value

    Raises:
        ValueError: If the value is not a valid uint64
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid uint64 value: {value!r}")
    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Invalid uint64 numeric string: {value!r}")
        value = int(value)
    if not isinstance(value, int) or value < 0 or value > UINT64_MAX:
        raise ValueError(f"Invalid uint64 value: {value!r}")
    return value


def uint64_to_hex(value: int) -> str:
    """Render a uint64 as 16 upper-case hex digits."""
    return f"{to_uint64(value):016X}"


def uint64_from_hex(value: str) -> int:
    if not is_hex(value, 16):
        raise ValueError(f"Invalid uint64 hex string: {value!r}")
    return int(value, 16)
