"""
Decoding of unresolved (possibly aliased) addresses and mosaic ids.

On the wire an unresolved address is 24 bytes. When bit 0 of the first byte
is set (e.g. 0x91 instead of 0x90) the following 8 bytes hold a namespace id
in little-endian order. An unresolved mosaic id is a uint64 whose high bit
marks a namespace id.

``UnresolvedAddress`` and ``UnresolvedMosaicId`` are pydantic field types:
hex strings assigned to such fields are decoded by these rules, so an encoded
alias always becomes a ``NamespaceId``.
"""

from __future__ import annotations
from typing import Annotated, Any, Union

from pydantic import BeforeValidator

from ..runtime.convert import hex_to_bytes, is_hex
from .account import Address
from .mosaic_id import MosaicId
from .namespace import NamespaceId
from .network import NetworkType


def to_unresolved_address(encoded: str) -> Union[Address, NamespaceId]:
    """
    Decode a hex encoded unresolved address.

    Args:
        encoded: 48 character hex string

    Returns:
        NamespaceId when the alias flag is set, otherwise Address
    """
    if not is_hex(encoded, 48):
        raise ValueError(f"Input string is not a hex encoded unresolved address: {encoded!r}")
    if hex_to_bytes(encoded[0:2])[0] & 0x01:
        return NamespaceId(int.from_bytes(hex_to_bytes(encoded[2:18]), "little"))
    return Address.create_from_encoded(encoded)


def to_unresolved_mosaic(encoded: str) -> Union[MosaicId, NamespaceId]:
    """Decode a hex encoded unresolved mosaic id."""
    if not is_hex(encoded, 16):
        raise ValueError(f"Input string is not a hex encoded mosaic id: {encoded!r}")
    if int(encoded[0], 16) & 0x8:
        return NamespaceId.create_from_encoded(encoded)
    return MosaicId(encoded)


def _decode_address(value: Any) -> Any:
    if isinstance(value, str) and is_hex(value, 48):
        return to_unresolved_address(value)
    return value


def _decode_mosaic_id(value: Any) -> Any:
    if isinstance(value, str) and is_hex(value, 16):
        return to_unresolved_mosaic(value)
    return value


UnresolvedAddress = Annotated[Union[Address, NamespaceId], BeforeValidator(_decode_address)]
UnresolvedMosaicId = Annotated[Union[MosaicId, NamespaceId], BeforeValidator(_decode_mosaic_id)]


def encode_unresolved_address(address: Union[Address, NamespaceId], network_type: NetworkType) -> str:
    """Inverse of ``to_unresolved_address``."""
    if isinstance(address, NamespaceId):
        raw = bytes([network_type.value | 0x01]) + address.id.to_bytes(8, "little") + bytes(15)
        return raw.hex().upper()
    return address.encoded()
