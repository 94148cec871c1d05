"""
Account addresses.

An address is 24 raw bytes: the network byte, a 20 byte public key hash and a
3 byte checksum. It is shown to users in its base32 "plain" form and travels
over REST in its hex "encoded" form.
"""

from __future__ import annotations
import base64
import hashlib
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.convert import bytes_to_hex, hex_to_bytes, is_hex
from .network import NetworkType

ADDRESS_DECODED_SIZE = 24
ADDRESS_ENCODED_SIZE = 39
ADDRESS_CHECKSUM_SIZE = 3


class Address:
    """Concrete account address."""

    def __init__(self, raw: bytes):
        if not isinstance(raw, (bytes, bytearray)) or len(raw) != ADDRESS_DECODED_SIZE:
            raise ValueError(f"Address must be {ADDRESS_DECODED_SIZE} bytes")
        self._raw = bytes(raw)
        self.network_type = NetworkType.from_address_prefix(self.plain()[0])

    @classmethod
    def create_from_raw_address(cls, raw_address: str) -> Address:
        """
        Create an address from its plain (base32) form.

        Args:
            raw_address: Plain address, optionally hyphen separated

        Returns:
            Address instance
        """
        plain = raw_address.strip().upper().replace("-", "")
        if len(plain) != ADDRESS_ENCODED_SIZE:
            raise ValueError(f"Address {raw_address} has to be {ADDRESS_ENCODED_SIZE} characters long")
        try:
            raw = base64.b32decode(plain + "=")
        except ValueError as e:
            raise ValueError(f"Address {raw_address} is not valid base32") from e
        return cls(raw)

    @classmethod
    def create_from_encoded(cls, encoded: str) -> Address:
        """Create an address from its hex encoded form."""
        if not is_hex(encoded, ADDRESS_DECODED_SIZE * 2):
            raise ValueError(f"Encoded address {encoded!r} is not a {ADDRESS_DECODED_SIZE} byte hex string")
        return cls(hex_to_bytes(encoded))

    @staticmethod
    def is_valid_raw_address(raw_address: str) -> bool:
        """Check length, alphabet and checksum of a plain address."""
        try:
            address = Address.create_from_raw_address(raw_address)
        except ValueError:
            return False
        return address.has_valid_checksum()

    def has_valid_checksum(self) -> bool:
        body = self._raw[:-ADDRESS_CHECKSUM_SIZE]
        checksum = hashlib.sha3_256(body).digest()[:ADDRESS_CHECKSUM_SIZE]
        return checksum == self._raw[-ADDRESS_CHECKSUM_SIZE:]

    def plain(self) -> str:
        return base64.b32encode(self._raw).decode("ascii").rstrip("=")

    def pretty(self) -> str:
        plain = self.plain()
        return "-".join(plain[i:i + 6] for i in range(0, len(plain), 6))

    def encoded(self) -> str:
        return bytes_to_hex(self._raw)

    def to_bytes(self) -> bytes:
        return self._raw

    def is_alias(self) -> bool:
        return False

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Address):
            return self._raw == other._raw
        return False

    def __hash__(self) -> int:
        return hash(self._raw)

    def __str__(self) -> str:
        return self.plain()

    def __repr__(self) -> str:
        return f"Address('{self.plain()}')"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Validate plain or encoded strings into Address instances."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any) -> Address:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if is_hex(value, ADDRESS_DECODED_SIZE * 2):
                # bit 0 of the network byte marks an encoded namespace alias
                if int(value[1], 16) & 0x1:
                    raise ValueError(f"{value} is an encoded namespace alias, not an Address")
                return cls.create_from_encoded(value)
            return cls.create_from_raw_address(value)
        raise ValueError(f"Invalid Address: {value!r}")
