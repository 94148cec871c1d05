"""
Namespace identifiers.

A namespace id is a uint64 with its high bit set, derived from the namespace
name. It stands in for an address or a mosaic id until chain execution
resolves it (see ``model.receipt.Statement``).
"""

from __future__ import annotations
import hashlib
import re
from typing import Any, List, Optional, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.convert import is_hex, to_uint64, uint64_from_hex, uint64_to_hex

NAMESPACE_FLAG = 1 << 63
MAX_NAMESPACE_DEPTH = 3
MAX_NAME_LENGTH = 64

_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


def generate_namespace_id(name: str, parent_id: int = 0) -> int:
    """
    Derive the id of a single namespace level.

    Args:
        name: Namespace part name
        parent_id: Id of the parent namespace (0 for a root namespace)

    Returns:
        The namespace id
    """
    if len(name) > MAX_NAME_LENGTH or not _NAME_RE.match(name):
        raise ValueError(f"Invalid namespace name: {name!r}")
    hasher = hashlib.sha3_256()
    hasher.update(to_uint64(parent_id).to_bytes(8, "little"))
    hasher.update(name.encode("utf-8"))
    return int.from_bytes(hasher.digest()[:8], "little") | NAMESPACE_FLAG


def generate_namespace_path(full_name: str) -> List[int]:
    """Ids of every level of a dotted namespace name, root first."""
    parts = full_name.split(".")
    if not parts or len(parts) > MAX_NAMESPACE_DEPTH:
        raise ValueError(f"Too many parts in namespace name: {full_name!r}")
    path: List[int] = []
    parent_id = 0
    for part in parts:
        parent_id = generate_namespace_id(part, parent_id)
        path.append(parent_id)
    return path


class NamespaceId:
    """Namespace alias, created from its full name or its numeric id."""

    def __init__(self, id: Union[str, int], full_name: Optional[str] = None):
        if isinstance(id, str):
            self.full_name: Optional[str] = id
            self.id = generate_namespace_path(id)[-1]
        else:
            self.full_name = full_name
            self.id = to_uint64(id)

    @classmethod
    def create_from_encoded(cls, encoded: str) -> NamespaceId:
        return cls(uint64_from_hex(encoded))

    def to_hex(self) -> str:
        return uint64_to_hex(self.id)

    def is_alias(self) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, NamespaceId):
            return self.id == other.id
        return False

    def __hash__(self) -> int:
        return hash(("namespace", self.id))

    def __repr__(self) -> str:
        if self.full_name:
            return f"NamespaceId('{self.full_name}')"
        return f"NamespaceId(0x{self.to_hex()})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any) -> NamespaceId:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if is_hex(value, 16):
                return cls.create_from_encoded(value)
            return cls(value)
        raise ValueError(f"Invalid NamespaceId: {value!r}")
