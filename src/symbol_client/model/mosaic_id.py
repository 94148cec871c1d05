"""Concrete mosaic identifiers."""

from __future__ import annotations
from typing import Any, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.convert import is_hex, to_uint64, uint64_from_hex, uint64_to_hex


class MosaicId:
    """Concrete mosaic id (uint64)."""

    def __init__(self, id: Union[str, int]):
        if isinstance(id, str):
            self.id = uint64_from_hex(id)
        else:
            self.id = to_uint64(id)

    def to_hex(self) -> str:
        return uint64_to_hex(self.id)

    def is_alias(self) -> bool:
        return False

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, MosaicId):
            return self.id == other.id
        return False

    def __hash__(self) -> int:
        return hash(("mosaic", self.id))

    def __repr__(self) -> str:
        return f"MosaicId(0x{self.to_hex()})"

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
    def _validate(cls, value: Any) -> MosaicId:
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and is_hex(value, 16):
            # high bit marks a namespace id
            if int(value[0], 16) & 0x8:
                raise ValueError(f"{value} is a namespace id, not a MosaicId")
            return cls(value)
        raise ValueError(f"Invalid MosaicId: {value!r}")
