"""Mosaic amounts."""

from __future__ import annotations
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, field_validator

from ..runtime.convert import to_uint64
from .mosaic_id import MosaicId
from .unresolved import UnresolvedMosaicId


class Mosaic(BaseModel):
    """An amount of a (possibly unresolved) mosaic."""

    id: UnresolvedMosaicId
    amount: int

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_uint64(cls, value: Any) -> int:
        return to_uint64(value)

    def has_alias(self) -> bool:
        return self.id.is_alias()


class MosaicSupplyChangeAction(IntEnum):
    """Supply change direction."""

    DECREASE = 0
    INCREASE = 1


__all__ = ["Mosaic", "MosaicId", "MosaicSupplyChangeAction"]
