"""
Finalization proof models.

Mirror the REST ``FinalizationProofDTO`` shape; values are passed through
without verification.
"""

from __future__ import annotations
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from ..runtime.convert import to_uint64


class ParentPublicKeySignaturePair(BaseModel):
    parent_public_key: str = Field(alias="parentPublicKey")
    signature: str

    model_config = {"populate_by_name": True, "frozen": True}


class BmTreeSignature(BaseModel):
    """Two-level voting signature."""

    root: ParentPublicKeySignaturePair
    bottom: ParentPublicKeySignaturePair

    model_config = {"populate_by_name": True, "frozen": True}


class MessageGroup(BaseModel):
    """Votes cast for one finalization stage."""

    stage: int
    height: int
    hashes: List[str] = Field(default_factory=list)
    signatures: List[BmTreeSignature] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("height", mode="before")
    @classmethod
    def _height_uint64(cls, value: Any) -> int:
        return to_uint64(value)


class FinalizationProof(BaseModel):
    """Proof that a block was finalized at an epoch and point."""

    version: int
    finalization_epoch: int = Field(alias="finalizationEpoch")
    finalization_point: int = Field(alias="finalizationPoint")
    height: int
    hash: str
    message_groups: List[MessageGroup] = Field(default_factory=list, alias="messageGroups")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("height", mode="before")
    @classmethod
    def _height_uint64(cls, value: Any) -> int:
        return to_uint64(value)

