"""Account state returned by the accounts endpoints."""

from __future__ import annotations
from enum import IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..runtime.convert import to_uint64
from .account import Address
from .mosaic import Mosaic
from .mosaic_id import MosaicId


class AccountType(IntEnum):
    UNLINKED = 0
    MAIN = 1
    REMOTE = 2
    REMOTE_UNLINKED = 3


class AccountInfo(BaseModel):
    """Account state at the latest chain height."""

    record_id: Optional[str] = Field(default=None, alias="id")
    address: Address
    address_height: int = Field(default=0, alias="addressHeight")
    public_key: str = Field(default="0" * 64, alias="publicKey")
    public_key_height: int = Field(default=0, alias="publicKeyHeight")
    account_type: AccountType = Field(default=AccountType.UNLINKED, alias="accountType")
    importance: int = 0
    importance_height: int = Field(default=0, alias="importanceHeight")
    mosaics: List[Mosaic] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("address_height", "public_key_height", "importance", "importance_height", mode="before")
    @classmethod
    def _uint64(cls, value: Any) -> int:
        return to_uint64(value)

    @classmethod
    def from_dto(cls, dto: Dict[str, Any]) -> AccountInfo:
        """
        Build from the REST ``AccountInfoDTO`` shape.

        Args:
            dto: ``{"id": ..., "account": {...}}``

        Returns:
            AccountInfo instance
        """
        account = dict(dto.get("account", dto))
        account["mosaics"] = [
            Mosaic(id=MosaicId(mosaic["id"]), amount=mosaic["amount"])
            for mosaic in account.get("mosaics", [])
        ]
        if "id" in dto:
            account["id"] = dto["id"]
        return cls.model_validate(account)
