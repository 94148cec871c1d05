"""
Search criteria and result pages.

Criteria are typed options for the REST search endpoints, matching the query
parameters of the node API.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from .account import Address
from .receipt import ReceiptType
from .transaction import TransactionType

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of search results."""

    data: List[T] = field(default_factory=list)
    page_number: int = 1
    page_size: int = 0
    is_last_page: bool = True
    total_entries: Optional[int] = None

    def is_full(self) -> bool:
        return self.page_size > 0 and len(self.data) >= self.page_size


class Order(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TransactionGroup(str, Enum):
    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"
    PARTIAL = "partial"


# =============================================================================
# Base criteria
# =============================================================================

class SearchCriteria(BaseModel):
    """
    Options common to every paginated search.

    ``offset`` is the id of the last entity already seen; when set, the server
    continues after it and ignores ``page_number``.
    """
    page_size: Optional[int] = Field(default=None, ge=1, le=100, alias="pageSize", description="Entities per page")
    page_number: Optional[int] = Field(default=None, ge=1, alias="pageNumber", description="1-based page number")
    offset: Optional[str] = Field(default=None, description="Id to continue after")
    order: Optional[Order] = Field(default=None, description="Sort direction")

    model_config = {"populate_by_name": True}

    def to_params(self) -> Dict[str, Any]:
        """Convert to REST query parameters."""
        params: Dict[str, Any] = {}
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None or info.exclude:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Address):
                value = value.plain()
            elif isinstance(value, list):
                if not value:
                    continue
                value = [item.value if isinstance(item, Enum) else item for item in value]
            params[info.alias or name] = value
        return params


class AccountOrderBy(str, Enum):
    ID = "id"
    BALANCE = "balance"


class AccountSearchCriteria(SearchCriteria):
    order_by: Optional[AccountOrderBy] = Field(default=None, alias="orderBy")
    mosaic_id: Optional[str] = Field(default=None, alias="mosaicId")


class TransactionSearchCriteria(SearchCriteria):
    group: TransactionGroup = Field(default=TransactionGroup.CONFIRMED, exclude=True)
    address: Optional[Address] = None
    recipient_address: Optional[Address] = Field(default=None, alias="recipientAddress")
    signer_public_key: Optional[str] = Field(default=None, alias="signerPublicKey")
    height: Optional[int] = None
    from_height: Optional[int] = Field(default=None, alias="fromHeight")
    to_height: Optional[int] = Field(default=None, alias="toHeight")
    type: List[TransactionType] = Field(default_factory=list)
    embedded: Optional[bool] = None


class TransactionStatementSearchCriteria(SearchCriteria):
    height: Optional[int] = None
    from_height: Optional[int] = Field(default=None, alias="fromHeight")
    to_height: Optional[int] = Field(default=None, alias="toHeight")
    receipt_type: List[ReceiptType] = Field(default_factory=list, alias="receiptType")
    recipient_address: Optional[Address] = Field(default=None, alias="recipientAddress")
    sender_address: Optional[Address] = Field(default=None, alias="senderAddress")
    target_address: Optional[Address] = Field(default=None, alias="targetAddress")
    artifact_id: Optional[str] = Field(default=None, alias="artifactId")


class ResolutionStatementSearchCriteria(SearchCriteria):
    height: Optional[int] = None
