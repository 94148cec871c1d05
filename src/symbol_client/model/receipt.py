"""
Block receipts and statements.

A block statement groups the receipts emitted while executing a block together
with the resolution statements recording which concrete address or mosaic id
each alias pointed to at every position of the block.
"""

from __future__ import annotations
import bisect
import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import total_ordering
from typing import List, Optional, Sequence, Tuple, Union

from ..runtime.errors import ErrorCode, NotFoundError
from .account import Address
from .mosaic import Mosaic
from .mosaic_id import MosaicId
from .namespace import NamespaceId
from .unresolved import UnresolvedAddress, UnresolvedMosaicId

logger = logging.getLogger(__name__)


# =============================================================================
# Receipt types
# =============================================================================

class ReceiptType(IntEnum):
    """Receipt type codes."""

    MOSAIC_RENTAL_FEE = 0x124D
    NAMESPACE_RENTAL_FEE = 0x134E
    HARVEST_FEE = 0x2143
    LOCK_HASH_COMPLETED = 0x2248
    LOCK_HASH_EXPIRED = 0x2348
    LOCK_SECRET_COMPLETED = 0x2252
    LOCK_SECRET_EXPIRED = 0x2352
    LOCK_HASH_CREATED = 0x3148
    LOCK_SECRET_CREATED = 0x3152
    MOSAIC_EXPIRED = 0x414D
    NAMESPACE_EXPIRED = 0x414E
    NAMESPACE_DELETED = 0x424E
    INFLATION = 0x5143
    TRANSACTION_GROUP = 0xE143
    ADDRESS_ALIAS_RESOLUTION = 0xF143
    MOSAIC_ALIAS_RESOLUTION = 0xF243


class ResolutionType(Enum):
    ADDRESS = "address"
    MOSAIC = "mosaic"


@total_ordering
@dataclass(frozen=True)
class ReceiptSource:
    """Position inside a block: transaction (primary) and aggregate inner transaction (secondary)."""

    primary_id: int
    secondary_id: int = 0

    def key(self) -> Tuple[int, int]:
        return (self.primary_id, self.secondary_id)

    def __lt__(self, other: "ReceiptSource") -> bool:
        if not isinstance(other, ReceiptSource):
            return NotImplemented
        return self.key() < other.key()


@dataclass(frozen=True)
class Receipt:
    """Base receipt."""

    type: ReceiptType
    version: int = 1


@dataclass(frozen=True)
class BalanceChangeReceipt(Receipt):
    """Credit or debit of a single account (harvest fees, lock creation and release)."""

    target_address: Optional[Address] = None
    mosaic_id: Optional[MosaicId] = None
    amount: int = 0


@dataclass(frozen=True)
class BalanceTransferReceipt(Receipt):
    """Transfer between two accounts (rental fees)."""

    sender_address: Optional[Address] = None
    recipient_address: Optional[Address] = None
    mosaic_id: Optional[MosaicId] = None
    amount: int = 0


@dataclass(frozen=True)
class ArtifactExpiryReceipt(Receipt):
    """Expiry or deletion of a mosaic or namespace."""

    artifact_id: Union[MosaicId, NamespaceId, None] = None


@dataclass(frozen=True)
class InflationReceipt(Receipt):
    """Currency created in a block."""

    mosaic_id: Optional[MosaicId] = None
    amount: int = 0


BALANCE_CHANGE_TYPES = frozenset({
    ReceiptType.HARVEST_FEE,
    ReceiptType.LOCK_HASH_CREATED,
    ReceiptType.LOCK_HASH_COMPLETED,
    ReceiptType.LOCK_HASH_EXPIRED,
    ReceiptType.LOCK_SECRET_CREATED,
    ReceiptType.LOCK_SECRET_COMPLETED,
    ReceiptType.LOCK_SECRET_EXPIRED,
})

BALANCE_TRANSFER_TYPES = frozenset({
    ReceiptType.MOSAIC_RENTAL_FEE,
    ReceiptType.NAMESPACE_RENTAL_FEE,
})

ARTIFACT_EXPIRY_TYPES = frozenset({
    ReceiptType.MOSAIC_EXPIRED,
    ReceiptType.NAMESPACE_EXPIRED,
    ReceiptType.NAMESPACE_DELETED,
})


# =============================================================================
# Statements
# =============================================================================

@dataclass(frozen=True)
class TransactionStatement:
    """Receipts emitted by one source of a block."""

    height: int
    source: ReceiptSource
    receipts: Tuple[Receipt, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "receipts", tuple(self.receipts))


@dataclass(frozen=True)
class ResolutionEntry:
    """The value an alias resolved to, from ``source`` onwards."""

    source: ReceiptSource
    resolved: Union[Address, MosaicId]


@dataclass(frozen=True)
class ResolutionStatement:
    """
    Resolutions of a single alias inside a block.

    Entries are sorted by source. An entry stays in force from its source
    until the next entry supersedes it.
    """

    resolution_type: ResolutionType
    height: int
    unresolved: Union[Address, MosaicId, NamespaceId]
    resolution_entries: Tuple[ResolutionEntry, ...] = ()
    _keys: Tuple[Tuple[int, int], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(sorted(self.resolution_entries, key=lambda entry: entry.source.key()))
        object.__setattr__(self, "resolution_entries", entries)
        object.__setattr__(self, "_keys", tuple(entry.source.key() for entry in entries))

    def get_resolution_entry(self, primary_id: int, secondary_id: int = 0) -> Optional[ResolutionEntry]:
        """
        Find the entry in force at a source.

        Args:
            primary_id: Source primary id (1-based transaction position)
            secondary_id: Source secondary id (aggregate inner position, 0 otherwise)

        Returns:
            The last entry whose source is at or before the query, or None
        """
        index = bisect.bisect_right(self._keys, (primary_id, secondary_id))
        if index == 0:
            return None
        return self.resolution_entries[index - 1]

    def resolve(self, primary_id: int, secondary_id: int = 0) -> Union[Address, MosaicId]:
        entry = self.get_resolution_entry(primary_id, secondary_id)
        if entry is None:
            raise NotFoundError(
                f"No resolution entry found for source ({primary_id}, {secondary_id}) "
                f"on block {self.height} for unresolved {_describe(self.unresolved)}",
                ErrorCode.RESOLUTION_NOT_FOUND,
                {"height": self.height, "primaryId": primary_id, "secondaryId": secondary_id},
            )
        return entry.resolved


@dataclass(frozen=True)
class Statement:
    """Receipts and resolution statements of a block."""

    transaction_statements: Tuple[TransactionStatement, ...] = ()
    address_resolution_statements: Tuple[ResolutionStatement, ...] = ()
    mosaic_resolution_statements: Tuple[ResolutionStatement, ...] = ()

    def __post_init__(self) -> None:
        for name in ("transaction_statements", "address_resolution_statements", "mosaic_resolution_statements"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def resolve_address(self, unresolved: UnresolvedAddress, height: int,
                        primary_id: int, secondary_id: int = 0) -> Address:
        """
        Resolve an unresolved address at a block position.

        Args:
            unresolved: Address or namespace alias
            height: Block height
            primary_id: Source primary id
            secondary_id: Source secondary id

        Returns:
            The concrete address; ``unresolved`` itself when it is not an alias

        Raises:
            NotFoundError: If the block holds no resolution for the alias at that source
        """
        if not isinstance(unresolved, NamespaceId):
            return unresolved
        return self._resolve(self.address_resolution_statements, unresolved, height, primary_id, secondary_id)

    def resolve_mosaic_id(self, unresolved: UnresolvedMosaicId, height: int,
                          primary_id: int, secondary_id: int = 0) -> MosaicId:
        if not isinstance(unresolved, NamespaceId):
            return unresolved
        return self._resolve(self.mosaic_resolution_statements, unresolved, height, primary_id, secondary_id)

    def resolve_mosaic(self, mosaic: Mosaic, height: int,
                       primary_id: int, secondary_id: int = 0) -> Mosaic:
        """Resolve the id of a mosaic, keeping its amount."""
        if not mosaic.has_alias():
            return mosaic
        resolved = self.resolve_mosaic_id(mosaic.id, height, primary_id, secondary_id)
        return Mosaic(id=resolved, amount=mosaic.amount)

    @staticmethod
    def _resolve(statements: Sequence[ResolutionStatement], unresolved: NamespaceId,
                 height: int, primary_id: int, secondary_id: int):
        for statement in statements:
            if statement.height == height and statement.unresolved == unresolved:
                logger.debug(f"Resolving {unresolved!r} at {height}/({primary_id}, {secondary_id})")
                return statement.resolve(primary_id, secondary_id)
        raise NotFoundError(
            f"No resolution statement found on block {height} for unresolved {_describe(unresolved)}",
            ErrorCode.RESOLUTION_STATEMENT_NOT_FOUND,
            {"height": height, "unresolved": _describe(unresolved)},
        )


def _describe(value: Union[Address, MosaicId, NamespaceId]) -> str:
    if isinstance(value, Address):
        return value.plain()
    return value.to_hex()


__all__: List[str] = [
    "ReceiptType",
    "ResolutionType",
    "ReceiptSource",
    "Receipt",
    "BalanceChangeReceipt",
    "BalanceTransferReceipt",
    "ArtifactExpiryReceipt",
    "InflationReceipt",
    "BALANCE_CHANGE_TYPES",
    "BALANCE_TRANSFER_TYPES",
    "ARTIFACT_EXPIRY_TYPES",
    "TransactionStatement",
    "ResolutionEntry",
    "ResolutionStatement",
    "Statement",
]
