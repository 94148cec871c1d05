# Transaction model for the Symbol protocol
# Covers the transaction variants that reference aliases, plus the aggregate container.

from __future__ import annotations
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from ..runtime.convert import is_hex, to_uint64
from ..runtime.errors import ErrorCode, PreconditionError
from .mosaic import Mosaic, MosaicSupplyChangeAction
from .network import NetworkType
from .receipt import Statement
from .unresolved import UnresolvedAddress, UnresolvedMosaicId


# =============================================================================
# Enums
# =============================================================================

class TransactionType(IntEnum):
    """Transaction type codes."""

    ACCOUNT_KEY_LINK = 0x414C
    AGGREGATE_COMPLETE = 0x4141
    AGGREGATE_BONDED = 0x4241
    HASH_LOCK = 0x4148
    SECRET_LOCK = 0x4152
    SECRET_PROOF = 0x4252
    MOSAIC_DEFINITION = 0x414D
    MOSAIC_SUPPLY_CHANGE = 0x424D
    NAMESPACE_REGISTRATION = 0x414E
    ADDRESS_ALIAS = 0x424E
    MOSAIC_ALIAS = 0x434E
    TRANSFER = 0x4154


class TransactionVersion(IntEnum):
    TRANSFER = 1
    MOSAIC_SUPPLY_CHANGE = 1
    SECRET_LOCK = 1
    SECRET_PROOF = 1
    AGGREGATE = 2


class LockHashAlgorithm(IntEnum):
    """Hash algorithm used to derive a lock secret from its proof."""

    SHA3_256 = 0
    HASH_160 = 1
    HASH_256 = 2


def lock_hash_algorithm_length_valid(algorithm: LockHashAlgorithm, secret: str) -> bool:
    """Check that a hex secret has the length produced by the hash algorithm."""
    if algorithm == LockHashAlgorithm.HASH_160:
        return is_hex(secret, 40) or is_hex(secret, 64)
    return is_hex(secret, 64)


# =============================================================================
# Supporting types
# =============================================================================

class Deadline(BaseModel):
    """Transaction deadline in milliseconds since the network epoch."""

    adjusted_value: int

    model_config = {"frozen": True}

    @classmethod
    def create_from_dto(cls, value: Any) -> Deadline:
        return cls(adjusted_value=to_uint64(value))


class TransactionInfo(BaseModel):
    """Block metadata of a confirmed transaction."""

    height: Optional[int] = None
    index: Optional[int] = None
    id: Optional[str] = None
    hash: Optional[str] = None
    merkle_component_hash: Optional[str] = Field(default=None, alias="merkleComponentHash")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("height", mode="before")
    @classmethod
    def _height_uint64(cls, value: Any) -> Optional[int]:
        return None if value is None else to_uint64(value)


class AggregateTransactionInfo(TransactionInfo):
    """Block metadata of a transaction embedded in an aggregate."""

    aggregate_hash: Optional[str] = Field(default=None, alias="aggregateHash")
    aggregate_id: Optional[str] = Field(default=None, alias="aggregateId")


class SignedTransaction(BaseModel):
    """Signed payload ready to announce; produced by an external codec and signer."""

    payload: str
    hash: str
    signer_public_key: str = Field(alias="signerPublicKey")
    type: TransactionType
    network_type: NetworkType = Field(alias="networkType")

    model_config = {"frozen": True, "populate_by_name": True}


# =============================================================================
# Transactions
# =============================================================================

class Transaction(BaseModel):
    """
    Base transaction.

    Subclasses holding aliases override ``has_aliases`` and ``_resolve_fields``;
    ``resolve_aliases`` then produces a copy with concrete values.
    """

    type: TransactionType
    network_type: NetworkType
    version: int = 1
    deadline: Deadline = Field(default_factory=lambda: Deadline(adjusted_value=0))
    max_fee: int = 0
    signature: Optional[str] = None
    signer_public_key: Optional[str] = None
    transaction_info: Optional[TransactionInfo] = None

    model_config = {"frozen": True}

    def is_confirmed(self) -> bool:
        info = self.transaction_info
        return info is not None and info.height is not None and info.height > 0

    def is_embedded(self) -> bool:
        return isinstance(self.transaction_info, AggregateTransactionInfo)

    def has_aliases(self) -> bool:
        """True when at least one referenced address or mosaic id is an alias."""
        return False

    def _resolve_fields(self, statement: Statement, height: int,
                        primary_id: int, secondary_id: int) -> Dict[str, Any]:
        return {}

    def source_position(self, aggregate_index: Optional[int] = None) -> Tuple[int, int, int]:
        """
        Block height and receipt source of this transaction.

        Top level transactions use ``(index + 1, 0)``; inner transactions of an
        aggregate use ``(aggregate_index + 1, index + 1)``.

        Args:
            aggregate_index: Index of the enclosing aggregate in its block

        Returns:
            Tuple of height, primary id and secondary id

        Raises:
            PreconditionError: If the transaction carries no height or index, or
                it is embedded in an aggregate and ``aggregate_index`` is missing
        """
        info = self.transaction_info
        if info is None or info.height is None or info.index is None:
            raise PreconditionError(
                "Transaction height or index undefined; aliases can only be resolved for confirmed transactions",
                ErrorCode.TRANSACTION_NOT_CONFIRMED,
            )
        if aggregate_index is None and self.is_embedded():
            raise PreconditionError(
                "Embedded transaction needs the index of its aggregate to resolve aliases",
                ErrorCode.AGGREGATE_INDEX_UNDEFINED,
                details={"aggregate_id": info.aggregate_id, "aggregate_hash": info.aggregate_hash},
            )
        if aggregate_index is None:
            return info.height, info.index + 1, 0
        return info.height, aggregate_index + 1, info.index + 1

    def resolve_aliases(self, statement: Statement, aggregate_index: Optional[int] = None) -> Transaction:
        """
        Replace aliases with the values they resolved to in the block.

        Args:
            statement: Statement of the block holding this transaction
            aggregate_index: Index of the enclosing aggregate, for inner transactions

        Returns:
            ``self`` when nothing is aliased, otherwise a resolved copy
        """
        if not self.has_aliases():
            return self
        height, primary_id, secondary_id = self.source_position(aggregate_index)
        return self.model_copy(update=self._resolve_fields(statement, height, primary_id, secondary_id))


class TransferTransaction(Transaction):
    """Send mosaics and an optional message to a recipient."""

    type: TransactionType = TransactionType.TRANSFER
    version: int = TransactionVersion.TRANSFER
    recipient_address: UnresolvedAddress
    mosaics: List[Mosaic] = Field(default_factory=list)
    message: Optional[str] = None

    def has_aliases(self) -> bool:
        return self.recipient_address.is_alias() or any(mosaic.has_alias() for mosaic in self.mosaics)

    def _resolve_fields(self, statement, height, primary_id, secondary_id):
        return {
            "recipient_address": statement.resolve_address(self.recipient_address, height, primary_id, secondary_id),
            "mosaics": [statement.resolve_mosaic(mosaic, height, primary_id, secondary_id) for mosaic in self.mosaics],
        }


class MosaicSupplyChangeTransaction(Transaction):
    """Increase or decrease the supply of a mutable mosaic."""

    type: TransactionType = TransactionType.MOSAIC_SUPPLY_CHANGE
    version: int = TransactionVersion.MOSAIC_SUPPLY_CHANGE
    mosaic_id: UnresolvedMosaicId
    action: MosaicSupplyChangeAction
    delta: int

    @field_validator("delta", mode="before")
    @classmethod
    def _delta_uint64(cls, value: Any) -> int:
        return to_uint64(value)

    def has_aliases(self) -> bool:
        return self.mosaic_id.is_alias()

    def _resolve_fields(self, statement, height, primary_id, secondary_id):
        return {"mosaic_id": statement.resolve_mosaic_id(self.mosaic_id, height, primary_id, secondary_id)}


class SecretLockTransaction(Transaction):
    """Lock funds until the proof of ``secret`` is revealed or ``duration`` blocks pass."""

    type: TransactionType = TransactionType.SECRET_LOCK
    version: int = TransactionVersion.SECRET_LOCK
    mosaic: Mosaic
    duration: int
    hash_algorithm: LockHashAlgorithm
    secret: str
    recipient_address: UnresolvedAddress

    @model_validator(mode="after")
    def _check_secret(self) -> SecretLockTransaction:
        if not lock_hash_algorithm_length_valid(self.hash_algorithm, self.secret):
            raise ValueError("HashAlgorithm and Secret have incompatible length or not hexadecimal string")
        return self

    def has_aliases(self) -> bool:
        return self.recipient_address.is_alias() or self.mosaic.has_alias()

    def _resolve_fields(self, statement, height, primary_id, secondary_id):
        return {
            "recipient_address": statement.resolve_address(self.recipient_address, height, primary_id, secondary_id),
            "mosaic": statement.resolve_mosaic(self.mosaic, height, primary_id, secondary_id),
        }


class SecretProofTransaction(Transaction):
    """Reveal the proof unlocking a secret lock."""

    type: TransactionType = TransactionType.SECRET_PROOF
    version: int = TransactionVersion.SECRET_PROOF
    hash_algorithm: LockHashAlgorithm
    secret: str
    recipient_address: UnresolvedAddress
    proof: str

    @model_validator(mode="after")
    def _check_secret(self) -> SecretProofTransaction:
        if not lock_hash_algorithm_length_valid(self.hash_algorithm, self.secret):
            raise ValueError("HashAlgorithm and Secret have incompatible length or not hexadecimal string")
        return self

    def has_aliases(self) -> bool:
        return self.recipient_address.is_alias()

    def _resolve_fields(self, statement, height, primary_id, secondary_id):
        return {
            "recipient_address": statement.resolve_address(self.recipient_address, height, primary_id, secondary_id),
        }


class AggregateTransaction(Transaction):
    """Container of inner transactions executed atomically."""

    type: TransactionType = TransactionType.AGGREGATE_COMPLETE
    version: int = TransactionVersion.AGGREGATE
    inner_transactions: List[Transaction] = Field(default_factory=list)
    cosignatures: List[Dict[str, Any]] = Field(default_factory=list)

    def has_aliases(self) -> bool:
        return any(transaction.has_aliases() for transaction in self.inner_transactions)

    def resolve_aliases(self, statement: Statement, aggregate_index: Optional[int] = None) -> AggregateTransaction:
        """
        Resolve the aliases of every inner transaction.

        Inner transactions without their own block metadata take the aggregate's
        height and their position in the aggregate.
        """
        if not self.has_aliases():
            return self
        height, primary_id, _ = self.source_position()
        index = primary_id - 1
        resolved: List[Transaction] = []
        for position, inner in enumerate(self.inner_transactions):
            info = inner.transaction_info
            if info is None or info.index is None or info.height is None:
                inner_index = position if info is None or info.index is None else info.index
                inner = inner.model_copy(update={
                    "transaction_info": AggregateTransactionInfo(height=height, index=inner_index),
                })
            resolved.append(inner.resolve_aliases(statement, index))
        return self.model_copy(update={"inner_transactions": resolved})


__all__ = [
    "TransactionType",
    "TransactionVersion",
    "LockHashAlgorithm",
    "lock_hash_algorithm_length_valid",
    "Deadline",
    "TransactionInfo",
    "AggregateTransactionInfo",
    "SignedTransaction",
    "Transaction",
    "TransferTransaction",
    "MosaicSupplyChangeTransaction",
    "SecretLockTransaction",
    "SecretProofTransaction",
    "AggregateTransaction",
]
