"""
Transaction DTO mapping.

Maps the JSON transactions returned by the node to transaction models.
Addresses and mosaic ids arrive encoded and may be aliases; they are decoded
with ``model.unresolved`` and left unresolved.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Optional

from ..model.mosaic import Mosaic, MosaicSupplyChangeAction
from ..model.network import NetworkType
from ..model.transaction import (
    AggregateTransaction,
    AggregateTransactionInfo,
    Deadline,
    LockHashAlgorithm,
    MosaicSupplyChangeTransaction,
    SecretLockTransaction,
    SecretProofTransaction,
    Transaction,
    TransactionInfo,
    TransactionType,
    TransferTransaction,
)
from ..model.unresolved import to_unresolved_address, to_unresolved_mosaic
from ..runtime.convert import to_uint64
from ..runtime.errors import ErrorCode, ParseError

logger = logging.getLogger(__name__)

_ZERO_KEY = "0" * 64


def create_transaction_from_dto(dto: Dict[str, Any]) -> Transaction:
    """
    Create a transaction from its DTO.

    Args:
        dto: ``{"id": ..., "meta": {...}, "transaction": {...}}``

    Returns:
        Transaction model

    Raises:
        ParseError: If the transaction type is not supported or a field is malformed
    """
    if not isinstance(dto, dict) or not isinstance(dto.get("transaction"), dict):
        raise ParseError("Transaction DTO must hold a 'transaction' object")
    body = dto["transaction"]
    meta = dto.get("meta") or {}

    try:
        transaction_type = TransactionType(int(body["type"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Transaction type is not recognized: {body.get('type')!r}",
                         ErrorCode.UNKNOWN_TRANSACTION_TYPE, cause=e) from e

    factory = _FACTORIES.get(transaction_type)
    if factory is None:
        raise ParseError(f"Transaction type is not supported: {transaction_type.name}",
                         ErrorCode.UNKNOWN_TRANSACTION_TYPE)

    logger.debug(f"Mapping {transaction_type.name} transaction {dto.get('id')}")
    try:
        common = _common_fields(body, _transaction_info(dto, meta))
        return factory(body, common)
    except ParseError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Malformed {transaction_type.name} transaction: {e}", cause=e) from e


def _transaction_info(dto: Dict[str, Any], meta: Dict[str, Any]) -> Optional[TransactionInfo]:
    if not meta:
        return None
    if "aggregateHash" in meta or "aggregateId" in meta:
        return AggregateTransactionInfo(
            height=meta.get("height"),
            index=meta.get("index"),
            id=dto.get("id"),
            aggregate_hash=meta.get("aggregateHash"),
            aggregate_id=meta.get("aggregateId"),
        )
    return TransactionInfo(
        height=meta.get("height"),
        index=meta.get("index"),
        id=dto.get("id"),
        hash=meta.get("hash"),
        merkle_component_hash=meta.get("merkleComponentHash"),
    )


def _common_fields(body: Dict[str, Any], info: Optional[TransactionInfo]) -> Dict[str, Any]:
    signature = body.get("signature")
    signer = body.get("signerPublicKey")
    return {
        "network_type": NetworkType(int(body["network"])),
        "version": int(body.get("version", 1)),
        "deadline": Deadline.create_from_dto(body.get("deadline", 0)),
        "max_fee": to_uint64(body.get("maxFee", 0)),
        "signature": signature if signature and signature.strip("0") else None,
        "signer_public_key": signer if signer and signer != _ZERO_KEY else None,
        "transaction_info": info,
    }


def _mosaic(id: str, amount: Any) -> Mosaic:
    return Mosaic(id=to_unresolved_mosaic(id), amount=to_uint64(amount))


def _message(encoded: Optional[str]) -> Optional[str]:
    # first byte is the message type, 0 for plain text
    if not encoded:
        return None
    raw = bytes.fromhex(encoded)
    if raw[:1] == b"\x00":
        return raw[1:].decode("utf-8", errors="replace")
    return encoded


def _transfer(body: Dict[str, Any], common: Dict[str, Any]) -> Transaction:
    return TransferTransaction(
        recipient_address=to_unresolved_address(body["recipientAddress"]),
        mosaics=[_mosaic(mosaic["id"], mosaic["amount"]) for mosaic in body.get("mosaics", [])],
        message=_message(body.get("message")),
        **common,
    )


def _mosaic_supply_change(body: Dict[str, Any], common: Dict[str, Any]) -> Transaction:
    return MosaicSupplyChangeTransaction(
        mosaic_id=to_unresolved_mosaic(body["mosaicId"]),
        action=MosaicSupplyChangeAction(int(body["action"])),
        delta=body["delta"],
        **common,
    )


def _secret_lock(body: Dict[str, Any], common: Dict[str, Any]) -> Transaction:
    return SecretLockTransaction(
        mosaic=_mosaic(body["mosaicId"], body["amount"]),
        duration=to_uint64(body["duration"]),
        hash_algorithm=LockHashAlgorithm(int(body["hashAlgorithm"])),
        secret=body["secret"],
        recipient_address=to_unresolved_address(body["recipientAddress"]),
        **common,
    )


def _secret_proof(body: Dict[str, Any], common: Dict[str, Any]) -> Transaction:
    return SecretProofTransaction(
        hash_algorithm=LockHashAlgorithm(int(body["hashAlgorithm"])),
        secret=body["secret"],
        recipient_address=to_unresolved_address(body["recipientAddress"]),
        proof=body["proof"],
        **common,
    )


def _aggregate(body: Dict[str, Any], common: Dict[str, Any]) -> Transaction:
    inner = [create_transaction_from_dto(item) for item in body.get("transactions", [])]
    return AggregateTransaction(
        type=TransactionType(int(body["type"])),
        inner_transactions=inner,
        cosignatures=list(body.get("cosignatures", [])),
        **common,
    )


_FACTORIES: Dict[TransactionType, Callable[[Dict[str, Any], Dict[str, Any]], Transaction]] = {
    TransactionType.TRANSFER: _transfer,
    TransactionType.MOSAIC_SUPPLY_CHANGE: _mosaic_supply_change,
    TransactionType.SECRET_LOCK: _secret_lock,
    TransactionType.SECRET_PROOF: _secret_proof,
    TransactionType.AGGREGATE_COMPLETE: _aggregate,
    TransactionType.AGGREGATE_BONDED: _aggregate,
}


__all__: List[str] = ["create_transaction_from_dto"]
