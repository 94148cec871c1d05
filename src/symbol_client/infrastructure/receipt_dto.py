"""
Statement DTO mapping.

Converts the JSON payloads of the statements endpoints into the immutable
``Statement`` model. Receipts are dispatched on their ``type`` code and
unresolved values are decoded as a tagged variant; anything unrecognized
raises ``ParseError`` instead of falling back to a default.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Union

from ..model.account import Address
from ..model.mosaic_id import MosaicId
from ..model.namespace import NamespaceId
from ..model.receipt import (
    ARTIFACT_EXPIRY_TYPES,
    BALANCE_CHANGE_TYPES,
    BALANCE_TRANSFER_TYPES,
    ArtifactExpiryReceipt,
    BalanceChangeReceipt,
    BalanceTransferReceipt,
    InflationReceipt,
    Receipt,
    ReceiptSource,
    ReceiptType,
    ResolutionEntry,
    ResolutionStatement,
    ResolutionType,
    Statement,
    TransactionStatement,
)
from ..model.unresolved import to_unresolved_address, to_unresolved_mosaic
from ..runtime.convert import is_hex, to_uint64
from ..runtime.errors import ErrorCode, ParseError

logger = logging.getLogger(__name__)

Unresolved = Union[Address, MosaicId, NamespaceId]


def create_statement_from_dto(dto: Dict[str, Any]) -> Statement:
    """
    Create a block statement from its DTO.

    Args:
        dto: Mapping with ``transactionStatements``, ``addressResolutionStatements``
            and ``mosaicResolutionStatements`` lists

    Returns:
        Statement instance

    Raises:
        ParseError: On an unknown receipt type or an unrecognized value shape
    """
    if not isinstance(dto, dict):
        raise ParseError(f"Statement DTO must be an object, got {type(dto).__name__}")
    statement = Statement(
        transaction_statements=[
            create_transaction_statement(item) for item in dto.get("transactionStatements") or []
        ],
        address_resolution_statements=[
            create_resolution_statement(item, ResolutionType.ADDRESS)
            for item in dto.get("addressResolutionStatements") or []
        ],
        mosaic_resolution_statements=[
            create_resolution_statement(item, ResolutionType.MOSAIC)
            for item in dto.get("mosaicResolutionStatements") or []
        ],
    )
    logger.debug(
        f"Parsed statement: {len(statement.transaction_statements)} transaction, "
        f"{len(statement.address_resolution_statements)} address and "
        f"{len(statement.mosaic_resolution_statements)} mosaic resolution statements"
    )
    return statement


def create_transaction_statement(dto: Dict[str, Any]) -> TransactionStatement:
    body = _unwrap(dto)
    return _guard(lambda: TransactionStatement(
        height=to_uint64(body["height"]),
        source=_source(body["source"]),
        receipts=[create_receipt(receipt) for receipt in body.get("receipts") or []],
    ), "transaction statement")


def create_resolution_statement(dto: Dict[str, Any], resolution_type: ResolutionType) -> ResolutionStatement:
    body = _unwrap(dto)
    resolved: Callable[[Any], Union[Address, MosaicId]] = (
        _resolved_address if resolution_type == ResolutionType.ADDRESS else _resolved_mosaic
    )
    return _guard(lambda: ResolutionStatement(
        resolution_type=resolution_type,
        height=to_uint64(body["height"]),
        unresolved=extract_unresolved(body["unresolved"], resolution_type),
        resolution_entries=[
            ResolutionEntry(source=_source(entry["source"]), resolved=resolved(entry["resolved"]))
            for entry in body.get("resolutionEntries") or []
        ],
    ), "resolution statement")


def create_receipt(dto: Dict[str, Any]) -> Receipt:
    """
    Create a receipt, dispatching on its type code.

    Args:
        dto: Receipt DTO with ``type`` and ``version``

    Returns:
        The matching receipt variant

    Raises:
        ParseError: If the type code is unknown or a field is malformed
    """
    try:
        receipt_type = ReceiptType(int(dto["type"]))
        version = int(dto.get("version", 1))
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ParseError(
            f"Receipt type is not recognized: {dto.get('type') if isinstance(dto, dict) else dto!r}",
            ErrorCode.UNKNOWN_RECEIPT_TYPE,
            cause=e,
        ) from e

    if receipt_type in BALANCE_CHANGE_TYPES:
        return _guard(lambda: BalanceChangeReceipt(
            type=receipt_type,
            version=version,
            target_address=_resolved_address(dto["targetAddress"]),
            mosaic_id=MosaicId(dto["mosaicId"]),
            amount=to_uint64(dto["amount"]),
        ), "balance change receipt")
    if receipt_type in BALANCE_TRANSFER_TYPES:
        return _guard(lambda: BalanceTransferReceipt(
            type=receipt_type,
            version=version,
            sender_address=_resolved_address(dto["senderAddress"]),
            recipient_address=_resolved_address(dto["recipientAddress"]),
            mosaic_id=MosaicId(dto["mosaicId"]),
            amount=to_uint64(dto["amount"]),
        ), "balance transfer receipt")
    if receipt_type in ARTIFACT_EXPIRY_TYPES:
        artifact = MosaicId if receipt_type == ReceiptType.MOSAIC_EXPIRED else NamespaceId.create_from_encoded
        return _guard(lambda: ArtifactExpiryReceipt(
            type=receipt_type,
            version=version,
            artifact_id=artifact(dto["artifactId"]),
        ), "artifact expiry receipt")
    if receipt_type == ReceiptType.INFLATION:
        return _guard(lambda: InflationReceipt(
            type=receipt_type,
            version=version,
            mosaic_id=MosaicId(dto["mosaicId"]),
            amount=to_uint64(dto["amount"]),
        ), "inflation receipt")

    raise ParseError(f"Receipt type is not supported: {receipt_type.name}", ErrorCode.UNKNOWN_RECEIPT_TYPE)


def extract_unresolved(value: Any, resolution_type: ResolutionType) -> Unresolved:
    """
    Decode the ``unresolved`` field of a resolution statement.

    Shapes are tried in a fixed order: an already typed value, an encoded hex
    string, an ``{address, networkType}`` object and an ``{id, name}``
    namespace descriptor.

    Args:
        value: Raw field value
        resolution_type: Whether the statement resolves addresses or mosaics

    Returns:
        Address, MosaicId or NamespaceId

    Raises:
        ParseError: If the value matches none of the shapes
    """
    is_address = resolution_type == ResolutionType.ADDRESS

    if isinstance(value, NamespaceId):
        return value
    if isinstance(value, Address if is_address else MosaicId):
        return value

    if isinstance(value, str):
        try:
            return to_unresolved_address(value) if is_address else to_unresolved_mosaic(value)
        except ValueError as e:
            raise ParseError(f"Unresolved value {value!r} is not a valid encoded {resolution_type.value}",
                             ErrorCode.INVALID_UNRESOLVED, cause=e) from e

    if isinstance(value, dict):
        if is_address and isinstance(value.get("address"), str) and "networkType" in value:
            try:
                return Address.create_from_raw_address(value["address"])
            except ValueError as e:
                raise ParseError(f"Unresolved address {value['address']!r} is not valid",
                                 ErrorCode.INVALID_UNRESOLVED, cause=e) from e
        if isinstance(value.get("id"), str) and is_hex(value["id"], 16) and "name" in value:
            namespace_id = NamespaceId.create_from_encoded(value["id"])
            namespace_id.full_name = value.get("name")
            return namespace_id

    raise ParseError(f"Unresolved type is not recognized: {value!r}", ErrorCode.INVALID_UNRESOLVED)


def _unwrap(dto: Any) -> Dict[str, Any]:
    if not isinstance(dto, dict):
        raise ParseError(f"Statement entry must be an object, got {type(dto).__name__}")
    body = dto.get("statement", dto)
    if not isinstance(body, dict):
        raise ParseError("Statement body must be an object")
    return body


def _source(dto: Dict[str, Any]) -> ReceiptSource:
    return ReceiptSource(primary_id=int(dto["primaryId"]), secondary_id=int(dto.get("secondaryId", 0)))


def _resolved_address(value: Any) -> Address:
    if isinstance(value, Address):
        return value
    if isinstance(value, dict) and "address" in value:
        return Address.create_from_raw_address(value["address"])
    return Address.create_from_encoded(value)


def _resolved_mosaic(value: Any) -> MosaicId:
    if isinstance(value, MosaicId):
        return value
    return MosaicId(value)


def _guard(build: Callable[[], Any], what: str) -> Any:
    try:
        return build()
    except ParseError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Malformed {what}: {e}", cause=e) from e


__all__: List[str] = [
    "create_statement_from_dto",
    "create_transaction_statement",
    "create_resolution_statement",
    "create_receipt",
    "extract_unresolved",
]
