"""
Tests for transaction DTO mapping.
"""

import pytest

from helpers import (
    CURRENCY_MOSAIC_HEX,
    SYMBOL_XYM_NAMESPACE_HEX,
    SYMBOL_XYM_UNRESOLVED_ADDRESS,
    TESTNET_ADDRESS_HEX,
)
from symbol_client.infrastructure.transaction_dto import create_transaction_from_dto
from symbol_client.model import (
    Address,
    AggregateTransaction,
    AggregateTransactionInfo,
    LockHashAlgorithm,
    MosaicId,
    MosaicSupplyChangeAction,
    MosaicSupplyChangeTransaction,
    NamespaceId,
    NetworkType,
    SecretLockTransaction,
    TransactionType,
    TransferTransaction,
)
from symbol_client.runtime.errors import ErrorCode, ParseError

SIGNER = "B4F12E7C9F6946091E2CB8B6D3A12B50D17CCBBF646386EA27CE2946A7423DCF"
SECRET = "3FC8BA10229AB5778D05D9C4B7F56676A88BF9295C185ACFC0F961DB5408CAFE"


def transfer_body(**overrides):
    body = {
        "type": TransactionType.TRANSFER.value,
        "network": NetworkType.TEST_NET.value,
        "version": 1,
        "deadline": "45000000",
        "maxFee": "20000",
        "signature": "A" * 128,
        "signerPublicKey": SIGNER,
        "recipientAddress": SYMBOL_XYM_UNRESOLVED_ADDRESS,
        "mosaics": [
            {"id": SYMBOL_XYM_NAMESPACE_HEX, "amount": "10"},
            {"id": CURRENCY_MOSAIC_HEX, "amount": "5"},
        ],
        "message": "0048656C6C6F",
    }
    body.update(overrides)
    return body


class TestTransfer:
    """Test transfer mapping."""

    def test_confirmed_transfer(self):
        dto = {
            "id": "5F2AA4A5E5AC8B001E8B8E5C",
            "meta": {"height": "1500", "index": 3, "hash": "C" * 64, "merkleComponentHash": "D" * 64},
            "transaction": transfer_body(),
        }
        transaction = create_transaction_from_dto(dto)

        assert isinstance(transaction, TransferTransaction)
        assert transaction.network_type == NetworkType.TEST_NET
        assert transaction.max_fee == 20000
        assert transaction.deadline.adjusted_value == 45000000
        assert transaction.signer_public_key == SIGNER
        assert transaction.recipient_address == NamespaceId("symbol.xym")
        assert transaction.mosaics[0].id == NamespaceId("symbol.xym")
        assert transaction.mosaics[1].id == MosaicId(CURRENCY_MOSAIC_HEX)
        assert transaction.mosaics[0].amount == 10
        assert transaction.message == "Hello"
        assert transaction.has_aliases()

        info = transaction.transaction_info
        assert info.height == 1500
        assert info.index == 3
        assert info.id == "5F2AA4A5E5AC8B001E8B8E5C"
        assert info.merkle_component_hash == "D" * 64
        assert transaction.is_confirmed()

    def test_concrete_recipient(self):
        transaction = create_transaction_from_dto({"transaction": transfer_body(
            recipientAddress=TESTNET_ADDRESS_HEX, mosaics=[], message=None,
        )})
        assert transaction.recipient_address == Address.create_from_encoded(TESTNET_ADDRESS_HEX)
        assert transaction.message is None
        assert transaction.transaction_info is None
        assert not transaction.is_confirmed()
        assert not transaction.has_aliases()

    def test_zero_signature_is_dropped(self):
        transaction = create_transaction_from_dto({"transaction": transfer_body(
            signature="0" * 128, signerPublicKey="0" * 64,
        )})
        assert transaction.signature is None
        assert transaction.signer_public_key is None


class TestOtherVariants:

    def test_mosaic_supply_change(self):
        transaction = create_transaction_from_dto({"transaction": {
            "type": TransactionType.MOSAIC_SUPPLY_CHANGE.value,
            "network": NetworkType.TEST_NET.value,
            "mosaicId": SYMBOL_XYM_NAMESPACE_HEX,
            "action": 0,
            "delta": "500",
        }})
        assert isinstance(transaction, MosaicSupplyChangeTransaction)
        assert transaction.action == MosaicSupplyChangeAction.DECREASE
        assert transaction.delta == 500
        assert transaction.mosaic_id == NamespaceId("symbol.xym")

    def test_secret_lock(self):
        transaction = create_transaction_from_dto({"transaction": {
            "type": TransactionType.SECRET_LOCK.value,
            "network": NetworkType.TEST_NET.value,
            "mosaicId": CURRENCY_MOSAIC_HEX,
            "amount": "10",
            "duration": "480",
            "hashAlgorithm": 0,
            "secret": SECRET,
            "recipientAddress": TESTNET_ADDRESS_HEX,
        }})
        assert isinstance(transaction, SecretLockTransaction)
        assert transaction.hash_algorithm == LockHashAlgorithm.SHA3_256
        assert transaction.duration == 480
        assert transaction.mosaic.amount == 10

    def test_aggregate(self):
        inner_meta = {"height": "1500", "index": 0, "aggregateHash": "E" * 64, "aggregateId": "5F2A"}
        transaction = create_transaction_from_dto({
            "meta": {"height": "1500", "index": 2, "hash": "E" * 64},
            "transaction": {
                "type": TransactionType.AGGREGATE_COMPLETE.value,
                "network": NetworkType.TEST_NET.value,
                "version": 2,
                "transactions": [{"meta": inner_meta, "transaction": transfer_body()}],
                "cosignatures": [],
            },
        })
        assert isinstance(transaction, AggregateTransaction)
        assert transaction.type == TransactionType.AGGREGATE_COMPLETE
        inner = transaction.inner_transactions[0]
        assert isinstance(inner, TransferTransaction)
        assert isinstance(inner.transaction_info, AggregateTransactionInfo)
        assert inner.transaction_info.aggregate_hash == "E" * 64
        assert inner.is_embedded()
        assert transaction.has_aliases()


class TestErrors:

    def test_missing_transaction(self):
        with pytest.raises(ParseError):
            create_transaction_from_dto({"meta": {}})

    def test_unknown_type(self):
        with pytest.raises(ParseError) as exc_info:
            create_transaction_from_dto({"transaction": transfer_body(type=1)})
        assert exc_info.value.code == ErrorCode.UNKNOWN_TRANSACTION_TYPE

    def test_unsupported_type(self):
        with pytest.raises(ParseError) as exc_info:
            create_transaction_from_dto({"transaction": transfer_body(type=TransactionType.HASH_LOCK.value)})
        assert exc_info.value.code == ErrorCode.UNKNOWN_TRANSACTION_TYPE

    def test_malformed_field(self):
        with pytest.raises(ParseError):
            create_transaction_from_dto({"transaction": transfer_body(recipientAddress="XYZ")})

    def test_invalid_secret(self):
        body = {
            "type": TransactionType.SECRET_LOCK.value,
            "network": NetworkType.TEST_NET.value,
            "mosaicId": CURRENCY_MOSAIC_HEX,
            "amount": "10",
            "duration": "480",
            "hashAlgorithm": 0,
            "secret": "ABCD",
            "recipientAddress": TESTNET_ADDRESS_HEX,
        }
        with pytest.raises(ParseError):
            create_transaction_from_dto({"transaction": body})
