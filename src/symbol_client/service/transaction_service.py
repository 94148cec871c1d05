"""
Transaction service.

Resolves the aliases of confirmed transactions against the statements of the
blocks that hold them.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from ..infrastructure.repositories import ReceiptRepository, TransactionRepository
from ..model.receipt import Statement
from ..model.transaction import Transaction
from ..runtime.errors import ErrorCode, PreconditionError

logger = logging.getLogger(__name__)


class TransactionService:
    """High level operations over transactions."""

    def __init__(self, receipt_repository: ReceiptRepository,
                 transaction_repository: Optional[TransactionRepository] = None):
        """
        Initialize the service.

        Args:
            receipt_repository: Source of block statements
            transaction_repository: Used to look up the aggregates of embedded
                transactions; without it embedded transactions with aliases
                cannot be resolved
        """
        self.receipt_repository = receipt_repository
        self.transaction_repository = transaction_repository

    def resolve_aliases(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        """
        Resolve the aliases of confirmed transactions.

        Each block statement is fetched at most once, and only for blocks
        holding a transaction with aliases. Embedded transactions are resolved
        at the position of their aggregate, which is fetched once per
        aggregate id.

        Args:
            transactions: Confirmed transactions

        Returns:
            Resolved transactions, in the input order

        Raises:
            PreconditionError: If a transaction with aliases is not confirmed,
                or is embedded and its aggregate cannot be looked up
            NotFoundError: If an alias has no resolution in its block
        """
        transactions = list(transactions)
        statements: Dict[int, Statement] = {}
        aggregate_indexes: Dict[str, int] = {}
        resolved: List[Transaction] = []
        for transaction in transactions:
            if not transaction.has_aliases():
                resolved.append(transaction)
                continue
            aggregate_index = None
            if transaction.is_embedded():
                aggregate_index = self._aggregate_index(transaction, aggregate_indexes)
            height = transaction.source_position(aggregate_index)[0]
            if height not in statements:
                logger.debug(f"Loading statement of block {height}")
                statements[height] = self.receipt_repository.get_block_receipts(height)
            resolved.append(transaction.resolve_aliases(statements[height], aggregate_index))
        return resolved

    def resolve_transaction_aliases(self, transaction: Transaction) -> Transaction:
        return self.resolve_aliases([transaction])[0]

    def _aggregate_index(self, transaction: Transaction, cache: Dict[str, int]) -> int:
        aggregate_id = transaction.transaction_info.aggregate_id or transaction.transaction_info.aggregate_hash
        if aggregate_id is None or self.transaction_repository is None:
            raise PreconditionError(
                "Embedded transaction needs its aggregate to resolve aliases",
                ErrorCode.AGGREGATE_INDEX_UNDEFINED,
                details={"aggregate_id": aggregate_id},
            )
        if aggregate_id not in cache:
            logger.debug(f"Loading aggregate {aggregate_id}")
            aggregate = self.transaction_repository.get_transaction(aggregate_id)
            info = aggregate.transaction_info
            if info is None or info.index is None:
                raise PreconditionError(
                    f"Aggregate {aggregate_id} has no index in its block",
                    ErrorCode.TRANSACTION_NOT_CONFIRMED,
                )
            cache[aggregate_id] = info.index
        return cache[aggregate_id]
