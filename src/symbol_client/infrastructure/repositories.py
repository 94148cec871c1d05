"""
Repository interfaces.

Each repository is an abstract collaborator; the HTTP implementations live in
``infrastructure.http``. Tests substitute mocks.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..model.account import Address
from ..model.account_info import AccountInfo
from ..model.finalization import FinalizationProof
from ..model.receipt import ResolutionStatement, Statement, TransactionStatement
from ..model.search import (
    AccountSearchCriteria,
    Page,
    ResolutionStatementSearchCriteria,
    SearchCriteria,
    TransactionGroup,
    TransactionSearchCriteria,
    TransactionStatementSearchCriteria,
)
from ..model.transaction import Transaction

E = TypeVar("E")
C = TypeVar("C", bound=SearchCriteria)


class Searcher(ABC, Generic[E, C]):
    """Anything that returns one page of entities for a criteria."""

    @abstractmethod
    def search(self, criteria: C) -> Page[E]:
        """
        Fetch one page.

        Args:
            criteria: Search criteria including page size, number and offset

        Returns:
            Page of entities
        """


class AccountRepository(Searcher[AccountInfo, AccountSearchCriteria]):

    @abstractmethod
    def get_account_info(self, address: Address) -> AccountInfo:
        """Account state for an address."""


class TransactionRepository(Searcher[Transaction, TransactionSearchCriteria]):

    @abstractmethod
    def get_transaction(self, transaction_id: str,
                        group: TransactionGroup = TransactionGroup.CONFIRMED) -> Transaction:
        """Transaction by id or hash."""


class ReceiptRepository(ABC):
    """Block statements: receipts and alias resolutions."""

    @abstractmethod
    def search_transaction_statements(
        self, criteria: TransactionStatementSearchCriteria
    ) -> Page[TransactionStatement]:
        ...

    @abstractmethod
    def search_address_resolution_statements(
        self, criteria: ResolutionStatementSearchCriteria
    ) -> Page[ResolutionStatement]:
        ...

    @abstractmethod
    def search_mosaic_resolution_statements(
        self, criteria: ResolutionStatementSearchCriteria
    ) -> Page[ResolutionStatement]:
        ...

    @abstractmethod
    def get_block_receipts(self, height: int) -> Statement:
        """
        Complete statement of a block.

        Args:
            height: Block height

        Returns:
            Statement with every receipt and resolution of the block
        """


class FinalizationRepository(ABC):

    @abstractmethod
    def get_finalization_proof_at_epoch(self, epoch: int) -> FinalizationProof:
        """Finalization proof for a finalization epoch."""

    @abstractmethod
    def get_finalization_proof_at_height(self, height: int) -> FinalizationProof:
        """Finalization proof covering a block height."""
