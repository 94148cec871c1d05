"""
Pagination streamers.

Turn a paged search into a lazy, forward-only sequence of entities. Pages are
fetched one at a time and only when the consumer asks for an item that is not
on a page already fetched; abandoning the iterator abandons the stream.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, AsyncIterator, Awaitable, Callable, Generic, Iterator, Optional, Type, TypeVar, Union
)

from ..model.account_info import AccountInfo
from ..model.receipt import ResolutionStatement, TransactionStatement
from ..model.search import (
    AccountSearchCriteria,
    Page,
    ResolutionStatementSearchCriteria,
    SearchCriteria,
    TransactionSearchCriteria,
    TransactionStatementSearchCriteria,
)
from ..model.transaction import Transaction
from ..runtime.errors import ParseError
from .repositories import AccountRepository, ReceiptRepository, Searcher, TransactionRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")
C = TypeVar("C", bound=SearchCriteria)

DEFAULT_PAGE_SIZE = 20

SearchFn = Callable[[Any], Page[Any]]
AsyncSearchFn = Callable[[Any], Awaitable[Page[Any]]]


class StreamState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EMITTING = "emitting"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


@dataclass
class PageCursor:
    """
    Position of one stream.

    Owned by a single ``search`` call and discarded when the stream ends.
    """
    page_size: int
    page_number: int = 1
    offset: Optional[str] = None
    pages_fetched: int = 0
    items_emitted: int = 0
    state: StreamState = StreamState.IDLE

    def request(self, criteria: C) -> C:
        """Criteria for the next fetch; the caller's criteria is never mutated."""
        update: dict = {"page_size": self.page_size, "page_number": self.page_number}
        if self.offset is not None:
            update["offset"] = self.offset
        return criteria.model_copy(update=update)

    def advance(self, key: Optional[str]) -> None:
        """
        Move past the last emitted item, by its key when it has one, else by page.

        Once a stream continues by key it stays keyed: the server ignores the
        page number when an offset is set.

        Raises:
            ParseError: If a keyed stream meets an item without a key
        """
        if key is not None:
            self.offset = key
        elif self.offset is not None:
            raise ParseError(f"Entity after offset {self.offset} has no id to continue from")
        else:
            self.page_number += 1


class _StreamLimits:
    """Stop conditions shared by the sync and async engines."""

    def __init__(self, limit: Optional[int], max_pages: Optional[int]):
        if limit is not None and limit < 0:
            raise ValueError("limit must be >= 0")
        if max_pages is not None and max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self.limit = limit
        self.max_pages = max_pages

    def items_reached(self, cursor: PageCursor) -> bool:
        return self.limit is not None and cursor.items_emitted >= self.limit

    def is_last(self, cursor: PageCursor, page: Page[Any]) -> bool:
        full = page.is_full() if page.page_size else len(page.data) >= cursor.page_size
        if not page.data or not full:
            return True
        if self.items_reached(cursor):
            return True
        return self.max_pages is not None and cursor.pages_fetched >= self.max_pages


class _StreamerBase(Generic[E, C]):

    def __init__(self, criteria_type: Type[C] = SearchCriteria,
                 cursor_key: Optional[Callable[[E], Optional[str]]] = None,
                 default_page_size: int = DEFAULT_PAGE_SIZE):
        self.criteria_type = criteria_type
        self.cursor_key = cursor_key
        self.default_page_size = default_page_size

    def _open(self, criteria: Optional[C]) -> tuple:
        criteria = criteria if criteria is not None else self.criteria_type()
        cursor = PageCursor(
            page_size=criteria.page_size or self.default_page_size,
            page_number=criteria.page_number or 1,
            offset=criteria.offset,
        )
        return criteria, cursor

    def _key(self, item: E) -> Optional[str]:
        return self.cursor_key(item) if self.cursor_key is not None else None


class PaginationStreamer(_StreamerBase[E, C]):
    """
    Lazy iterator over every entity matching a search.

    Example:
        ```python
        streamer = AccountPaginationStreamer(repository_factory.create_account_repository())
        for account in streamer.search(AccountSearchCriteria(page_size=50), limit=120):
            print(account.address)
        ```
    """

    def __init__(self, searcher: Union[Searcher[E, C], SearchFn],
                 criteria_type: Type[C] = SearchCriteria,
                 cursor_key: Optional[Callable[[E], Optional[str]]] = None,
                 default_page_size: int = DEFAULT_PAGE_SIZE):
        """
        Initialize the streamer.

        Args:
            searcher: Repository with a ``search`` method, or a page search function
            criteria_type: Criteria class used when ``search`` gets no criteria
            cursor_key: Continuation key of an entity (its id); pages advance by number when None
            default_page_size: Page size used when the criteria does not set one
        """
        super().__init__(criteria_type, cursor_key, default_page_size)
        self._search: SearchFn = searcher.search if isinstance(searcher, Searcher) else searcher

    def search(self, criteria: Optional[C] = None, limit: Optional[int] = None,
               max_pages: Optional[int] = None) -> Iterator[E]:
        """
        Stream the entities matching a criteria.

        Each call starts a new stream with its own cursor.

        Args:
            criteria: Search criteria; page size and start position are taken from it
            limit: Maximum number of entities, truncating mid-page
            max_pages: Maximum number of pages to fetch

        Returns:
            Lazy iterator; errors of a page fetch propagate when that page is needed
        """
        limits = _StreamLimits(limit, max_pages)
        criteria, cursor = self._open(criteria)
        return self._stream(criteria, cursor, limits)

    def _stream(self, criteria: C, cursor: PageCursor, limits: _StreamLimits) -> Iterator[E]:
        if limits.items_reached(cursor):
            cursor.state = StreamState.EXHAUSTED
            return
        try:
            while True:
                cursor.state = StreamState.FETCHING
                request = cursor.request(criteria)
                logger.debug(f"Fetching page {cursor.page_number} (offset={cursor.offset}, size={cursor.page_size})")
                page = self._search(request)
                cursor.pages_fetched += 1

                cursor.state = StreamState.EMITTING
                last: Optional[E] = None
                for item in page.data:
                    if limits.items_reached(cursor):
                        break
                    cursor.items_emitted += 1
                    last = item
                    yield item

                if limits.is_last(cursor, page):
                    cursor.state = StreamState.EXHAUSTED
                    logger.debug(f"Stream exhausted after {cursor.pages_fetched} pages, {cursor.items_emitted} items")
                    return
                cursor.advance(self._key(last))
        except GeneratorExit:
            cursor.state = StreamState.CANCELLED
            raise


class AsyncPaginationStreamer(_StreamerBase[E, C]):
    """
    Async variant of ``PaginationStreamer`` for coroutine searchers.

    Exactly one page request is awaited at a time; closing the iterator while
    it awaits a page cancels that request.
    """

    def __init__(self, searcher: AsyncSearchFn,
                 criteria_type: Type[C] = SearchCriteria,
                 cursor_key: Optional[Callable[[E], Optional[str]]] = None,
                 default_page_size: int = DEFAULT_PAGE_SIZE):
        super().__init__(criteria_type, cursor_key, default_page_size)
        self._search = searcher

    def search(self, criteria: Optional[C] = None, limit: Optional[int] = None,
               max_pages: Optional[int] = None) -> AsyncIterator[E]:
        limits = _StreamLimits(limit, max_pages)
        criteria, cursor = self._open(criteria)
        return self._stream(criteria, cursor, limits)

    async def _stream(self, criteria: C, cursor: PageCursor, limits: _StreamLimits) -> AsyncIterator[E]:
        if limits.items_reached(cursor):
            cursor.state = StreamState.EXHAUSTED
            return
        try:
            while True:
                cursor.state = StreamState.FETCHING
                logger.debug(f"Fetching page {cursor.page_number} (offset={cursor.offset}, size={cursor.page_size})")
                page = await self._search(cursor.request(criteria))
                cursor.pages_fetched += 1

                cursor.state = StreamState.EMITTING
                last: Optional[E] = None
                for item in page.data:
                    if limits.items_reached(cursor):
                        break
                    cursor.items_emitted += 1
                    last = item
                    yield item

                if limits.is_last(cursor, page):
                    cursor.state = StreamState.EXHAUSTED
                    return
                cursor.advance(self._key(last))
        except GeneratorExit:
            cursor.state = StreamState.CANCELLED
            raise


# =============================================================================
# Entity streamers
# =============================================================================

class AccountPaginationStreamer(PaginationStreamer[AccountInfo, AccountSearchCriteria]):
    """Streams accounts, continuing after the last account id."""

    def __init__(self, repository: AccountRepository):
        super().__init__(repository, AccountSearchCriteria, cursor_key=lambda account: account.record_id)


class TransactionPaginationStreamer(PaginationStreamer[Transaction, TransactionSearchCriteria]):
    """Streams transactions of one group, continuing after the last transaction id."""

    def __init__(self, repository: TransactionRepository):
        super().__init__(repository, TransactionSearchCriteria, cursor_key=_transaction_id)


class TransactionStatementPaginationStreamer(
    PaginationStreamer[TransactionStatement, TransactionStatementSearchCriteria]
):
    def __init__(self, repository: ReceiptRepository):
        super().__init__(repository.search_transaction_statements, TransactionStatementSearchCriteria)


class AddressResolutionStatementPaginationStreamer(
    PaginationStreamer[ResolutionStatement, ResolutionStatementSearchCriteria]
):
    def __init__(self, repository: ReceiptRepository):
        super().__init__(repository.search_address_resolution_statements, ResolutionStatementSearchCriteria)


class MosaicResolutionStatementPaginationStreamer(
    PaginationStreamer[ResolutionStatement, ResolutionStatementSearchCriteria]
):
    def __init__(self, repository: ReceiptRepository):
        super().__init__(repository.search_mosaic_resolution_statements, ResolutionStatementSearchCriteria)


def _transaction_id(transaction: Transaction) -> Optional[str]:
    info = transaction.transaction_info
    return info.id if info is not None else None
