"""
Tests for the pagination streamers.

Page fetches are counted through mock search functions; the streamer must
fetch lazily and never more pages than the consumer needs.
"""

import itertools
from unittest.mock import AsyncMock, Mock

import pytest

from helpers import page_of, paged_searcher
from symbol_client.infrastructure.repositories import AccountRepository, ReceiptRepository
from symbol_client.infrastructure.streamer import (
    AccountPaginationStreamer,
    AsyncPaginationStreamer,
    PageCursor,
    PaginationStreamer,
    TransactionStatementPaginationStreamer,
)
from symbol_client.model import (
    AccountInfo,
    AccountSearchCriteria,
    Order,
    SearchCriteria,
    TransactionStatementSearchCriteria,
)
from symbol_client.runtime.errors import ParseError, TransportError


class TestPageCursor:

    def test_request_copies_criteria(self):
        criteria = SearchCriteria(page_size=2, order=Order.DESC)
        cursor = PageCursor(page_size=2, page_number=3)
        request = cursor.request(criteria)
        assert request.page_number == 3
        assert request.order == Order.DESC
        assert criteria.page_number is None

    def test_advance_by_page(self):
        cursor = PageCursor(page_size=2)
        cursor.advance(None)
        assert cursor.page_number == 2
        assert cursor.offset is None

    def test_advance_by_key(self):
        cursor = PageCursor(page_size=2)
        cursor.advance("5F2A")
        assert cursor.page_number == 1
        assert cursor.offset == "5F2A"

    def test_keyed_cursor_stays_keyed(self):
        cursor = PageCursor(page_size=2)
        cursor.advance("B")
        with pytest.raises(ParseError):
            cursor.advance(None)
        assert cursor.page_number == 1
        assert cursor.offset == "B"

    def test_page_is_full(self):
        assert page_of([1, 2], 2).is_full()
        assert not page_of([1], 2).is_full()
        assert not page_of([1, 2], 0).is_full()


class TestPaginationStreamer:
    """Test page fetching and termination."""

    def test_three_full_pages_then_empty(self):
        search = paged_searcher(list(range(6)))
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=2)))
        assert items == [0, 1, 2, 3, 4, 5]
        assert search.call_count == 4

    def test_three_full_pages_then_partial(self):
        search = paged_searcher(list(range(7)))
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=2)))
        assert items == list(range(7))
        assert search.call_count == 4

    def test_limit_truncates_mid_page(self):
        search = paged_searcher(list(range(100)))
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=2), limit=5))
        assert items == [0, 1, 2, 3, 4]
        assert search.call_count == 3

    def test_limit_on_page_boundary(self):
        search = paged_searcher(list(range(100)))
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=2), limit=4))
        assert len(items) == 4
        assert search.call_count == 2

    def test_limit_zero(self):
        search = paged_searcher(list(range(10)))
        assert list(PaginationStreamer(search).search(SearchCriteria(page_size=2), limit=0)) == []
        search.assert_not_called()

    def test_single_short_page(self):
        search = paged_searcher([1, 2, 3])
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=10)))
        assert items == [1, 2, 3]
        assert search.call_count == 1

    def test_max_pages(self):
        search = paged_searcher(list(range(100)))
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=3), max_pages=2))
        assert items == [0, 1, 2, 3, 4, 5]
        assert search.call_count == 2

    def test_invalid_arguments(self):
        streamer = PaginationStreamer(paged_searcher([]))
        with pytest.raises(ValueError):
            streamer.search(limit=-1)
        with pytest.raises(ValueError):
            streamer.search(max_pages=0)

    def test_lazy_fetching(self):
        """No page is requested before the first item is pulled."""
        search = paged_searcher(list(range(10)))
        stream = PaginationStreamer(search).search(SearchCriteria(page_size=2))
        search.assert_not_called()

        assert list(itertools.islice(stream, 3)) == [0, 1, 2]
        assert search.call_count == 2

    def test_requests_advance_page_number(self):
        search = paged_searcher(list(range(5)))
        list(PaginationStreamer(search).search(SearchCriteria(page_size=2, order=Order.ASC)))
        requests = [call.args[0] for call in search.call_args_list]
        assert [request.page_number for request in requests] == [1, 2, 3]
        assert all(request.page_size == 2 for request in requests)
        assert all(request.order == Order.ASC for request in requests)

    def test_starts_at_given_page(self):
        search = paged_searcher(list(range(6)))
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=2, page_number=2)))
        assert items == [2, 3, 4, 5]

    def test_default_page_size(self):
        search = paged_searcher(list(range(5)))
        list(PaginationStreamer(search, default_page_size=4).search())
        assert search.call_args_list[0].args[0].page_size == 4

    def test_cursor_key_sets_offset(self):
        pages = [page_of(["a", "b"], 2), page_of(["c", "d"], 2), page_of([], 2)]
        search = Mock(side_effect=pages)
        items = list(PaginationStreamer(search, cursor_key=lambda item: item.upper()).search(
            SearchCriteria(page_size=2)))
        assert items == ["a", "b", "c", "d"]
        offsets = [call.args[0].offset for call in search.call_args_list]
        assert offsets == [None, "B", "D"]

    def test_missing_key_after_offset(self):
        pages = [page_of(["a", "b"], 2), page_of(["c", None], 2)]
        search = Mock(side_effect=pages)
        stream = PaginationStreamer(search, cursor_key=lambda item: item and item.upper()).search(
            SearchCriteria(page_size=2))
        assert [next(stream) for _ in range(4)] == ["a", "b", "c", None]
        with pytest.raises(ParseError):
            next(stream)
        assert [(call.args[0].page_number, call.args[0].offset) for call in search.call_args_list] == [
            (1, None), (1, "B")]

    def test_independent_streams(self):
        search = paged_searcher(list(range(4)))
        streamer = PaginationStreamer(search)
        first = streamer.search(SearchCriteria(page_size=2))
        second = streamer.search(SearchCriteria(page_size=2))
        assert next(first) == 0
        assert list(second) == [0, 1, 2, 3]
        assert list(first) == [1, 2, 3]

    def test_error_after_items(self):
        """A failing fetch propagates after earlier items were delivered."""
        search = Mock(side_effect=[page_of([1, 2], 2), TransportError("connection reset")])
        stream = PaginationStreamer(search).search(SearchCriteria(page_size=2))
        assert next(stream) == 1
        assert next(stream) == 2
        with pytest.raises(TransportError):
            next(stream)

    def test_abandoned_stream_fetches_nothing_more(self):
        search = paged_searcher(list(range(10)))
        stream = PaginationStreamer(search).search(SearchCriteria(page_size=2))
        next(stream)
        stream.close()
        assert search.call_count == 1

    def test_server_page_size_takes_precedence(self):
        """A server clamping the page size up still ends the stream on a short page."""
        search = Mock(side_effect=[page_of([1, 2, 3], 10)])
        items = list(PaginationStreamer(search).search(SearchCriteria(page_size=2)))
        assert items == [1, 2, 3]
        assert search.call_count == 1


class TestEntityStreamers:

    def test_account_streamer_uses_record_id(self):
        repository = Mock(spec=AccountRepository)
        accounts = [AccountInfo(id=f"ID{i}", address="TATNE7Q5BITMUTRRN6IB4I7FLSDRDWZA37JGO5Q") for i in range(3)]
        repository.search.side_effect = [page_of(accounts[:2], 2), page_of(accounts[2:], 2)]

        items = list(AccountPaginationStreamer(repository).search(AccountSearchCriteria(page_size=2)))

        assert [account.record_id for account in items] == ["ID0", "ID1", "ID2"]
        assert repository.search.call_args_list[1].args[0].offset == "ID1"

    def test_statement_streamer_passes_height(self):
        repository = Mock(spec=ReceiptRepository)
        repository.search_transaction_statements.return_value = page_of([], 20)
        streamer = TransactionStatementPaginationStreamer(repository)

        assert list(streamer.search(TransactionStatementSearchCriteria(height=10))) == []
        request = repository.search_transaction_statements.call_args.args[0]
        assert request.height == 10
        assert request.to_params()["pageSize"] == 20


class TestAsyncPaginationStreamer:
    """Test the async streamer."""

    @staticmethod
    def async_searcher(items):
        sync = paged_searcher(items)
        return AsyncMock(side_effect=lambda criteria: sync(criteria))

    @pytest.mark.asyncio
    async def test_multiple_pages(self):
        search = self.async_searcher(list(range(6)))
        items = [item async for item in AsyncPaginationStreamer(search).search(SearchCriteria(page_size=2))]
        assert items == list(range(6))
        assert search.await_count == 4

    @pytest.mark.asyncio
    async def test_limit(self):
        search = self.async_searcher(list(range(100)))
        streamer = AsyncPaginationStreamer(search)
        items = [item async for item in streamer.search(SearchCriteria(page_size=2), limit=5)]
        assert items == [0, 1, 2, 3, 4]
        assert search.await_count == 3

    @pytest.mark.asyncio
    async def test_error_propagates(self):
        search = AsyncMock(side_effect=[page_of([1, 2], 2), TransportError("down")])
        stream = AsyncPaginationStreamer(search).search(SearchCriteria(page_size=2))
        received = []
        with pytest.raises(TransportError):
            async for item in stream:
                received.append(item)
        assert received == [1, 2]

    @pytest.mark.asyncio
    async def test_aclose(self):
        search = self.async_searcher(list(range(10)))
        stream = AsyncPaginationStreamer(search).search(SearchCriteria(page_size=2))
        assert await stream.__anext__() == 0
        await stream.aclose()
        assert search.await_count == 1
