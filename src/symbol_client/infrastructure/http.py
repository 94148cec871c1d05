"""
HTTP repositories for the Symbol REST gateway.

``HttpClient`` wraps a ``requests.Session`` with retries and error mapping;
the repositories on top of it turn REST payloads into model objects.
"""

from __future__ import annotations
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from ..model.account import Address
from ..model.account_info import AccountInfo
from ..model.finalization import FinalizationProof
from ..model.receipt import ResolutionStatement, ResolutionType, Statement, TransactionStatement
from ..model.search import (
    AccountSearchCriteria,
    Page,
    ResolutionStatementSearchCriteria,
    SearchCriteria,
    TransactionGroup,
    TransactionSearchCriteria,
    TransactionStatementSearchCriteria,
)
from ..model.transaction import SignedTransaction, Transaction
from ..runtime.errors import (
    ErrorCode,
    ParseError,
    SymbolError,
    TimeoutError,
    TransportError,
    error_from_response,
    is_retryable,
)
from .receipt_dto import create_resolution_statement, create_transaction_statement
from .repositories import (
    AccountRepository,
    FinalizationRepository,
    ReceiptRepository,
    TransactionRepository,
)
from .streamer import DEFAULT_PAGE_SIZE, PaginationStreamer
from .transaction_dto import create_transaction_from_dto

logger = logging.getLogger(__name__)

# Well-known node endpoints
ENDPOINTS = {
    "mainnet": "http://ngl-dual-001.symbolblockchain.io:3000",
    "testnet": "http://ngl-dual-101.testnet.symboldev.network:3000",
    "local": "http://localhost:3000",
}


@dataclass
class ClientConfig:
    """Configuration for the Symbol REST client."""

    endpoint: str
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_backoff: float = 2.0
    debug: bool = False
    verify_ssl: bool = True
    user_agent: str = "symbol-client-python/0.1.0"
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        self.endpoint = ENDPOINTS.get(self.endpoint, self.endpoint).rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """
        Build a configuration from environment variables.

        Reads ``SYMBOL_NODE_URL`` (defaults to the local node),
        ``SYMBOL_TIMEOUT`` and ``SYMBOL_MAX_RETRIES``.

        Args:
            **overrides: Fields that take precedence over the environment

        Returns:
            ClientConfig instance
        """
        values: Dict[str, Any] = {"endpoint": os.environ.get("SYMBOL_NODE_URL", "local")}
        if os.environ.get("SYMBOL_TIMEOUT"):
            values["timeout"] = float(os.environ["SYMBOL_TIMEOUT"])
        if os.environ.get("SYMBOL_MAX_RETRIES"):
            values["max_retries"] = int(os.environ["SYMBOL_MAX_RETRIES"])
        values.update(overrides)
        return cls(**values)


class HttpClient:
    """
    JSON over HTTP with retries.

    Connection failures, timeouts, 5xx and 429 responses are retried with
    exponential backoff; other errors are raised immediately.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": config.user_agent,
        })
        if config.debug:
            logger.setLevel(logging.DEBUG)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def put(self, path: str, body: Any) -> Any:
        return self._request("PUT", path, body=body)

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                 body: Any = None) -> Any:
        """
        Send a request, retrying transient failures.

        Args:
            method: HTTP method
            path: Path relative to the endpoint
            params: Query parameters
            body: JSON body

        Returns:
            Decoded JSON response

        Raises:
            NotFoundError: On 404
            TransportError: On network errors or other failed responses
            ParseError: If a successful response is not JSON
        """
        url = f"{self.config.endpoint}{path}"
        last_error: Optional[SymbolError] = None

        for attempt in range(self.config.max_retries + 1):
            if attempt > 0:
                delay = self.config.retry_delay * (self.config.retry_backoff ** (attempt - 1))
                logger.debug(f"Retrying {method} {path} in {delay:.2f}s (attempt {attempt + 1})")
                time.sleep(delay)

            try:
                logger.debug(f"{method} {url} params={params}")
                response = self.session.request(
                    method, url, params=params, json=body,
                    timeout=self.config.timeout, verify=self.config.verify_ssl,
                )
            except requests.exceptions.Timeout as e:
                last_error = TimeoutError(f"Request timed out: {method} {path}", cause=e)
                continue
            except requests.exceptions.ConnectionError as e:
                last_error = TransportError(f"Connection failed: {e}", ErrorCode.CONNECTION_FAILED, cause=e)
                continue
            except requests.exceptions.RequestException as e:
                raise TransportError(f"Request failed: {e}", cause=e) from e

            if response.status_code >= 400:
                error = error_from_response(response.status_code, self._error_body(response))
                if not is_retryable(error):
                    raise error
                last_error = error
                continue

            if response.status_code == 204:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise ParseError(f"Response of {method} {path} is not JSON", ErrorCode.INVALID_JSON, cause=e) from e

        raise last_error

    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _parse(mapper: Callable[[Any], Any], payload: Any) -> Any:
    try:
        return mapper(payload)
    except ParseError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Malformed response: {e}", cause=e) from e


def _page(payload: Dict[str, Any], mapper: Callable[[Any], Any], criteria: SearchCriteria) -> Page:
    """Map a ``{"data": [...], "pagination": {...}}`` body to a page."""
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise ParseError("Search response must hold a 'data' list")
    pagination = payload.get("pagination") or {}
    data = [_parse(mapper, item) for item in payload["data"]]
    page_size = int(pagination.get("pageSize") or criteria.page_size or DEFAULT_PAGE_SIZE)
    return Page(
        data=data,
        page_number=int(pagination.get("pageNumber") or criteria.page_number or 1),
        page_size=page_size,
        is_last_page=len(data) < page_size,
    )


# =============================================================================
# Repositories
# =============================================================================

class AccountHttp(AccountRepository):

    def __init__(self, client: HttpClient):
        self.client = client

    def search(self, criteria: AccountSearchCriteria) -> Page[AccountInfo]:
        return _page(self.client.get("/accounts", criteria.to_params()), AccountInfo.from_dto, criteria)

    def get_account_info(self, address: Address) -> AccountInfo:
        return _parse(AccountInfo.from_dto, self.client.get(f"/accounts/{address.plain()}"))


class TransactionHttp(TransactionRepository):

    def __init__(self, client: HttpClient):
        self.client = client

    def search(self, criteria: TransactionSearchCriteria) -> Page[Transaction]:
        path = f"/transactions/{criteria.group.value}"
        return _page(self.client.get(path, criteria.to_params()), create_transaction_from_dto, criteria)

    def get_transaction(self, transaction_id: str,
                        group: TransactionGroup = TransactionGroup.CONFIRMED) -> Transaction:
        return _parse(create_transaction_from_dto, self.client.get(f"/transactions/{group.value}/{transaction_id}"))

    def announce(self, signed_transaction: SignedTransaction) -> str:
        """
        Announce a signed transaction to the network.

        Args:
            signed_transaction: Signed payload

        Returns:
            Announce message returned by the node
        """
        logger.info(f"Announcing transaction {signed_transaction.hash}")
        response = self.client.put("/transactions", {"payload": signed_transaction.payload})
        return (response or {}).get("message", "")


class ReceiptHttp(ReceiptRepository):

    def __init__(self, client: HttpClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def search_transaction_statements(
        self, criteria: TransactionStatementSearchCriteria
    ) -> Page[TransactionStatement]:
        payload = self.client.get("/statements/transaction", criteria.to_params())
        return _page(payload, create_transaction_statement, criteria)

    def search_address_resolution_statements(
        self, criteria: ResolutionStatementSearchCriteria
    ) -> Page[ResolutionStatement]:
        payload = self.client.get("/statements/resolutions/address", criteria.to_params())
        return _page(payload, lambda dto: create_resolution_statement(dto, ResolutionType.ADDRESS), criteria)

    def search_mosaic_resolution_statements(
        self, criteria: ResolutionStatementSearchCriteria
    ) -> Page[ResolutionStatement]:
        payload = self.client.get("/statements/resolutions/mosaic", criteria.to_params())
        return _page(payload, lambda dto: create_resolution_statement(dto, ResolutionType.MOSAIC), criteria)

    def get_block_receipts(self, height: int) -> Statement:
        """
        Collect every statement of a block by streaming the three searches.

        Args:
            height: Block height

        Returns:
            Statement of the block
        """
        logger.debug(f"Fetching statements of block {height}")
        transaction_criteria = TransactionStatementSearchCriteria(height=height, page_size=self.page_size)
        resolution_criteria = ResolutionStatementSearchCriteria(height=height, page_size=self.page_size)
        return Statement(
            transaction_statements=list(
                PaginationStreamer(self.search_transaction_statements).search(transaction_criteria)
            ),
            address_resolution_statements=list(
                PaginationStreamer(self.search_address_resolution_statements).search(resolution_criteria)
            ),
            mosaic_resolution_statements=list(
                PaginationStreamer(self.search_mosaic_resolution_statements).search(resolution_criteria)
            ),
        )


class FinalizationHttp(FinalizationRepository):

    def __init__(self, client: HttpClient):
        self.client = client

    def get_finalization_proof_at_epoch(self, epoch: int) -> FinalizationProof:
        return _parse(FinalizationProof.model_validate, self.client.get(f"/finalization/proof/epoch/{epoch}"))

    def get_finalization_proof_at_height(self, height: int) -> FinalizationProof:
        return _parse(FinalizationProof.model_validate, self.client.get(f"/finalization/proof/height/{height}"))


class RepositoryFactoryHttp:
    """
    Creates HTTP repositories sharing one client.

    Example:
        ```python
        with RepositoryFactoryHttp("testnet") as factory:
            statement = factory.create_receipt_repository().get_block_receipts(1)
        ```
    """

    def __init__(self, config: Any, session: Optional[requests.Session] = None):
        self.config = config if isinstance(config, ClientConfig) else ClientConfig(endpoint=config)
        self.client = HttpClient(self.config, session)

    def create_account_repository(self) -> AccountHttp:
        return AccountHttp(self.client)

    def create_transaction_repository(self) -> TransactionHttp:
        return TransactionHttp(self.client)

    def create_receipt_repository(self) -> ReceiptHttp:
        return ReceiptHttp(self.client, self.config.page_size)

    def create_finalization_repository(self) -> FinalizationHttp:
        return FinalizationHttp(self.client)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__: List[str] = [
    "ENDPOINTS",
    "ClientConfig",
    "HttpClient",
    "AccountHttp",
    "TransactionHttp",
    "ReceiptHttp",
    "FinalizationHttp",
    "RepositoryFactoryHttp",
]
