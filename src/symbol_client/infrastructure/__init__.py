"""
Infrastructure: DTO mapping, repository interfaces, pagination streamers and
their HTTP implementations.
"""

from .receipt_dto import (
    create_statement_from_dto,
    create_transaction_statement,
    create_resolution_statement,
    create_receipt,
    extract_unresolved,
)
from .transaction_dto import create_transaction_from_dto
from .repositories import (
    Searcher,
    AccountRepository,
    TransactionRepository,
    ReceiptRepository,
    FinalizationRepository,
)
from .streamer import (
    DEFAULT_PAGE_SIZE,
    StreamState,
    PageCursor,
    PaginationStreamer,
    AsyncPaginationStreamer,
    AccountPaginationStreamer,
    TransactionPaginationStreamer,
    TransactionStatementPaginationStreamer,
    AddressResolutionStatementPaginationStreamer,
    MosaicResolutionStatementPaginationStreamer,
)
from .http import (
    ENDPOINTS,
    ClientConfig,
    HttpClient,
    AccountHttp,
    TransactionHttp,
    ReceiptHttp,
    FinalizationHttp,
    RepositoryFactoryHttp,
)
