"""
Symbol Python SDK - REST Client

This package provides a Python client for Symbol nodes: block statements and
alias resolution, transaction models and lazy pagination over the REST search
endpoints.
"""

# Domain model
from .model import *

# Runtime components
from .runtime.errors import *

# Infrastructure
from .infrastructure import (
    create_statement_from_dto,
    create_transaction_from_dto,
    AccountRepository,
    TransactionRepository,
    ReceiptRepository,
    FinalizationRepository,
    PageCursor,
    PaginationStreamer,
    AsyncPaginationStreamer,
    AccountPaginationStreamer,
    TransactionPaginationStreamer,
    TransactionStatementPaginationStreamer,
    AddressResolutionStatementPaginationStreamer,
    MosaicResolutionStatementPaginationStreamer,
    ClientConfig,
    HttpClient,
    RepositoryFactoryHttp,
)

# Services
from .service import TransactionService

__version__ = "0.1.0"
