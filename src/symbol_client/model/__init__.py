"""
Symbol domain model: identifiers, receipts and statements, transactions and
search criteria.
"""

from .network import NetworkType
from .account import Address
from .namespace import NamespaceId, generate_namespace_id, generate_namespace_path
from .mosaic_id import MosaicId
from .mosaic import Mosaic, MosaicSupplyChangeAction
from .unresolved import (
    UnresolvedAddress,
    UnresolvedMosaicId,
    to_unresolved_address,
    to_unresolved_mosaic,
    encode_unresolved_address,
)
from .receipt import *
from .transaction import *
from .account_info import AccountInfo, AccountType
from .finalization import FinalizationProof, MessageGroup, BmTreeSignature, ParentPublicKeySignaturePair
from .search import (
    Page,
    Order,
    TransactionGroup,
    SearchCriteria,
    AccountOrderBy,
    AccountSearchCriteria,
    TransactionSearchCriteria,
    TransactionStatementSearchCriteria,
    ResolutionStatementSearchCriteria,
)
