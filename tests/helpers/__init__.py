from .factories import *
from .mocks import MockReceiptRepository, page_of, paged_searcher
