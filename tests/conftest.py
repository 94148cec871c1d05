"""
Shared fixtures for the Symbol client tests.
"""

import pytest

from helpers import (
    CURRENCY_MOSAIC_HEX,
    MIJIN_TEST_ADDRESS_HEX,
    OTHER_MOSAIC_HEX,
    TESTNET_ADDRESS_HEX,
    make_statement_dto,
)
from symbol_client.model import Address, MosaicId, NamespaceId


@pytest.fixture
def address():
    """Concrete testnet address."""
    return Address.create_from_encoded(TESTNET_ADDRESS_HEX)


@pytest.fixture
def other_address():
    return Address.create_from_encoded(MIJIN_TEST_ADDRESS_HEX)


@pytest.fixture
def namespace_id():
    """Alias for symbol.xym."""
    return NamespaceId("symbol.xym")


@pytest.fixture
def currency_mosaic_id():
    return MosaicId(CURRENCY_MOSAIC_HEX)


@pytest.fixture
def other_mosaic_id():
    return MosaicId(OTHER_MOSAIC_HEX)


@pytest.fixture
def statement_dto():
    return make_statement_dto()
