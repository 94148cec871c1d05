"""
Runtime support for the Symbol client: error model and conversion helpers.
"""

from .errors import *
from .convert import (
    UINT64_MAX,
    is_hex,
    hex_to_bytes,
    bytes_to_hex,
    to_uint64,
    uint64_to_hex,
    uint64_from_hex,
)
