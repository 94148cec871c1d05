"""
Tests for hex and uint64 conversion helpers.
"""

import pytest

from symbol_client.runtime.convert import (
    UINT64_MAX,
    bytes_to_hex,
    hex_to_bytes,
    is_hex,
    to_uint64,
    uint64_from_hex,
    uint64_to_hex,
)


class TestHex:

    def test_is_hex(self):
        assert is_hex("00ff")
        assert is_hex("ABCDEF", 6)
        assert not is_hex("ABC")
        assert not is_hex("ZZ")
        assert not is_hex("ABCD", 6)
        assert not is_hex(None)

    def test_bytes_roundtrip_is_upper_case(self):
        assert bytes_to_hex(hex_to_bytes("0aff")) == "0AFF"

    def test_hex_to_bytes_rejects_invalid(self):
        with pytest.raises(ValueError):
            hex_to_bytes("xyz")


class TestUint64:

    def test_numeric_strings(self):
        assert to_uint64("1500") == 1500
        assert to_uint64(str(UINT64_MAX)) == UINT64_MAX

    @pytest.mark.parametrize("value", [-1, UINT64_MAX + 1, "-1", "1.5", "", True, None])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(ValueError):
            to_uint64(value)

    def test_hex(self):
        assert uint64_to_hex(1) == "0000000000000001"
        assert uint64_from_hex("E74B99BA41F4AFEE") == 0xE74B99BA41F4AFEE
        with pytest.raises(ValueError):
            uint64_from_hex("E74B")
