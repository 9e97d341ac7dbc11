"""
Tests for the static ABI helpers.
"""

import pytest
from eth_utils import to_checksum_address

from stablepay.core import abi


def test_selector_matches_known_erc20_selectors() -> None:
    assert abi.selector("decimals()") == "0x313ce567"
    assert abi.selector("totalSupply()") == "0x18160ddd"
    assert abi.selector("transfer(address,uint256)") == "0xa9059cbb"


def test_encode_call_appends_one_word_per_argument() -> None:
    call_data = abi.encode_call(
        "buyStableCoins(address,uint256,address)",
        "0x" + "b" * 40,
        7,
        "0x" + "c" * 40,
    )

    assert call_data.startswith(abi.selector("buyStableCoins(address,uint256,address)"))
    assert len(call_data) == 10 + 64 * 3
    assert call_data[10:74] == "0" * 24 + "b" * 40
    assert call_data[74:138] == "0" * 63 + "7"


def test_encode_call_rejects_wrong_arity() -> None:
    with pytest.raises(ValueError):
        abi.encode_call("fission(uint256,address)", 1)


def test_encode_uint_bounds() -> None:
    with pytest.raises(ValueError):
        abi.encode_uint(-1)
    with pytest.raises(ValueError):
        abi.encode_uint(2**256)


def test_encode_address_rejects_short_address() -> None:
    with pytest.raises(ValueError):
        abi.encode_address("0x1234")


@pytest.mark.parametrize(
    "address",
    ["0x-" + "a" * 39, "0x+" + "a" * 39, "0x" + "a_" * 20, "0x" + "g" * 40, None],
)
def test_encode_address_rejects_non_hex(address) -> None:
    with pytest.raises(ValueError):
        abi.encode_address(address)


def test_encode_address_pads_lowercased_address() -> None:
    address = to_checksum_address("0x" + "ab" * 20)

    assert abi.encode_address(address) == "0" * 24 + "ab" * 20


def test_decode_address_returns_checksum() -> None:
    word = "0x" + "0" * 24 + "a" * 40

    assert abi.decode_address(word) == to_checksum_address("0x" + "a" * 40)


def test_decode_address_rejects_dirty_high_bytes() -> None:
    with pytest.raises(ValueError):
        abi.decode_address("0x" + "f" * 64)


def test_decode_uint_rejects_empty_return_data() -> None:
    with pytest.raises(ValueError):
        abi.decode_uint("0x")


def test_parse_param_types() -> None:
    assert abi.parse_param_types("reserve()") == []
    assert abi.parse_param_types("fission(address, address)") == ["address", "address"]
