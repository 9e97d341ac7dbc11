"""
Minimal ABI helpers for static contract calls.

Only the static types the two protocols need are supported: ``address``,
``uintN`` and ``bool``.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from eth_utils import is_address, keccak, to_checksum_address

WORD_HEX_LEN = 64


def _strip_0x(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def encode_uint(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected an integer, got {value!r}")
    if value < 0:
        raise ValueError("Value must be non-negative")
    if value >= 2**256:
        raise ValueError("Value does not fit in uint256")
    return hex(value)[2:].rjust(WORD_HEX_LEN, "0")


def encode_address(address: str) -> str:
    if not isinstance(address, str) or not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return _strip_0x(address).lower().rjust(WORD_HEX_LEN, "0")


def selector(signature: str) -> str:
    """Return the 4-byte selector for a canonical signature, 0x-prefixed."""
    return f"0x{keccak(text=signature)[:4].hex()}"


def parse_param_types(signature: str) -> List[str]:
    """``"foo(address,uint256)"`` → ``["address", "uint256"]``."""
    start = signature.find("(")
    if start < 0 or not signature.endswith(")"):
        raise ValueError(f"Malformed function signature: {signature}")
    inner = signature[start + 1:-1].strip()
    return [part.strip() for part in inner.split(",")] if inner else []


def encode_call(signature: str, *args: Any) -> str:
    """Build calldata for a function with static arguments."""
    types = parse_param_types(signature)
    if len(types) != len(args):
        raise ValueError(
            f"{signature} expects {len(types)} argument(s), got {len(args)}"
        )

    words = []
    for abi_type, arg in zip(types, args):
        if abi_type == "address":
            words.append(encode_address(arg))
        elif abi_type.startswith("uint"):
            words.append(encode_uint(int(arg)))
        elif abi_type == "bool":
            words.append(encode_uint(1 if arg else 0))
        else:
            raise ValueError(f"Unsupported ABI type: {abi_type}")
    return selector(signature) + "".join(words)


def split_words(data: str) -> Sequence[str]:
    raw = _strip_0x(data)
    if not raw or len(raw) % WORD_HEX_LEN != 0:
        raise ValueError(f"Return data is not a sequence of 32-byte words: {data!r}")
    return [raw[i:i + WORD_HEX_LEN] for i in range(0, len(raw), WORD_HEX_LEN)]


def decode_uint(data: str, index: int = 0) -> int:
    return int(split_words(data)[index], 16)


def decode_address(data: str, index: int = 0) -> str:
    word = split_words(data)[index]
    if int(word[:24], 16) != 0:
        raise ValueError(f"Word is not an address: 0x{word}")
    return to_checksum_address("0x" + word[24:])
