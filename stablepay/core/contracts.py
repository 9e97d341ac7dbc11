"""
Contract handles.

A handle pairs an on-chain address with the endpoint used to read from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from eth_utils import is_address, to_checksum_address

from . import abi
from .errors import ContractCallError


class Endpoint(Protocol):
    """The subset of ``RpcEndpoint`` contract handles rely on."""

    uri: str

    async def eth_call(self, to: str, data: str, block: str = "latest") -> str:
        ...


def checksum(address: str) -> str:
    if not isinstance(address, str) or not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return to_checksum_address(address)


@dataclass(frozen=True)
class ContractHandle:
    """A deployed contract reachable through an endpoint."""

    address: str
    endpoint: Endpoint

    @classmethod
    def at(cls, endpoint: Endpoint, address: str) -> ContractHandle:
        return cls(address=checksum(address), endpoint=endpoint)

    async def call(self, signature: str, *args: Any) -> str:
        """Run a read call and return the raw hex result."""
        data = abi.encode_call(signature, *args)
        try:
            result = await self.endpoint.eth_call(self.address, data)
        except ContractCallError as e:
            raise ContractCallError(
                e.message,
                contract_address=self.address,
                function_name=signature,
                reverted=e.reverted,
            ) from e

        if result in ("0x", ""):
            # No code at the address, or the function does not exist
            raise ContractCallError(
                f"{signature} on {self.address} returned no data",
                contract_address=self.address,
                function_name=signature,
            )
        return result

    async def call_uint(self, signature: str, *args: Any) -> int:
        result = await self.call(signature, *args)
        try:
            return abi.decode_uint(result)
        except ValueError as e:
            raise ContractCallError(
                f"{signature} on {self.address} returned malformed data",
                contract_address=self.address,
                function_name=signature,
            ) from e

    async def call_address(self, signature: str, *args: Any) -> str:
        result = await self.call(signature, *args)
        try:
            return abi.decode_address(result)
        except ValueError as e:
            raise ContractCallError(
                f"{signature} on {self.address} returned malformed data",
                contract_address=self.address,
                function_name=signature,
            ) from e


@dataclass(frozen=True)
class Erc20Token(ContractHandle):
    """ERC-20 token handle."""

    async def decimals(self) -> int:
        return await self.call_uint("decimals()")

    async def total_supply(self) -> int:
        return await self.call_uint("totalSupply()")
