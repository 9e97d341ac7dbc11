"""
JSON-RPC endpoint used by the transaction handle.

Wraps an ``httpx.AsyncClient`` bound to a single node URI and turns transport
and JSON-RPC failures into the typed errors from ``errors.py``.
"""

import itertools
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .errors import ContractCallError, RpcConnectionError, RpcResponseError


logger = logging.getLogger(__name__)

# JSON-RPC error code geth and most clients use for reverted calls
REVERT_ERROR_CODE = 3


class RpcEndpoint:
    """A live connection to one EVM node."""

    def __init__(
        self,
        uri: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.uri = uri
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.rpc_timeout_seconds
        )
        self._ids = itertools.count(1)
        self.chain_id: Optional[int] = None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, params: List[Any]) -> Any:
        """Make a JSON-RPC call and return its ``result`` field."""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }

        try:
            response = await self._client.post(self.uri, json=payload)
        except httpx.TransportError as e:
            raise RpcConnectionError(
                f"Could not reach {self.uri}: {e.__class__.__name__}: {e}",
                network_uri=self.uri,
            ) from e

        if response.status_code >= 400:
            raise RpcResponseError(
                f"RPC endpoint returned HTTP {response.status_code} for {method}",
                code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RpcResponseError(f"RPC endpoint returned invalid JSON for {method}") from e

        error = body.get("error") if isinstance(body, dict) else None
        if error:
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            if method == "eth_call" and (code == REVERT_ERROR_CODE or "revert" in message.lower()):
                raise ContractCallError(f"execution reverted: {message}", reverted=True)
            raise RpcResponseError(f"RPC error: {message}", code=code)

        return body.get("result") if isinstance(body, dict) else None

    async def get_chain_id(self) -> int:
        result = await self.request("eth_chainId", [])
        try:
            self.chain_id = int(result, 16)
        except (TypeError, ValueError) as e:
            raise RpcResponseError(f"Unexpected eth_chainId result: {result!r}") from e
        return self.chain_id

    async def eth_call(self, to: str, data: str, block: str = "latest") -> str:
        result = await self.request("eth_call", [{"to": to, "data": data}, block])
        if not isinstance(result, str):
            raise ContractCallError(f"eth_call to {to} returned {result!r}", contract_address=to)
        return result

    async def get_balance(self, address: str, block: str = "latest") -> int:
        result = await self.request("eth_getBalance", [address, block])
        return int(result, 16)


async def connect(uri: str, timeout: Optional[float] = None) -> RpcEndpoint:
    """Open an endpoint and verify it answers ``eth_chainId``."""
    endpoint = RpcEndpoint(uri, timeout=timeout)
    try:
        chain_id = await endpoint.get_chain_id()
    except Exception:
        await endpoint.aclose()
        raise
    logger.debug("Connected to %s (chain %s)", uri, chain_id)
    return endpoint


__all__ = ["RpcEndpoint", "connect", "REVERT_ERROR_CODE"]
