"""
Transaction handle.

One handle per (endpoint, contract, protocol). Lifecycle:

    handle = TransactionHandle(network_uri, contract_address, protocol="gluon")
    await handle.init()
    amount_in = await handle.quote_stablecoin_purchase("1000000")
    tx = await handle.build_stablecoin_purchase_transaction(payer, receiver, int(amount_in))

``init`` connects, discovers every contract the protocol needs and turns
endpoint and contract failures into diagnostics a user can act on. Quote and
build failures are logged and re-raised with the delegate's message intact.
"""

import re
from typing import Awaitable, Callable, Optional, Union

import structlog

from .config import Settings, settings as default_settings
from .core.contracts import ContractHandle, Endpoint, Erc20Token
from .core.errors import (
    AlreadyInitializedError,
    BuildFailedError,
    ConnectivityError,
    ContractDiscoveryError,
    ErrorCategory,
    ErrorContext,
    InvalidArgumentError,
    InvalidConfigurationError,
    NotInitializedError,
    QuoteFailedError,
    RpcConnectionError,
    classify_error,
)
from .core.models import (
    NOT_APPLICABLE,
    BlockchainDetails,
    DecimalsPair,
    HandleState,
    ProtocolTag,
    TransactionPayload,
)
from .core.networks import describe_network
from .core.rpc import connect
from .protocols.base import Discovery, ProtocolAdapter
from .protocols.resolver import ProtocolResolver


logger = structlog.stdlib.get_logger("stablepay.transaction")

Connector = Callable[[str], Awaitable[Endpoint]]

_SCALED_AMOUNT = re.compile(r"[0-9]+")

MAX_UINT256 = 2**256 - 1

PROTOCOL_LABELS = {
    ProtocolTag.DJED: "Djed",
    ProtocolTag.GLUON: "Gluon",
}


class TransactionHandle:
    """Uniform stablecoin purchase surface over the Djed and Gluon protocols."""

    def __init__(
        self,
        network_uri: str,
        contract_address: str,
        protocol: Union[str, ProtocolTag] = ProtocolTag.DJED,
        router_address: Optional[str] = None,
        *,
        connector: Optional[Connector] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or default_settings
        self._resolver = ProtocolResolver(self._settings)

        self.network_uri = network_uri
        self.contract_address = contract_address
        self.protocol = self._resolver.parse(protocol)
        self.router_address = router_address or None

        self._connector = connector or self._default_connector
        self.state = HandleState.UNINITIALIZED
        self.endpoint: Optional[Endpoint] = None
        self._discovery = Discovery()
        self._adapter: Optional[ProtocolAdapter] = None

    async def _default_connector(self, uri: str) -> Endpoint:
        return await connect(uri, timeout=self._settings.rpc_timeout_seconds)

    # Discovered state

    @property
    def main_contract(self) -> Optional[ContractHandle]:
        return self._discovery.main_contract

    @property
    def stable_coin(self) -> Optional[Erc20Token]:
        return self._discovery.stable_coin

    @property
    def reserve_coin(self) -> Optional[Erc20Token]:
        return self._discovery.reserve_coin

    @property
    def decimals(self) -> Optional[DecimalsPair]:
        return self._discovery.decimals

    @property
    def oracle_address(self) -> Optional[str]:
        return self._discovery.oracle_address

    @property
    def oracle_contract(self) -> Optional[ContractHandle]:
        return self._discovery.oracle_contract

    @property
    def adapter(self) -> Optional[ProtocolAdapter]:
        return self._adapter

    @property
    def is_ready(self) -> bool:
        return self.state is HandleState.READY

    # Lifecycle

    async def init(self) -> None:
        """Connect to the endpoint and discover the protocol's contracts."""
        if self.is_ready:
            raise AlreadyInitializedError(
                "Transaction handle is already initialized; create a new handle to rediscover contracts"
            )

        self._validate_configuration()
        log = logger.bind(
            network_uri=self.network_uri,
            contract_address=self.contract_address,
            protocol=self.protocol.value,
        )
        log.info("init_started")

        if self.endpoint is None:
            try:
                self.endpoint = await self._connector(self.network_uri)
            except Exception as exc:
                log.error("connectivity_failure", error=str(exc), error_type=exc.__class__.__name__)
                raise self._connectivity_failure(exc) from exc

        initializer = self._resolver.select_initializer(self.protocol)
        adapter = self._resolver.select_adapter(self.protocol)
        self._discovery = Discovery()

        try:
            await initializer(self.endpoint, self.contract_address, self.router_address, self._discovery)
        except RpcConnectionError as exc:
            log.error("connectivity_failure", error=str(exc), error_type=exc.__class__.__name__)
            raise self._connectivity_failure(exc) from exc
        except Exception as exc:
            log.error(
                "contract_discovery_failure",
                error=str(exc),
                error_type=exc.__class__.__name__,
                category=classify_error(exc).category.value,
            )
            raise self._discovery_failure(exc) from exc

        self._adapter = adapter
        self.state = HandleState.READY
        log.info(
            "init_completed",
            stable_coin=self.stable_coin.address,
            reserve_coin=self.reserve_coin.address,
            oracle=self.oracle_address,
        )

    async def aclose(self) -> None:
        close = getattr(self.endpoint, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "TransactionHandle":
        if not self.is_ready:
            try:
                await self.init()
            except BaseException:
                # __aexit__ is skipped when entry fails
                await self.aclose()
                self.endpoint = None
                raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _validate_configuration(self) -> None:
        missing = [
            name
            for name, value in (("network_uri", self.network_uri), ("contract_address", self.contract_address))
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise InvalidConfigurationError(
                f"Network URI and contract address are required (missing: {', '.join(missing)})",
                context=ErrorContext(
                    category=ErrorCategory.VALIDATION,
                    details={"missing": missing},
                ),
            )

    def _connectivity_failure(self, exc: BaseException) -> ConnectivityError:
        network = describe_network(self.network_uri)
        return ConnectivityError(
            f"Failed to connect to {network.short_name} RPC endpoint: {self.network_uri}\n\n"
            "Possible causes:\n"
            "- The RPC endpoint may be temporarily unavailable\n"
            "- DNS resolution issue (check your internet connection)\n"
            "- Network firewall blocking the connection\n\n"
            "Please try again in a few moments or check the network status.",
            context=ErrorContext(
                category=ErrorCategory.NETWORK,
                network_uri=self.network_uri,
                chain_id=network.chain_id,
                suggested_action="Retry later or switch to another RPC endpoint",
                details={"cause": exc.__class__.__name__},
            ),
        )

    def _discovery_failure(self, exc: BaseException) -> ContractDiscoveryError:
        network = describe_network(self.network_uri, getattr(self.endpoint, "chain_id", None))
        label = PROTOCOL_LABELS[self.protocol]
        return ContractDiscoveryError(
            f"Failed to interact with {label} contract at {self.contract_address} on {network.name}.\n\n"
            "Possible causes:\n"
            "- The contract address may be incorrect\n"
            f"- The contract may not be deployed on {network.name}\n"
            f"- The contract may not be a valid {label} contract\n\n"
            f"Please verify the contract address is correct for {network.name} (Chain ID: {network.chain_id}).",
            context=ErrorContext(
                category=ErrorCategory.CONTRACT,
                network_uri=self.network_uri,
                contract_address=self.contract_address,
                chain_id=network.chain_id,
                suggested_action="Check the contract address and protocol for this network",
                details={"cause": exc.__class__.__name__},
            ),
        )

    def _require_ready(self, operation: str) -> ProtocolAdapter:
        if not self.is_ready or self._adapter is None:
            raise NotInitializedError(operation)
        return self._adapter

    # Operations

    async def quote_stablecoin_purchase(self, amount_scaled: str) -> str:
        """
        Base currency required to receive ``amount_scaled`` stablecoins.

        Args:
            amount_scaled: Stablecoin amount in its smallest unit, as a
                decimal string

        Returns:
            Required base-currency amount in its smallest unit, as a
            decimal string
        """
        if not isinstance(amount_scaled, str):
            raise InvalidArgumentError(
                f"Amount must be a string, got {type(amount_scaled).__name__}"
            )
        if not _SCALED_AMOUNT.fullmatch(amount_scaled):
            raise InvalidArgumentError(
                f"Amount must be a non-negative integer string, got {amount_scaled!r}"
            )
        adapter = self._require_ready("quote_stablecoin_purchase")

        try:
            return await adapter.quote_stablecoin_purchase(self._discovery, amount_scaled)
        except Exception as exc:
            logger.error(
                "quote_failed",
                protocol=self.protocol.value,
                contract_address=self.contract_address,
                amount_scaled=amount_scaled,
                error=str(exc),
            )
            raise QuoteFailedError(exc, "quote_stablecoin_purchase") from exc

    async def build_stablecoin_purchase_transaction(
        self,
        payer: str,
        receiver: str,
        value: Union[int, str],
    ) -> TransactionPayload:
        """Unsigned transaction buying stablecoins for ``receiver`` with ``value`` wei."""
        adapter = self._require_ready("build_stablecoin_purchase_transaction")
        amount = self._parse_value(value)

        logger.info(
            "building_purchase_transaction",
            protocol=self.protocol.value,
            payer=payer,
            receiver=receiver,
            value=str(amount),
        )
        try:
            payload = await adapter.build_stablecoin_purchase(self._discovery, payer, receiver, amount)
        except Exception as exc:
            logger.error(
                "build_failed",
                protocol=self.protocol.value,
                contract_address=self.contract_address,
                payer=payer,
                receiver=receiver,
                error=str(exc),
            )
            raise BuildFailedError(exc, "build_stablecoin_purchase_transaction") from exc

        if payload.chain_id is None:
            payload.chain_id = getattr(self.endpoint, "chain_id", None)
        return payload

    @staticmethod
    def _parse_value(value: Union[int, str]) -> int:
        if isinstance(value, bool):
            raise InvalidArgumentError("Value must be an integer amount of wei")
        if isinstance(value, int):
            amount = value
        elif isinstance(value, str) and _SCALED_AMOUNT.fullmatch(value):
            amount = int(value)
        else:
            raise InvalidArgumentError(
                f"Value must be an integer or integer string of wei, got {value!r}"
            )
        if amount < 0:
            raise InvalidArgumentError("Value must be non-negative")
        if amount > MAX_UINT256:
            raise InvalidArgumentError("Value does not fit in uint256")
        return amount

    def get_blockchain_details(self) -> BlockchainDetails:
        """Snapshot of whatever state the handle has reached. Never raises."""
        discovery = self._discovery
        decimals = discovery.decimals
        return BlockchainDetails(
            protocol=self.protocol.value,
            state=self.state.value,
            endpoint_available=self.endpoint is not None,
            main_contract_available=discovery.main_contract is not None,
            stable_coin_address=discovery.stable_coin.address if discovery.stable_coin else NOT_APPLICABLE,
            reserve_coin_address=discovery.reserve_coin.address if discovery.reserve_coin else NOT_APPLICABLE,
            stable_coin_decimals=decimals.stable_coin if decimals else None,
            reserve_coin_decimals=decimals.reserve_coin if decimals else None,
            oracle_address=discovery.oracle_address or NOT_APPLICABLE,
            oracle_contract_available=discovery.oracle_contract is not None,
        )
