from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..core.contracts import ContractHandle, Endpoint, Erc20Token
from ..core.models import DecimalsPair, ProtocolTag, TransactionPayload


@dataclass
class Discovery:
    """Contract handles found during init.

    Filled in step by step, so a failed discovery leaves the fields that
    were reached populated and the rest ``None``.
    """

    contract_address: Optional[str] = None
    main_contract: Optional[ContractHandle] = None
    stable_coin: Optional[Erc20Token] = None
    reserve_coin: Optional[Erc20Token] = None
    decimals: Optional[DecimalsPair] = None
    oracle_address: Optional[str] = None
    oracle_contract: Optional[ContractHandle] = None
    helper: Any = None

    @property
    def complete(self) -> bool:
        return None not in (
            self.main_contract,
            self.stable_coin,
            self.reserve_coin,
            self.decimals,
        )


class ProtocolAdapter(ABC):
    """Capability set every stablecoin protocol implements"""

    tag: ProtocolTag

    @staticmethod
    @abstractmethod
    async def discover(
        endpoint: Endpoint,
        contract_address: str,
        router_address: Optional[str],
        into: Discovery,
    ) -> Discovery:
        """Resolve contract handles and decimals, writing them to ``into``"""
        pass

    @abstractmethod
    async def quote_stablecoin_purchase(self, discovery: Discovery, amount_scaled: str) -> str:
        """Base-currency amount (scaled, decimal string) needed to receive ``amount_scaled`` stablecoins"""
        pass

    @abstractmethod
    async def build_stablecoin_purchase(
        self,
        discovery: Discovery,
        payer: str,
        receiver: str,
        value: int,
    ) -> TransactionPayload:
        """Unsigned transaction that buys stablecoins with ``value`` wei"""
        pass
