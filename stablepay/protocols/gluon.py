"""
Gluon (dual-token fission/fusion) protocol helpers.

Gluon splits deposited base currency into a stable "neutron" token and a
volatile "proton" token. Buying stablecoins means running fission and
keeping the neutrons. Fees are 1e18-scaled fractions.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..core import abi
from ..core.contracts import ContractHandle, Endpoint, Erc20Token, checksum
from ..core.models import NOT_APPLICABLE, DecimalsPair, ProtocolTag, TransactionPayload
from .base import Discovery, ProtocolAdapter

logger = logging.getLogger(__name__)

WAD = 10**18

FISSION_SIGNATURE = "fission(uint256,address)"
ROUTER_FISSION_SIGNATURE = "fission(address,address)"


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


class Gluon:
    """Bound view of one Gluon deployment and its optional router."""

    def __init__(self, endpoint: Endpoint, address: str, router_address: Optional[str] = None):
        self.endpoint = endpoint
        self.contract = ContractHandle.at(endpoint, address)
        self.router = ContractHandle.at(endpoint, router_address) if router_address else None

    async def resolve_coin_contracts(self) -> Tuple[Erc20Token, Erc20Token]:
        """Return ``(proton, neutron)`` token handles."""
        proton_address = await self.contract.call_address("proton()")
        neutron_address = await self.contract.call_address("neutron()")
        return (
            Erc20Token.at(self.endpoint, proton_address),
            Erc20Token.at(self.endpoint, neutron_address),
        )

    async def resolve_decimals(self, proton: Erc20Token, neutron: Erc20Token) -> Tuple[int, int]:
        """Return ``(proton_decimals, neutron_decimals)``."""
        return await proton.decimals(), await neutron.decimals()

    async def reserve(self) -> int:
        return await self.contract.call_uint("reserve()")

    async def fission_fee(self) -> int:
        return await self.contract.call_uint("FISSION_FEE()")

    @staticmethod
    def compute_required_input_for_output(
        neutrons_out: int,
        reserve: int,
        neutron_supply: int,
        fission_fee: int,
    ) -> int:
        """
        Base currency needed so fission mints at least ``neutrons_out``.

        Fission mints neutrons pro rata to the reserve after the fee:
        ``out = in * (1 - fee) * supply / reserve``. Solving for ``in`` and
        rounding up gives the deposit that is never short.
        """
        if neutrons_out < 0:
            raise ValueError("Neutron amount must be non-negative")
        if neutron_supply <= 0 or reserve <= 0:
            raise ValueError("Gluon reserve and neutron supply must be positive to price fission")
        if not 0 <= fission_fee < WAD:
            raise ValueError(f"Fission fee out of range: {fission_fee}")

        return _ceil_div(neutrons_out * reserve * WAD, neutron_supply * (WAD - fission_fee))

    def build_fission_transaction(self, payer: str, value: int, receiver: str) -> TransactionPayload:
        """Unsigned fission transaction depositing ``value`` wei for ``receiver``."""
        receiver = checksum(receiver)
        if self.router is not None:
            to_address = self.router.address
            data = abi.encode_call(ROUTER_FISSION_SIGNATURE, self.contract.address, receiver)
        else:
            to_address = self.contract.address
            data = abi.encode_call(FISSION_SIGNATURE, value, receiver)

        return TransactionPayload(
            from_address=checksum(payer),
            to_address=to_address,
            data=data,
            value=value,
            description=f"Fission for {receiver}",
        )


class GluonAdapter(ProtocolAdapter):
    tag = ProtocolTag.GLUON

    @staticmethod
    async def discover(
        endpoint: Endpoint,
        contract_address: str,
        router_address: Optional[str],
        into: Discovery,
    ) -> Discovery:
        """Gluon discovery. Neutron is always the stable asset, proton the reserve."""
        gluon = Gluon(endpoint, contract_address, router_address)
        into.contract_address = contract_address
        into.helper = gluon
        into.main_contract = gluon.contract

        proton, neutron = await gluon.resolve_coin_contracts()
        into.stable_coin = neutron
        into.reserve_coin = proton

        proton_decimals, neutron_decimals = await gluon.resolve_decimals(proton, neutron)
        into.decimals = DecimalsPair(stable_coin=neutron_decimals, reserve_coin=proton_decimals)

        # No external price oracle in this protocol
        into.oracle_address = NOT_APPLICABLE
        into.oracle_contract = None
        return into

    async def quote_stablecoin_purchase(self, discovery: Discovery, amount_scaled: str) -> str:
        gluon: Gluon = discovery.helper
        reserve = await gluon.reserve()
        neutron_supply = await discovery.stable_coin.total_supply()
        fission_fee = await gluon.fission_fee()

        required = gluon.compute_required_input_for_output(
            int(amount_scaled), reserve, neutron_supply, fission_fee
        )
        return str(required)

    async def build_stablecoin_purchase(self, discovery, payer, receiver, value):
        gluon: Gluon = discovery.helper
        return gluon.build_fission_transaction(payer, value, receiver)
