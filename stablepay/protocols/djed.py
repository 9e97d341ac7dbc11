"""
Djed (classical reserve-ratio) protocol helpers.

Read calls used during discovery and pricing, plus the calldata builder for
``buyStableCoins``. Fees on the Djed contract are fractions scaled by
``10**FEE_SCALING_DECIMALS``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core import abi
from ..core.contracts import ContractHandle, Endpoint, Erc20Token, checksum
from ..core.models import DecimalsPair, ProtocolTag, TransactionPayload
from .base import Discovery, ProtocolAdapter

logger = logging.getLogger(__name__)

FEE_SCALING_DECIMALS = 24
FEE_SCALING_FACTOR = 10**FEE_SCALING_DECIMALS

BUY_STABLECOINS_SIGNATURE = "buyStableCoins(address,uint256,address)"


@dataclass(frozen=True)
class OracleContract(ContractHandle):
    """Price oracle consulted by the Djed contract.

    ``caller`` is the Djed contract that consumes this oracle.
    """

    caller: Optional[str] = None


@dataclass(frozen=True)
class BuyQuote:
    """Pricing breakdown for a stablecoin purchase, all values scaled."""
    amount_scaled: int
    sc_price: int
    base_bc_scaled: int
    total_bc_scaled: int
    fee: int
    treasury_fee: int
    ui_fee: int


def resolve_contract(endpoint: Endpoint, address: str) -> ContractHandle:
    return ContractHandle.at(endpoint, address)


async def resolve_coin_contracts(djed: ContractHandle) -> Tuple[Erc20Token, Erc20Token]:
    """Return ``(stable_coin, reserve_coin)`` token handles."""
    stable_address = await djed.call_address("stableCoin()")
    reserve_address = await djed.call_address("reserveCoin()")
    return (
        Erc20Token.at(djed.endpoint, stable_address),
        Erc20Token.at(djed.endpoint, reserve_address),
    )


async def resolve_decimals(stable_coin: Erc20Token, reserve_coin: Erc20Token) -> DecimalsPair:
    return DecimalsPair(
        stable_coin=await stable_coin.decimals(),
        reserve_coin=await reserve_coin.decimals(),
    )


async def resolve_oracle_address(djed: ContractHandle) -> str:
    return await djed.call_address("oracle()")


def resolve_oracle_contract(endpoint: Endpoint, oracle_address: str, djed_address: str) -> OracleContract:
    return OracleContract(
        address=checksum(oracle_address),
        endpoint=endpoint,
        caller=checksum(djed_address),
    )


def append_fees(amount_bc: int, fee: int, treasury_fee: int, ui_fee: int) -> int:
    """Gross up a base-currency amount by the protocol, treasury and UI fees."""
    return amount_bc * (FEE_SCALING_FACTOR + fee + treasury_fee + ui_fee) // FEE_SCALING_FACTOR


async def price_quote_for_buy(
    djed: ContractHandle,
    sc_decimals: int,
    amount_scaled: str,
    ui_fee: int = 0,
) -> BuyQuote:
    """
    Price ``amount_scaled`` stablecoins in base currency.

    ``scPrice(0)`` is the base-currency price of one whole stablecoin; the
    total includes the protocol fee, the treasury fee and the UI fee.
    """
    amount = int(amount_scaled)
    sc_price = await djed.call_uint("scPrice(uint256)", 0)
    fee = await djed.call_uint("fee()")
    treasury_fee = await djed.call_uint("treasuryFee()")

    base_bc = amount * sc_price // 10**sc_decimals
    total_bc = append_fees(base_bc, fee, treasury_fee, ui_fee)

    return BuyQuote(
        amount_scaled=amount,
        sc_price=sc_price,
        base_bc_scaled=base_bc,
        total_bc_scaled=total_bc,
        fee=fee,
        treasury_fee=treasury_fee,
        ui_fee=ui_fee,
    )


def build_buy_transaction(
    djed: ContractHandle,
    payer: str,
    receiver: str,
    value: int,
    ui_address: str,
    djed_address: str,
    ui_fee: int = 0,
) -> TransactionPayload:
    """
    Build an unsigned ``buyStableCoins`` transaction.

    Args:
        djed: Handle of the Djed contract
        payer: Address that sends the base currency
        receiver: Address that receives the stablecoins
        value: Base currency to send, in wei
        ui_address: Fee recipient registered for this UI
        djed_address: Transaction target
        ui_fee: UI fee fraction, scaled like the protocol fees
    """
    receiver = checksum(receiver)
    data = abi.encode_call(BUY_STABLECOINS_SIGNATURE, receiver, ui_fee, ui_address)
    logger.debug("Built buyStableCoins for %s via %s", receiver, djed.address)
    return TransactionPayload(
        from_address=checksum(payer),
        to_address=checksum(djed_address),
        data=data,
        value=value,
        description=f"Buy stablecoins for {receiver}",
    )


class DjedAdapter(ProtocolAdapter):
    tag = ProtocolTag.DJED

    def __init__(self, ui_address: str, ui_fee: int = 0):
        self.ui_address = ui_address
        self.ui_fee = ui_fee

    @staticmethod
    async def discover(
        endpoint: Endpoint,
        contract_address: str,
        router_address: Optional[str],
        into: Discovery,
    ) -> Discovery:
        """Djed discovery: contract, coins, decimals, oracle."""
        into.contract_address = contract_address
        into.main_contract = resolve_contract(endpoint, contract_address)
        into.stable_coin, into.reserve_coin = await resolve_coin_contracts(into.main_contract)
        into.decimals = await resolve_decimals(into.stable_coin, into.reserve_coin)
        oracle_address = await resolve_oracle_address(into.main_contract)
        into.oracle_contract = resolve_oracle_contract(endpoint, oracle_address, into.main_contract.address)
        into.oracle_address = into.oracle_contract.address
        return into

    async def quote_stablecoin_purchase(self, discovery: Discovery, amount_scaled: str) -> str:
        quote = await price_quote_for_buy(
            discovery.main_contract,
            discovery.decimals.stable_coin,
            amount_scaled,
            ui_fee=self.ui_fee,
        )
        return str(quote.total_bc_scaled)

    async def build_stablecoin_purchase(self, discovery, payer, receiver, value):
        return build_buy_transaction(
            discovery.main_contract,
            payer,
            receiver,
            value,
            self.ui_address,
            discovery.contract_address,
            ui_fee=self.ui_fee,
        )
