"""
Handle models and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

NOT_APPLICABLE = "N/A"


class ProtocolTag(str, Enum):
    """Supported stablecoin protocols."""
    DJED = "djed"
    GLUON = "gluon"


class HandleState(str, Enum):
    """Transaction handle lifecycle."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class DecimalsPair:
    """Decimal exponents of the stable-coin and reserve-coin tokens."""
    stable_coin: int
    reserve_coin: int


@dataclass
class TransactionPayload:
    """An unsigned transaction ready to be handed to a wallet."""
    from_address: str
    to_address: str
    data: str                                   # Encoded calldata (hex)
    value: int = 0                              # Wei to send
    chain_id: Optional[int] = None
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for signing."""
        tx = {
            "from": self.from_address,
            "to": self.to_address,
            "data": self.data,
            "value": hex(self.value),
        }
        if self.chain_id is not None:
            tx["chainId"] = hex(self.chain_id)
        return tx


@dataclass(frozen=True)
class BlockchainDetails:
    """Diagnostic snapshot of a transaction handle."""
    protocol: str
    state: str
    endpoint_available: bool
    main_contract_available: bool
    stable_coin_address: str
    reserve_coin_address: str
    stable_coin_decimals: Optional[int]
    reserve_coin_decimals: Optional[int]
    oracle_address: str
    oracle_contract_available: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "protocol": self.protocol,
            "state": self.state,
            "web3Available": self.endpoint_available,
            "djedContractAvailable": self.main_contract_available,
            "stableCoinAddress": self.stable_coin_address,
            "reserveCoinAddress": self.reserve_coin_address,
            "stableCoinDecimals": self.stable_coin_decimals,
            "reserveCoinDecimals": self.reserve_coin_decimals,
            "oracleAddress": self.oracle_address,
            "oracleContractAvailable": self.oracle_contract_available,
        }
