"""Best-effort network naming for diagnostic messages.

The lookup is keyed by substrings of the RPC URI. It is only used to make
error messages readable and never drives a control decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

UNKNOWN_NETWORK_NAME = "the selected network"
UNKNOWN_CHAIN_ID = "unknown"


@dataclass(frozen=True)
class NetworkInfo:
    name: str
    chain_id: str
    short_name: str

    @property
    def is_known(self) -> bool:
        return self.chain_id != UNKNOWN_CHAIN_ID


# URI substring → network metadata. First match wins.
NETWORK_TABLE: Tuple[Tuple[str, NetworkInfo], ...] = (
    ('milkomeda', NetworkInfo(name='Milkomeda', chain_id='2001', short_name='Milkomeda')),
    ('mordor', NetworkInfo(name='Mordor Testnet', chain_id='63', short_name='Mordor')),
    ('sepolia', NetworkInfo(name='Sepolia', chain_id='11155111', short_name='Sepolia')),
    ('etc.rivet.link', NetworkInfo(name='Ethereum Classic', chain_id='61', short_name='Ethereum Classic')),
)

_UNKNOWN = NetworkInfo(
    name=UNKNOWN_NETWORK_NAME,
    chain_id=UNKNOWN_CHAIN_ID,
    short_name=UNKNOWN_NETWORK_NAME,
)


def describe_network(uri: Optional[str], reported_chain_id: Optional[int] = None) -> NetworkInfo:
    """Return the best-effort network description for an RPC URI.

    ``reported_chain_id`` (from ``eth_chainId``) fills in the chain ID when
    the URI matches nothing in the table.
    """

    lowered = (uri or '').lower()
    for needle, info in NETWORK_TABLE:
        if needle in lowered:
            return info

    if reported_chain_id is not None:
        return NetworkInfo(
            name=UNKNOWN_NETWORK_NAME,
            chain_id=str(reported_chain_id),
            short_name=UNKNOWN_NETWORK_NAME,
        )
    return _UNKNOWN


__all__ = [
    'NetworkInfo',
    'NETWORK_TABLE',
    'UNKNOWN_NETWORK_NAME',
    'UNKNOWN_CHAIN_ID',
    'describe_network',
]
