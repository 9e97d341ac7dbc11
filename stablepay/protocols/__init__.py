"""
Protocol helpers

- djed: classical reserve-ratio stablecoin (stable coin, reserve coin, oracle)
- gluon: dual-token fission/fusion (neutron is the stable coin, proton the reserve)
- resolver: maps a protocol tag to its discovery procedure and adapter
"""

from .base import Discovery, ProtocolAdapter
from .djed import DjedAdapter
from .gluon import Gluon, GluonAdapter
from .resolver import ProtocolResolver, parse_tag

__all__ = [
    "Discovery",
    "ProtocolAdapter",
    "DjedAdapter",
    "Gluon",
    "GluonAdapter",
    "ProtocolResolver",
    "parse_tag",
]
