"""
stablepay

Buy stablecoins from Djed-style and Gluon-style protocols through one handle:

    from stablepay import TransactionHandle

    handle = TransactionHandle("https://rpc.sepolia.example", "0x...", protocol="djed")
    await handle.init()
    amount_in = await handle.quote_stablecoin_purchase("1000000")
    tx = await handle.build_stablecoin_purchase_transaction(payer, receiver, int(amount_in))
"""

from .core.errors import (
    AlreadyInitializedError,
    BuildFailedError,
    ConnectivityError,
    ContractCallError,
    ContractDiscoveryError,
    ErrorCategory,
    InvalidArgumentError,
    InvalidConfigurationError,
    NotInitializedError,
    QuoteFailedError,
    RpcConnectionError,
    RpcResponseError,
    StablePayError,
    UnsupportedProtocolError,
)
from .core.models import (
    BlockchainDetails,
    DecimalsPair,
    HandleState,
    ProtocolTag,
    TransactionPayload,
)
from .protocols.resolver import ProtocolResolver
from .transaction import TransactionHandle

__version__ = "0.1.0"

__all__ = [
    # Handle
    "TransactionHandle",
    "ProtocolResolver",
    # Models
    "BlockchainDetails",
    "DecimalsPair",
    "HandleState",
    "ProtocolTag",
    "TransactionPayload",
    # Errors
    "StablePayError",
    "ErrorCategory",
    "InvalidConfigurationError",
    "UnsupportedProtocolError",
    "InvalidArgumentError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "ConnectivityError",
    "ContractDiscoveryError",
    "QuoteFailedError",
    "BuildFailedError",
    "RpcConnectionError",
    "RpcResponseError",
    "ContractCallError",
]
