"""
Error Classification

Closed set of error types raised by the handle and its protocol helpers.
Every error carries an ``ErrorCategory`` so callers can branch on kind
instead of inspecting message text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import httpx


class ErrorCategory(str, Enum):
    """Categories of errors surfaced by the library."""

    VALIDATION = "validation"     # Bad constructor or call arguments
    STATE = "state"               # Operation invalid in the current handle state
    NETWORK = "network"           # Endpoint unreachable
    CONTRACT = "contract"         # Contract read reverted or returned garbage
    PROVIDER = "provider"         # Endpoint answered with a non-revert error
    QUOTE = "quote"               # Pricing delegate failed
    BUILD = "build"               # Purchase builder failed
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Additional context about an error."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    suggested_action: Optional[str] = None
    network_uri: Optional[str] = None
    contract_address: Optional[str] = None
    chain_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class StablePayError(Exception):
    """Base class for every error raised by stablepay."""

    default_category = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        category: Optional[ErrorCategory] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext(category=self.category)


# Caller-facing errors

class InvalidConfigurationError(StablePayError):
    """Required constructor fields are missing or empty."""

    default_category = ErrorCategory.VALIDATION


class UnsupportedProtocolError(StablePayError):
    """Protocol tag is not one of the known protocols."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, tag: Any):
        super().__init__(
            f"Unsupported protocol {tag!r}. Expected one of: djed, gluon",
            context=ErrorContext(
                category=ErrorCategory.VALIDATION,
                suggested_action="Pass protocol='djed' or protocol='gluon'",
                details={"protocol": tag},
            ),
        )
        self.tag = tag


class InvalidArgumentError(StablePayError):
    """An operation argument has the wrong type or format."""

    default_category = ErrorCategory.VALIDATION


class NotInitializedError(StablePayError):
    """Operation invoked before init() completed successfully."""

    default_category = ErrorCategory.STATE

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot call {operation}: the transaction handle is not initialized. "
            "Await init() and make sure it succeeded first.",
            context=ErrorContext(
                category=ErrorCategory.STATE,
                suggested_action="Call init() before quoting or building transactions",
                details={"operation": operation},
            ),
        )


class AlreadyInitializedError(StablePayError):
    """init() invoked on a handle that is already ready."""

    default_category = ErrorCategory.STATE


class ConnectivityError(StablePayError):
    """RPC endpoint could not be reached during init."""

    default_category = ErrorCategory.NETWORK


class ContractDiscoveryError(StablePayError):
    """A discovery read call against the configured contract failed."""

    default_category = ErrorCategory.CONTRACT


class _DelegateFailure(StablePayError):
    """Wraps a delegate failure, keeping its message unchanged."""

    def __init__(self, cause: BaseException, operation: str):
        super().__init__(
            str(cause) or cause.__class__.__name__,
            context=ErrorContext(
                category=self.default_category,
                details={"operation": operation, "cause": cause.__class__.__name__},
            ),
        )
        self.cause = cause
        self.operation = operation


class QuoteFailedError(_DelegateFailure):
    """Price quote delegate failed."""

    default_category = ErrorCategory.QUOTE


class BuildFailedError(_DelegateFailure):
    """Purchase transaction builder failed."""

    default_category = ErrorCategory.BUILD


# Delegate-level errors raised by the RPC endpoint and protocol helpers

class RpcConnectionError(StablePayError):
    """Transport-level failure talking to the endpoint (DNS, refused, timeout)."""

    default_category = ErrorCategory.NETWORK

    def __init__(self, message: str, network_uri: Optional[str] = None):
        super().__init__(
            message,
            context=ErrorContext(category=ErrorCategory.NETWORK, network_uri=network_uri),
        )


class RpcResponseError(StablePayError):
    """Endpoint answered but with an HTTP or JSON-RPC error that is not a revert."""

    default_category = ErrorCategory.PROVIDER

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(
            message,
            context=ErrorContext(category=ErrorCategory.PROVIDER, details={"code": code}),
        )
        self.code = code


class ContractCallError(StablePayError):
    """Contract read call reverted or returned data that cannot be decoded."""

    default_category = ErrorCategory.CONTRACT

    def __init__(
        self,
        message: str,
        contract_address: Optional[str] = None,
        function_name: Optional[str] = None,
        reverted: bool = False,
    ):
        super().__init__(
            message,
            context=ErrorContext(
                category=ErrorCategory.CONTRACT,
                contract_address=contract_address,
                details={"function": function_name, "reverted": reverted},
            ),
        )
        self.contract_address = contract_address
        self.function_name = function_name
        self.reverted = reverted


def classify_error(error: BaseException) -> ErrorContext:
    """
    Classify an exception and return its error context.

    Library errors carry their own context. Foreign exceptions are
    classified by type only.
    """
    if isinstance(error, StablePayError):
        return error.context

    if isinstance(error, (httpx.TransportError, OSError)):
        return ErrorContext(
            category=ErrorCategory.NETWORK,
            suggested_action="Check network connectivity",
        )

    if isinstance(error, httpx.HTTPStatusError):
        return ErrorContext(
            category=ErrorCategory.PROVIDER,
            details={"status_code": error.response.status_code},
        )

    if isinstance(error, (ValueError, TypeError)):
        return ErrorContext(category=ErrorCategory.VALIDATION)

    return ErrorContext(category=ErrorCategory.UNKNOWN)
