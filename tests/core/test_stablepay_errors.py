"""
Tests for error classification.
"""

import httpx

from stablepay.core.errors import (
    BuildFailedError,
    ContractCallError,
    ErrorCategory,
    InvalidArgumentError,
    NotInitializedError,
    QuoteFailedError,
    RpcConnectionError,
    StablePayError,
    UnsupportedProtocolError,
    classify_error,
)


class TestErrorCategories:
    """Every library error carries a category callers can branch on."""

    def test_default_categories(self):
        assert InvalidArgumentError("bad").category == ErrorCategory.VALIDATION
        assert NotInitializedError("quote").category == ErrorCategory.STATE
        assert RpcConnectionError("down").category == ErrorCategory.NETWORK
        assert ContractCallError("reverted").category == ErrorCategory.CONTRACT

    def test_not_initialized_names_operation(self):
        error = NotInitializedError("quote_stablecoin_purchase")

        assert "quote_stablecoin_purchase" in str(error)
        assert error.context.details["operation"] == "quote_stablecoin_purchase"

    def test_unsupported_protocol_keeps_tag(self):
        error = UnsupportedProtocolError("sigmausd")

        assert error.tag == "sigmausd"
        assert "sigmausd" in error.message

    def test_contract_call_error_context(self):
        error = ContractCallError(
            "execution reverted",
            contract_address="0x" + "1" * 40,
            function_name="oracle()",
            reverted=True,
        )

        assert error.context.contract_address == "0x" + "1" * 40
        assert error.context.details == {"function": "oracle()", "reverted": True}


class TestDelegateFailures:
    """Quote and build failures keep the delegate message and cause."""

    def test_quote_failed_preserves_message(self):
        cause = ContractCallError("execution reverted: paused")
        error = QuoteFailedError(cause, "quote_stablecoin_purchase")

        assert str(error) == "execution reverted: paused"
        assert error.cause is cause
        assert error.category == ErrorCategory.QUOTE

    def test_build_failed_uses_class_name_for_empty_message(self):
        error = BuildFailedError(RuntimeError(), "build_stablecoin_purchase_transaction")

        assert str(error) == "RuntimeError"
        assert error.category == ErrorCategory.BUILD
        assert isinstance(error, StablePayError)


class TestClassifyError:
    """classify_error branches on type only."""

    def test_library_error_returns_own_context(self):
        error = RpcConnectionError("down", network_uri="http://x")

        assert classify_error(error) is error.context

    def test_httpx_transport_error_is_network(self):
        assert classify_error(httpx.ConnectError("boom")).category == ErrorCategory.NETWORK

    def test_os_error_is_network(self):
        assert classify_error(ConnectionRefusedError()).category == ErrorCategory.NETWORK

    def test_value_error_is_validation(self):
        assert classify_error(ValueError("nope")).category == ErrorCategory.VALIDATION

    def test_message_text_is_ignored(self):
        assert classify_error(RuntimeError("execution reverted")).category == ErrorCategory.UNKNOWN
