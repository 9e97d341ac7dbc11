from stablepay.config import DEFAULT_UI_ADDRESS, Settings


def test_defaults(monkeypatch):
    """Defaults match the reference UI deployment."""

    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("STABLEPAY_LOG_LEVEL", raising=False)

    settings = Settings()

    assert settings.ui_address == DEFAULT_UI_ADDRESS
    assert settings.ui_fee == 0
    assert settings.strict_protocol_tags is True
    assert settings.log_level == "INFO"


def test_prefixed_env_overrides(monkeypatch):
    monkeypatch.setenv("STABLEPAY_RPC_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("STABLEPAY_STRICT_PROTOCOL_TAGS", "false")

    settings = Settings()

    assert settings.rpc_timeout_seconds == 2.5
    assert settings.strict_protocol_tags is False


def test_fee_recipient_alias(monkeypatch):
    """UI address loads from the fee-recipient alias when present."""

    monkeypatch.delenv("STABLEPAY_UI_ADDRESS", raising=False)
    monkeypatch.delenv("UI_ADDRESS", raising=False)
    monkeypatch.setenv("STABLEPAY_FEE_RECIPIENT", "0x" + "e" * 40)

    settings = Settings()

    assert settings.ui_address == "0x" + "e" * 40


def test_unprefixed_log_level_fallback(monkeypatch):
    monkeypatch.delenv("STABLEPAY_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert Settings().log_level == "DEBUG"


def test_prefixed_log_level_wins(monkeypatch):
    monkeypatch.setenv("STABLEPAY_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert Settings().log_level == "WARNING"
