"""
Tests for protocol dispatch.
"""

import pytest

from stablepay.config import Settings
from stablepay.core.errors import UnsupportedProtocolError
from stablepay.core.models import ProtocolTag
from stablepay.protocols import djed, gluon
from stablepay.protocols.resolver import ProtocolResolver, parse_tag


@pytest.mark.parametrize(
    "value,expected",
    [
        ("djed", ProtocolTag.DJED),
        ("gluon", ProtocolTag.GLUON),
        (" Gluon ", ProtocolTag.GLUON),
        (ProtocolTag.GLUON, ProtocolTag.GLUON),
        (None, ProtocolTag.DJED),
    ],
)
def test_parse_tag(value, expected):
    assert parse_tag(value) is expected


def test_unknown_tag_is_rejected_in_strict_mode():
    with pytest.raises(UnsupportedProtocolError):
        parse_tag("sigmausd")


def test_unknown_tag_falls_back_to_djed_when_not_strict():
    assert parse_tag("sigmausd", strict=False) is ProtocolTag.DJED


def test_non_string_tag_is_rejected():
    with pytest.raises(UnsupportedProtocolError):
        parse_tag(42)


def test_select_initializer():
    resolver = ProtocolResolver(Settings())

    assert resolver.select_initializer(ProtocolTag.GLUON) is gluon.GluonAdapter.discover
    assert resolver.select_initializer(ProtocolTag.DJED) is djed.DjedAdapter.discover
    for tag in ProtocolTag:
        assert resolver.select_initializer(tag) is resolver.select_adapter(tag).discover


def test_select_adapter_binds_settings():
    resolver = ProtocolResolver(Settings(ui_address="0x" + "e" * 40, ui_fee=7))

    adapter = resolver.select_adapter(ProtocolTag.DJED)

    assert isinstance(adapter, djed.DjedAdapter)
    assert adapter.ui_address == "0x" + "e" * 40
    assert adapter.ui_fee == 7
    assert isinstance(resolver.select_adapter(ProtocolTag.GLUON), gluon.GluonAdapter)


def test_resolver_parse_follows_settings():
    lenient = ProtocolResolver(Settings(strict_protocol_tags=False))

    assert lenient.parse("unknown") is ProtocolTag.DJED
    with pytest.raises(UnsupportedProtocolError):
        ProtocolResolver(Settings(strict_protocol_tags=True)).parse("unknown")
