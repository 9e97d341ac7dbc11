"""Protocol dispatch: maps a protocol tag to its discovery and adapter."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Optional, Type, Union

from ..config import Settings, settings as default_settings
from ..core.contracts import Endpoint
from ..core.errors import UnsupportedProtocolError
from ..core.models import ProtocolTag
from . import djed, gluon
from .base import Discovery, ProtocolAdapter

logger = logging.getLogger(__name__)

InitProcedure = Callable[[Endpoint, str, Optional[str], Discovery], Awaitable[Discovery]]

ADAPTER_TYPES: Dict[ProtocolTag, Type[ProtocolAdapter]] = {
    ProtocolTag.DJED: djed.DjedAdapter,
    ProtocolTag.GLUON: gluon.GluonAdapter,
}


def parse_tag(value: Union[str, ProtocolTag, None], strict: bool = True) -> ProtocolTag:
    """Normalize a protocol tag.

    ``None`` means the default protocol. Unknown tags raise
    ``UnsupportedProtocolError`` unless ``strict`` is off, in which case
    they fall back to djed.
    """
    if value is None:
        return ProtocolTag.DJED
    if isinstance(value, ProtocolTag):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for tag in ProtocolTag:
            if tag.value == normalized:
                return tag

    if strict:
        raise UnsupportedProtocolError(value)
    logger.warning("Unknown protocol %r, falling back to %s", value, ProtocolTag.DJED.value)
    return ProtocolTag.DJED


class ProtocolResolver:
    """Stateless dispatch table over the supported protocols."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or default_settings

    def parse(self, value: Union[str, ProtocolTag, None]) -> ProtocolTag:
        return parse_tag(value, strict=self._settings.strict_protocol_tags)

    def select_initializer(self, tag: ProtocolTag) -> InitProcedure:
        """Discovery procedure of the protocol's adapter."""
        return ADAPTER_TYPES[tag].discover

    def select_adapter(self, tag: ProtocolTag) -> ProtocolAdapter:
        if tag is ProtocolTag.GLUON:
            return gluon.GluonAdapter()
        return djed.DjedAdapter(
            ui_address=self._settings.ui_address,
            ui_fee=self._settings.ui_fee,
        )
