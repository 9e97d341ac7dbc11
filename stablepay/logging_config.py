"""
Opt-in structlog output for applications embedding stablepay.

Nothing here runs on import. Library modules log through stdlib ``logging``
under the ``stablepay`` namespace and the transaction handle emits structlog
events; ``setup_logging`` renders both through one handler.
"""

import logging
import sys
from typing import IO, Optional

import structlog

from .config import settings


PACKAGE_LOGGER = "stablepay"

_HANDLER_NAME = "stablepay-structlog"


def _resolve_level(log_level: Optional[str]) -> int:
    level = logging.getLevelName((log_level or settings.log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: Optional[str] = None,
    *,
    json_logs: Optional[bool] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Route stablepay logs through structlog.

    Args:
        log_level: Override log level (default: from settings.log_level)
        json_logs: Force JSON (True) or console (False) rendering; by default
            DEBUG renders for the console and everything else as JSON lines
        stream: Destination stream (default: stderr)

    Returns:
        The installed handler. Calling again replaces it.
    """
    level = _resolve_level(log_level)
    if json_logs is None:
        json_logs = level != logging.DEBUG

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    # JSON-RPC traffic is logged by stablepay.core.rpc; the client's own logs are noise
    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
