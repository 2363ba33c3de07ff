"""
The ``dockerbuild`` logger. Records go to stderr, docker keeps stdout for itself.

==================================== =========================================================
``DOCKERBUILD_LOGGING_LEVEL``        numeric level, INFO when unset
``DOCKERBUILD_RICH_TRACEBACKS=0``    plain lines instead of the rich handler
``DOCKERBUILD_LOGGING_FORMAT=json``  JSON lines, only without the rich handler
==================================== =========================================================
"""

import logging
import os
import sys
import typing

from pythonjsonlogger.json import JsonFormatter

LOGGING_ENV_VAR = "DOCKERBUILD_LOGGING_LEVEL"
LOGGING_FMT_ENV_VAR = "DOCKERBUILD_LOGGING_FORMAT"
LOGGING_RICH_FMT_ENV_VAR = "DOCKERBUILD_RICH_TRACEBACKS"

logger = logging.getLogger("dockerbuild")
# Handlers of the root logger never see dockerbuild records.
logger.propagate = False


def is_rich_logging_enabled() -> bool:
    return os.environ.get(LOGGING_RICH_FMT_ENV_VAR) != "0"


def _rich_handler() -> logging.Handler:
    import click
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(
        tracebacks_suppress=[click],
        rich_tracebacks=True,
        show_path=False,
        log_time_format="%H:%M:%S",
        console=Console(stderr=True),
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s"))
    return handler


def _stream_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if os.environ.get(LOGGING_FMT_ENV_VAR, "plain") == "json":
        handler.setFormatter(JsonFormatter(fmt="%(asctime)s %(name)s %(levelname)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(levelname)s %(message)s"))
    return handler


def resolve_level(verbosity: int = 0, configured: typing.Optional[int] = None) -> int:
    """
    Any ``-v`` on the command line means DEBUG. Otherwise the workspace ``logging.level`` setting is used, then
    ``$DOCKERBUILD_LOGGING_LEVEL``, then INFO.
    """
    if verbosity > 0:
        return logging.DEBUG
    if configured is not None:
        return configured
    return int(os.getenv(LOGGING_ENV_VAR, logging.INFO))


def set_log_level(verbosity: int = 0, configured: typing.Optional[int] = None):
    logger.setLevel(resolve_level(verbosity, configured))


def initialize_global_loggers():
    """Replaces the handlers of the dockerbuild logger with the one the environment asks for."""
    handler = _rich_handler() if is_rich_logging_enabled() else _stream_handler()
    logger.handlers.clear()
    logger.addHandler(handler)
    set_log_level()


initialize_global_loggers()
