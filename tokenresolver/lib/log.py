"""
Centralized library-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

As a library, token-resolver leaves the host's loguru sinks alone and keeps
its own records disabled. The `tokres` console script calls `log_configure`
to install the formatted stderr sink and enable them.

Features:
- A custom `LOG` function for library debug logging.
- Dynamic checking of the `beQuiet` flag to suppress logs when necessary.
- Consistent and customizable logging format.

Usage:
- Use `LOG` for grammar-cache, parsing and resolution tracing.
- Host applications opt in with `logger.enable("tokenresolver")`.
- The `beQuiet` flag controls whether logs are displayed.

Example:
    from tokenresolver.lib.log import LOG
    LOG("Grammar cache miss")

Environment:
- Set `TKR_BEQUIET=True` to suppress detailed logging output.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the library
app_logger = logger.bind(app="TOKRES")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >32}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.disable("tokenresolver")


def log_configure() -> None:
    """
    Application-side logging setup for the `tokres` console script.

    Replaces loguru's sinks with the formatted stderr sink and enables the
    library's records. Only the process entry point should call this.
    """
    logger.remove()
    logger.add(sys.stderr, format=logger_format)
    logger.enable("tokenresolver")


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Library-specific logging function.

    This function checks the `beQuiet` flag in `appsettings` and logs the message
    only if logging is enabled.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from tokenresolver.config.settings import appsettings

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        # stdout carries command output
        print(f"Logging error: {e}", file=sys.stderr)
