"""
Logging utilities for subnetplan.

All modules obtain their logger through ``get_logger(__name__)``. The
returned object is the process-wide loguru logger bound to the component
name, so every line can be traced back to the module that emitted it.

Call ``configure_logging`` once at startup (the CLI does this in its
callback) to install the stderr sink with the requested verbosity.
"""

import sys
import traceback

from loguru import logger as _logger

from subnetplan.models.enums import LogLevel

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> - <level>{message}</level>"
)

# loguru level name for each configured verbosity
_LEVEL_NAMES = {
    LogLevel.FULL: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
}

_logger.configure(extra={"component": "subnetplan"})


def get_logger(name: str):
    """Get a logger bound to the given component name."""
    return _logger.bind(component=name)


def _stderr_sink(message) -> None:
    # Resolve sys.stderr per write so redirected streams are honored
    sys.stderr.write(message)


def configure_logging(level: LogLevel = LogLevel.INFO, sink=None) -> None:
    """
    Install the subnetplan log sink, replacing any previous handlers.

    Args:
        level: Verbosity. FULL also enables loguru's backtrace/diagnose output.
        sink: Destination for log lines (defaults to stderr so that stdout
            stays clean for rendered plans).
    """
    level = LogLevel(level)
    full = level == LogLevel.FULL

    _logger.remove()
    _logger.add(
        sink if sink is not None else _stderr_sink,
        level=_LEVEL_NAMES[level],
        format=LOG_FORMAT,
        backtrace=full,
        diagnose=full,
    )


def format_traceback(exc: BaseException) -> str:
    """Render an exception with its traceback for debug logs."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
