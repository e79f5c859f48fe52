"""
Logging setup for sapengine.

The calculation engine never logs. The certificate mapper, upgrade
comparator, recommendation ranker, batch runner and CLI log through
module loggers under `sapengine` and pass dwelling context as `extra`:
- building_id: certificate UPRN or address
- region: SAP climate region
- measure: upgrade measure id

ContextFormatter renders that context after the message, so one building
can be followed through a batch run. Handlers go on the `sapengine`
logger, never the root logger, so a host application keeps its own setup.

Usage:
    ensure_logging("DEBUG")
    logger.debug("Mapped certificate", extra={"building_id": "100", "region": 13})
    # 14:02:11 | DEBUG    | sapengine.ingest.epc_mapper | Mapped certificate [building_id=100, region=13]
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from ..core.config import settings

PACKAGE_LOGGER = "sapengine"

CONTEXT_KEYS = ("building_id", "region", "measure")

LEVEL_COLOURS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


def format_context(record: logging.LogRecord) -> str:
    """`[key=value, ...]` for the dwelling context on a record, empty if none."""
    pairs = [f"{key}={getattr(record, key)}" for key in CONTEXT_KEYS if hasattr(record, key)]
    return f" [{', '.join(pairs)}]" if pairs else ""


class ContextFormatter(logging.Formatter):
    """
    `time | level | logger | message [context]` lines.

    The context is added in formatMessage, so the record itself is left
    untouched for any other handler.
    """

    def __init__(self, colour: bool = False):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
        self.colour = colour

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record) + format_context(record)
        if self.colour:
            return f"{LEVEL_COLOURS.get(record.levelname, '')}{line}{RESET}"
        return line


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach console (stderr) and optional file handlers to the sapengine logger.

    Calling it again replaces the handlers it added before.

    Args:
        level: Log level name, defaults to settings.log_level
        log_file: Also write plain lines to this file

    Returns:
        The configured `sapengine` logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel((level or settings.log_level).upper())

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ContextFormatter(colour=sys.stderr.isatty()))
    package_logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setFormatter(ContextFormatter())
        package_logger.addHandler(file_handler)

    return package_logger


_initialized = False


def ensure_logging(level: Optional[str] = None) -> None:
    """Set up logging once per process; the CLI calls this on every command."""
    global _initialized
    if not _initialized:
        setup_logging(level, settings.log_file)
        _initialized = True
