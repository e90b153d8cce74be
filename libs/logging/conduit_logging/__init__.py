"""Conduit centralized logging with logfmt format."""

from conduit_logging.logger import ConduitLogger, get_logger, configure_from_config
from conduit_logging.formatters import LogfmtFormatter
from conduit_logging.handlers import (
    create_file_handler,
    create_console_handler,
    create_syslog_handler
)

__all__ = [
    "ConduitLogger",
    "get_logger",
    "configure_from_config",
    "LogfmtFormatter",
    "create_file_handler",
    "create_console_handler",
    "create_syslog_handler",
]
