"""Conduit centralized logger."""

import logging
from pathlib import Path
from typing import Any

from conduit_logging.formatters import LogfmtFormatter
from conduit_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)


class ConduitLogger:
    """Structured logger for Conduit components.

    Keyword arguments passed to the log methods become logfmt fields::

        logger.warning("Skipping conversation", conversation_id="c1", error="boom")
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        level: str = "INFO",
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_syslog: bool = False,
        enable_console: bool = True,
        stream=None,
    ):
        """Initialize Conduit logger.

        Args:
            name: Logger name (will be prefixed with 'conduit.')
            log_dir: Directory for log files; no file handler when None
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            max_file_size: Maximum log file size before rotation
            backup_count: Number of backup files to keep
            enable_syslog: Whether to enable syslog handler
            enable_console: Whether to enable console handler
            stream: Stream for the console handler (defaults to stderr)
        """
        self.name = f'conduit.{name}'
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        self.formatter = LogfmtFormatter()
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.stream = stream

        self._setup_handlers(log_dir, enable_console, enable_syslog)

    def _setup_handlers(self, log_dir: Path | None, enable_console: bool, enable_syslog: bool):
        self.log_dir = Path(log_dir).expanduser() if log_dir else None
        self.enable_console = enable_console
        self.enable_syslog = enable_syslog

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if self.log_dir is not None:
            self._setup_file_handler(self.max_file_size, self.backup_count)

        if enable_console:
            self.logger.addHandler(create_console_handler(formatter=self.formatter, stream=self.stream))

        if enable_syslog:
            self._setup_syslog_handler()

    def reconfigure(
        self,
        log_dir: Path | None,
        level: str,
        enable_console: bool,
        enable_syslog: bool,
    ):
        """Replace level and handlers after the logging config changed."""
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self._setup_handlers(log_dir, enable_console, enable_syslog)

    def _setup_file_handler(self, max_bytes: int, backup_count: int):
        log_file = self.log_dir / f'{self.name}.log'
        handler = create_file_handler(
            log_file,
            max_bytes=max_bytes,
            backup_count=backup_count,
            formatter=self.formatter
        )
        self.logger.addHandler(handler)

    def _setup_syslog_handler(self):
        handler = create_syslog_handler(formatter=self.formatter)
        if handler:
            self.logger.addHandler(handler)

    def _log(self, level: int, msg: str, **kwargs):
        # stacklevel=3 attributes the record to the caller of debug()/info()/...
        self.logger.log(level, msg, extra=dict(kwargs), stacklevel=3)

    def is_enabled_for(self, level: str) -> bool:
        return self.logger.isEnabledFor(getattr(logging, level.upper(), logging.INFO))

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs):
        self._log(logging.CRITICAL, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log at ERROR level with the active exception's traceback."""
        self.logger.exception(msg, extra=kwargs, stacklevel=2)


# Global logger cache
_loggers: dict[str, ConduitLogger] = {}

# Defaults applied to loggers created after configure_from_config()
_default_log_dir: Path | None = None
_default_level = "INFO"
_default_enable_console = True
_default_enable_syslog = False


def get_logger(
    name: str,
    log_dir: Path | None = None,
    level: str | None = None,
    **kwargs
) -> ConduitLogger:
    """Get or create a Conduit logger.

    Args:
        name: Logger name
        log_dir: Log directory (falls back to the configured default)
        level: Log level (falls back to the configured default)
        **kwargs: Additional ConduitLogger arguments; enable_console and
            enable_syslog fall back to the configured defaults

    Returns:
        Cached logger instance
    """
    if name not in _loggers:
        kwargs.setdefault('enable_console', _default_enable_console)
        kwargs.setdefault('enable_syslog', _default_enable_syslog)
        _loggers[name] = ConduitLogger(
            name,
            log_dir=log_dir or _default_log_dir,
            level=level or _default_level,
            **kwargs
        )
    return _loggers[name]


def configure_from_config(config: Any):
    """Apply logging settings from a config object with a ``logging`` section.

    The settings become the defaults for new loggers, and loggers already
    in the cache are reconfigured with them.
    """
    log_config = getattr(config, 'logging', None)
    if log_config is None:
        return

    global _default_log_dir, _default_level, _default_enable_console, _default_enable_syslog
    _default_log_dir = Path(log_config.log_dir).expanduser() if log_config.log_dir else None
    _default_level = log_config.level
    _default_enable_console = getattr(log_config, 'enable_console', True)
    _default_enable_syslog = getattr(log_config, 'enable_syslog', False)

    for cached in _loggers.values():
        cached.reconfigure(
            _default_log_dir,
            _default_level,
            _default_enable_console,
            _default_enable_syslog,
        )
