"""Log formatters for Conduit."""

import logging
from datetime import datetime

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName'
})


def _quote(value: str) -> str:
    """Quote a logfmt value when it holds spaces, quotes or equals signs."""
    if value == '' or any(c in value for c in ' "='):
        escaped = value.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'
    return value


class LogfmtFormatter(logging.Formatter):
    """Logfmt formatter: level=INFO ts=2025-01-01T12:00:00 component=conduit.search msg="message" key=value"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as logfmt key=value pairs.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        parts = [
            f'level={record.levelname}',
            f'ts={datetime.fromtimestamp(record.created).isoformat()}',
            f'component={record.name}',
            f'msg={_quote(record.getMessage())}',
        ]

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if exc_text:
                exc_text = exc_text.replace("\n", "\\n")
                parts.append(f"error={_quote(exc_text)}")

        for key, value in record.__dict__.items():
            if key in _RESERVED_KEYS or key.startswith('_'):
                continue
            if isinstance(value, str):
                parts.append(f'{key}={_quote(value)}')
            else:
                parts.append(f'{key}={value}')

        return ' '.join(parts)
