"""logfmt rendering for CLI log lines.

Log context is a flat mapping from string keys to a closed set of printable
value kinds: ``str``, ``int``, ``float`` and ``bool``. Anything else is
rejected rather than stringified.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

LogValue = str | int | float | bool
LogContext = Mapping[str, LogValue]

_NEEDS_QUOTES = (" ", "=", '"', "\n", "\t")


def _format_value(value: LogValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        if value == "" or any(ch in value for ch in _NEEDS_QUOTES):
            escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
            return f'"{escaped}"'
        return value
    raise TypeError(f"Unsupported log context value type: {type(value).__name__}")


def format_context(context: LogContext | None) -> str:
    """Render ``context`` as space-separated ``key=value`` pairs.

    Keys are emitted in sorted order so lines are stable across runs.

    Raises:
        TypeError: If a key is not a string or a value is outside the
            supported kinds.
    """
    if not context:
        return ""
    parts: list[str] = []
    for key in sorted(context):
        if not isinstance(key, str):
            raise TypeError(f"Log context keys must be str; got {type(key).__name__}")
        parts.append(f"{key}={_format_value(context[key])}")
    return " ".join(parts)


class LogfmtFormatter(logging.Formatter):
    """Formats records as ``level message key=value ...``.

    Context is read from the ``context`` attribute set through
    ``logger.info(..., extra={"context": {...}})``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        line = f"{record.levelname.lower()} {message}"
        context = format_context(getattr(record, "context", None))
        if context:
            line = f"{line} {context}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
