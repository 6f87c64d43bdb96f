from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional, Union

# Per-request values picked up by every log line
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
user_var: ContextVar[Optional[str]] = ContextVar("user", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | user=%(user)s | %(message)s"

# Libraries that log every outbound request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


class LoggingContextFilter(logging.Filter):
    """Copy the request's correlation id and user onto each record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.correlation_id = correlation_id_var.get() or "-"
        record.user = user_var.get() or "-"
        return True


# PUBLIC_INTERFACE
def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install a single stdout handler on the root logger with the request context filter."""
    if isinstance(level, str):
        level = level.upper()

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(LoggingContextFilter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
