"""Logging setup shared by the server and command-line entry points."""

from __future__ import annotations

import logging
import sys

from sectionhtml.config import SECTIONHTML_LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_configured = False


class ExtraFieldsFormatter(logging.Formatter):
    """Appends fields passed through ``extra=`` as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}
        if extras:
            message += " " + " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return message


def configure_logging(level: str = SECTIONHTML_LOG_LEVEL) -> None:
    """Install a single stream handler on the root logger, once."""
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ExtraFieldsFormatter(_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
