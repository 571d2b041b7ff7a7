"""
Centralized Logging

Architectural Intent:
- One stderr handler on the package logger; stdout carries the MCP JSON-RPC
  stream and must never receive log lines
- Level comes from CLI flags (--verbose, --debug) or the config file
- JSON output lifts the tool and platform operation of a record (passed via
  ``extra=``) to top-level keys so a request can be followed across lines
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Union

PACKAGE_LOGGER = "railway_mcp"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONTEXT_FIELDS = ("tool", "operation")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def resolve_level(level: Union[int, str]) -> int:
    """Accept a logging level as int or name ("debug", "INFO", ...)."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
) -> logging.Handler:
    """Install the package's only handler and return it."""
    level = resolve_level(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))

    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(level)
    package.handlers[:] = [handler]
    return handler
