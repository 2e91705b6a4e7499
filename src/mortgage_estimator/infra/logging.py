"""Structured JSON logging.

Application code logs through ``logging.getLogger(__name__)`` and passes
structured fields via ``extra=``; this module only decides how records are
rendered.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "mortgage-estimator"


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter that stamps every record with level and service name."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | None = None) -> None:
    """Install a single JSON stdout handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level or log_level())

    # Replace handlers so repeated app builds don't duplicate output
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServiceJsonFormatter("%(asctime)s %(name)s %(message)s"))
    root.addHandler(handler)
