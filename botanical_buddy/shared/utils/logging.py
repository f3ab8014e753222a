# 📄 File: botanical_buddy/shared/utils/logging.py
#
# 🧭 Purpose (Layman Explanation):
# Sets up how the app writes its diary of events, either as readable text while developing
# or as structured JSON lines that log tools can search in production.
#
# 🧪 Purpose (Technical Summary):
# Root logger configuration with a python-json-logger formatter for production and a
# plain formatter for development. A ContextVar carries the request id into every record.
#
# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging, contextvars (standard library)
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (startup)
# - botanical_buddy.api.middleware.logging (request id propagation)

import logging
import sys
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger import jsonlogger

from botanical_buddy.shared.config.settings import Settings, get_settings

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(request_id)s %(message)s"

# Chatty third-party loggers kept at WARNING
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio", "passlib")

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """Attach the current request id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def _build_formatter(settings: Settings) -> logging.Formatter:
    if settings.LOG_FORMAT == "json":
        return jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={"levelname": "level", "asctime": "timestamp", "name": "logger"},
        )
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(settings: Optional[Settings] = None, force: bool = False) -> None:
    """
    Configure root logging once per process.

    Args:
        settings: Settings to read level and format from
        force: Reconfigure even if logging was already set up
    """
    global _logging_configured
    if _logging_configured and not force:
        return

    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(settings))
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True
    logging.getLogger(__name__).debug(
        f"Logging configured (level={settings.LOG_LEVEL}, format={settings.LOG_FORMAT})"
    )
