"""
Structured logging setup.
Application logs carry a correlation id; audit records go to a dedicated logger as JSON lines.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from solarview.core.config import settings


class CorrelationIdFilter(logging.Filter):
    """Guarantees every record has a correlation_id attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s"
    ))
    handler.addFilter(CorrelationIdFilter())
    return handler


def setup_logger(name: str) -> logging.Logger:
    """Returns a configured logger. Idempotent: handlers are attached only once."""
    configured = logging.getLogger(name)
    if not configured.handlers:
        configured.addHandler(_build_handler())
        configured.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
        configured.propagate = False
    return configured


logger = setup_logger("solarview")
_audit_logger = setup_logger("solarview.audit")


def get_logger_with_correlation(correlation_id: str) -> logging.LoggerAdapter:
    """Binds a correlation id to every message emitted through the returned adapter."""
    return logging.LoggerAdapter(logger, {"correlation_id": correlation_id})


def audit_log(
    action: str,
    user: str,
    resource: str,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """
    Emits an append-only audit record.
    One JSON line per mutation: who did what to which resource, plus free-form details.
    """
    details = details or {}
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "user": user,
        "resource": resource,
        "details": details,
    }
    _audit_logger.info(
        json.dumps(record, ensure_ascii=False, default=str),
        extra={"correlation_id": details.get("correlation_id", "-")}
    )
