"""Structured JSON logging for production observability"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from pythonjsonlogger import jsonlogger

from payment_core.config import settings
from payment_core.infrastructure.observability.metrics import operation_duration_histogram
from payment_core.utils.correlation import generate_correlation_id

PAYMENT_SERVICE = "payment"
PAYMENT_LOGGER_NAME = "payment_core.payment"

# Attributes logging.LogRecord reserves; passing them through `extra` raises KeyError
RESERVED_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

T = TypeVar("T")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        if not log_record.get("service"):
            log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class PaymentLogger:
    """
    Structured logger for payment operations.

    Each call emits one record whose message is the operation name and whose
    extra fields carry service="payment", the operation and the caller's data.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(PAYMENT_LOGGER_NAME)

    def _log(self, level: int, operation: str, data: Optional[Dict[str, Any]]) -> None:
        extra: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            extra[f"data_{key}" if key in RESERVED_RECORD_ATTRS else key] = value
        extra["service"] = PAYMENT_SERVICE
        extra["operation"] = operation
        self.logger.log(level, operation, extra=extra)

    def info(self, operation: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, operation, data)

    def warn(self, operation: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, operation, data)

    def error(self, operation: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, operation, data)

    async def track_operation(
        self,
        operation: str,
        metadata: Optional[Dict[str, Any]],
        fn: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Await fn() with start/completion/failure logging and timing.

        Logs "<operation>_started", then "<operation>_completed" or
        "<operation>_failed" with duration_ms. Failures are re-raised
        unchanged; this wrapper never swallows or wraps errors.
        """
        metadata = metadata or {}
        correlation_id = generate_correlation_id()
        start_time = time.time()

        self.info(f"{operation}_started", {**metadata, "correlation_id": correlation_id})

        try:
            result = await fn()
        except Exception as e:
            duration = time.time() - start_time
            operation_duration_histogram.labels(operation=operation, outcome="failed").observe(duration)
            self.error(
                f"{operation}_failed",
                {
                    **metadata,
                    "correlation_id": correlation_id,
                    "duration_ms": round(duration * 1000, 2),
                    "error": str(e),
                },
            )
            raise

        duration = time.time() - start_time
        operation_duration_histogram.labels(operation=operation, outcome="completed").observe(duration)
        self.info(
            f"{operation}_completed",
            {**metadata, "correlation_id": correlation_id, "duration_ms": round(duration * 1000, 2)},
        )
        return result


payment_logger = PaymentLogger()
