"""Translate raw provider/internal failures into client-safe payment errors"""

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from payment_core.domain.currency import PROVIDER_CURRENCIES
from payment_core.domain.models import PaymentError
from payment_core.infrastructure.observability.logging import payment_logger
from payment_core.infrastructure.observability.metrics import payment_error_counter
from payment_core.utils.correlation import generate_correlation_id


class PaymentErrorKind(str, Enum):
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_ACCOUNT = "invalid_account"
    DUPLICATE = "duplicate"
    RATE_LIMITED = "rate_limited"
    PROVIDER_AUTH = "provider_auth"
    PROVIDER_UNREACHABLE = "provider_unreachable"
    UNSUPPORTED_CURRENCY = "unsupported_currency"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ErrorRule:
    """Substring rule: every group must have at least one term in the message"""

    kind: PaymentErrorKind
    status_code: int
    user_message: str
    term_groups: Tuple[Tuple[str, ...], ...]

    def matches(self, message: str) -> bool:
        return all(any(term in message for term in group) for group in self.term_groups)


# Order matters: first match wins
ERROR_RULES: Tuple[ErrorRule, ...] = (
    ErrorRule(
        PaymentErrorKind.INSUFFICIENT_FUNDS,
        400,
        "Insufficient funds for this transaction.",
        (("insufficient", "balance"),),
    ),
    ErrorRule(
        PaymentErrorKind.INVALID_ACCOUNT,
        400,
        "The recipient account details are invalid. Please check and try again.",
        (("invalid",), ("account",)),
    ),
    ErrorRule(
        PaymentErrorKind.DUPLICATE,
        409,
        "This transaction has already been processed.",
        (("duplicate", "idempotent"),),
    ),
    ErrorRule(
        PaymentErrorKind.RATE_LIMITED,
        429,
        "Too many requests. Please wait a moment and try again.",
        (("rate", "limit", "throttl"),),
    ),
    ErrorRule(
        PaymentErrorKind.PROVIDER_AUTH,
        503,
        "Payment service temporarily unavailable. Please try again later.",
        (("authentication", "unauthorized", "api key"),),
    ),
    ErrorRule(
        PaymentErrorKind.PROVIDER_UNREACHABLE,
        503,
        "Payment service is temporarily unreachable. Please try again in a few minutes.",
        (("timeout", "timed out", "econnrefused", "connection refused", "network"),),
    ),
    ErrorRule(
        PaymentErrorKind.UNSUPPORTED_CURRENCY,
        400,
        "This currency is not supported for the selected country.",
        (("currency",), ("not supported", "invalid")),
    ),
)

DEFAULT_RULE = ErrorRule(
    PaymentErrorKind.UNKNOWN,
    500,
    "An error occurred processing your payment. Please try again or contact support.",
    (),
)


def _error_message(error: Any) -> str:
    """Best-effort message from an exception, a {"message": ...} mapping, or anything else"""
    if isinstance(error, Mapping):
        message = error.get("message")
    else:
        message = getattr(error, "message", None)
    if message is None and error is not None:
        message = str(error)
    return str(message) if message is not None else ""


def _first_stack_line(error: Any) -> Optional[str]:
    """Innermost frame of an exception's traceback, formatted on one line"""
    tb = getattr(error, "__traceback__", None)
    if tb is None:
        return None
    frame = traceback.extract_tb(tb)[-1]
    return f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'


def _provider_label(provider: Optional[str]) -> str:
    """Bounded metric label; unknown providers collapse to "other"."""
    if not provider:
        return "internal"
    key = provider.strip().lower()
    return key if key in PROVIDER_CURRENCIES else "other"


def classify_error_message(message: str) -> ErrorRule:
    lowered = message.lower()
    return next((rule for rule in ERROR_RULES if rule.matches(lowered)), DEFAULT_RULE)


def map_payment_error(error: Any, provider: Optional[str] = None) -> PaymentError:
    """
    Map a raw failure to a PaymentError that is safe to return to clients.

    The full internal detail (message, innermost stack frame, provider) is
    logged under a fresh correlation id before classification; the returned
    object only carries the generic user message, status code, correlation
    id and provider.
    """
    correlation_id = generate_correlation_id()
    internal_message = _error_message(error)

    payment_logger.error(
        "payment_error",
        {
            "correlation_id": correlation_id,
            "provider": provider,
            "internal_message": internal_message,
            "stack": _first_stack_line(error),
        },
    )

    rule = classify_error_message(internal_message)
    payment_error_counter.labels(provider=_provider_label(provider), kind=rule.kind.value).inc()

    return PaymentError(
        user_message=rule.user_message,
        status_code=rule.status_code,
        correlation_id=correlation_id,
        provider=provider,
    )
