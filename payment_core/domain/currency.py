"""Currency support per payment provider"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from payment_core.domain.models import CurrencyValidationResult


class PaymentProvider(str, Enum):
    """Payment providers the platform routes money through"""

    STRIPE = "stripe"
    PAYSTACK = "paystack"


PROVIDER_CURRENCIES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        PaymentProvider.STRIPE.value: ("USD", "EUR", "GBP", "CAD", "AUD", "JPY", "CHF", "SEK", "NOK", "DKK", "ISK"),
        PaymentProvider.PAYSTACK.value: ("NGN", "GHS", "ZAR", "KES", "USD", "EGP", "XOF", "RWF"),
    }
)


def supported_currencies(provider: str) -> Tuple[str, ...]:
    """Currencies a provider accepts, empty for unknown providers"""
    return PROVIDER_CURRENCIES.get(provider.strip().lower(), ())


def validate_currency_for_provider(currency: str, provider: str) -> CurrencyValidationResult:
    """
    Check a currency can be charged through a provider before calling it.

    Both arguments are case-insensitive. Failures name the supported set so
    the message is actionable on its own.
    """
    provider_key = provider.strip().lower()
    supported = PROVIDER_CURRENCIES.get(provider_key)
    if supported is None:
        return CurrencyValidationResult(
            valid=False,
            message=f"Unknown payment provider: {provider}. Supported providers: {', '.join(PROVIDER_CURRENCIES)}",
        )

    if currency.strip().upper() not in supported:
        return CurrencyValidationResult(
            valid=False,
            message=f"Currency {currency} is not supported by {provider_key}. Supported: {', '.join(supported)}",
        )

    return CurrencyValidationResult(valid=True)
