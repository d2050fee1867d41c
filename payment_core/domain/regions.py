"""Country to currency and payment provider routing"""

from typing import Dict, Optional, Tuple

from payment_core.domain.currency import PaymentProvider
from payment_core.domain.models import RegionConfig

DEFAULT_PROVIDER = PaymentProvider.STRIPE.value
DEFAULT_CURRENCY = "USD"
DEFAULT_CURRENCY_SYMBOL = "$"

REGION_CONFIGS: Tuple[RegionConfig, ...] = (
    RegionConfig("North America", ("US", "CA"), "USD", PaymentProvider.STRIPE.value, "$"),
    RegionConfig(
        "Europe",
        ("DE", "FR", "ES", "IT", "NL", "BE", "AT", "CH", "SE", "NO", "DK", "FI", "IE", "PT"),
        "EUR",
        PaymentProvider.STRIPE.value,
        "€",
    ),
    RegionConfig("United Kingdom", ("GB",), "GBP", PaymentProvider.STRIPE.value, "£"),
    RegionConfig("Nigeria", ("NG",), "NGN", PaymentProvider.PAYSTACK.value, "₦"),
    RegionConfig("Ghana", ("GH",), "GHS", PaymentProvider.PAYSTACK.value, "GH₵"),
    RegionConfig("South Africa", ("ZA",), "ZAR", PaymentProvider.PAYSTACK.value, "R"),
    RegionConfig("Kenya", ("KE",), "KES", PaymentProvider.PAYSTACK.value, "KSh"),
    RegionConfig("Egypt", ("EG",), "EGP", PaymentProvider.PAYSTACK.value, "E£"),
    RegionConfig("Rwanda", ("RW",), "RWF", PaymentProvider.PAYSTACK.value, "RF"),
    RegionConfig("Côte d'Ivoire", ("CI",), "XOF", PaymentProvider.PAYSTACK.value, "CFA"),
)


def get_region_config(country_code: str) -> Optional[RegionConfig]:
    code = country_code.strip().upper()
    return next((config for config in REGION_CONFIGS if code in config.countries), None)


def get_payment_provider(country_code: str) -> str:
    """Provider used for a country; Stripe when the country has no region"""
    config = get_region_config(country_code)
    return config.payment_provider if config else DEFAULT_PROVIDER


def get_currency_for_country(country_code: str) -> Dict[str, str]:
    """Default currency and symbol for a country; USD when the country has no region"""
    config = get_region_config(country_code)
    if config is None:
        return {"currency": DEFAULT_CURRENCY, "symbol": DEFAULT_CURRENCY_SYMBOL}
    return {"currency": config.currency, "symbol": config.currency_symbol}
