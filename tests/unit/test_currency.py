"""Unit tests for provider currency support and region routing"""

import pytest
from payment_core.domain.currency import (
    PROVIDER_CURRENCIES,
    PaymentProvider,
    supported_currencies,
    validate_currency_for_provider,
)
from payment_core.domain.regions import (
    REGION_CONFIGS,
    get_currency_for_country,
    get_payment_provider,
    get_region_config,
)


@pytest.mark.parametrize("currency", ["USD", "EUR", "GBP", "CAD", "AUD", "JPY", "CHF", "SEK", "NOK", "DKK", "ISK"])
def test_stripe_currencies(currency: str):
    assert validate_currency_for_provider(currency, "stripe").valid is True


@pytest.mark.parametrize("currency", ["NGN", "GHS", "ZAR", "KES", "USD", "EGP", "XOF", "RWF"])
def test_paystack_currencies(currency: str):
    assert validate_currency_for_provider(currency, "paystack").valid is True


def test_unsupported_currency_lists_supported_set():
    result = validate_currency_for_provider("NGN", "stripe")
    assert result.valid is False
    assert "not supported by stripe" in result.message
    assert "USD, EUR, GBP" in result.message


def test_paystack_rejects_euro():
    result = validate_currency_for_provider("EUR", "paystack")
    assert result.valid is False
    assert "not supported by paystack" in result.message


def test_case_insensitive():
    assert validate_currency_for_provider("usd", "stripe").valid is True
    assert validate_currency_for_provider("Usd", "Stripe").valid is True


def test_unknown_provider():
    result = validate_currency_for_provider("USD", "square")
    assert result.valid is False
    assert "Unknown payment provider" in result.message
    assert "stripe, paystack" in result.message


def test_valid_result_has_no_message():
    assert validate_currency_for_provider("GBP", "stripe").message is None


def test_supported_currencies():
    assert supported_currencies("PAYSTACK") == PROVIDER_CURRENCIES["paystack"]
    assert supported_currencies("unknown") == ()


def test_currency_table_is_read_only():
    with pytest.raises(TypeError):
        PROVIDER_CURRENCIES["adyen"] = ("EUR",)  # type: ignore[index]


def test_region_lookup():
    config = get_region_config("ng")
    assert config is not None
    assert config.currency == "NGN"
    assert config.payment_provider == PaymentProvider.PAYSTACK.value


def test_unknown_region_defaults():
    assert get_region_config("XX") is None
    assert get_payment_provider("XX") == "stripe"
    assert get_currency_for_country("XX") == {"currency": "USD", "symbol": "$"}


def test_europe_routes_through_stripe_in_euros():
    assert get_payment_provider("DE") == "stripe"
    assert get_currency_for_country("fr") == {"currency": "EUR", "symbol": "€"}


@pytest.mark.parametrize("config", REGION_CONFIGS, ids=lambda c: c.region)
def test_every_region_currency_is_supported_by_its_provider(config):
    assert validate_currency_for_provider(config.currency, config.payment_provider).valid is True


def test_countries_belong_to_one_region():
    countries = [code for config in REGION_CONFIGS for code in config.countries]
    assert len(countries) == len(set(countries))
