"""Currency, region and payout preflight endpoints"""

from fastapi import APIRouter, HTTPException, Query, Request

from payment_core.api.dependencies import get_request_id
from payment_core.api.v1.schemas import (
    CurrencyValidationResponse,
    PayoutPreflightRequest,
    PayoutPreflightResponse,
    RegionResponse,
)
from payment_core.domain import money
from payment_core.domain.bank_validation import resolve_country, validate_bank_details
from payment_core.domain.currency import validate_currency_for_provider
from payment_core.domain.regions import get_currency_for_country, get_payment_provider, get_region_config
from payment_core.infrastructure.observability.logging import payment_logger
from payment_core.infrastructure.observability.metrics import record_bank_validation

router = APIRouter()

INVALID_AMOUNT_MESSAGE = f"Amount must be a number greater than 0 and at most {money.MAX_AMOUNT:,}"


@router.get("/currencies/validate", response_model=CurrencyValidationResponse)
def validate_currency(
    currency: str = Query(..., min_length=1),
    provider: str = Query(..., min_length=1),
):
    result = validate_currency_for_provider(currency, provider)
    return CurrencyValidationResponse(valid=result.valid, message=result.message)


@router.get("/regions/{country_code}", response_model=RegionResponse)
def get_region(country_code: str):
    config = get_region_config(country_code)
    if config is None:
        raise HTTPException(status_code=404, detail=f"No payment region for country: {country_code.upper()}")

    return RegionResponse(
        region=config.region,
        countries=list(config.countries),
        currency=config.currency,
        payment_provider=config.payment_provider,
        currency_symbol=config.currency_symbol,
    )


@router.post("/payouts/preflight", response_model=PayoutPreflightResponse)
def payout_preflight(request_body: PayoutPreflightRequest, request: Request):
    """
    Run every check a payout needs before the provider is contacted.

    Flow:
    1. Validate bank details for the destination country
    2. Resolve provider and currency (country defaults when omitted)
    3. Check the currency is supported by the provider
    4. Check the amount is a positive, bounded number

    All checks run; the response lists every problem found.
    """
    details = request_body.bank_details.to_domain()
    bank_result = validate_bank_details(details)
    country = resolve_country(details.country_code)
    record_bank_validation(country.value if country else None, bank_result.valid)

    provider = (request_body.provider or get_payment_provider(details.country_code)).lower()
    currency = (request_body.currency or get_currency_for_country(details.country_code)["currency"]).upper()

    errors = list(bank_result.errors)

    currency_result = validate_currency_for_provider(currency, provider)
    if not currency_result.valid:
        errors.append(currency_result.message)

    amount_minor = None
    formatted_amount = None
    if money.is_valid(request_body.amount):
        amount_minor = money.to_minor(request_body.amount)
        formatted_amount = money.format_amount(request_body.amount, currency)
    else:
        errors.append(INVALID_AMOUNT_MESSAGE)

    if errors:
        payment_logger.warn(
            "payout_preflight_rejected",
            {
                "request_id": get_request_id(request),
                "country_code": details.country_code.upper(),
                "provider": provider,
                "error_count": len(errors),
            },
        )

    return PayoutPreflightResponse(
        valid=not errors,
        errors=errors,
        provider=provider,
        currency=currency,
        amount_minor=amount_minor,
        formatted_amount=formatted_amount,
    )
