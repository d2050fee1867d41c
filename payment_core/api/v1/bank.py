"""Bank detail validation endpoints"""

from fastapi import APIRouter

from payment_core.api.v1.schemas import BankDetailsRequest, BankValidationResponse, RequiredFieldsResponse
from payment_core.domain.bank_validation import (
    get_country_rules,
    get_required_bank_fields,
    resolve_country,
    validate_bank_details,
)
from payment_core.infrastructure.observability.metrics import record_bank_validation

router = APIRouter()


@router.post("/bank-details/validate", response_model=BankValidationResponse)
def validate_bank_details_endpoint(request_body: BankDetailsRequest):
    """
    Validate payout/collection account details for their country.

    Always answers 200; an invalid record is a normal outcome whose errors
    are meant to be shown next to the form.
    """
    details = request_body.to_domain()
    result = validate_bank_details(details)

    country = resolve_country(details.country_code)
    record_bank_validation(country.value if country else None, result.valid)

    return BankValidationResponse(valid=result.valid, errors=result.errors)


@router.get("/bank-details/required-fields/{country_code}", response_model=RequiredFieldsResponse)
def get_required_fields(country_code: str):
    """Fields a form must collect before calling validate"""
    code = country_code.strip().upper()
    rules = get_country_rules(code)
    return RequiredFieldsResponse(
        country_code=code,
        supported=rules is not None,
        clearing_system=rules.clearing_system if rules else None,
        fields=get_required_bank_fields(code),
    )
