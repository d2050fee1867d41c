"""Pydantic schemas for API request/response validation"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from payment_core.domain.models import BankDetails


class CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BankDetailsRequest(CamelModel):
    """Request body for POST /v1/bank-details/validate"""

    country_code: str = Field(..., min_length=1, description="ISO 3166-1 alpha-2 country code")
    account_number: Optional[str] = None
    routing_number: Optional[str] = Field(None, description="ABA, transit or branch code")
    sort_code: Optional[str] = None
    iban: Optional[str] = None
    bsb: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None

    def to_domain(self) -> BankDetails:
        return BankDetails(**self.model_dump())


class BankValidationResponse(BaseModel):
    """Response for POST /v1/bank-details/validate"""

    valid: bool
    errors: List[str]


class RequiredFieldsResponse(BaseModel):
    """Response for GET /v1/bank-details/required-fields/{country_code}"""

    country_code: str
    supported: bool
    clearing_system: Optional[str] = Field(None, description="Domestic rail the details are routed through")
    fields: List[str]


class CurrencyValidationResponse(BaseModel):
    """Response for GET /v1/currencies/validate"""

    valid: bool
    message: Optional[str] = None


class RegionResponse(BaseModel):
    """Response for GET /v1/regions/{country_code}"""

    region: str
    countries: List[str]
    currency: str
    payment_provider: str
    currency_symbol: str


class PayoutPreflightRequest(CamelModel):
    """Request body for POST /v1/payouts/preflight"""

    bank_details: BankDetailsRequest
    amount: Union[str, float] = Field(..., description="Amount in major units")
    currency: Optional[str] = Field(None, description="Defaults to the country's currency")
    provider: Optional[str] = Field(None, description="Defaults to the country's provider")


class PayoutPreflightResponse(BaseModel):
    """Response for POST /v1/payouts/preflight"""

    valid: bool
    errors: List[str]
    provider: str
    currency: str
    amount_minor: Optional[int] = None
    formatted_amount: Optional[str] = None


class PaymentErrorResponse(BaseModel):
    """Client-safe body returned for failed provider calls"""

    user_message: str
    status_code: int
    correlation_id: str
    provider: Optional[str] = None
