"""
Country-aware bank detail validation.

Every supported country has one descriptor in COUNTRY_RULES holding the
fields its clearing system needs and the callable that checks them. Both
validate_bank_details and get_required_bank_fields read from that table, so
the form fields a client collects always match what the validator enforces.
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Tuple

from payment_core.domain.checksums import is_valid_aba_routing, is_valid_iban, normalize_iban
from payment_core.domain.models import (
    BankDetails,
    BankValidationIssue,
    BankValidationResult,
    IssueKind,
)

BASE_FIELDS: Tuple[str, ...] = ("account_name", "country_code")
MIN_ACCOUNT_NAME_LENGTH = 2

_DIGITS = re.compile(r"[0-9]+")


class SupportedCountry(str, Enum):
    """Countries with bank validation rules"""

    # ACH
    US = "US"
    CA = "CA"
    # BACS
    GB = "GB"
    # BECS
    AU = "AU"
    # SEPA
    DE = "DE"
    FR = "FR"
    ES = "ES"
    IT = "IT"
    NL = "NL"
    BE = "BE"
    AT = "AT"
    SE = "SE"
    NO = "NO"
    DK = "DK"
    FI = "FI"
    CH = "CH"
    PT = "PT"
    IE = "IE"
    # Africa (Paystack)
    NG = "NG"
    GH = "GH"
    ZA = "ZA"
    KE = "KE"
    EG = "EG"
    RW = "RW"
    CI = "CI"


CountryCheck = Callable[[BankDetails], List[BankValidationIssue]]


@dataclass(frozen=True)
class CountryRules:
    """Validation descriptor for one country"""

    clearing_system: str
    required_fields: Tuple[str, ...]
    check: CountryCheck
    # Fields accepted instead of the required ones (e.g. IBAN for UK accounts)
    alternative_fields: Tuple[str, ...] = ()


def _missing(field_name: str, message: str) -> BankValidationIssue:
    return BankValidationIssue(IssueKind.MISSING_FIELD, field_name, message)


def _require(value: Optional[str], field_name: str, message: str) -> List[BankValidationIssue]:
    return [] if value else [_missing(field_name, message)]


def _require_digits(
    value: Optional[str],
    field_name: str,
    min_len: int,
    max_len: int,
    missing_message: str,
    invalid_message: str,
    strip_hyphens: bool = False,
) -> List[BankValidationIssue]:
    """Check a numeric field is present, ASCII digits only, and within length bounds"""
    if not value:
        return [_missing(field_name, missing_message)]

    candidate = value.replace("-", "") if strip_hyphens else value
    if not _DIGITS.fullmatch(candidate):
        return [BankValidationIssue(IssueKind.BAD_FORMAT, field_name, invalid_message)]
    if not min_len <= len(candidate) <= max_len:
        return [BankValidationIssue(IssueKind.BAD_LENGTH, field_name, invalid_message)]
    return []


def _check_iban(iban: str, prefix: str, checksum_message: str, prefix_message: str) -> List[BankValidationIssue]:
    issues = []
    if not is_valid_iban(iban):
        issues.append(BankValidationIssue(IssueKind.CHECKSUM_FAILED, "iban", checksum_message))
    if not normalize_iban(iban).startswith(prefix):
        issues.append(BankValidationIssue(IssueKind.WRONG_PREFIX, "iban", prefix_message))
    return issues


def _check_us(details: BankDetails) -> List[BankValidationIssue]:
    issues = _require_digits(
        details.routing_number,
        "routing_number",
        9,
        9,
        "Routing number (ABA) is required for US accounts",
        "US routing number must be exactly 9 digits",
    )
    if not issues and not is_valid_aba_routing(details.routing_number):
        issues.append(
            BankValidationIssue(IssueKind.CHECKSUM_FAILED, "routing_number", "Invalid US routing number checksum")
        )
    issues += _require_digits(
        details.account_number,
        "account_number",
        4,
        17,
        "Account number is required for US accounts",
        "US account number must be 4-17 digits",
    )
    return issues


def _check_ca(details: BankDetails) -> List[BankValidationIssue]:
    return _require_digits(
        details.routing_number,
        "routing_number",
        8,
        9,
        "Transit/institution number is required for Canadian accounts",
        "Canadian routing number must be 8-9 digits (transit + institution)",
    ) + _require_digits(
        details.account_number,
        "account_number",
        5,
        12,
        "Account number is required",
        "Canadian account number must be 5-12 digits",
    )


def _check_gb(details: BankDetails) -> List[BankValidationIssue]:
    if details.iban:
        return _check_iban(details.iban, "GB", "Invalid UK IBAN checksum", "UK IBAN must start with GB")

    return _require_digits(
        details.sort_code,
        "sort_code",
        6,
        6,
        "Sort code is required for UK accounts",
        "UK sort code must be 6 digits",
        strip_hyphens=True,
    ) + _require_digits(
        details.account_number,
        "account_number",
        8,
        8,
        "Account number is required for UK accounts",
        "UK account number must be exactly 8 digits",
    )


def _check_au(details: BankDetails) -> List[BankValidationIssue]:
    return _require_digits(
        details.bsb,
        "bsb",
        6,
        6,
        "BSB is required for Australian accounts",
        "Australian BSB must be 6 digits",
        strip_hyphens=True,
    ) + _require_digits(
        details.account_number,
        "account_number",
        5,
        9,
        "Account number is required",
        "Australian account number must be 5-9 digits",
    )


def _sepa(prefix: str, expected_length: int) -> CountryCheck:
    """Build the IBAN-only check for a SEPA country"""

    def check(details: BankDetails) -> List[BankValidationIssue]:
        if not details.iban:
            return [_missing("iban", f"IBAN is required for {prefix} accounts")]

        clean = normalize_iban(details.iban)
        issues = []
        if not clean.startswith(prefix):
            issues.append(BankValidationIssue(IssueKind.WRONG_PREFIX, "iban", f"IBAN must start with {prefix}"))
        if len(clean) != expected_length:
            issues.append(
                BankValidationIssue(
                    IssueKind.BAD_LENGTH, "iban", f"{prefix} IBAN must be exactly {expected_length} characters"
                )
            )
        if not is_valid_iban(clean):
            issues.append(BankValidationIssue(IssueKind.CHECKSUM_FAILED, "iban", "Invalid IBAN checksum"))
        return issues

    return check


def _account_and_bank(
    min_len: int,
    max_len: int,
    invalid_message: str,
    missing_message: str = "Account number is required",
    bank_message: str = "Bank name/code is required",
) -> CountryCheck:
    """Build the account number + bank name check used by African rails"""

    def check(details: BankDetails) -> List[BankValidationIssue]:
        return _require_digits(
            details.account_number, "account_number", min_len, max_len, missing_message, invalid_message
        ) + _require(details.bank_name, "bank_name", bank_message)

    return check


def _check_za(details: BankDetails) -> List[BankValidationIssue]:
    return _require_digits(
        details.account_number,
        "account_number",
        7,
        11,
        "Account number is required",
        "South African account number must be 7-11 digits",
    ) + _require_digits(
        details.routing_number,
        "routing_number",
        6,
        6,
        "Branch code is required for South African accounts",
        "South African branch code must be 6 digits",
    )


def _check_eg(details: BankDetails) -> List[BankValidationIssue]:
    if details.iban:
        return _check_iban(details.iban, "EG", "Invalid Egyptian IBAN checksum", "Egyptian IBAN must start with EG")
    return _require(details.account_number, "account_number", "Account number or IBAN is required")


def _check_ci(details: BankDetails) -> List[BankValidationIssue]:
    return _require(details.account_number, "account_number", "Account number is required") + _require(
        details.bank_name, "bank_name", "Bank name is required"
    )


_ROUTING_ACCOUNT = ("routing_number", "account_number")
_IBAN = ("iban",)
_BANK_ACCOUNT = ("bank_name", "account_number")

# IBAN lengths per SEPA country
SEPA_IBAN_LENGTHS: Mapping[SupportedCountry, int] = MappingProxyType(
    {
        SupportedCountry.DE: 22,
        SupportedCountry.FR: 27,
        SupportedCountry.ES: 24,
        SupportedCountry.IT: 27,
        SupportedCountry.NL: 18,
        SupportedCountry.BE: 16,
        SupportedCountry.AT: 20,
        SupportedCountry.SE: 24,
        SupportedCountry.NO: 15,
        SupportedCountry.DK: 18,
        SupportedCountry.FI: 18,
        SupportedCountry.CH: 21,
        SupportedCountry.PT: 25,
        SupportedCountry.IE: 22,
    }
)

COUNTRY_RULES: Mapping[SupportedCountry, CountryRules] = MappingProxyType(
    {
        SupportedCountry.US: CountryRules("ACH", _ROUTING_ACCOUNT, _check_us),
        SupportedCountry.CA: CountryRules("ACH", _ROUTING_ACCOUNT, _check_ca),
        SupportedCountry.GB: CountryRules("BACS", ("sort_code", "account_number"), _check_gb, alternative_fields=_IBAN),
        SupportedCountry.AU: CountryRules("BECS", ("bsb", "account_number"), _check_au),
        **{
            country: CountryRules("SEPA", _IBAN, _sepa(country.value, length))
            for country, length in SEPA_IBAN_LENGTHS.items()
        },
        SupportedCountry.NG: CountryRules(
            "NIBSS",
            _BANK_ACCOUNT,
            _account_and_bank(
                10,
                10,
                "Nigerian NUBAN account number must be exactly 10 digits",
                missing_message="NUBAN account number is required",
                bank_message="Bank name/code is required for Nigerian accounts",
            ),
        ),
        SupportedCountry.GH: CountryRules(
            "GhIPSS", _BANK_ACCOUNT, _account_and_bank(9, 16, "Ghanaian account number must be 9-16 digits")
        ),
        SupportedCountry.ZA: CountryRules("BankservAfrica", _ROUTING_ACCOUNT, _check_za),
        SupportedCountry.KE: CountryRules(
            "KEPSS", _BANK_ACCOUNT, _account_and_bank(8, 14, "Kenyan account number must be 8-14 digits")
        ),
        SupportedCountry.EG: CountryRules("ACH Egypt", _IBAN, _check_eg, alternative_fields=("account_number",)),
        SupportedCountry.RW: CountryRules(
            "RIPPS",
            _BANK_ACCOUNT,
            _account_and_bank(10, 16, "Rwandan account number must be 10-16 digits", bank_message="Bank name is required"),
        ),
        SupportedCountry.CI: CountryRules("BCEAO", _BANK_ACCOUNT, _check_ci),
    }
)


def resolve_country(country_code: Optional[str]) -> Optional[SupportedCountry]:
    """Map a case-insensitive country code to a supported country, or None"""
    try:
        return SupportedCountry((country_code or "").strip().upper())
    except ValueError:
        return None


def get_country_rules(country_code: Optional[str]) -> Optional[CountryRules]:
    country = resolve_country(country_code)
    return COUNTRY_RULES[country] if country else None


def _check_common(details: BankDetails) -> List[BankValidationIssue]:
    name = (details.account_name or "").strip()
    if len(name) < MIN_ACCOUNT_NAME_LENGTH:
        return [_missing("account_name", "Account holder name is required (minimum 2 characters)")]
    return []


def validate_bank_details(details: BankDetails) -> BankValidationResult:
    """
    Validate bank details against the rules of their country.

    Common checks and country checks both run so the caller sees every
    problem in one round trip. Unsupported countries fail immediately with a
    single error. Never raises.
    """
    country_code = (details.country_code or "").strip().upper()
    rules = get_country_rules(country_code)
    if rules is None:
        return BankValidationResult(
            issues=[
                BankValidationIssue(
                    IssueKind.UNSUPPORTED_COUNTRY,
                    "country_code",
                    f"Bank validation not supported for country: {country_code}",
                )
            ]
        )

    return BankValidationResult(issues=_check_common(details) + rules.check(details))


def get_required_bank_fields(country_code: str) -> List[str]:
    """Field names a form must collect for the country, base fields first"""
    rules = get_country_rules(country_code)
    if rules is None:
        return list(BASE_FIELDS)
    return [*BASE_FIELDS, *rules.required_fields]
