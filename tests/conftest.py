"""Pytest fixtures for testing"""

import logging
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from payment_core.api.main import create_app
from payment_core.domain.bank_validation import SEPA_IBAN_LENGTHS
from payment_core.infrastructure.observability.logging import PAYMENT_LOGGER_NAME


def _iban_check_digits(country: str, bban: str) -> str:
    """Reference check digits using Python's big integers (no incremental reduction)"""
    rearranged = bban + country + "00"
    numeric = "".join(str(int(c, 36)) for c in rearranged)
    return f"{98 - int(numeric) % 97:02d}"


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def payment_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture records from the payment logger"""
    caplog.set_level(logging.INFO, logger=PAYMENT_LOGGER_NAME)
    return caplog


@pytest.fixture
def make_iban() -> Callable[[str, str], str]:
    """Build a checksum-valid IBAN from a country code and BBAN"""

    def build(country: str, bban: str) -> str:
        return f"{country}{_iban_check_digits(country, bban)}{bban}"

    return build


@pytest.fixture
def valid_bank_details(make_iban: Callable[[str, str], str]) -> Dict[str, dict]:
    """One valid BankDetails mapping per supported country"""
    details = {
        "US": {"routing_number": "021000021", "account_number": "123456789"},
        "CA": {"routing_number": "12345678", "account_number": "1234567"},
        "GB": {"sort_code": "20-00-00", "account_number": "12345678"},
        "AU": {"bsb": "062-000", "account_number": "123456789"},
        "NG": {"account_number": "0123456789", "bank_name": "Access Bank"},
        "GH": {"account_number": "1234567890", "bank_name": "GCB Bank"},
        "ZA": {"account_number": "1234567890", "routing_number": "250655"},
        "KE": {"account_number": "1234567890", "bank_name": "Equity Bank"},
        "EG": {"iban": make_iban("EG", "0019000500000000263180002")},
        "RW": {"account_number": "1234567890", "bank_name": "Bank of Kigali"},
        "CI": {"account_number": "CI0080111", "bank_name": "SGBCI"},
    }
    digits = "12345678901234567890123456789"
    for country, length in SEPA_IBAN_LENGTHS.items():
        details[country.value] = {"iban": make_iban(country.value, digits[: length - 4])}

    for code, fields in details.items():
        fields["country_code"] = code
        fields["account_name"] = "Ada Lovelace"
    return details
