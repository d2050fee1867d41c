"""
E2E payout scenarios across regions, driven through the HTTP API.

Each scenario walks the flow a client form follows:
1. Ask which fields the destination country needs
2. Look up the region's provider and currency
3. Preflight the payout with the collected details

Scenarios:
- us_ach: ABA routing number with a valid checksum
- uk_bacs: sort code path
- eu_sepa: IBAN with country prefix and length checks
- ng_nuban: Paystack payout in naira
- ke_mobile_bank: Paystack payout in shillings
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

SCENARIOS: Dict[str, dict] = {
    "us_ach": {
        "bank_details": {
            "countryCode": "US",
            "routingNumber": "021000021",
            "accountNumber": "000123456789",
            "accountName": "Grace Hopper",
        },
        "amount": "1250.00",
        "provider": "stripe",
        "currency": "USD",
        "formatted": "$1250.00",
    },
    "uk_bacs": {
        "bank_details": {
            "countryCode": "GB",
            "sortCode": "40-47-84",
            "accountNumber": "70872490",
            "accountName": "Alan Turing",
        },
        "amount": 99.99,
        "provider": "stripe",
        "currency": "GBP",
        "formatted": "£99.99",
    },
    "eu_sepa": {
        "bank_details": {
            "countryCode": "NL",
            "iban": "NL91 ABNA 0417 1643 00",
            "accountName": "Edsger Dijkstra",
        },
        "amount": "0.10",
        "provider": "stripe",
        "currency": "EUR",
        "formatted": "€0.10",
    },
    "ng_nuban": {
        "bank_details": {
            "countryCode": "NG",
            "accountNumber": "0690000031",
            "bankName": "Access Bank",
            "accountName": "Chimamanda Adichie",
        },
        "amount": "75000",
        "provider": "paystack",
        "currency": "NGN",
        "formatted": "₦75000.00",
    },
    "ke_mobile_bank": {
        "bank_details": {
            "countryCode": "KE",
            "accountNumber": "0110123456",
            "bankName": "Equity Bank",
            "accountName": "Wangari Maathai",
        },
        "amount": "1500.5",
        "provider": "paystack",
        "currency": "KES",
        "formatted": "KSh1500.50",
    },
}


@pytest.mark.integration
@pytest.mark.parametrize("name", list(SCENARIOS))
def test_payout_scenario(client: TestClient, name: str):
    scenario = SCENARIOS[name]
    country = scenario["bank_details"]["countryCode"]

    required = client.get(f"/v1/bank-details/required-fields/{country}").json()
    assert required["supported"] is True
    for field_name in required["fields"]:
        camel = "".join(part.capitalize() if i else part for i, part in enumerate(field_name.split("_")))
        assert camel in scenario["bank_details"], f"{name} is missing {field_name}"

    region = client.get(f"/v1/regions/{country}").json()
    assert region["payment_provider"] == scenario["provider"]
    assert region["currency"] == scenario["currency"]

    response = client.post(
        "/v1/payouts/preflight",
        json={"bankDetails": scenario["bank_details"], "amount": scenario["amount"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True, data["errors"]
    assert data["provider"] == scenario["provider"]
    assert data["currency"] == scenario["currency"]
    assert data["formatted_amount"] == scenario["formatted"]


@pytest.mark.integration
def test_sepa_payout_with_foreign_iban_is_rejected(client: TestClient):
    """A French IBAN entered for a German account fails prefix and length"""
    data = client.post(
        "/v1/payouts/preflight",
        json={
            "bankDetails": {"countryCode": "DE", "iban": "FR7630006000011234567890189", "accountName": "Hans Muller"},
            "amount": "10",
        },
    ).json()

    assert data["valid"] is False
    assert "IBAN must start with DE" in data["errors"]
    assert "DE IBAN must be exactly 22 characters" in data["errors"]


@pytest.mark.integration
def test_payout_with_overridden_provider_and_unsupported_currency(client: TestClient):
    """Routing naira through Stripe is caught before any provider call"""
    data = client.post(
        "/v1/payouts/preflight",
        json={
            "bankDetails": {
                "countryCode": "NG",
                "accountNumber": "0690000031",
                "bankName": "Access Bank",
                "accountName": "Chimamanda Adichie",
            },
            "amount": "5000",
            "provider": "Stripe",
        },
    ).json()

    assert data["valid"] is False
    assert data["provider"] == "stripe"
    assert data["currency"] == "NGN"
    assert len(data["errors"]) == 1
    assert data["errors"][0].startswith("Currency NGN is not supported by stripe")
