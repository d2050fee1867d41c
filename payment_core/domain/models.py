"""Domain models - pure Python dataclasses representing payment inputs and outcomes"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class BankDetails:
    """Payout/collection account details as entered by the user"""

    country_code: str
    account_number: Optional[str] = None
    routing_number: Optional[str] = None  # ABA, transit or branch code depending on country
    sort_code: Optional[str] = None  # UK
    iban: Optional[str] = None
    bsb: Optional[str] = None  # Australia
    bank_name: Optional[str] = None
    account_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BankDetails":
        """
        Build from a plain key/value mapping.

        Accepts snake_case keys ("account_number") and the camelCase keys
        web forms send ("accountNumber"). Unknown keys are ignored. Values
        are kept as text, so a number typed into a JSON form (1234567890)
        is checked as "1234567890".
        """
        values: Dict[str, Any] = {}
        for f in fields(cls):
            camel = _to_camel(f.name)
            if f.name in data:
                values[f.name] = _as_text(data[f.name])
            elif camel in data:
                values[f.name] = _as_text(data[camel])
        return cls(**values)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class IssueKind(str, Enum):
    """Kinds of bank validation failure"""

    MISSING_FIELD = "missing_field"
    BAD_FORMAT = "bad_format"
    BAD_LENGTH = "bad_length"
    WRONG_PREFIX = "wrong_prefix"
    CHECKSUM_FAILED = "checksum_failed"
    UNSUPPORTED_COUNTRY = "unsupported_country"


@dataclass(frozen=True)
class BankValidationIssue:
    """Single validation failure with its user-facing message"""

    kind: IssueKind
    field: Optional[str]
    message: str


@dataclass
class BankValidationResult:
    """Outcome of validating one BankDetails record"""

    issues: List[BankValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues]


@dataclass(frozen=True)
class CurrencyValidationResult:
    """Whether a currency can be charged through a provider"""

    valid: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class RegionConfig:
    """Countries served by one currency and payment provider"""

    region: str
    countries: Tuple[str, ...]
    currency: str
    payment_provider: str
    currency_symbol: str


@dataclass(frozen=True)
class PaymentError:
    """Client-safe description of a failed payment"""

    user_message: str
    status_code: int
    correlation_id: str
    provider: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        return {
            "user_message": self.user_message,
            "status_code": self.status_code,
            "correlation_id": self.correlation_id,
            "provider": self.provider,
        }
