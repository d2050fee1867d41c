"""Checksum primitives for bank routing identifiers"""

import re

IBAN_PATTERN = re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]{4,30}")
ABA_PATTERN = re.compile(r"[0-9]{9}")

_WHITESPACE = re.compile(r"\s+")


def normalize_iban(iban: str) -> str:
    """Remove all whitespace and uppercase an IBAN"""
    return _WHITESPACE.sub("", iban).upper()


def iban_remainder(iban: str) -> int:
    """
    Compute the ISO 7064 MOD97-10 remainder of a normalized IBAN.

    The first four characters (country code + check digits) are moved to the
    end and every letter is expanded to two digits (A=10 ... Z=35). The
    resulting digit string is reduced one digit at a time so the running value
    never exceeds 96 * 10 + 9.
    """
    rearranged = iban[4:] + iban[:4]
    remainder = 0
    for char in rearranged:
        digits = str(ord(char) - 55) if char.isalpha() else char
        for digit in digits:
            remainder = (remainder * 10 + int(digit)) % 97
    return remainder


def is_valid_iban(iban: str) -> bool:
    """
    Validate IBAN structure and mod-97 check digits.

    Example:
        "DE89 3704 0044 0532 0130 00" -> True
        "DE00370400440532013000"      -> False (check digits corrupted)
    """
    clean = normalize_iban(iban)
    if not IBAN_PATTERN.fullmatch(clean):
        return False
    return iban_remainder(clean) == 1


def is_valid_aba_routing(routing_number: str) -> bool:
    """
    Validate a US ABA routing number checksum.

    Weights repeat 3, 7, 1 across the nine digits; the weighted sum must be
    divisible by 10.
    """
    if not ABA_PATTERN.fullmatch(routing_number):
        return False
    d = [int(c) for c in routing_number]
    checksum = 3 * (d[0] + d[3] + d[6]) + 7 * (d[1] + d[4] + d[7]) + (d[2] + d[5] + d[8])
    return checksum % 10 == 0
