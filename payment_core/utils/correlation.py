"""Correlation identifiers linking client-visible errors to internal logs"""

import random
import string
import time

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 6


def generate_correlation_id(prefix: str = "pay") -> str:
    """
    Generate an id like "pay_1718035200123_k3x9qa".

    Diagnostic only, not a security token, so the suffix uses the
    non-cryptographic random module.
    """
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=_SUFFIX_LENGTH))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"
