"""
iban.py - Account Identifier Generation

Generates IBAN-style account identifiers for new ledger accounts:

    BY <2-digit check> CBDC <20-digit account number>

e.g. "BY47CBDC00000123456789012345". The check digits are random, not an
ISO 13616 checksum; identifiers only need to be unique and comparable.
"""

from __future__ import annotations
import random
import re
from typing import Optional


COUNTRY_CODE = "BY"
BANK_CODE = "CBDC"

# Account numbers are drawn below this bound and zero-padded to 20 digits.
ACCOUNT_NUMBER_BOUND = 10 ** 18

_IBAN_PATTERN = re.compile(r"^BY\d{2}CBDC\d{20}$")


def format_iban(check: int, account_number: int) -> str:
    """
    Format check digits and account number into an identifier.

    Args:
        check: Check digits, 0-99
        account_number: Account number, 0 <= n < 10**18

    Returns:
        Identifier string such as "BY07CBDC00000000000000000042"

    Raises:
        ValueError: If either part is out of range
    """
    if not 0 <= check < 100:
        raise ValueError(f"check digits out of range: {check}")
    if not 0 <= account_number < ACCOUNT_NUMBER_BOUND:
        raise ValueError(f"account number out of range: {account_number}")
    return f"{COUNTRY_CODE}{check:02d}{BANK_CODE}{account_number:020d}"


def is_valid_iban(value: str) -> bool:
    """Check that a string has the generated identifier format."""
    return isinstance(value, str) and _IBAN_PATTERN.match(value) is not None


class IbanGenerator:
    """
    Random identifier generator.

    Each instance owns its own random.Random, so a seeded generator yields the
    same sequence on every run and does not disturb the module-level RNG.

    Example:
        gen = IbanGenerator(seed=42)
        gen.generate()  # same value on every run
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def generate(self) -> str:
        check = self._rng.randrange(100)
        account_number = self._rng.randrange(ACCOUNT_NUMBER_BOUND)
        return format_iban(check, account_number)
