"""
helpers.py - Assertion helpers shared by ledger tests
"""

from decimal import Decimal
from typing import Dict

from cbdc_ledger import Ledger


def balances_of(ledger: Ledger) -> Dict[str, Decimal]:
    """Map every account identifier to its balance."""
    return {a.iban: a.balance for a in ledger.snapshot()}


def assert_unchanged(ledger: Ledger, before: Dict[str, Decimal]) -> None:
    """Assert that no balance differs from a previous balances_of() result."""
    after = balances_of(ledger)
    assert after == before, f"balances changed: {before} -> {after}"
