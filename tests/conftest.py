"""
conftest.py - Shared pytest fixtures for ledger tests

Provides common fixtures used across unit, conformance and functional tests:
- Basic ledgers (empty, funded, with ordinary accounts)
"""

import pytest
from decimal import Decimal

from cbdc_ledger import Ledger

from tests.fake_ids import CountingGenerator


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def empty_ledger():
    """Fresh ledger holding only the emission and destruction accounts."""
    return Ledger("test", id_generator=CountingGenerator(), verbose=False)


@pytest.fixture
def funded_ledger(empty_ledger):
    """Ledger with 1000 emitted into the emission account."""
    empty_ledger.emit(Decimal("1000"))
    return empty_ledger


@pytest.fixture
def alice_ledger(funded_ledger):
    """
    Funded ledger with one ordinary account holding 500.

    Returns:
        (ledger, alice)
    """
    alice = funded_ledger.create_account()
    funded_ledger.transfer(funded_ledger.emission_iban, alice, Decimal("500"))
    return funded_ledger, alice


@pytest.fixture
def two_account_ledger(funded_ledger):
    """
    Funded ledger with alice holding 600 and bob holding 400.

    Returns:
        (ledger, alice, bob)
    """
    alice = funded_ledger.create_account()
    bob = funded_ledger.create_account()
    funded_ledger.transfer(funded_ledger.emission_iban, alice, Decimal("600"))
    funded_ledger.transfer(funded_ledger.emission_iban, bob, Decimal("400"))
    return funded_ledger, alice, bob
