"""
cbdc_ledger - Thread-Safe Emission/Destruction Ledger

An in-memory account ledger that conserves value across emission,
destruction and transfer, safe to share between threads.

Usage:
    from cbdc_ledger import initialize, accounts_to_json

    ledger, emission, destruction = initialize()

    # Create value in the emission account
    ledger.emit(1000)

    # Move it to a new account
    alice = ledger.create_account()
    ledger.transfer(emission, alice, 500)

    # Take some of it out of circulation
    ledger.destroy(alice, 200)

    print(accounts_to_json(ledger.snapshot()))
"""

# Core types
from .core import (
    Account,
    AccountStatus,
    IdentifierGenerator,
    LedgerView,
    LedgerError,
    InvalidAmount,
    AccountNotFound,
    AccountBlocked,
    InsufficientFunds,
    IdentifierCollision,
    to_amount,
    EMISSION_IBAN,
    DESTRUCTION_IBAN,
    DEFAULT_MAX_ID_ATTEMPTS,
    LEDGER_DECIMAL_CONTEXT,
)

# Ledger
from .ledger import Ledger, initialize

# Identifiers
from .iban import (
    IbanGenerator,
    format_iban,
    is_valid_iban,
)

# Formatting
from .formatting import (
    account_to_dict,
    accounts_to_records,
    accounts_to_json,
)


__all__ = [
    # Core types
    'Account',
    'AccountStatus',
    'IdentifierGenerator',
    'LedgerView',
    # Exceptions
    'LedgerError',
    'InvalidAmount',
    'AccountNotFound',
    'AccountBlocked',
    'InsufficientFunds',
    'IdentifierCollision',
    # Constants
    'EMISSION_IBAN',
    'DESTRUCTION_IBAN',
    'DEFAULT_MAX_ID_ATTEMPTS',
    'LEDGER_DECIMAL_CONTEXT',
    # Ledger
    'Ledger',
    'initialize',
    'to_amount',
    # Identifiers
    'IbanGenerator',
    'format_iban',
    'is_valid_iban',
    # Formatting
    'account_to_dict',
    'accounts_to_records',
    'accounts_to_json',
]
