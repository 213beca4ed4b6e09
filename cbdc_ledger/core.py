"""
Core types and pure functions for the CBDC ledger.

This module provides the foundational data structures and protocols for the ledger:
1. Protocols: LedgerView for read-only ledger access, IdentifierGenerator for new accounts
2. Immutable data structures: Account
3. Exceptions: LedgerError and domain-specific error types
4. Amount coercion: to_amount()

Nothing in this module mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN
from enum import Enum
from typing import Any, Protocol, Set, Tuple, runtime_checkable


# ============================================================================
# DECIMAL CONTEXT CONFIGURATION
# ============================================================================
#
# Balances are Decimal. Decimal contexts are per thread and new threads start
# from decimal.DefaultContext, so the ledger does not rely on the global
# context. Every balance computation runs inside
# localcontext(LEDGER_DECIMAL_CONTEXT) instead.
#
#   - prec=50: enough headroom that sums of realistic balances stay exact
#   - rounding=ROUND_HALF_EVEN: banker's rounding
#
LEDGER_DECIMAL_CONTEXT = Context(prec=50, rounding=ROUND_HALF_EVEN)


# ============================================================================
# CONSTANTS
# ============================================================================

# Reserved identifiers of the two distinguished accounts.
EMISSION_IBAN = "BY00000000000000000000000000001"
DESTRUCTION_IBAN = "BY0000000000000000000000000002"

# Number of identifier draws create_account() makes before giving up.
DEFAULT_MAX_ID_ATTEMPTS = 5

ZERO = Decimal("0")


# ============================================================================
# ENUMS
# ============================================================================

class AccountStatus(Enum):
    """
    Status of an account.

    ACTIVE: Account may send and receive value.
    BLOCKED: Account may not originate or receive transfers or destructions.
    """
    ACTIVE = "active"
    BLOCKED = "blocked"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class InvalidAmount(LedgerError):
    """Raised when an amount is not a finite number, or not positive where positivity is required."""
    pass


class AccountNotFound(LedgerError):
    """Raised when an operation references an account that does not exist."""

    def __init__(self, iban: str):
        super().__init__(f"account with IBAN {iban} not found")
        self.iban = iban


class AccountBlocked(LedgerError):
    """Raised when an operation requires an active account and the account is blocked."""

    def __init__(self, iban: str):
        super().__init__(f"account {iban} is blocked")
        self.iban = iban


class InsufficientFunds(LedgerError):
    """Raised when a debit would take an account balance below the requested amount."""
    pass


class IdentifierCollision(LedgerError):
    """Raised when account creation cannot obtain an identifier that is not already in use."""
    pass


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Account:
    """
    Point-in-time record of one ledger account.

    Attributes:
        iban: Unique account identifier.
        balance: Current balance.
        status: ACTIVE or BLOCKED.

    Accounts are handed out by read operations and never mutated; the ledger
    keeps its own state and builds a fresh Account for every read.
    """
    iban: str
    balance: Decimal
    status: AccountStatus

    @property
    def is_blocked(self) -> bool:
        return self.status is AccountStatus.BLOCKED

    def __repr__(self) -> str:
        return f"Account({self.iban}: {self.balance} [{self.status.value}])"


def to_amount(value: Any) -> Decimal:
    """
    Convert a caller-supplied amount to a finite Decimal.

    int, float and str are converted through their string form so that
    float inputs keep the digits the caller wrote (0.1 stays 0.1).

    Raises:
        InvalidAmount: If the value is not numeric, or is NaN or infinite
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"amount must be numeric, got {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidAmount(f"amount must be numeric, got {value!r}") from None
    if not value.is_finite():
        raise InvalidAmount(f"amount must be finite, got {value}")
    return value


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class IdentifierGenerator(Protocol):
    """
    Source of account identifiers.

    Implementations should make collisions unlikely; the ledger still checks
    every generated identifier against the accounts it already holds.
    """

    def generate(self) -> str:
        """Return a new identifier string."""
        ...


@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    Functions that accept a LedgerView declare that they only read. The Ledger
    class implements this protocol and also provides the mutating operations.
    """

    @property
    def emission_iban(self) -> str:
        """Identifier of the emission account."""
        ...

    @property
    def destruction_iban(self) -> str:
        """Identifier of the destruction sink."""
        ...

    def get_account(self, iban: str) -> Account:
        """Return the current record of an account."""
        ...

    def get_balance(self, iban: str) -> Decimal:
        """Return the current balance of an account."""
        ...

    def has_account(self, iban: str) -> bool:
        """Return True if the account exists."""
        ...

    def list_accounts(self) -> Set[str]:
        """Return the set of all account identifiers."""
        ...

    def snapshot(self) -> Tuple[Account, ...]:
        """Return every account's current state."""
        ...

    def total_supply(self) -> Decimal:
        """Return the sum of all balances."""
        ...
