"""
ledger.py - Thread-Safe Emission/Destruction Ledger

The Ledger class is the central state manager for the CBDC ledger.
It is the only module that mutates account state.

Key responsibilities:
    - Implements LedgerView protocol for safe read-only access
    - Creates accounts with collision-checked identifiers
    - Emits value into the emission account
    - Destroys value by relocating it to the destruction sink
    - Transfers value between accounts atomically
    - Serializes every operation behind one lock
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any, Dict, List, Optional, Set, Tuple
import threading

from .core import (
    # Types
    Account, AccountStatus, IdentifierGenerator,
    # Constants
    EMISSION_IBAN, DESTRUCTION_IBAN, DEFAULT_MAX_ID_ATTEMPTS, ZERO,
    LEDGER_DECIMAL_CONTEXT,
    # Exceptions
    InvalidAmount, AccountNotFound, AccountBlocked, InsufficientFunds,
    IdentifierCollision,
    # Helper functions
    to_amount,
)
from .iban import IbanGenerator


@dataclass(slots=True)
class _AccountState:
    """Mutable per-account state owned by the ledger. Never leaves the lock."""
    balance: Decimal
    status: AccountStatus

    def freeze(self, iban: str) -> Account:
        return Account(iban=iban, balance=self.balance, status=self.status)


class Ledger:
    """
    In-memory account ledger with emission, destruction and transfer.

    Implements the LedgerView protocol, so the ledger can be passed to code that
    only needs the read-only methods.

    Design Principles:
        - One lock: every operation, reads included, holds a single
          threading.Lock for its whole duration. Operations are linearized and
          a transfer's debit and credit are never observed separately.
        - Check, then apply: all preconditions are evaluated before the first
          balance changes, so a failed operation leaves state untouched.
        - Errors are raised to the caller, never printed or retried here
          (identifier regeneration in create_account() is the one exception).
        - Fixed arithmetic: balance sums and differences are computed in
          LEDGER_DECIMAL_CONTEXT, whatever the calling thread's own decimal
          context is.

    Thread Safety:
        Safe to share between threads.

    Example:
        ledger = Ledger("main")
        ledger.emit(1000)
        alice = ledger.create_account()
        ledger.transfer(ledger.emission_iban, alice, 500)
        ledger.destroy(alice, 200)
        ledger.snapshot()
    """

    def __init__(
        self,
        name: str = "main",
        emission_iban: str = EMISSION_IBAN,
        destruction_iban: str = DESTRUCTION_IBAN,
        id_generator: Optional[IdentifierGenerator] = None,
        max_id_attempts: int = DEFAULT_MAX_ID_ATTEMPTS,
        verbose: bool = False,
    ):
        """
        Create a ledger holding only the emission and destruction accounts.

        Args:
            name: Ledger name, shown in verbose output
            emission_iban: Identifier of the emission account
            destruction_iban: Identifier of the destruction sink
            id_generator: Identifier source for create_account() (default: IbanGenerator())
            max_id_attempts: Identifier draws per create_account() before IdentifierCollision
            verbose: Print one line per applied operation (default: False)

        Raises:
            ValueError: If an identifier is empty, the two identifiers are equal,
                        or max_id_attempts is below 1
        """
        if not emission_iban or not emission_iban.strip():
            raise ValueError("emission_iban cannot be empty")
        if not destruction_iban or not destruction_iban.strip():
            raise ValueError("destruction_iban cannot be empty")
        if emission_iban == destruction_iban:
            raise ValueError("emission_iban and destruction_iban must be different")
        if max_id_attempts < 1:
            raise ValueError(f"max_id_attempts must be at least 1, got {max_id_attempts}")

        self.name = name
        self.verbose = verbose
        self.max_id_attempts = max_id_attempts
        self._id_generator: IdentifierGenerator = id_generator or IbanGenerator()
        # Fixed after construction; read without the lock.
        self._emission_iban = emission_iban
        self._destruction_iban = destruction_iban
        self._lock = threading.Lock()
        self._accounts: Dict[str, _AccountState] = {
            emission_iban: _AccountState(ZERO, AccountStatus.ACTIVE),
            destruction_iban: _AccountState(ZERO, AccountStatus.ACTIVE),
        }

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    @property
    def emission_iban(self) -> str:
        """Identifier of the emission account."""
        return self._emission_iban

    @property
    def destruction_iban(self) -> str:
        """Identifier of the destruction sink."""
        return self._destruction_iban

    def get_account(self, iban: str) -> Account:
        """
        Get the current record of an account.

        Raises:
            AccountNotFound: If the account does not exist
        """
        with self._lock:
            return self._require(iban).freeze(iban)

    def get_balance(self, iban: str) -> Decimal:
        """
        Get the current balance of an account.

        Raises:
            AccountNotFound: If the account does not exist
        """
        with self._lock:
            return self._require(iban).balance

    def has_account(self, iban: str) -> bool:
        """Check if an account exists."""
        with self._lock:
            return iban in self._accounts

    def list_accounts(self) -> Set[str]:
        """List all account identifiers."""
        with self._lock:
            return set(self._accounts)

    def snapshot(self) -> Tuple[Account, ...]:
        """
        Return every account's current state.

        Taken under the ledger lock, so it never includes half of an
        operation. Accounts are ordered by identifier, so two snapshots of the
        same state compare equal.

        Returns:
            Tuple of Account records
        """
        with self._lock:
            return tuple(
                self._accounts[iban].freeze(iban) for iban in sorted(self._accounts)
            )

    def total_supply(self) -> Decimal:
        """
        Sum of all balances, the sink included.

        Accounts are summed in sorted order so the accumulation order is
        deterministic.
        """
        with self._lock, localcontext(LEDGER_DECIMAL_CONTEXT):
            return self._total_supply()

    def verify_supply(
        self,
        expected: Optional[Decimal] = None,
        tolerance: Decimal = Decimal("1e-9"),
    ) -> Dict[str, Any]:
        """
        Check the ledger's conservation invariants.

        Every balance must be non-negative. When expected is given, total supply
        must also match it within tolerance. Emission is the only operation
        that changes total supply, so expected is normally the sum of all
        emitted amounts.

        Args:
            expected: Optional expected total supply
            tolerance: Maximum allowed difference for the supply comparison

        Returns:
            Dict with keys:
            - 'valid': bool - True if all checks pass
            - 'supply': Decimal - Current total supply
            - 'negative_balances': Dict[str, Decimal] - Accounts below zero
            - 'discrepancy': Optional[Decimal] - supply - expected, when it exceeds tolerance

        Example:
            ledger.emit(1000)
            result = ledger.verify_supply(expected=Decimal("1000"))
            assert result['valid'], result
        """
        with self._lock, localcontext(LEDGER_DECIMAL_CONTEXT):
            supply = self._total_supply()
            negative = {
                iban: state.balance
                for iban, state in sorted(self._accounts.items())
                if state.balance < ZERO
            }

        discrepancy = None
        if expected is not None:
            with localcontext(LEDGER_DECIMAL_CONTEXT):
                difference = supply - to_amount(expected)
            if abs(difference) > tolerance:
                discrepancy = difference

        return {
            'valid': not negative and discrepancy is None,
            'supply': supply,
            'negative_balances': negative,
            'discrepancy': discrepancy,
        }

    # ========================================================================
    # ACCOUNT MANAGEMENT (Mutating)
    # ========================================================================

    def create_account(self) -> str:
        """
        Create a new active account with a zero balance.

        The identifier comes from the configured generator. An identifier that
        is already in use is discarded and a new one drawn, up to
        max_id_attempts draws in total.

        Returns:
            The new account's identifier

        Raises:
            IdentifierCollision: If every draw returned an identifier already in use
        """
        with self._lock:
            rejected: List[str] = []
            for _ in range(self.max_id_attempts):
                iban = self._id_generator.generate()
                if iban not in self._accounts:
                    break
                rejected.append(iban)
            else:
                raise IdentifierCollision(
                    f"no unused identifier after {self.max_id_attempts} attempts "
                    f"(last: {rejected[-1]})"
                )
            self._accounts[iban] = _AccountState(ZERO, AccountStatus.ACTIVE)

        if self.verbose:
            print(f"📝 [{self.name}] Created account {iban}")
        return iban

    def set_status(self, iban: str, status: AccountStatus) -> None:
        """
        Block or unblock an account.

        None of the monetary operations change status; this is the hook a
        surrounding system uses to do it. The distinguished accounts may be
        blocked like any other.

        Args:
            iban: Account identifier
            status: New status

        Raises:
            AccountNotFound: If the account does not exist
            ValueError: If status is not an AccountStatus
        """
        if not isinstance(status, AccountStatus):
            raise ValueError(f"status must be an AccountStatus, got {status!r}")
        with self._lock:
            self._require(iban).status = status

        if self.verbose:
            print(f"🔒 [{self.name}] {iban} is now {status.value}")

    # ========================================================================
    # MONETARY OPERATIONS (Mutating)
    # ========================================================================

    def emit(self, amount) -> None:
        """
        Create value in the emission account.

        The emission account is credited whatever its status; a blocked
        emission account still receives newly emitted value.

        Args:
            amount: Amount to emit, must be greater than zero

        Raises:
            InvalidAmount: If amount is not a finite number greater than zero
        """
        amount = to_amount(amount)
        if amount <= ZERO:
            raise InvalidAmount("amount must be greater than zero")

        with self._lock, localcontext(LEDGER_DECIMAL_CONTEXT):
            self._accounts[self._emission_iban].balance += amount

        if self.verbose:
            print(f"✓ [{self.name}] EMIT {amount} → {self._emission_iban}")

    def destroy(self, from_iban: str, amount) -> None:
        """
        Take value out of circulation.

        The amount is debited from from_iban and credited to the destruction
        sink, so total supply is unchanged. Checks run in order: existence,
        status, funds; the first failure is raised and nothing is applied.

        Args:
            from_iban: Account to debit
            amount: Amount to destroy

        Raises:
            AccountNotFound: If from_iban does not exist
            AccountBlocked: If from_iban is blocked
            InsufficientFunds: If from_iban's balance is below amount
        """
        amount = to_amount(amount)

        with self._lock, localcontext(LEDGER_DECIMAL_CONTEXT):
            source = self._require(from_iban)
            if source.status is AccountStatus.BLOCKED:
                raise AccountBlocked(from_iban)
            if source.balance < amount:
                raise InsufficientFunds(
                    f"insufficient funds: {from_iban} has {source.balance}, needs {amount}"
                )
            source.balance -= amount
            self._accounts[self._destruction_iban].balance += amount

        if self.verbose:
            print(f"✓ [{self.name}] DESTROY {amount}: {from_iban} → {self._destruction_iban}")

    def transfer(self, from_iban: str, to_iban: str, amount) -> None:
        """
        Move value from one account to another.

        Checks run in order: both accounts exist, neither is blocked, the
        source has at least amount. Debit and credit are applied together
        under the lock.

        The amount is not required to be positive. Zero is a no-op and a
        negative amount moves value from to_iban to from_iban without any
        funds check on to_iban.

        Args:
            from_iban: Account to debit
            to_iban: Account to credit
            amount: Amount to move

        Raises:
            AccountNotFound: If either account does not exist
            AccountBlocked: If either account is blocked
            InsufficientFunds: If from_iban's balance is below amount
        """
        amount = to_amount(amount)

        with self._lock, localcontext(LEDGER_DECIMAL_CONTEXT):
            source = self._require(from_iban)
            dest = self._require(to_iban)
            if source.status is AccountStatus.BLOCKED:
                raise AccountBlocked(from_iban)
            if dest.status is AccountStatus.BLOCKED:
                raise AccountBlocked(to_iban)
            if source.balance < amount:
                raise InsufficientFunds(
                    f"insufficient funds: {from_iban} has {source.balance}, needs {amount}"
                )
            source.balance -= amount
            dest.balance += amount

        if self.verbose:
            print(f"✓ [{self.name}] TRANSFER {amount}: {from_iban} → {to_iban}")

    # ========================================================================
    # INTERNALS (caller holds the lock)
    # ========================================================================

    def _require(self, iban: str) -> _AccountState:
        state = self._accounts.get(iban)
        if state is None:
            raise AccountNotFound(iban)
        return state

    def _total_supply(self) -> Decimal:
        return sum(
            (self._accounts[iban].balance for iban in sorted(self._accounts)),
            ZERO,
        )

    def __repr__(self) -> str:
        return f"Ledger({self.name!r}, accounts={len(self._accounts)})"


def initialize(**kwargs) -> Tuple[Ledger, str, str]:
    """
    Create a ledger and return it with its two distinguished identifiers.

    Keyword arguments are passed to Ledger().

    Returns:
        (ledger, emission_iban, destruction_iban)
    """
    ledger = Ledger(**kwargs)
    return ledger, ledger.emission_iban, ledger.destruction_iban
