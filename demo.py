#!/usr/bin/env python3
"""
demo.py - Walkthrough: Emission, Transfer and Destruction

Runs the ledger's canonical call sequence and prints the result:

  1. Emit money into the emission account
  2. Open a new account
  3. Transfer part of the emission to it
  4. Destroy part of the new account's balance
  5. Print every account as JSON

A failing step prints its error and the walkthrough continues.

Run:
    python demo.py             # Plain output
    python demo.py --verbose   # Also print the ledger's own operation log
    python demo.py --threads   # Add a concurrent transfer round at the end
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
import sys

from cbdc_ledger import (
    Ledger, LedgerError, initialize, accounts_to_json,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the walkthrough. Modify these to experiment."""
    emission_amount: Decimal = Decimal("1000")
    transfer_amount: Decimal = Decimal("500")
    destroy_amount: Decimal = Decimal("200")

    # Concurrent round (--threads)
    worker_threads: int = 8
    concurrent_accounts: int = 10
    concurrent_transfers: int = 1_000


CONFIG = DemoConfig()


def run_step(label: str, operation, *args) -> bool:
    """Run one ledger operation, printing the error instead of raising it."""
    try:
        operation(*args)
    except LedgerError as e:
        print(f"Error during {label}: {e}")
        return False
    return True


def concurrent_round(ledger: Ledger, config: DemoConfig) -> None:
    """Fan small transfers out over a thread pool and check conservation afterwards."""
    print(f"\n--- Concurrent round: {config.concurrent_transfers} transfers "
          f"on {config.worker_threads} threads ---\n")

    ledger.emit(config.concurrent_transfers)
    supply_before = ledger.total_supply()
    accounts = [ledger.create_account() for _ in range(config.concurrent_accounts)]

    def pay(i: int) -> None:
        run_step("transfer", ledger.transfer,
                 ledger.emission_iban, accounts[i % len(accounts)], 1)

    with ThreadPoolExecutor(max_workers=config.worker_threads) as pool:
        list(pool.map(pay, range(config.concurrent_transfers)))

    result = ledger.verify_supply(expected=supply_before)
    print(f"Supply before: {supply_before}")
    print(f"Supply after:  {result['supply']}")
    print(f"Conserved:     {result['valid']}")


def main(argv=None, config: DemoConfig = CONFIG, **ledger_options) -> Ledger:
    """
    Run the walkthrough.

    Extra keyword arguments are passed to initialize(), e.g. id_generator.
    """
    argv = sys.argv[1:] if argv is None else argv
    verbose = "--verbose" in argv

    ledger, emission, destruction = initialize(name="demo", verbose=verbose, **ledger_options)

    run_step("emission", ledger.emit, config.emission_amount)

    try:
        account = ledger.create_account()
    except LedgerError as e:
        print(f"Error during account creation: {e}")
    else:
        print(f"New account created: {account}")
        run_step("transfer", ledger.transfer, emission, account, config.transfer_amount)
        run_step("destruction", ledger.destroy, account, config.destroy_amount)

    print(f"All accounts: {accounts_to_json(ledger.snapshot())}")

    if "--threads" in argv:
        concurrent_round(ledger, config)

    return ledger


if __name__ == "__main__":
    main()
