"""
formatting.py - Snapshot Serialization

Turns ledger snapshots into plain records and JSON text. Nothing here reads
or locks the ledger; callers pass in the result of Ledger.snapshot().
"""

from __future__ import annotations
from decimal import Decimal
import json
from typing import Any, Dict, Iterable, List, Optional, Union

from .core import Account, LEDGER_DECIMAL_CONTEXT


def _json_number(d: Decimal) -> Union[int, float]:
    """
    Convert a Decimal balance to a JSON-friendly number.

    Integral values become int so that 300 is written as 300, not 300.0.
    """
    normalized = d.normalize(LEDGER_DECIMAL_CONTEXT)
    if normalized == normalized.to_integral_value():
        return int(normalized)
    return float(normalized)


def account_to_dict(account: Account) -> Dict[str, Any]:
    """
    Plain-record form of an account.

    Returns:
        {"iban": str, "balance": int | float, "status": "active" | "blocked"}
    """
    return {
        "iban": account.iban,
        "balance": _json_number(account.balance),
        "status": account.status.value,
    }


def accounts_to_records(accounts: Iterable[Account]) -> List[Dict[str, Any]]:
    """Plain-record form of a snapshot, order preserved."""
    return [account_to_dict(a) for a in accounts]


def accounts_to_json(accounts: Iterable[Account], indent: Optional[int] = 2) -> str:
    """
    Render a snapshot as a JSON array.

    Args:
        accounts: Accounts to render, usually Ledger.snapshot()
        indent: Indentation passed to json.dumps (None for a single line)

    Returns:
        JSON text

    Example:
        print(accounts_to_json(ledger.snapshot()))
    """
    return json.dumps(accounts_to_records(accounts), indent=indent, ensure_ascii=False)
