"""Ledger subpackage: token ownership and the domain event log."""
from .events import EventLog
from .store import LedgerStore
from .token import TokenLedger

__all__ = [
    "EventLog",
    "LedgerStore",
    "TokenLedger",
]
