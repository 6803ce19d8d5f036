"""Loading and saving the economy between CLI invocations."""
import json
import sys
from pathlib import Path

import click

from ..core.errors import GemError
from ..core.receipt import StopRule
from ..economy import GemEconomy
from ..ledger.store import LedgerStore
from ..state import read_state, save_state
from .output import error_box

# Exit codes
EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_BAD_INPUT = 2


def open_economy(ctx: click.Context) -> GemEconomy:
    """Read the economy named by the group's --state option."""
    state_path = ctx.obj["state_path"]
    if not Path(state_path).exists():
        error_box("No economy", f"State file not found: {state_path}", "gem init --admin <address>")
        sys.exit(EXIT_BAD_INPUT)
    return read_state(state_path)


def persist(ctx: click.Context, economy: GemEconomy) -> None:
    """Save the state, then append this invocation's receipts to the event log.

    Receipts only reach the event log once the state they describe is on disk.
    """
    save_state(economy, ctx.obj["state_path"])
    receipts = economy.event_log()
    if receipts:
        LedgerStore(ctx.obj["event_log"]).extend(receipts)


def fail(title: str, error: Exception) -> None:
    """Report `error` and exit with the matching code."""
    if isinstance(error, GemError):
        error_box(f"{title}: REJECTED", f"{error.code}: {error}")
        sys.exit(EXIT_REJECTED)
    if isinstance(error, (ValueError, StopRule, FileNotFoundError, json.JSONDecodeError)):
        error_box(f"{title}: FAILED", str(error))
        sys.exit(EXIT_BAD_INPUT)
    raise error
