"""Ordered, append-only domain event log.

Receipts recorded during an operation stay pending until the operation
commits. A rolled-back operation leaves no event behind, neither on stdout
nor in the backing LedgerStore.
"""
import json
import logging

from ..core.constants import DEFAULT_TENANT
from ..core.receipt import build_receipt
from ..core.schemas import validate_receipt
from .store import LedgerStore

logger = logging.getLogger("gemforge.ledger.events")


class EventLog:
    """Buffered event log with commit/discard semantics."""

    def __init__(
        self,
        store: LedgerStore | None = None,
        tenant_id: str = DEFAULT_TENANT,
        echo: bool = True,
    ):
        self.store = store
        self.tenant_id = tenant_id
        self.echo = echo
        self._committed: list[dict] = []
        self._pending: list[dict] = []

    def record(self, receipt_type: str, data: dict) -> dict:
        """Stage a receipt for the current operation."""
        receipt = build_receipt(receipt_type, data, self.tenant_id)
        validate_receipt(receipt)
        self._pending.append(receipt)
        return receipt

    def commit(self) -> list[dict]:
        """Publish pending receipts in order. Returns what was published."""
        published, self._pending = self._pending, []
        if not published:
            return published

        if self.store is not None:
            self.store.extend(published)
        if self.echo:
            for receipt in published:
                print(json.dumps(receipt, sort_keys=True), flush=True)

        self._committed.extend(published)
        logger.debug("committed %d receipt(s)", len(published))
        return published

    def discard(self) -> int:
        """Drop pending receipts. Returns how many were dropped."""
        dropped = len(self._pending)
        self._pending = []
        if dropped:
            logger.debug("discarded %d pending receipt(s)", dropped)
        return dropped

    @property
    def pending(self) -> list[dict]:
        return list(self._pending)

    def events(self, receipt_type: str | None = None) -> list[dict]:
        """Committed receipts, oldest first, optionally filtered by type."""
        if receipt_type is None:
            return list(self._committed)
        return [r for r in self._committed if r["receipt_type"] == receipt_type]

    def __len__(self) -> int:
        return len(self._committed)
