"""Append-only receipt storage.

Uses content-addressable storage where receipt_id = payload_hash.
Thread-safe with file locking on write.
"""
import fcntl
import json
from pathlib import Path
from typing import Callable


class LedgerStore:
    """Append-only receipt storage backed by JSONL file.

    Attributes:
        path: Path to the JSONL file
    """

    def __init__(self, path: str = "gem_events.jsonl"):
        """Initialize LedgerStore.

        Args:
            path: Path to JSONL file for receipt storage
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.touch()

    def append(self, receipt: dict) -> str:
        """Append receipt to ledger.

        Returns:
            receipt_id (the payload_hash)
        """
        return self.extend([receipt])[-1]

    def extend(self, receipts: list[dict]) -> list[str]:
        """Append a batch of receipts under a single lock.

        Returns:
            receipt_ids in append order
        """
        lines = "".join(json.dumps(r, sort_keys=True) + "\n" for r in receipts)

        with open(self.path, "a") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(lines)
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        return [r.get("payload_hash", "") for r in receipts]

    def read_all(self) -> list[dict]:
        """Read all receipts from ledger, oldest first."""
        receipts = []
        if not self.path.exists():
            return receipts

        with open(self.path, "r") as f:
            for line in f:
                line = line.strip()
                if line:
                    receipts.append(json.loads(line))

        return receipts

    def query(self, predicate: Callable[[dict], bool]) -> list[dict]:
        """Query receipts matching predicate."""
        return [r for r in self.read_all() if predicate(r)]
