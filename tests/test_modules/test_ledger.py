"""Tests for gemforge.ledger module."""
import json

import pytest

from gemforge.core.errors import NotFound, Unauthorized
from gemforge.core.receipt import StopRule
from gemforge.ledger import EventLog, LedgerStore, TokenLedger


class TestTokenLedger:
    """Tests for TokenLedger."""

    def test_mint_owner_of(self):
        """owner_of() returns the minted holder."""
        ledger = TokenLedger()
        ledger.mint("alice", 0)
        assert ledger.owner_of(0) == "alice"
        assert ledger.exists(0)

    def test_double_mint(self):
        """Minting a live id raises ValueError."""
        ledger = TokenLedger()
        ledger.mint("alice", 0)
        with pytest.raises(ValueError):
            ledger.mint("bob", 0)

    def test_burn(self):
        """Burned id is no longer live."""
        ledger = TokenLedger()
        ledger.mint("alice", 0)
        ledger.burn(0)
        with pytest.raises(NotFound):
            ledger.owner_of(0)
        with pytest.raises(NotFound):
            ledger.burn(0)

    def test_transfer_by_holder(self):
        """Holder can transfer."""
        ledger = TokenLedger()
        ledger.mint("alice", 5)
        assert ledger.transfer("alice", "bob", 5) == "alice"
        assert ledger.owner_of(5) == "bob"

    def test_transfer_by_stranger(self):
        """Non-holder without approval raises Unauthorized."""
        ledger = TokenLedger()
        ledger.mint("alice", 5)
        with pytest.raises(Unauthorized):
            ledger.transfer("mallory", "mallory", 5)

    def test_approved_transfer_clears_approval(self):
        """Approved spender can transfer once."""
        ledger = TokenLedger()
        ledger.mint("alice", 5)
        ledger.approve("alice", "carol", 5)
        assert ledger.get_approved(5) == "carol"
        ledger.transfer("carol", "dave", 5)
        assert ledger.owner_of(5) == "dave"
        assert ledger.get_approved(5) is None

    def test_enumeration(self):
        """balance_of, tokens_of, holders and total_supply agree."""
        ledger = TokenLedger()
        for token_id, owner in enumerate(["a", "b", "a", "c", "a"]):
            ledger.mint(owner, token_id)
        assert ledger.balance_of("a") == 3
        assert ledger.tokens_of("a") == [0, 2, 4]
        assert ledger.holders()["b"] == [1]
        assert ledger.total_supply() == 5


class TestLedgerStore:
    """Tests for LedgerStore."""

    def test_append_read(self, temp_ledger):
        """Appended receipts read back in order."""
        temp_ledger.append({"payload_hash": "h1", "n": 1})
        temp_ledger.extend([{"payload_hash": "h2", "n": 2}, {"payload_hash": "h3", "n": 3}])
        assert [r["n"] for r in temp_ledger.read_all()] == [1, 2, 3]

    def test_query(self, temp_ledger):
        """query() filters by predicate."""
        temp_ledger.extend([{"k": "a"}, {"k": "b"}, {"k": "a"}])
        assert len(temp_ledger.query(lambda r: r["k"] == "a")) == 2

    def test_creates_parent(self, tmp_path):
        """Missing parent directory is created."""
        store = LedgerStore(str(tmp_path / "deep" / "dir" / "events.jsonl"))
        assert store.path.exists()


class TestEventLog:
    """Tests for EventLog."""

    def _record(self, log, gem_id=0):
        return log.record("gem_transferred", {"sender": "a", "to": "b", "gem_id": gem_id})

    def test_pending_until_commit(self):
        """Recorded receipts are invisible until commit()."""
        log = EventLog(echo=False)
        self._record(log)
        assert log.events() == []
        assert len(log.pending) == 1
        log.commit()
        assert len(log) == 1

    def test_discard(self, temp_ledger):
        """Discarded receipts never reach the store."""
        log = EventLog(temp_ledger, echo=False)
        self._record(log)
        assert log.discard() == 1
        log.commit()
        assert temp_ledger.read_all() == []

    def test_commit_persists_and_prints(self, temp_ledger, capsys):
        """Committed receipts go to stdout and the store, in order."""
        log = EventLog(temp_ledger, tenant_id="t1")
        self._record(log, 1)
        self._record(log, 2)
        log.commit()

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["gem_id"] for line in lines] == [1, 2]
        stored = temp_ledger.read_all()
        assert [r["gem_id"] for r in stored] == [1, 2]
        assert all(r["tenant_id"] == "t1" for r in stored)

    def test_schema_enforced(self):
        """Receipts missing schema fields raise StopRule."""
        log = EventLog(echo=False)
        with pytest.raises(StopRule):
            log.record("gem_transferred", {"sender": "a"})

    def test_filter_by_type(self):
        """events(type) filters committed receipts."""
        log = EventLog(echo=False)
        self._record(log)
        log.record("airdrop_toggled", {"caller": "admin", "active": True})
        log.commit()
        assert len(log.events("airdrop_toggled")) == 1
