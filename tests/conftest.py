"""Pytest fixtures for GemForge tests."""
import pytest

from gemforge.anchor.merkle import allowlist_leaf, allowlist_root
from gemforge.config import GemConfig
from gemforge.economy import GemEconomy
from gemforge.gems.combinator import FixedTraitGenerator
from gemforge.gems.models import Traits
from gemforge.ledger.store import LedgerStore

ADMIN = "admin"
T0 = 1_700_000_000
DAY = 86_400


@pytest.fixture
def fixed_traits():
    """Provide three distinct trait triples for generated gems."""
    return [
        Traits("red", "round", "solid"),
        Traits("blue", "oval", "banded"),
        Traits("green", "pear", "veined"),
    ]


@pytest.fixture
def generator(fixed_traits):
    """Provide a FixedTraitGenerator cycling through fixed_traits."""
    return FixedTraitGenerator(fixed_traits)


@pytest.fixture
def economy(generator):
    """Provide a quiet GemEconomy with default cooldowns and fixed traits."""
    return GemEconomy(ADMIN, GemConfig(), generator=generator, echo=False)


@pytest.fixture
def temp_ledger(tmp_path):
    """Provide temporary LedgerStore with tmp_path."""
    return LedgerStore(str(tmp_path / "test_events.jsonl"))


@pytest.fixture
def allowlist():
    """Provide 5 allowlist leaves."""
    return [
        allowlist_leaf("alice", 1),
        allowlist_leaf("bob", 3),
        allowlist_leaf("carol", 2),
        allowlist_leaf("dave", 1),
        allowlist_leaf("erin", 4),
    ]


@pytest.fixture
def airdrop_economy(generator, allowlist):
    """Provide a GemEconomy committed to the allowlist root (inactive)."""
    config = GemConfig(merkle_root=allowlist_root(allowlist))
    return GemEconomy(ADMIN, config, generator=generator, echo=False)


def mint_gem(economy, to, staked=100, mining=10, forging=10, rarity=3, traits=None):
    """Admin-mint helper used across modules."""
    return economy.mint(ADMIN, to, staked, mining, forging, rarity, traits=traits)


def fingerprint(economy) -> dict:
    """Everything a rejected operation must leave untouched."""
    return {
        "gems": economy.gems.snapshot(),
        "cooldowns": economy.cooldowns.snapshot(),
        "next_id": economy.allocator.peek(),
        "ledger": economy.ledger.snapshot(),
        "airdrop": economy.airdrop.snapshot(),
        "generator": economy.generator.snapshot(),
        "events": len(economy.event_log()),
    }
