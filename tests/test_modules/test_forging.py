"""Tests for gemforge.gems.forging module."""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import ADMIN, DAY, T0, fingerprint, mint_gem
from gemforge.config import GemConfig
from gemforge.core.errors import (
    ArithmeticOverflow,
    CooldownActive,
    InvalidForgeSize,
    NotFound,
    Unauthorized,
)
from gemforge.economy import GemEconomy
from gemforge.gems.combinator import JoinCombinator, RuleTableCombinator
from gemforge.gems.forging import aggregate
from gemforge.gems.models import Gem

RED = ("red", "round", "solid")
BLUE = ("blue", "oval", "banded")
GREEN = ("green", "pear", "veined")


def _pair(economy):
    a = mint_gem(economy, "bob", 10, 10, 10, 1, traits=RED)
    b = mint_gem(economy, "bob", 20, 20, 5, 3, traits=BLUE)
    return a, b


class TestForgeAggregation:
    """Output gem attributes."""

    def test_sums_and_max(self, economy):
        """Numeric fields sum; rarity is the max."""
        ids = [
            mint_gem(economy, "bob", 10, 10, 10, 1),
            mint_gem(economy, "bob", 20, 20, 5, 3),
            mint_gem(economy, "bob", 30, 5, 15, 2),
        ]
        forged = economy.gem(economy.forge(ids, "bob", T0))
        assert (forged.staked_value, forged.mining_power, forged.forging_power) == (60, 35, 30)
        assert forged.rarity == 3

    def test_tags_fold_left(self, economy):
        """Tags fold left-to-right from the first gem."""
        ids = [mint_gem(economy, "bob", traits=t) for t in (RED, BLUE, GREEN)]
        forged = economy.gem(economy.forge(ids, "bob", T0))
        assert forged.color == "red-blue-green"
        assert forged.shape == "round-oval-pear"
        assert forged.pattern == "solid-banded-veined"

    def test_order_sensitive_tags_same_numbers(self, generator):
        """[A, B] and [B, A] differ in tags only."""
        results = []
        for order in ((0, 1), (1, 0)):
            economy = GemEconomy(ADMIN, GemConfig(), generator=generator, echo=False)
            ids = _pair(economy)
            forged_id = economy.forge([ids[i] for i in order], "bob", T0)
            results.append(economy.gem(forged_id))

        ab, ba = results
        assert ab.color == "red-blue"
        assert ba.color == "blue-red"
        assert (ab.staked_value, ab.mining_power, ab.forging_power, ab.rarity) == \
            (ba.staked_value, ba.mining_power, ba.forging_power, ba.rarity)

    def test_aggregate_with_rule_table(self):
        """aggregate() uses whichever combinator it is given."""
        gems = [Gem(1, "red", "round", "solid", 1, 1, 1), Gem(2, "blue", "oval", "banded", 2, 2, 0)]
        forged = aggregate(gems, RuleTableCombinator({("color", "red", "blue"): "purple"}))
        assert forged.color == "purple"
        assert forged.shape == "round-oval"

    def test_five_inputs(self, economy):
        """Upper bound of 5 inputs is accepted."""
        ids = [mint_gem(economy, "bob", staked=1) for _ in range(5)]
        forged = economy.gem(economy.forge(ids, "bob", T0))
        assert forged.staked_value == 5


class TestForgeLifecycle:
    """Burn-and-mint bookkeeping."""

    def test_inputs_burned(self, economy):
        """All inputs leave GemStore and the ledger."""
        ids = _pair(economy)
        forged_id = economy.forge(list(ids), "bob", T0)
        for gem_id in ids:
            assert gem_id not in economy.gems
            assert not economy.ledger.exists(gem_id)
        assert economy.gems.ids() == [forged_id]
        assert economy.owner_of(forged_id) == "bob"

    def test_forged_cooldown(self, economy):
        """Forged gem waits forging cooldown (3 days)."""
        ids = _pair(economy)
        forged_id = economy.forge(list(ids), "bob", T0)
        assert economy.ready_at(forged_id) == T0 + 3 * DAY
        with pytest.raises(CooldownActive):
            economy.mine(forged_id, "bob", T0 + 3 * DAY - 1)
        economy.mine(forged_id, "bob", T0 + 3 * DAY)

    def test_ids_never_reused(self, economy):
        """Burned ids are never handed out again."""
        ids = _pair(economy)
        forged_id = economy.forge(list(ids), "bob", T0)
        later = mint_gem(economy, "bob")
        assert forged_id == 2
        assert later == 3
        assert later not in ids

    def test_gem_forged_recorded(self, economy):
        """gem_forged carries owner, new id and the burned set."""
        ids = _pair(economy)
        forged_id = economy.forge(list(ids), "bob", T0)
        forged = economy.event_log("gem_forged")
        assert len(forged) == 1
        assert forged[0]["owner"] == "bob"
        assert forged[0]["gem_id"] == forged_id
        assert forged[0]["burned"] == list(ids)


class TestForgeRejections:
    """Failed forging burns nothing."""

    @pytest.mark.parametrize("count", [0, 1, 6])
    def test_bad_size(self, economy, count):
        """Sizes outside 2..5 raise InvalidForgeSize and mutate nothing."""
        ids = [mint_gem(economy, "bob") for _ in range(count)]
        before = fingerprint(economy)
        with pytest.raises(InvalidForgeSize):
            economy.forge(ids, "bob", T0)
        assert fingerprint(economy) == before

    def test_later_input_not_owned(self, economy):
        """Unowned last input rejects the whole set."""
        a, b = _pair(economy)
        c = mint_gem(economy, "carol")
        before = fingerprint(economy)
        with pytest.raises(Unauthorized):
            economy.forge([a, b, c], "bob", T0)
        assert fingerprint(economy) == before

    def test_later_input_cooling(self, economy):
        """Cooling last input rejects the whole set."""
        a, b = _pair(economy)
        economy.mine(b, "bob", T0)
        before = fingerprint(economy)
        with pytest.raises(CooldownActive):
            economy.forge([a, b], "bob", T0 + 1)
        assert fingerprint(economy) == before

    def test_duplicate_input(self, economy):
        """Listing a gem twice raises NotFound before any burn."""
        a, b = _pair(economy)
        before = fingerprint(economy)
        with pytest.raises(NotFound):
            economy.forge([a, b, a], "bob", T0)
        assert fingerprint(economy) == before

    def test_missing_input(self, economy):
        """Unknown id raises NotFound."""
        a, _ = _pair(economy)
        with pytest.raises(NotFound):
            economy.forge([a, 99], "bob", T0)
        assert a in economy.gems

    def test_overflow(self, generator):
        """Sum past the integer width raises ArithmeticOverflow, nothing burned."""
        economy = GemEconomy(ADMIN, GemConfig(integer_bits=8), generator=generator, echo=False)
        a = mint_gem(economy, "bob", staked=200)
        b = mint_gem(economy, "bob", staked=56)
        before = fingerprint(economy)
        with pytest.raises(ArithmeticOverflow):
            economy.forge([a, b], "bob", T0)
        assert fingerprint(economy) == before

    def test_default_combinator_is_join(self, economy):
        """Economy defaults to the join rule."""
        assert isinstance(economy.forging.combinator, JoinCombinator)
