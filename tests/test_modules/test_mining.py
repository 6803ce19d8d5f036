"""Tests for gemforge.gems.mining module."""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import DAY, T0, fingerprint, mint_gem
from gemforge.core.errors import CooldownActive, InvalidRarity, NotFound, Unauthorized
from gemforge.gems.models import Traits


class TestMineDerivation:
    """Child gem attributes."""

    @pytest.mark.parametrize("staked,mining,forging,rarity", [
        (100, 10, 10, 3),
        (7, 3, 1, 1),
        (0, 0, 0, 5),
        (2**200 + 1, 999, 1, 10),
    ])
    def test_child_is_halved_and_one_tier_lower(self, economy, staked, mining, forging, rarity):
        """Child has floor-halved value and powers, rarity - 1."""
        parent_id = mint_gem(economy, "alice", staked, mining, forging, rarity)
        child_id = economy.mine(parent_id, "alice", T0)
        child = economy.gem(child_id)

        assert child.staked_value == staked // 2
        assert child.mining_power == mining // 2
        assert child.forging_power == forging // 2
        assert child.rarity == rarity - 1

    def test_parent_survives(self, economy):
        """Parent is still present, unchanged and owned after mining."""
        parent_id = mint_gem(economy, "alice")
        before = economy.gem(parent_id)
        economy.mine(parent_id, "alice", T0)
        assert economy.gem(parent_id) == before
        assert economy.owner_of(parent_id) == "alice"

    def test_exactly_one_new_gem(self, economy):
        """Mining adds exactly one gem, owned by the miner."""
        parent_id = mint_gem(economy, "alice")
        child_id = economy.mine(parent_id, "alice", T0)
        assert len(economy.gems) == 2
        assert child_id == parent_id + 1
        assert economy.owner_of(child_id) == "alice"

    def test_child_traits_from_generator(self, economy, fixed_traits):
        """Child tags come from the generator, not the parent."""
        parent_id = mint_gem(economy, "alice", traits=("onyx", "heart", "starred"))
        child_id = economy.mine(parent_id, "alice", T0)
        assert economy.gem(child_id).traits == fixed_traits[0]
        assert economy.gem(child_id).traits != Traits("onyx", "heart", "starred")


class TestMineCooldown:
    """Cooldown gating on the parent."""

    def test_parent_gated_child_free(self, economy):
        """Parent ready_at = now + mining cooldown; child has no entry."""
        parent_id = mint_gem(economy, "alice")
        child_id = economy.mine(parent_id, "alice", T0)
        assert economy.ready_at(parent_id) == T0 + DAY
        assert economy.ready_at(child_id) == 0
        economy.mine(child_id, "alice", T0)

    def test_before_cooldown_rejected(self, economy):
        """Mining again one second early raises CooldownActive."""
        parent_id = mint_gem(economy, "alice")
        economy.mine(parent_id, "alice", T0)
        with pytest.raises(CooldownActive) as exc_info:
            economy.mine(parent_id, "alice", T0 + DAY - 1)
        assert exc_info.value.ready_at == T0 + DAY

    def test_at_cooldown_succeeds(self, economy):
        """Mining exactly at ready_at succeeds."""
        parent_id = mint_gem(economy, "alice")
        economy.mine(parent_id, "alice", T0)
        economy.mine(parent_id, "alice", T0 + DAY)
        assert economy.ready_at(parent_id) == T0 + 2 * DAY


class TestMineRejections:
    """Failed mining leaves no trace."""

    def test_rarity_zero(self, economy):
        """Rarity-0 gem raises InvalidRarity and mutates nothing."""
        gem_id = mint_gem(economy, "alice", rarity=0)
        before = fingerprint(economy)
        with pytest.raises(InvalidRarity):
            economy.mine(gem_id, "alice", T0)
        assert fingerprint(economy) == before

    def test_not_owner(self, economy):
        """Non-holder raises Unauthorized."""
        gem_id = mint_gem(economy, "alice")
        before = fingerprint(economy)
        with pytest.raises(Unauthorized):
            economy.mine(gem_id, "mallory", T0)
        assert fingerprint(economy) == before

    def test_missing_gem(self, economy):
        """Unknown id raises NotFound."""
        with pytest.raises(NotFound):
            economy.mine(42, "alice", T0)

    def test_ownership_checked_before_cooldown(self, economy):
        """Non-holder on a cooling gem gets Unauthorized."""
        gem_id = mint_gem(economy, "alice")
        economy.mine(gem_id, "alice", T0)
        with pytest.raises(Unauthorized):
            economy.mine(gem_id, "mallory", T0)


class TestMineEvents:
    """gem_mined receipts."""

    def test_gem_mined_recorded(self, economy):
        """gem_mined carries owner and new gem id."""
        parent_id = mint_gem(economy, "alice")
        child_id = economy.mine(parent_id, "alice", T0)
        mined = economy.event_log("gem_mined")
        assert len(mined) == 1
        assert mined[0]["owner"] == "alice"
        assert mined[0]["gem_id"] == child_id
        assert mined[0]["parent_id"] == parent_id

    def test_receipts_ordered(self, economy):
        """Child mint receipt precedes the gem_mined receipt."""
        parent_id = mint_gem(economy, "alice")
        economy.mine(parent_id, "alice", T0)
        types = [r["receipt_type"] for r in economy.event_log()]
        assert types == ["gem_minted", "gem_minted", "gem_mined"]
