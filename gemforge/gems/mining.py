"""Mining: one parent gem spawns one degraded child.

The parent survives and is cooldown-gated afterwards; the child is eligible
immediately.
"""
import logging

from ..core.constants import MINING_COOLDOWN_SECONDS
from ..core.errors import CooldownActive, Unauthorized
from .combinator import TraitGenerator, degrade_power, degrade_rarity
from .minter import GemMinter
from .models import Gem
from .store import CooldownRegistry

logger = logging.getLogger("gemforge.gems.mining")


def derive_child(parent: Gem, generator: TraitGenerator) -> Gem:
    """Child of `parent`: halved value and powers, one tier lower, fresh traits.

    Raises:
        InvalidRarity: If parent rarity is 0
    """
    rarity = degrade_rarity(parent.rarity)
    return Gem.from_traits(
        generator.generate(),
        staked_value=degrade_power(parent.staked_value),
        mining_power=degrade_power(parent.mining_power),
        forging_power=degrade_power(parent.forging_power),
        rarity=rarity,
    )


class MiningEngine:
    """Orchestrates single-gem to single-child mutation."""

    def __init__(
        self,
        minter: GemMinter,
        cooldowns: CooldownRegistry,
        generator: TraitGenerator,
        cooldown: int = MINING_COOLDOWN_SECONDS,
    ):
        self.minter = minter
        self.cooldowns = cooldowns
        self.generator = generator
        self.cooldown = cooldown

    def check(self, gem_id: int, owner: str, now: int) -> Gem:
        """Run every mining precondition. Returns the parent gem.

        Raises:
            NotFound: gem_id is not live
            Unauthorized: owner does not hold gem_id
            CooldownActive: parent still cooling down
            InvalidRarity: parent rarity is 0
        """
        holder = self.minter.ledger.owner_of(gem_id)
        if holder != owner:
            raise Unauthorized(f"{owner} does not hold gem {gem_id}")

        if not self.cooldowns.is_ready(gem_id, now):
            raise CooldownActive(gem_id, self.cooldowns.ready_at(gem_id), now)

        parent = self.minter.gems.get(gem_id)
        degrade_rarity(parent.rarity)
        return parent

    def mine(self, gem_id: int, owner: str, now: int) -> int:
        """Mine gem_id on behalf of owner at time now.

        Returns:
            Id of the new child gem
        """
        parent = self.check(gem_id, owner, now)
        child = derive_child(parent, self.generator)

        new_id = self.minter.issue(owner, child, source="mine")
        ready_at = now + self.cooldown
        self.cooldowns.set_ready_at(gem_id, ready_at)

        self.minter.events.record("gem_mined", {
            "owner": owner,
            "gem_id": new_id,
            "parent_id": gem_id,
            "parent_ready_at": ready_at,
        })
        logger.info("gem %d mined by %s -> gem %d", gem_id, owner, new_id)
        return new_id
