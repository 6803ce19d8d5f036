"""Forging: 2-5 gems are burned and consolidated into one.

Validation of every input happens before the first burn, so a rejected forge
never leaves a half-burned set behind.
"""
import logging

from ..core.constants import (
    FORGE_MAX_INPUTS,
    FORGE_MIN_INPUTS,
    FORGING_COOLDOWN_SECONDS,
    INTEGER_BITS,
)
from ..core.errors import CooldownActive, InvalidForgeSize, NotFound, Unauthorized
from .combinator import TraitCombinator, checked_add
from .minter import GemMinter
from .models import Gem
from .store import CooldownRegistry

logger = logging.getLogger("gemforge.gems.forging")


def aggregate(gems: list[Gem], combinator: TraitCombinator, bits: int = INTEGER_BITS) -> Gem:
    """Left fold of `gems` into one forged gem.

    Sums staked value and both powers, keeps the max rarity and folds tags
    through the combinator starting from the first gem. Tag order matters;
    numeric aggregates do not.

    Raises:
        ArithmeticOverflow: If a sum exceeds the `bits` width
    """
    first, rest = gems[0], gems[1:]
    staked = first.staked_value
    mining = first.mining_power
    forging = first.forging_power
    rarity = first.rarity
    traits = first.traits

    for gem in rest:
        staked = checked_add(staked, gem.staked_value, bits, "staked_value")
        mining = checked_add(mining, gem.mining_power, bits, "mining_power")
        forging = checked_add(forging, gem.forging_power, bits, "forging_power")
        rarity = max(rarity, gem.rarity)
        traits = combinator.combine(traits, gem.traits)

    return Gem.from_traits(
        traits,
        staked_value=staked,
        mining_power=mining,
        forging_power=forging,
        rarity=rarity,
    )


class ForgingEngine:
    """Orchestrates N-gem to single-gem consolidation."""

    def __init__(
        self,
        minter: GemMinter,
        cooldowns: CooldownRegistry,
        combinator: TraitCombinator,
        cooldown: int = FORGING_COOLDOWN_SECONDS,
        integer_bits: int = INTEGER_BITS,
    ):
        self.minter = minter
        self.cooldowns = cooldowns
        self.combinator = combinator
        self.cooldown = cooldown
        self.integer_bits = integer_bits

    def check(self, gem_ids: list[int], owner: str, now: int) -> list[Gem]:
        """Validate the whole forge set. Returns the input gems in order.

        Raises:
            InvalidForgeSize: Fewer than 2 or more than 5 ids
            NotFound: An id is not live, or appears twice
            Unauthorized: owner does not hold one of the gems
            CooldownActive: One of the gems is still cooling down
        """
        if not FORGE_MIN_INPUTS <= len(gem_ids) <= FORGE_MAX_INPUTS:
            raise InvalidForgeSize(
                f"Forge needs {FORGE_MIN_INPUTS}-{FORGE_MAX_INPUTS} gems, got {len(gem_ids)}"
            )

        seen = set()
        inputs = []
        for gem_id in gem_ids:
            # a repeated id would name a gem already burned earlier in the set
            if gem_id in seen:
                raise NotFound(f"Gem {gem_id} listed twice in forge set")
            seen.add(gem_id)

            if self.minter.ledger.owner_of(gem_id) != owner:
                raise Unauthorized(f"{owner} does not hold gem {gem_id}")
            if not self.cooldowns.is_ready(gem_id, now):
                raise CooldownActive(gem_id, self.cooldowns.ready_at(gem_id), now)

            inputs.append(self.minter.gems.get(gem_id))
        return inputs

    def forge(self, gem_ids: list[int], owner: str, now: int) -> int:
        """Forge gem_ids (in order) for owner at time now.

        Returns:
            Id of the forged gem
        """
        gem_ids = list(gem_ids)
        inputs = self.check(gem_ids, owner, now)
        forged = aggregate(inputs, self.combinator, self.integer_bits)

        for gem_id in gem_ids:
            self.minter.destroy(gem_id)

        forged_id = self.minter.issue(owner, forged, source="forge")
        ready_at = now + self.cooldown
        self.cooldowns.set_ready_at(forged_id, ready_at)

        self.minter.events.record("gem_forged", {
            "owner": owner,
            "gem_id": forged_id,
            "burned": gem_ids,
            "ready_at": ready_at,
        })
        logger.info("gems %s forged by %s -> gem %d", gem_ids, owner, forged_id)
        return forged_id
