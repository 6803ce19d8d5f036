"""Airdrop claims against a Merkle-committed allowlist.

Leaves are {"to": address, "amount": n}. A valid claim mints `amount` starter
gems to `to`. With replay protection on, each leaf can be claimed once.
"""
import logging
from typing import Callable

from ..anchor.merkle import allowlist_leaf
from ..authority import Authority
from ..core.constants import (
    AIRDROP_REPLAY_PROTECTION,
    STARTER_FORGING_POWER,
    STARTER_MINING_POWER,
    STARTER_RARITY,
    STARTER_STAKED_VALUE,
)
from ..core.errors import AirdropInactive, AlreadyClaimed, InvalidProof
from ..core.receipt import leaf_hash
from .combinator import TraitGenerator
from .minter import GemMinter
from .models import Gem

logger = logging.getLogger("gemforge.gems.airdrop")

Verifier = Callable[[dict, str, dict], bool]


class AirdropClaimEngine:
    """Batch minting gated by an activation flag and a membership proof."""

    def __init__(
        self,
        minter: GemMinter,
        generator: TraitGenerator,
        authority: Authority,
        verifier: Verifier,
        root: str,
        replay_protection: bool = AIRDROP_REPLAY_PROTECTION,
        starter_staked_value: int = STARTER_STAKED_VALUE,
        starter_mining_power: int = STARTER_MINING_POWER,
        starter_forging_power: int = STARTER_FORGING_POWER,
        starter_rarity: int = STARTER_RARITY,
    ):
        self.minter = minter
        self.generator = generator
        self.authority = authority
        self.verifier = verifier
        self.root = root
        self.replay_protection = replay_protection
        self.starter_staked_value = starter_staked_value
        self.starter_mining_power = starter_mining_power
        self.starter_forging_power = starter_forging_power
        self.starter_rarity = starter_rarity
        self.active = False
        self.claimed: set[str] = set()

    def _toggle(self, caller: str, active: bool) -> None:
        self.authority.require_admin(caller)
        self.active = active
        self.minter.events.record("airdrop_toggled", {
            "caller": caller,
            "active": active,
        })
        logger.info("airdrop %s by %s", "activated" if active else "deactivated", caller)

    def activate(self, caller: str) -> None:
        self._toggle(caller, True)

    def deactivate(self, caller: str) -> None:
        self._toggle(caller, False)

    def starter_gem(self) -> Gem:
        return Gem.from_traits(
            self.generator.generate(),
            staked_value=self.starter_staked_value,
            mining_power=self.starter_mining_power,
            forging_power=self.starter_forging_power,
            rarity=self.starter_rarity,
        )

    def claim(self, to: str, amount: int, proof: dict) -> list[int]:
        """Claim `amount` starter gems for `to`.

        Returns:
            Ids of the minted gems, in mint order

        Raises:
            AirdropInactive: Claims are switched off
            ValueError: amount is not a non-negative integer
            InvalidProof: Proof does not verify against the root
            AlreadyClaimed: Leaf already claimed (replay protection on)
        """
        if not self.active:
            raise AirdropInactive("Airdrop is not active")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValueError(f"amount must be a non-negative integer, got {amount!r}")

        leaf = allowlist_leaf(to, amount)
        if not self.verifier(proof, self.root, leaf):
            raise InvalidProof(f"Proof for {to} x{amount} does not verify")

        digest = leaf_hash(leaf)
        if self.replay_protection and digest in self.claimed:
            raise AlreadyClaimed(f"{to} x{amount} already claimed")

        gem_ids = [
            self.minter.issue(to, self.starter_gem(), source="airdrop")
            for _ in range(amount)
        ]
        self.claimed.add(digest)

        self.minter.events.record("airdrop_claimed", {
            "to": to,
            "amount": amount,
            "gem_ids": gem_ids,
            "leaf_hash": digest,
        })
        logger.info("airdrop claim by %s minted %d gem(s)", to, amount)
        return gem_ids

    def snapshot(self) -> tuple[bool, frozenset]:
        return self.active, frozenset(self.claimed)

    def restore(self, snap: tuple[bool, frozenset]) -> None:
        self.active, claimed = snap
        self.claimed = set(claimed)
