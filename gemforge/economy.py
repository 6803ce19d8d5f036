"""GemEconomy: the public face of the gem lifecycle.

Wires the stores, collaborators and engines together and runs every public
operation as one transaction. A failing operation rolls back gems, cooldowns,
the id counter, token ownership, airdrop state and generator state, and its
receipts are discarded unpublished.

Usage:
    from gemforge import GemEconomy

    economy = GemEconomy("admin")
    gem_id = economy.mint("admin", "alice", staked_value=100,
                          mining_power=10, forging_power=10, rarity=3)
    child_id = economy.mine(gem_id, "alice", now=1_700_000_000)
"""
import logging
from contextlib import contextmanager

from .anchor.verify import verify_membership
from .authority import Authority
from .config import GemConfig
from .gems.airdrop import AirdropClaimEngine, Verifier
from .gems.combinator import (
    JoinCombinator,
    SeededTraitGenerator,
    TraitCombinator,
    TraitGenerator,
    check_width,
)
from .gems.forging import ForgingEngine
from .gems.minter import GemMinter
from .gems.mining import MiningEngine
from .gems.models import Gem, Traits
from .gems.store import CooldownRegistry, GemStore, IdentifierAllocator
from .ledger.events import EventLog
from .ledger.store import LedgerStore
from .ledger.token import TokenLedger

logger = logging.getLogger("gemforge.economy")


def _require_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value


class GemEconomy:
    """Gem lifecycle state machine with whole-operation atomicity."""

    def __init__(
        self,
        authority: Authority | str,
        config: GemConfig | None = None,
        ledger: TokenLedger | None = None,
        generator: TraitGenerator | None = None,
        combinator: TraitCombinator | None = None,
        verifier: Verifier | None = None,
        event_store: LedgerStore | None = None,
        echo: bool = True,
    ):
        self.config = config or GemConfig()
        errors = self.config.validate()
        if errors:
            raise ValueError("Invalid config: " + "; ".join(errors))

        self.authority = authority if isinstance(authority, Authority) else Authority(authority)
        self.ledger = ledger or TokenLedger()
        self.generator = generator or SeededTraitGenerator(self.config.trait_seed)
        self.combinator = combinator or JoinCombinator()
        self.events = EventLog(event_store, tenant_id=self.config.tenant_id, echo=echo)

        self.gems = GemStore()
        self.cooldowns = CooldownRegistry()
        self.allocator = IdentifierAllocator()
        self.minter = GemMinter(self.gems, self.ledger, self.allocator, self.events)

        self.mining = MiningEngine(
            self.minter, self.cooldowns, self.generator,
            cooldown=self.config.mining_cooldown,
        )
        self.forging = ForgingEngine(
            self.minter, self.cooldowns, self.combinator,
            cooldown=self.config.forging_cooldown,
            integer_bits=self.config.integer_bits,
        )
        self.airdrop = AirdropClaimEngine(
            self.minter, self.generator, self.authority,
            verifier or verify_membership,
            root=self.config.merkle_root,
            replay_protection=self.config.airdrop_replay_protection,
            starter_staked_value=self.config.starter_staked_value,
            starter_mining_power=self.config.starter_mining_power,
            starter_forging_power=self.config.starter_forging_power,
            starter_rarity=self.config.starter_rarity,
        )
        self._in_transaction = False

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _checkpoint(self) -> dict:
        return {
            "gems": self.gems.snapshot(),
            "cooldowns": self.cooldowns.snapshot(),
            "allocator": self.allocator.snapshot(),
            "ledger": self.ledger.snapshot(),
            "airdrop": self.airdrop.snapshot(),
            "generator": self.generator.snapshot(),
            "admin": self.authority.admin,
            "mining_cooldown": self.mining.cooldown,
            "forging_cooldown": self.forging.cooldown,
        }

    def _rollback(self, checkpoint: dict) -> None:
        self.gems.restore(checkpoint["gems"])
        self.cooldowns.restore(checkpoint["cooldowns"])
        self.allocator.restore(checkpoint["allocator"])
        self.ledger.restore(checkpoint["ledger"])
        self.airdrop.restore(checkpoint["airdrop"])
        self.generator.restore(checkpoint["generator"])
        self.authority.admin = checkpoint["admin"]
        self.mining.cooldown = checkpoint["mining_cooldown"]
        self.forging.cooldown = checkpoint["forging_cooldown"]
        self.events.discard()

    @contextmanager
    def transaction(self):
        """Commit everything done inside, or nothing.

        Nested use joins the outer transaction.
        """
        if self._in_transaction:
            yield
            return

        checkpoint = self._checkpoint()
        self._in_transaction = True
        try:
            yield
            self.events.commit()
        except Exception as e:
            self._rollback(checkpoint)
            logger.info("rolled back: %s: %s", type(e).__name__, e)
            raise
        finally:
            self._in_transaction = False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def mint(
        self,
        caller: str,
        to: str,
        staked_value: int,
        mining_power: int,
        forging_power: int,
        rarity: int,
        traits: Traits | tuple[str, str, str] | None = None,
    ) -> int:
        """Admin mint of a single gem. Traits are generated when omitted."""
        with self.transaction():
            self.authority.require_admin(caller)
            for name, value in (
                ("staked_value", staked_value),
                ("mining_power", mining_power),
                ("forging_power", forging_power),
                ("rarity", rarity),
            ):
                _require_count(name, value)
            for name, value in (
                ("staked_value", staked_value),
                ("mining_power", mining_power),
                ("forging_power", forging_power),
            ):
                check_width(value, self.config.integer_bits, name)

            if traits is None:
                traits = self.generator.generate()
            elif not isinstance(traits, Traits):
                traits = Traits(*traits)

            gem = Gem.from_traits(
                traits,
                staked_value=staked_value,
                mining_power=mining_power,
                forging_power=forging_power,
                rarity=rarity,
            )
            return self.minter.issue(to, gem, source="admin")

    def mine(self, gem_id: int, owner: str, now: int) -> int:
        with self.transaction():
            return self.mining.mine(gem_id, owner, now)

    def forge(self, gem_ids: list[int], owner: str, now: int) -> int:
        with self.transaction():
            return self.forging.forge(gem_ids, owner, now)

    def claim(self, to: str, amount: int, proof: dict) -> list[int]:
        with self.transaction():
            return self.airdrop.claim(to, amount, proof)

    def activate_airdrop(self, caller: str) -> None:
        with self.transaction():
            self.airdrop.activate(caller)

    def deactivate_airdrop(self, caller: str) -> None:
        with self.transaction():
            self.airdrop.deactivate(caller)

    def transfer_admin(self, caller: str, new_admin: str) -> None:
        """Hand the admin role to `new_admin` (admin only)."""
        with self.transaction():
            self.authority.transfer_admin(caller, new_admin)
            self.events.record("admin_transferred", {
                "caller": caller,
                "new_admin": new_admin,
            })

    def set_cooldowns(
        self,
        caller: str,
        mining: int | None = None,
        forging: int | None = None,
    ) -> tuple[int, int]:
        """Admin update of cooldown durations. Returns (mining, forging)."""
        with self.transaction():
            self.authority.require_admin(caller)
            if mining is not None:
                self.mining.cooldown = _require_count("mining", mining)
            if forging is not None:
                self.forging.cooldown = _require_count("forging", forging)
            self.events.record("cooldowns_updated", {
                "caller": caller,
                "mining_cooldown": self.mining.cooldown,
                "forging_cooldown": self.forging.cooldown,
            })
            return self.mining.cooldown, self.forging.cooldown

    def transfer(self, sender: str, to: str, gem_id: int) -> None:
        with self.transaction():
            self.ledger.transfer(sender, to, gem_id)
            self.events.record("gem_transferred", {
                "sender": sender,
                "to": to,
                "gem_id": gem_id,
            })

    def approve(self, owner: str, spender: str | None, gem_id: int) -> None:
        with self.transaction():
            self.ledger.approve(owner, spender, gem_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def gem(self, gem_id: int) -> Gem:
        return self.gems.get(gem_id)

    def owner_of(self, gem_id: int) -> str:
        return self.ledger.owner_of(gem_id)

    def ready_at(self, gem_id: int) -> int:
        return self.cooldowns.ready_at(gem_id)

    def gems_of(self, owner: str) -> list[int]:
        return self.ledger.tokens_of(owner)

    def describe(self, gem_id: int) -> dict:
        """Gem record plus its owner and cooldown, for display."""
        return {
            "gem_id": gem_id,
            "owner": self.owner_of(gem_id),
            "ready_at": self.ready_at(gem_id),
            **self.gem(gem_id).to_dict(),
        }

    def event_log(self, receipt_type: str | None = None) -> list[dict]:
        return self.events.events(receipt_type)
