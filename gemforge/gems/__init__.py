"""Gem lifecycle: records, stores, attribute rules and the three engines."""
from .airdrop import AirdropClaimEngine
from .combinator import (
    FixedTraitGenerator,
    JoinCombinator,
    RuleTableCombinator,
    SeededTraitGenerator,
    TraitCombinator,
    TraitGenerator,
    check_width,
    checked_add,
    degrade_power,
    degrade_rarity,
)
from .forging import ForgingEngine, aggregate
from .minter import GemMinter
from .mining import MiningEngine, derive_child
from .models import Gem, Traits
from .store import CooldownRegistry, GemStore, IdentifierAllocator

__all__ = [
    "Gem",
    "Traits",
    "GemStore",
    "CooldownRegistry",
    "IdentifierAllocator",
    "GemMinter",
    "TraitCombinator",
    "JoinCombinator",
    "RuleTableCombinator",
    "TraitGenerator",
    "SeededTraitGenerator",
    "FixedTraitGenerator",
    "degrade_power",
    "degrade_rarity",
    "check_width",
    "checked_add",
    "MiningEngine",
    "derive_child",
    "ForgingEngine",
    "aggregate",
    "AirdropClaimEngine",
]
