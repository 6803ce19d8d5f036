"""
GemForge - Collectible gem lifecycle engine

Gems are minted, mined into degraded offspring, or forged together into
stronger gems, each action gated by a per-gem cooldown. Allowlisted
addresses claim starter gems with a Merkle membership proof. Every
committed change leaves a receipt.
"""

__version__ = "0.1.0"

from gemforge.anchor import allowlist_leaf, allowlist_proof, allowlist_root, verify_membership
from gemforge.authority import Authority
from gemforge.config import GemConfig
from gemforge.core.errors import (
    AirdropInactive,
    AlreadyClaimed,
    ArithmeticOverflow,
    CooldownActive,
    GemError,
    InvalidForgeSize,
    InvalidProof,
    InvalidRarity,
    NotFound,
    Unauthorized,
)
from gemforge.core.receipt import StopRule, dual_hash, emit_receipt, merkle
from gemforge.economy import GemEconomy
from gemforge.gems.models import Gem, Traits
from gemforge.state import dump_state, load_state, read_state, save_state

__all__ = [
    "__version__",
    # Facade
    "GemEconomy",
    "GemConfig",
    "Authority",
    "Gem",
    "Traits",
    # Errors
    "GemError",
    "NotFound",
    "Unauthorized",
    "CooldownActive",
    "InvalidRarity",
    "InvalidForgeSize",
    "AirdropInactive",
    "InvalidProof",
    "AlreadyClaimed",
    "ArithmeticOverflow",
    "StopRule",
    # Receipts
    "dual_hash",
    "emit_receipt",
    "merkle",
    # Allowlist
    "allowlist_leaf",
    "allowlist_root",
    "allowlist_proof",
    "verify_membership",
    # State
    "dump_state",
    "load_state",
    "save_state",
    "read_state",
]
