"""Core subpackage for GemForge primitives.

Exports all from receipt.py, schemas.py, errors.py and constants.py.
"""
from .receipt import StopRule, build_receipt, dual_hash, emit_receipt, leaf_hash, merkle
from .schemas import RECEIPT_SCHEMAS, REQUIRED_FIELDS, validate_receipt
from .errors import (
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
from .constants import (
    FORGE_MAX_INPUTS,
    FORGE_MIN_INPUTS,
    FORGING_COOLDOWN_SECONDS,
    INTEGER_BITS,
    MINING_COOLDOWN_SECONDS,
)

__all__ = [
    # Receipt primitives
    "dual_hash",
    "build_receipt",
    "emit_receipt",
    "leaf_hash",
    "merkle",
    "StopRule",
    # Schemas
    "RECEIPT_SCHEMAS",
    "REQUIRED_FIELDS",
    "validate_receipt",
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
    # Constants
    "MINING_COOLDOWN_SECONDS",
    "FORGING_COOLDOWN_SECONDS",
    "FORGE_MIN_INPUTS",
    "FORGE_MAX_INPUTS",
    "INTEGER_BITS",
]
