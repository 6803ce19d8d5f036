"""Rejection errors raised by gem operations.

Every error is raised at the failing precondition and aborts the whole
operation. Callers see exactly one of these per rejected call.
"""


class GemError(Exception):
    """Base class for rejected gem operations."""
    code = "GEM_ERROR"


class NotFound(GemError):
    """Gem or token identifier does not exist (or was burned)."""
    code = "NOT_FOUND"


class Unauthorized(GemError):
    """Caller does not hold or administer the referenced gem."""
    code = "UNAUTHORIZED"


class CooldownActive(GemError):
    """Gem is still time-gated."""
    code = "COOLDOWN_ACTIVE"

    def __init__(self, gem_id: int, ready_at: int, now: int):
        super().__init__(f"Gem {gem_id} cooling down until {ready_at} (now {now})")
        self.gem_id = gem_id
        self.ready_at = ready_at
        self.now = now


class InvalidRarity(GemError):
    """Rarity-0 gems cannot be mined."""
    code = "INVALID_RARITY"


class InvalidForgeSize(GemError):
    """Forge set size outside the allowed bounds."""
    code = "INVALID_FORGE_SIZE"


class AirdropInactive(GemError):
    """Airdrop claims are switched off."""
    code = "AIRDROP_INACTIVE"


class InvalidProof(GemError):
    """Membership proof does not verify against the commitment root."""
    code = "INVALID_PROOF"


class AlreadyClaimed(GemError):
    """Allowlist leaf has been claimed before."""
    code = "ALREADY_CLAIMED"


class ArithmeticOverflow(GemError):
    """Aggregated value exceeds the configured integer width."""
    code = "ARITHMETIC_OVERFLOW"
