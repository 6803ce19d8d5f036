"""GemForge configuration.

All settings can be overridden via environment variables with the GEMFORGE_
prefix.
"""
import os
from dataclasses import asdict, dataclass

from .core.constants import (
    AIRDROP_REPLAY_PROTECTION,
    DEFAULT_TENANT,
    DEFAULT_TRAIT_SEED,
    FORGING_COOLDOWN_SECONDS,
    INTEGER_BITS,
    MINING_COOLDOWN_SECONDS,
    STARTER_FORGING_POWER,
    STARTER_MINING_POWER,
    STARTER_RARITY,
    STARTER_STAKED_VALUE,
)


@dataclass
class GemConfig:
    """Economy configuration, fixed at initialization."""

    # Allowlist commitment
    merkle_root: str = ""

    # Cooldowns (seconds)
    mining_cooldown: int = MINING_COOLDOWN_SECONDS
    forging_cooldown: int = FORGING_COOLDOWN_SECONDS

    # Aggregation width
    integer_bits: int = INTEGER_BITS

    # Trait generation
    trait_seed: int = DEFAULT_TRAIT_SEED

    # Airdrop starter profile
    starter_staked_value: int = STARTER_STAKED_VALUE
    starter_mining_power: int = STARTER_MINING_POWER
    starter_forging_power: int = STARTER_FORGING_POWER
    starter_rarity: int = STARTER_RARITY
    airdrop_replay_protection: bool = AIRDROP_REPLAY_PROTECTION

    # Receipts and persistence
    tenant_id: str = DEFAULT_TENANT
    state_path: str = "gem_state.json"
    event_log_path: str = "gem_events.jsonl"

    @classmethod
    def from_env(cls) -> "GemConfig":
        """Load configuration from environment variables."""
        config = cls()

        if "GEMFORGE_MERKLE_ROOT" in os.environ:
            config.merkle_root = os.environ["GEMFORGE_MERKLE_ROOT"]

        if "GEMFORGE_MINING_COOLDOWN" in os.environ:
            config.mining_cooldown = int(os.environ["GEMFORGE_MINING_COOLDOWN"])
        if "GEMFORGE_FORGING_COOLDOWN" in os.environ:
            config.forging_cooldown = int(os.environ["GEMFORGE_FORGING_COOLDOWN"])

        if "GEMFORGE_INTEGER_BITS" in os.environ:
            config.integer_bits = int(os.environ["GEMFORGE_INTEGER_BITS"])
        if "GEMFORGE_TRAIT_SEED" in os.environ:
            config.trait_seed = int(os.environ["GEMFORGE_TRAIT_SEED"])

        if "GEMFORGE_REPLAY_PROTECTION" in os.environ:
            config.airdrop_replay_protection = (
                os.environ["GEMFORGE_REPLAY_PROTECTION"].lower() in ("true", "1", "yes")
            )

        if "GEMFORGE_TENANT" in os.environ:
            config.tenant_id = os.environ["GEMFORGE_TENANT"]
        if "GEMFORGE_STATE_PATH" in os.environ:
            config.state_path = os.environ["GEMFORGE_STATE_PATH"]
        if "GEMFORGE_EVENT_LOG" in os.environ:
            config.event_log_path = os.environ["GEMFORGE_EVENT_LOG"]

        return config

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if self.mining_cooldown < 0:
            errors.append(f"mining_cooldown must be >= 0, got {self.mining_cooldown}")
        if self.forging_cooldown < 0:
            errors.append(f"forging_cooldown must be >= 0, got {self.forging_cooldown}")

        if self.integer_bits < 8:
            errors.append(f"integer_bits must be >= 8, got {self.integer_bits}")

        for name in ("starter_staked_value", "starter_mining_power",
                     "starter_forging_power", "starter_rarity"):
            if getattr(self, name) < 0:
                errors.append(f"{name} must be >= 0, got {getattr(self, name)}")

        if self.integer_bits >= 8:
            limit = (1 << self.integer_bits) - 1
            for name in ("starter_staked_value", "starter_mining_power",
                         "starter_forging_power"):
                if getattr(self, name) > limit:
                    errors.append(f"{name} exceeds the {self.integer_bits}-bit width")

        if self.merkle_root and ":" not in self.merkle_root:
            errors.append("merkle_root must be a dual hash 'sha256hex:blake3hex'")

        if not self.tenant_id:
            errors.append("tenant_id must be non-empty")

        return errors

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GemConfig":
        known = cls.__dataclass_fields__
        return cls(**{k: v for k, v in data.items() if k in known})
