"""GemForge constants and defaults.

All magic numbers live here. No exceptions.
"""

# Cooldowns (seconds)
MINING_COOLDOWN_SECONDS = 86_400         # one day
FORGING_COOLDOWN_SECONDS = 3 * 86_400    # three days

# Forge set bounds (inclusive)
FORGE_MIN_INPUTS = 2
FORGE_MAX_INPUTS = 5

# Host integer width for staked value / power aggregation
INTEGER_BITS = 256

# Airdrop starter profile
STARTER_STAKED_VALUE = 100
STARTER_MINING_POWER = 10
STARTER_FORGING_POWER = 10
STARTER_RARITY = 1

# Replay protection for airdrop leaves
AIRDROP_REPLAY_PROTECTION = True

# Trait generation
DEFAULT_TRAIT_SEED = 0
TRAIT_SEPARATOR = "-"

# Identifier allocation
FIRST_GEM_ID = 0

# Epoch origin: cooldown value for gems never used
EPOCH_ORIGIN = 0

# Tenant used when none configured
DEFAULT_TENANT = "default"

# Trait palettes for seeded generation
TRAIT_COLORS = ("red", "blue", "green", "amber", "violet", "onyx", "pearl")
TRAIT_SHAPES = ("round", "oval", "pear", "marquise", "princess", "emerald", "heart")
TRAIT_PATTERNS = ("solid", "speckled", "banded", "clouded", "starred", "veined")
