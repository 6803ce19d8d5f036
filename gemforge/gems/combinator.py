"""Attribute derivation for new gems.

Pure helpers for degrading and aggregating numeric traits, a pluggable
strategy for fusing categorical tags, and the trait generator capability used
for every freshly generated (non-forged) gem.
"""
import random
from abc import ABC, abstractmethod

from ..core.constants import (
    DEFAULT_TRAIT_SEED,
    INTEGER_BITS,
    TRAIT_COLORS,
    TRAIT_PATTERNS,
    TRAIT_SEPARATOR,
    TRAIT_SHAPES,
)
from ..core.errors import ArithmeticOverflow, InvalidRarity
from .models import Traits


# ============================================================================
# Numeric traits
# ============================================================================

def degrade_power(value: int) -> int:
    """Halve with truncation. Zero stays zero."""
    if value < 0:
        raise ValueError(f"Power must be non-negative, got {value}")
    return value // 2


def degrade_rarity(rarity: int) -> int:
    """Drop one rarity tier. Rarity-0 gems cannot degrade further."""
    if rarity < 1:
        raise InvalidRarity(f"Rarity {rarity} cannot be mined")
    return rarity - 1


def check_width(value: int, bits: int = INTEGER_BITS, field: str = "value") -> int:
    """Return `value` if it fits an unsigned `bits`-wide integer."""
    if value > (1 << bits) - 1:
        raise ArithmeticOverflow(f"{field} overflows {bits}-bit width")
    return value


def checked_add(a: int, b: int, bits: int = INTEGER_BITS, field: str = "value") -> int:
    """Add two unsigned integers, failing instead of wrapping at `bits`."""
    return check_width(a + b, bits, field)


# ============================================================================
# Categorical traits
# ============================================================================

class TraitCombinator(ABC):
    """Fuses two tags into one.

    Implementations must be deterministic, defined for every pair of valid
    tags, and return tags that are themselves valid inputs.
    """

    @abstractmethod
    def combine_color(self, a: str, b: str) -> str:
        pass

    @abstractmethod
    def combine_shape(self, a: str, b: str) -> str:
        pass

    @abstractmethod
    def combine_pattern(self, a: str, b: str) -> str:
        pass

    def combine(self, acc: Traits, nxt: Traits) -> Traits:
        """Fold `nxt` into the accumulated triple, left-associative."""
        return Traits(
            color=self.combine_color(acc.color, nxt.color),
            shape=self.combine_shape(acc.shape, nxt.shape),
            pattern=self.combine_pattern(acc.pattern, nxt.pattern),
        )


class JoinCombinator(TraitCombinator):
    """Reference rule: a + separator + b."""

    def __init__(self, separator: str = TRAIT_SEPARATOR):
        self.separator = separator

    def _join(self, a: str, b: str) -> str:
        return f"{a}{self.separator}{b}"

    def combine_color(self, a: str, b: str) -> str:
        return self._join(a, b)

    def combine_shape(self, a: str, b: str) -> str:
        return self._join(a, b)

    def combine_pattern(self, a: str, b: str) -> str:
        return self._join(a, b)


class RuleTableCombinator(TraitCombinator):
    """Looks (kind, a, b) up in a rule table, falling back to another rule.

    Table keys are ("color" | "shape" | "pattern", a, b).
    """

    def __init__(
        self,
        rules: dict[tuple[str, str, str], str],
        fallback: TraitCombinator | None = None,
    ):
        self.rules = dict(rules)
        self.fallback = fallback or JoinCombinator()

    def combine_color(self, a: str, b: str) -> str:
        key = ("color", a, b)
        if key in self.rules:
            return self.rules[key]
        return self.fallback.combine_color(a, b)

    def combine_shape(self, a: str, b: str) -> str:
        key = ("shape", a, b)
        if key in self.rules:
            return self.rules[key]
        return self.fallback.combine_shape(a, b)

    def combine_pattern(self, a: str, b: str) -> str:
        key = ("pattern", a, b)
        if key in self.rules:
            return self.rules[key]
        return self.fallback.combine_pattern(a, b)


# ============================================================================
# Trait generation
# ============================================================================

class TraitGenerator(ABC):
    """Source of fresh trait triples. One call per generated gem."""

    @abstractmethod
    def generate(self) -> Traits:
        pass

    @abstractmethod
    def snapshot(self):
        """Opaque, JSON-serializable generator state."""
        pass

    @abstractmethod
    def restore(self, snap) -> None:
        pass


class SeededTraitGenerator(TraitGenerator):
    """Deterministic draws from fixed palettes.

    Draw n is a pure function of (seed, n), so the generator state is just the
    draw counter.
    """

    def __init__(
        self,
        seed: int = DEFAULT_TRAIT_SEED,
        colors: tuple[str, ...] = TRAIT_COLORS,
        shapes: tuple[str, ...] = TRAIT_SHAPES,
        patterns: tuple[str, ...] = TRAIT_PATTERNS,
    ):
        self.seed = seed
        self.colors = colors
        self.shapes = shapes
        self.patterns = patterns
        self.draws = 0

    def generate(self) -> Traits:
        rng = random.Random(f"{self.seed}:{self.draws}")
        self.draws += 1
        return Traits(
            color=rng.choice(self.colors),
            shape=rng.choice(self.shapes),
            pattern=rng.choice(self.patterns),
        )

    def snapshot(self) -> int:
        return self.draws

    def restore(self, snap: int) -> None:
        self.draws = int(snap)


class FixedTraitGenerator(TraitGenerator):
    """Cycles through a supplied list of triples."""

    def __init__(self, triples: list[Traits | tuple[str, str, str]]):
        if not triples:
            raise ValueError("FixedTraitGenerator needs at least one triple")
        self.triples = [t if isinstance(t, Traits) else Traits(*t) for t in triples]
        self.calls = 0

    def generate(self) -> Traits:
        traits = self.triples[self.calls % len(self.triples)]
        self.calls += 1
        return traits

    def snapshot(self) -> int:
        return self.calls

    def restore(self, snap: int) -> None:
        self.calls = int(snap)
