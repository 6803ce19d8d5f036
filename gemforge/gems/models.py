"""Gem value records."""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Traits:
    """Categorical tag triple carried by every gem."""
    color: str
    shape: str
    pattern: str


@dataclass(frozen=True)
class Gem:
    """A gem record. Ownership is tracked by the token ledger, not here."""
    staked_value: int
    color: str
    shape: str
    pattern: str
    mining_power: int
    forging_power: int
    rarity: int

    @classmethod
    def from_traits(
        cls,
        traits: Traits,
        staked_value: int,
        mining_power: int,
        forging_power: int,
        rarity: int,
    ) -> "Gem":
        return cls(
            staked_value=staked_value,
            color=traits.color,
            shape=traits.shape,
            pattern=traits.pattern,
            mining_power=mining_power,
            forging_power=forging_power,
            rarity=rarity,
        )

    @property
    def traits(self) -> Traits:
        return Traits(self.color, self.shape, self.pattern)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Gem":
        return cls(
            staked_value=int(data["staked_value"]),
            color=str(data["color"]),
            shape=str(data["shape"]),
            pattern=str(data["pattern"]),
            mining_power=int(data["mining_power"]),
            forging_power=int(data["forging_power"]),
            rarity=int(data["rarity"]),
        )
