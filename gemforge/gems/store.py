"""Gem state stores: records, cooldowns and the identifier counter.

These are the only places gem state lives. Engines mutate them; nothing else
does. Each store can snapshot and restore itself so the economy can roll a
failed operation back as one unit.
"""
import threading

from ..core.constants import EPOCH_ORIGIN, FIRST_GEM_ID
from ..core.errors import NotFound
from .models import Gem


class GemStore:
    """Mapping from gem id to Gem record."""

    def __init__(self):
        self._gems: dict[int, Gem] = {}

    def put(self, gem_id: int, gem: Gem) -> None:
        self._gems[gem_id] = gem

    def get(self, gem_id: int) -> Gem:
        try:
            return self._gems[gem_id]
        except KeyError:
            raise NotFound(f"Gem {gem_id} does not exist") from None

    def remove(self, gem_id: int) -> Gem:
        """Delete and return gem_id. Removing an absent id is an error."""
        if gem_id not in self._gems:
            raise NotFound(f"Gem {gem_id} does not exist")
        return self._gems.pop(gem_id)

    def contains(self, gem_id: int) -> bool:
        return gem_id in self._gems

    __contains__ = contains

    def ids(self) -> list[int]:
        return sorted(self._gems)

    def items(self) -> list[tuple[int, Gem]]:
        return sorted(self._gems.items())

    def __len__(self) -> int:
        return len(self._gems)

    def snapshot(self) -> dict[int, Gem]:
        return dict(self._gems)

    def restore(self, snap: dict[int, Gem]) -> None:
        self._gems = dict(snap)


class CooldownRegistry:
    """Mapping from gem id to the earliest time it may be used again."""

    def __init__(self):
        self._ready_at: dict[int, int] = {}

    def ready_at(self, gem_id: int) -> int:
        return self._ready_at.get(gem_id, EPOCH_ORIGIN)

    def set_ready_at(self, gem_id: int, timestamp: int) -> None:
        self._ready_at[gem_id] = timestamp

    def is_ready(self, gem_id: int, now: int) -> bool:
        return now >= self.ready_at(gem_id)

    def entries(self) -> dict[int, int]:
        return dict(self._ready_at)

    def snapshot(self) -> dict[int, int]:
        return dict(self._ready_at)

    def restore(self, snap: dict[int, int]) -> None:
        self._ready_at = dict(snap)


class IdentifierAllocator:
    """Strictly increasing gem ids. Never reused, burned ids included."""

    def __init__(self, start: int = FIRST_GEM_ID):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            gem_id = self._next
            self._next += 1
            return gem_id

    def peek(self) -> int:
        return self._next

    def snapshot(self) -> int:
        return self._next

    def restore(self, snap: int) -> None:
        with self._lock:
            self._next = snap
