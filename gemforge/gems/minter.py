"""Single path for creating and destroying gems.

A gem record exists iff its id is a live token in the ledger. Every mint path
(admin, mining, forging, airdrop) and the forge burn step go through here so
the two never drift apart.
"""
import logging

from ..ledger.events import EventLog
from ..ledger.token import TokenLedger
from .models import Gem
from .store import GemStore, IdentifierAllocator

logger = logging.getLogger("gemforge.gems.minter")


class GemMinter:
    """Issues gems into GemStore and the token ledger together."""

    def __init__(
        self,
        gems: GemStore,
        ledger: TokenLedger,
        allocator: IdentifierAllocator,
        events: EventLog,
    ):
        self.gems = gems
        self.ledger = ledger
        self.allocator = allocator
        self.events = events

    def issue(self, to: str, gem: Gem, source: str) -> int:
        """Allocate an id, store the gem and mint its token to `to`."""
        gem_id = self.allocator.next()
        self.ledger.mint(to, gem_id)
        self.gems.put(gem_id, gem)
        self.events.record("gem_minted", {
            "gem_id": gem_id,
            "owner": to,
            "source": source,
            "gem": gem.to_dict(),
        })
        logger.debug("issued gem %d to %s via %s", gem_id, to, source)
        return gem_id

    def destroy(self, gem_id: int) -> Gem:
        """Burn the token and drop the record."""
        self.ledger.burn(gem_id)
        gem = self.gems.remove(gem_id)
        logger.debug("destroyed gem %d", gem_id)
        return gem
