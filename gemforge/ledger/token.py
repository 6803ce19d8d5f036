"""In-process token ledger: ownership, transfer and enumeration.

Holds who owns which token id. Gem attributes live in GemStore; the two are
kept in lockstep by the engines.
"""
from collections import defaultdict

from ..core.errors import NotFound, Unauthorized


class TokenLedger:
    """Ownership bookkeeping for non-fungible tokens keyed by integer id."""

    def __init__(self):
        self._owners: dict[int, str] = {}
        self._approvals: dict[int, str] = {}

    def mint(self, to: str, token_id: int) -> None:
        if not to:
            raise Unauthorized("Cannot mint to an empty address")
        if token_id in self._owners:
            raise ValueError(f"Token {token_id} already minted")
        self._owners[token_id] = to

    def burn(self, token_id: int) -> None:
        if token_id not in self._owners:
            raise NotFound(f"Token {token_id} is not live")
        del self._owners[token_id]
        self._approvals.pop(token_id, None)

    def owner_of(self, token_id: int) -> str:
        try:
            return self._owners[token_id]
        except KeyError:
            raise NotFound(f"Token {token_id} is not live") from None

    def exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def approve(self, owner: str, spender: str | None, token_id: int) -> None:
        """Let spender move token_id once. Passing None clears the approval."""
        if self.owner_of(token_id) != owner:
            raise Unauthorized(f"{owner} does not hold token {token_id}")
        if spender is None:
            self._approvals.pop(token_id, None)
        else:
            self._approvals[token_id] = spender

    def get_approved(self, token_id: int) -> str | None:
        self.owner_of(token_id)
        return self._approvals.get(token_id)

    def transfer(self, sender: str, to: str, token_id: int) -> str:
        """Move token_id to `to`. Sender must hold or be approved for it.

        Returns:
            Previous owner
        """
        owner = self.owner_of(token_id)
        if sender != owner and self._approvals.get(token_id) != sender:
            raise Unauthorized(f"{sender} may not transfer token {token_id}")
        if not to:
            raise Unauthorized("Cannot transfer to an empty address")
        self._owners[token_id] = to
        self._approvals.pop(token_id, None)
        return owner

    def balance_of(self, owner: str) -> int:
        return sum(1 for o in self._owners.values() if o == owner)

    def tokens_of(self, owner: str) -> list[int]:
        return sorted(t for t, o in self._owners.items() if o == owner)

    def holders(self) -> dict[str, list[int]]:
        grouped = defaultdict(list)
        for token_id, owner in sorted(self._owners.items()):
            grouped[owner].append(token_id)
        return dict(grouped)

    def total_supply(self) -> int:
        return len(self._owners)

    def snapshot(self) -> tuple[dict, dict]:
        return dict(self._owners), dict(self._approvals)

    def restore(self, snap: tuple[dict, dict]) -> None:
        owners, approvals = snap
        self._owners = dict(owners)
        self._approvals = dict(approvals)
