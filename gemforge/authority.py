"""Single-admin authority for privileged operations."""
import logging

from .core.errors import Unauthorized

logger = logging.getLogger("gemforge.authority")


class Authority:
    """Gates admin operations (direct mint, airdrop toggles, cooldown changes)."""

    def __init__(self, admin: str):
        if not admin:
            raise ValueError("Authority needs an admin address")
        self.admin = admin

    def is_admin(self, caller: str) -> bool:
        return caller == self.admin

    def require_admin(self, caller: str) -> None:
        if not self.is_admin(caller):
            raise Unauthorized(f"{caller} is not the admin")

    def transfer_admin(self, caller: str, new_admin: str) -> None:
        self.require_admin(caller)
        if not new_admin:
            raise ValueError("New admin address must be non-empty")
        logger.info("admin moved from %s to %s", self.admin, new_admin)
        self.admin = new_admin
