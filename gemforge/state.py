"""JSON snapshots of a GemEconomy.

The snapshot carries its own dual hash; a snapshot whose hash no longer
matches its body, or whose gem records and token owners disagree, is refused.
"""
import json
from pathlib import Path

from .config import GemConfig
from .core.receipt import StopRule, dual_hash, emit_receipt
from .economy import GemEconomy
from .gems.models import Gem

STATE_VERSION = 1


def dump_state(economy: GemEconomy) -> dict:
    """Serialize every store of `economy` into a JSON-safe dict."""
    owners, approvals = economy.ledger.snapshot()
    active, claimed = economy.airdrop.snapshot()

    body = {
        "version": STATE_VERSION,
        "config": economy.config.to_dict(),
        "admin": economy.authority.admin,
        "next_id": economy.allocator.peek(),
        "mining_cooldown": economy.mining.cooldown,
        "forging_cooldown": economy.forging.cooldown,
        "gems": {str(gid): gem.to_dict() for gid, gem in economy.gems.items()},
        "owners": {str(gid): owner for gid, owner in sorted(owners.items())},
        "approvals": {str(gid): spender for gid, spender in sorted(approvals.items())},
        "cooldowns": {str(gid): ts for gid, ts in sorted(economy.cooldowns.entries().items())},
        "airdrop": {"active": active, "claimed": sorted(claimed)},
        "generator": economy.generator.snapshot(),
    }
    return {**body, "state_hash": dual_hash(body)}


def load_state(data: dict, **kwargs) -> GemEconomy:
    """Rebuild a GemEconomy from dump_state() output.

    Extra keyword arguments (generator, combinator, verifier, event_store,
    echo) are passed to GemEconomy.

    Raises:
        StopRule: On version mismatch, hash mismatch or broken invariants
    """
    body = {k: v for k, v in data.items() if k != "state_hash"}
    if body.get("version") != STATE_VERSION:
        raise StopRule(f"Unsupported state version: {body.get('version')}")
    if dual_hash(body) != data.get("state_hash"):
        raise StopRule("State hash mismatch: snapshot was modified")

    gems = {int(gid): Gem.from_dict(g) for gid, g in body["gems"].items()}
    owners = {int(gid): owner for gid, owner in body["owners"].items()}
    if set(gems) != set(owners):
        raise StopRule("Gem records and token owners disagree")
    next_id = int(body["next_id"])
    if gems and max(gems) >= next_id:
        raise StopRule(f"next_id {next_id} would reuse a live gem id")

    economy = GemEconomy(body["admin"], GemConfig.from_dict(body["config"]), **kwargs)
    economy.gems.restore(gems)
    economy.ledger.restore((
        owners,
        {int(gid): spender for gid, spender in body["approvals"].items()},
    ))
    economy.cooldowns.restore({int(gid): int(ts) for gid, ts in body["cooldowns"].items()})
    economy.allocator.restore(next_id)
    economy.airdrop.restore((bool(body["airdrop"]["active"]), frozenset(body["airdrop"]["claimed"])))
    economy.generator.restore(body["generator"])
    economy.mining.cooldown = int(body["mining_cooldown"])
    economy.forging.cooldown = int(body["forging_cooldown"])
    return economy


def save_state(economy: GemEconomy, path: str) -> dict:
    """Write a snapshot to `path` and emit a state_saved receipt."""
    state = dump_state(economy)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(target.suffix + ".tmp")
    with open(tmp, "w") as f:
        json.dump(state, f, indent=2, sort_keys=True)
    tmp.replace(target)

    if economy.events.echo:
        emit_receipt("state_saved", {
            "path": str(target),
            "state_hash": state["state_hash"],
            "gem_count": len(state["gems"]),
            "next_id": state["next_id"],
        }, economy.config.tenant_id)
    return state


def read_state(path: str, **kwargs) -> GemEconomy:
    """Load a snapshot written by save_state()."""
    with open(path) as f:
        return load_state(json.load(f), **kwargs)
