"""Gem commands: init, mint, mine, forge, transfer, show, holdings, events, cooldowns."""
import sys
import time
from pathlib import Path

import click

from ..config import GemConfig
from ..economy import GemEconomy
from ..ledger.store import LedgerStore
from ..state import save_state
from .output import error_box, print_json, success_box, table
from .session import EXIT_BAD_INPUT, fail, open_economy, persist


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else now


@click.command()
@click.option('--admin', required=True, help='Admin address')
@click.option('--root', default=None, help='Allowlist Merkle root')
@click.option('--mining-cooldown', type=int, default=None, help='Mining cooldown (seconds)')
@click.option('--forging-cooldown', type=int, default=None, help='Forging cooldown (seconds)')
@click.option('--seed', type=int, default=None, help='Trait generator seed')
@click.option('--force', is_flag=True, help='Overwrite an existing state file')
@click.pass_context
def init(ctx, admin: str, root: str | None, mining_cooldown: int | None,
         forging_cooldown: int | None, seed: int | None, force: bool):
    """Create a fresh economy."""
    state_path = ctx.obj["state_path"]
    if Path(state_path).exists() and not force:
        error_box("Init: FAILED", f"State exists: {state_path}", "gem init --force")
        sys.exit(EXIT_BAD_INPUT)

    config = GemConfig.from_env()
    if root is not None:
        config.merkle_root = root
    if mining_cooldown is not None:
        config.mining_cooldown = mining_cooldown
    if forging_cooldown is not None:
        config.forging_cooldown = forging_cooldown
    if seed is not None:
        config.trait_seed = seed
    config.state_path = state_path
    config.event_log_path = ctx.obj["event_log"]

    try:
        economy = GemEconomy(admin, config)
        state = save_state(economy, state_path)
    except Exception as e:
        fail("Init", e)

    success_box("Init: SUCCESS", [
        ("State", state_path),
        ("Admin", admin),
        ("Root", config.merkle_root or "(none)"),
        ("Mining cooldown", f"{config.mining_cooldown}s"),
        ("Forging cooldown", f"{config.forging_cooldown}s"),
        ("Hash", state["state_hash"][:16]),
    ], "gem mint --caller <admin> --to <address> ...")


@click.command()
@click.option('--caller', required=True, help='Admin address')
@click.option('--to', 'to', required=True, help='Recipient address')
@click.option('--staked', type=int, required=True, help='Staked value')
@click.option('--mining-power', type=int, required=True)
@click.option('--forging-power', type=int, required=True)
@click.option('--rarity', type=int, required=True)
@click.option('--traits', nargs=3, default=None, help='COLOR SHAPE PATTERN (generated if omitted)')
@click.pass_context
def mint(ctx, caller: str, to: str, staked: int, mining_power: int,
         forging_power: int, rarity: int, traits: tuple | None):
    """Admin mint of one gem."""
    economy = open_economy(ctx)
    try:
        gem_id = economy.mint(caller, to, staked, mining_power, forging_power,
                              rarity, traits=traits or None)
        persist(ctx, economy)
    except Exception as e:
        fail("Mint", e)

    gem = economy.gem(gem_id)
    success_box("Mint: SUCCESS", [
        ("Gem", str(gem_id)),
        ("Owner", to),
        ("Traits", f"{gem.color} / {gem.shape} / {gem.pattern}"),
        ("Staked", str(gem.staked_value)),
        ("Power", f"mining {gem.mining_power}, forging {gem.forging_power}"),
        ("Rarity", str(gem.rarity)),
    ], f"gem mine {gem_id} --owner {to}")


@click.command()
@click.argument('gem_id', type=int)
@click.option('--owner', required=True, help='Holder of the gem')
@click.option('--now', type=int, default=None, help='Timestamp (default: wall clock)')
@click.pass_context
def mine(ctx, gem_id: int, owner: str, now: int | None):
    """Mine a gem into a degraded child."""
    economy = open_economy(ctx)
    now = _now(now)
    try:
        child_id = economy.mine(gem_id, owner, now)
        persist(ctx, economy)
    except Exception as e:
        fail("Mine", e)

    child = economy.gem(child_id)
    success_box("Mine: SUCCESS", [
        ("Parent", str(gem_id)),
        ("Child", str(child_id)),
        ("Staked", str(child.staked_value)),
        ("Rarity", str(child.rarity)),
        ("Parent ready at", str(economy.ready_at(gem_id))),
    ], f"gem show {child_id}")


@click.command()
@click.argument('gem_ids', type=int, nargs=-1, required=True)
@click.option('--owner', required=True, help='Holder of every gem')
@click.option('--now', type=int, default=None, help='Timestamp (default: wall clock)')
@click.pass_context
def forge(ctx, gem_ids: tuple, owner: str, now: int | None):
    """Forge 2-5 gems (in the given order) into one."""
    economy = open_economy(ctx)
    now = _now(now)
    try:
        forged_id = economy.forge(list(gem_ids), owner, now)
        persist(ctx, economy)
    except Exception as e:
        fail("Forge", e)

    forged = economy.gem(forged_id)
    success_box("Forge: SUCCESS", [
        ("Burned", ", ".join(str(g) for g in gem_ids)),
        ("Forged", str(forged_id)),
        ("Staked", str(forged.staked_value)),
        ("Power", f"mining {forged.mining_power}, forging {forged.forging_power}"),
        ("Rarity", str(forged.rarity)),
        ("Ready at", str(economy.ready_at(forged_id))),
    ], f"gem show {forged_id}")


@click.command()
@click.argument('gem_id', type=int)
@click.option('--sender', required=True)
@click.option('--to', 'to', required=True)
@click.pass_context
def transfer(ctx, gem_id: int, sender: str, to: str):
    """Move a gem to another holder."""
    economy = open_economy(ctx)
    try:
        economy.transfer(sender, to, gem_id)
        persist(ctx, economy)
    except Exception as e:
        fail("Transfer", e)

    success_box("Transfer: SUCCESS", [
        ("Gem", str(gem_id)),
        ("From", sender),
        ("To", to),
    ])


@click.command()
@click.argument('gem_id', type=int)
@click.pass_context
def show(ctx, gem_id: int):
    """Show a gem as JSON."""
    economy = open_economy(ctx)
    try:
        print_json(economy.describe(gem_id))
    except Exception as e:
        fail("Show", e)


@click.command()
@click.argument('owner')
@click.pass_context
def holdings(ctx, owner: str):
    """List gems held by OWNER."""
    economy = open_economy(ctx)
    gem_ids = economy.gems_of(owner)
    if not gem_ids:
        click.echo(f"{owner} holds no gems")
        return

    rows = []
    for gem_id in gem_ids:
        gem = economy.gem(gem_id)
        rows.append([
            str(gem_id), gem.color, gem.shape, gem.pattern,
            str(gem.staked_value), str(gem.mining_power),
            str(gem.forging_power), str(gem.rarity),
            str(economy.ready_at(gem_id)),
        ])
    table(["id", "color", "shape", "pattern", "staked", "mining", "forging",
           "rarity", "ready_at"], rows)


@click.command()
@click.option('--type', 'receipt_type', default=None, help='Filter by receipt type')
@click.option('--json', 'as_json', is_flag=True, help='Print raw receipts')
@click.pass_context
def events(ctx, receipt_type: str | None, as_json: bool):
    """Show the committed event log, oldest first."""
    store = LedgerStore(ctx.obj["event_log"])
    receipts = store.read_all()
    if receipt_type:
        receipts = [r for r in receipts if r.get("receipt_type") == receipt_type]

    if as_json:
        print_json(receipts)
        return
    if not receipts:
        click.echo("No events")
        return

    table(["ts", "type", "owner", "gem"], [
        [r.get("ts", ""), r.get("receipt_type", ""),
         r.get("owner", r.get("to", r.get("caller", ""))),
         str(r.get("gem_id", r.get("gem_ids", "")))]
        for r in receipts
    ])


@click.command()
@click.option('--caller', required=True, help='Admin address')
@click.option('--mining', type=int, default=None, help='New mining cooldown (seconds)')
@click.option('--forging', type=int, default=None, help='New forging cooldown (seconds)')
@click.pass_context
def cooldowns(ctx, caller: str, mining: int | None, forging: int | None):
    """Update cooldown durations (admin)."""
    economy = open_economy(ctx)
    try:
        new_mining, new_forging = economy.set_cooldowns(caller, mining, forging)
        persist(ctx, economy)
    except Exception as e:
        fail("Cooldowns", e)

    success_box("Cooldowns: UPDATED", [
        ("Mining", f"{new_mining}s"),
        ("Forging", f"{new_forging}s"),
    ])


GEM_COMMANDS = [init, mint, mine, forge, transfer, show, holdings, events, cooldowns]
