"""Airdrop commands: root, proof, activate, deactivate, claim."""
import json

import click

from ..anchor.merkle import allowlist_leaf, allowlist_proof, allowlist_root, read_allowlist
from .output import print_json, success_box
from .session import fail, open_economy, persist


@click.group()
def airdrop():
    """Allowlist commitments and airdrop claims."""
    pass


@airdrop.command()
@click.argument('allowlist', type=click.Path(exists=True))
def root(allowlist: str):
    """Print the Merkle root of an allowlist file."""
    try:
        leaves = read_allowlist(allowlist)
    except Exception as e:
        fail("Airdrop Root", e)

    commitment = allowlist_root(leaves)
    success_box("Airdrop Root", [
        ("Leaves", str(len(leaves))),
        ("Root", commitment),
    ], "gem init --root <root> ...")
    click.echo(commitment)


@airdrop.command()
@click.argument('allowlist', type=click.Path(exists=True))
@click.option('--to', 'to', required=True)
@click.option('--amount', type=int, required=True)
@click.option('--out', type=click.Path(), default=None, help='Write proof JSON here')
def proof(allowlist: str, to: str, amount: int, out: str | None):
    """Build the inclusion proof for one allowlist entry."""
    try:
        leaves = read_allowlist(allowlist)
        result = allowlist_proof(allowlist_leaf(to, amount), leaves)
    except Exception as e:
        fail("Airdrop Proof", e)

    if out:
        with open(out, "w") as f:
            json.dump(result, f, indent=2, sort_keys=True)
        success_box("Airdrop Proof: WRITTEN", [
            ("Leaf", f"{to} x{amount}"),
            ("Depth", str(len(result["path"]))),
            ("File", out),
        ], f"gem airdrop claim --to {to} --amount {amount} --proof {out}")
    else:
        print_json(result)


def _toggle(ctx: click.Context, caller: str, active: bool) -> None:
    title = "Airdrop Activate" if active else "Airdrop Deactivate"
    economy = open_economy(ctx)
    try:
        if active:
            economy.activate_airdrop(caller)
        else:
            economy.deactivate_airdrop(caller)
        persist(ctx, economy)
    except Exception as e:
        fail(title, e)

    success_box(f"{title}: SUCCESS", [("Active", str(active))])


@airdrop.command()
@click.option('--caller', required=True, help='Admin address')
@click.pass_context
def activate(ctx, caller: str):
    """Open airdrop claims (admin)."""
    _toggle(ctx, caller, True)


@airdrop.command()
@click.option('--caller', required=True, help='Admin address')
@click.pass_context
def deactivate(ctx, caller: str):
    """Close airdrop claims (admin)."""
    _toggle(ctx, caller, False)


@airdrop.command()
@click.option('--to', 'to', required=True)
@click.option('--amount', type=int, required=True)
@click.option('--proof', 'proof_file', type=click.Path(exists=True), required=True)
@click.pass_context
def claim(ctx, to: str, amount: int, proof_file: str):
    """Claim allowlisted starter gems."""
    economy = open_economy(ctx)
    try:
        with open(proof_file) as f:
            membership = json.load(f)
        gem_ids = economy.claim(to, amount, membership)
        persist(ctx, economy)
    except Exception as e:
        fail("Airdrop Claim", e)

    success_box("Airdrop Claim: SUCCESS", [
        ("To", to),
        ("Minted", str(len(gem_ids))),
        ("Gems", ", ".join(str(g) for g in gem_ids) or "-"),
    ], f"gem holdings {to}")
