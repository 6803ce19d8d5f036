"""Merkle tree operations for the airdrop allowlist.

Delegates to core.receipt.merkle() for root computation.
Provides allowlist_proof for generating inclusion proofs.
"""
import json

from ..core.receipt import dual_hash, leaf_hash, merkle


def allowlist_leaf(to: str, amount: int) -> dict:
    """Canonical leaf for an allowlist entry."""
    return {"to": to, "amount": int(amount)}


def allowlist_root(leaves: list[dict]) -> str:
    """Compute the commitment root over allowlist leaves.

    Delegates to core.receipt.merkle().
    """
    return merkle(leaves)


def _build_tree(items: list[dict]) -> dict:
    """Build full Merkle tree structure for proof generation.

    Args:
        items: List of dicts to build tree from

    Returns:
        dict with root, levels, and leaves
    """
    if not items:
        return {
            "root": dual_hash(b"empty"),
            "levels": [],
            "leaves": [],
        }

    leaves = [leaf_hash(item) for item in items]

    levels = [leaves[:]]
    current = leaves[:]

    while len(current) > 1:
        if len(current) % 2 == 1:
            current.append(current[-1])

        new_level = []
        for i in range(0, len(current), 2):
            combined = (current[i] + current[i + 1]).encode("utf-8")
            new_level.append(dual_hash(combined))
        current = new_level
        levels.append(current[:])

    return {
        "root": current[0],
        "levels": levels,
        "leaves": leaves,
    }


def allowlist_proof(leaf: dict, leaves: list[dict]) -> dict:
    """Generate Merkle inclusion proof for an allowlist leaf.

    Args:
        leaf: The leaf to prove inclusion of
        leaves: All leaves in the allowlist

    Returns:
        dict with item_hash, path (sibling hashes), indices (0=left, 1=right)
        and root

    Raises:
        ValueError: If leaf not found in tree
    """
    tree = _build_tree(leaves)
    item_hash = leaf_hash(leaf)
    hashes = tree["leaves"]

    if item_hash not in hashes:
        raise ValueError("Leaf not in allowlist")

    idx = hashes.index(item_hash)
    path = []
    indices = []

    for level in tree["levels"][:-1]:
        level_copy = level[:]
        if len(level_copy) % 2 == 1:
            level_copy.append(level_copy[-1])

        path.append(level_copy[idx ^ 1])
        indices.append(idx % 2)
        idx //= 2

    return {
        "item_hash": item_hash,
        "path": path,
        "indices": indices,
        "root": tree["root"],
    }


def read_allowlist(path: str) -> list[dict]:
    """Load allowlist leaves from a JSON array or a JSONL file.

    Each entry needs "to" and "amount". Order is preserved; it fixes the
    tree shape and therefore the root.
    """
    with open(path) as f:
        text = f.read()

    stripped = text.lstrip()
    if stripped.startswith("["):
        entries = json.loads(stripped)
    else:
        entries = [json.loads(line) for line in text.splitlines() if line.strip()]

    leaves = []
    for i, entry in enumerate(entries):
        if "to" not in entry or "amount" not in entry:
            raise ValueError(f"Allowlist entry {i} needs 'to' and 'amount'")
        leaves.append(allowlist_leaf(entry["to"], entry["amount"]))
    return leaves
