"""Membership proof verification.

SLO: Verify <= 2s p95. Stoprule if latency > 5s.
"""
import time

from ..core.receipt import StopRule, dual_hash, leaf_hash


def verify_proof(item: dict, proof: dict, root: str) -> bool:
    """Verify Merkle proof for item inclusion.

    Recomputes root from item hash and proof path, compares to expected root.
    Malformed proofs verify as False rather than raising.

    Args:
        item: Leaf dict to verify
        proof: Proof dict with item_hash, path, indices
        root: Expected Merkle root

    Returns:
        True if proof is valid, False otherwise

    Raises:
        StopRule: If latency exceeds 5s
    """
    if not isinstance(proof, dict):
        return False

    start_time = time.perf_counter()

    current = leaf_hash(item)
    if current != proof.get("item_hash"):
        return False

    path = proof.get("path", [])
    indices = proof.get("indices", [])
    if not isinstance(path, list) or not isinstance(indices, list):
        return False
    if len(path) != len(indices):
        return False

    for sibling, position in zip(path, indices):
        if not isinstance(sibling, str) or position not in (0, 1):
            return False
        if position == 0:
            combined = (current + sibling).encode("utf-8")
        else:
            combined = (sibling + current).encode("utf-8")
        current = dual_hash(combined)

    elapsed = time.perf_counter() - start_time
    if elapsed > 5.0:
        raise StopRule(f"Verify latency {elapsed:.2f}s exceeds 5s limit")

    return current == root


def verify_membership(proof: dict, root: str, leaf: dict) -> bool:
    """Proof-verifier collaborator: verify(proof, root, leaf) -> bool."""
    if not root:
        return False
    return verify_proof(leaf, proof, root)
