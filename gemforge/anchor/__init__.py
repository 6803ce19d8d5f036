"""Anchor subpackage for allowlist commitments.

Provides Merkle tree operations and membership proof verification.
"""
from .merkle import allowlist_leaf, allowlist_proof, allowlist_root, read_allowlist
from .verify import verify_membership, verify_proof

__all__ = [
    "allowlist_leaf",
    "allowlist_root",
    "allowlist_proof",
    "read_allowlist",
    "verify_proof",
    "verify_membership",
]
