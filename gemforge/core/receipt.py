"""Core receipt primitives shared by every GemForge module.

Functions:
    dual_hash: SHA256:BLAKE3 dual-hash format
    build_receipt: Assemble a receipt with the standard fields
    emit_receipt: Build a receipt and print it to stdout
    merkle: Compute Merkle root from item list
    StopRule: Exception for stoprule triggers
"""
import hashlib
import json
from datetime import datetime, timezone

import blake3


class StopRule(Exception):
    """Raised when stoprule triggers. Never catch silently."""
    pass


def dual_hash(data: bytes | str | dict) -> str:
    """Compute dual hash in format 'sha256hex:blake3hex'.

    Pure function with no side effects.

    Args:
        data: Bytes, string, or dict to hash

    Returns:
        String in format 'sha256hex:blake3hex' (both 64 hex chars)
    """
    if isinstance(data, dict):
        data = json.dumps(data, sort_keys=True, separators=(",", ":"))
    if isinstance(data, str):
        data = data.encode("utf-8")

    sha256_hex = hashlib.sha256(data).hexdigest()
    blake3_hex = blake3.blake3(data).hexdigest()

    return f"{sha256_hex}:{blake3_hex}"


def build_receipt(receipt_type: str, data: dict, tenant_id: str = "default") -> dict:
    """Build a receipt with standard required fields without emitting it.

    Args:
        receipt_type: Type of receipt (gem_minted, gem_mined, gem_forged, ...)
        data: Receipt payload data
        tenant_id: Tenant identifier (default: "default")

    Returns:
        Complete receipt dict with receipt_type, ts, tenant_id, payload_hash
    """
    tenant_id = data.get("tenant_id", tenant_id)

    payload_bytes = json.dumps(data, sort_keys=True).encode("utf-8")
    payload_hash = dual_hash(payload_bytes)

    return {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "tenant_id": tenant_id,
        "payload_hash": payload_hash,
        **data
    }


def emit_receipt(receipt_type: str, data: dict, tenant_id: str = "default") -> dict:
    """Emit a receipt with standard required fields.

    Prints JSON to stdout with flush=True.

    Returns:
        Complete receipt dict
    """
    receipt = build_receipt(receipt_type, data, tenant_id)
    print(json.dumps(receipt, sort_keys=True), flush=True)
    return receipt


def leaf_hash(item: dict) -> str:
    """Hash a single Merkle leaf (canonical JSON of the item)."""
    return dual_hash(json.dumps(item, sort_keys=True).encode("utf-8"))


def merkle(items: list) -> str:
    """Compute Merkle root from list of items.

    - Empty list: return dual_hash(b"empty")
    - Hash each item: dual_hash(json.dumps(item, sort_keys=True))
    - Odd count: duplicate last hash
    - Pairwise combine until single root

    Args:
        items: List of items (dicts) to compute root for

    Returns:
        Merkle root as dual-hash string
    """
    if not items:
        return dual_hash(b"empty")

    hashes = [leaf_hash(item) for item in items]

    while len(hashes) > 1:
        if len(hashes) % 2 == 1:
            hashes.append(hashes[-1])

        new_hashes = []
        for i in range(0, len(hashes), 2):
            combined = (hashes[i] + hashes[i + 1]).encode("utf-8")
            new_hashes.append(dual_hash(combined))
        hashes = new_hashes

    return hashes[0]
