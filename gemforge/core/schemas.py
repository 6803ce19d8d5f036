"""Receipt schema definitions and validation.

Constants:
    RECEIPT_SCHEMAS: Schema dicts keyed by receipt_type
    REQUIRED_FIELDS: Fields required in all receipts

Functions:
    validate_receipt: Validate receipt against schema
"""
from .receipt import StopRule


# Required fields for all receipt types
REQUIRED_FIELDS = ["receipt_type", "ts", "tenant_id", "payload_hash"]

_BASE = {
    "receipt_type": str,
    "ts": str,
    "tenant_id": str,
    "payload_hash": str,
}

RECEIPT_SCHEMAS = {
    "gem_minted": {
        **_BASE,
        "gem_id": int,
        "owner": str,
        "source": str,  # admin, mine, forge, airdrop
        "gem": dict,
    },
    "gem_mined": {
        **_BASE,
        "owner": str,
        "gem_id": int,
        "parent_id": int,
        "parent_ready_at": int,
    },
    "gem_forged": {
        **_BASE,
        "owner": str,
        "gem_id": int,
        "burned": list,
        "ready_at": int,
    },
    "airdrop_claimed": {
        **_BASE,
        "to": str,
        "amount": int,
        "gem_ids": list,
        "leaf_hash": str,
    },
    "airdrop_toggled": {
        **_BASE,
        "caller": str,
        "active": bool,
    },
    "cooldowns_updated": {
        **_BASE,
        "caller": str,
        "mining_cooldown": int,
        "forging_cooldown": int,
    },
    "admin_transferred": {
        **_BASE,
        "caller": str,
        "new_admin": str,
    },
    "gem_transferred": {
        **_BASE,
        "sender": str,
        "to": str,
        "gem_id": int,
    },
    "state_saved": {
        **_BASE,
        "path": str,
        "state_hash": str,
        "gem_count": int,
        "next_id": int,
    },
}


def validate_receipt(receipt: dict) -> bool:
    """Validate receipt has required fields and matches schema.

    Args:
        receipt: Receipt dict to validate

    Returns:
        True if valid

    Raises:
        StopRule: If validation fails (missing field, wrong type or
            unknown receipt_type)
    """
    if not isinstance(receipt, dict):
        raise StopRule("Receipt must be a dict")

    for field in REQUIRED_FIELDS:
        if field not in receipt:
            raise StopRule(f"Missing required field: {field}")

    receipt_type = receipt["receipt_type"]
    if receipt_type not in RECEIPT_SCHEMAS:
        raise StopRule(f"Unknown receipt_type: {receipt_type}")

    for field, expected in RECEIPT_SCHEMAS[receipt_type].items():
        if field not in receipt:
            raise StopRule(f"{receipt_type}: missing field {field}")
        # bool is an int subclass; keep the two apart
        value = receipt[field]
        if expected is int and isinstance(value, bool):
            raise StopRule(f"{receipt_type}: {field} must be int, got bool")
        if not isinstance(value, expected):
            raise StopRule(
                f"{receipt_type}: {field} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )

    return True
