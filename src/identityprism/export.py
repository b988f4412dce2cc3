"""Flattened records for metadata export and scene serialization."""

import base64
import json
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from identityprism.config import RARITY_THRESHOLDS, RarityThresholds
from identityprism.models import AttributeRecord, RarityTier, SceneDescriptor
from identityprism.scoring import resolve_tier

COLLECTION = "Identity Prism"
NETWORK = "mainnet-beta"

_DAYS_PER_YEAR = 365


def build_export_record(
    attributes: AttributeRecord,
    identity: str,
    score: int,
    tier: RarityTier,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Build the metadata record handed to an export/minting flow.

    Args:
        attributes: Account traits the score was computed from.
        identity: Account identity string (stored as ``address``).
        score: Resolved score.
        tier: Tier resolved from ``score``.
        timestamp: Export time. Defaults to now (UTC).

    Returns:
        JSON-serializable dict.
    """
    when = timestamp or datetime.now(timezone.utc)
    return {
        "collection": COLLECTION,
        "network": NETWORK,
        "score": score,
        "rarity": tier.label,
        "traits": {
            "seeker": attributes.has_seeker,
            "preorder": attributes.has_preorder,
            "combo": attributes.has_combo,
            "blue_chip": attributes.is_blue_chip,
            "meme_lord": attributes.is_meme_lord,
            "defi_king": attributes.is_defi_king,
            "hyperactive": attributes.hyperactive,
            "diamond_hands": attributes.diamond_hands,
        },
        "stats": {
            "tokens": attributes.unique_token_count,
            "nfts": attributes.nft_count,
            "transactions": attributes.tx_count,
            "sol_balance": attributes.sol_balance,
            "wallet_age_years": attributes.wallet_age_days // _DAYS_PER_YEAR,
        },
        "timestamp": when.isoformat(),
        "address": identity,
    }


def encode_export_record(record: dict[str, Any]) -> str:
    """Compact JSON, base64-encoded (UTF-8)."""
    payload = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_export_record(encoded: str) -> dict[str, Any]:
    return json.loads(base64.b64decode(encoded).decode("utf-8"))


def tier_from_export(
    record: dict[str, Any], thresholds: RarityThresholds = RARITY_THRESHOLDS
) -> RarityTier:
    """Re-derive the tier from the score embedded in an export record."""
    return resolve_tier(int(record["score"]), thresholds)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.label if isinstance(value, RarityTier) else value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def scene_to_dict(scene: SceneDescriptor) -> dict[str, Any]:
    """Plain nested dict of a scene (enums as strings, tuples as lists).

    ``nebula`` stays ``None`` when the scene has none.
    """
    return _jsonable(asdict(scene))
