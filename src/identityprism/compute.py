"""Top-level pipeline — attribute record + identity to score, tier and scene."""

import logging
from functools import lru_cache

from identityprism.config import (
    GENERATION,
    RARITY_THRESHOLDS,
    SCORING,
    GenerationConfig,
    RarityThresholds,
    ScoringConfig,
)
from identityprism.generator import generate_scene
from identityprism.models import AttributeRecord, PrismResult, SceneDescriptor
from identityprism.rng import derive_seed
from identityprism.scoring import clamp_score, resolve_tier, score_breakdown

logger = logging.getLogger(__name__)

_SCENE_CACHE_SIZE = 256
_DEMO_FALLBACK_SEED = 777
_DAYS_PER_YEAR = 365
_MEME_COIN_COUNT = 4  # Tracked meme tokens; holding 3+ makes a meme lord
_DIAMOND_HANDS_DAYS = 60


@lru_cache(maxsize=_SCENE_CACHE_SIZE)
def _compute(
    attributes: AttributeRecord,
    identity: str,
    scoring: ScoringConfig,
    thresholds: RarityThresholds,
    generation: GenerationConfig,
) -> PrismResult:
    breakdown = score_breakdown(attributes, scoring)
    value = clamp_score(breakdown.raw_total, scoring)
    tier = resolve_tier(value, thresholds)
    seed = derive_seed(identity, attributes)
    scene = generate_scene(attributes, tier, seed, value, generation)
    logger.info("Built %s scene for %r (score=%d)", tier.label, identity, value)
    return PrismResult(score=value, tier=tier, breakdown=breakdown, scene=scene)


def run(
    attributes: AttributeRecord | None,
    identity: str,
    scoring: ScoringConfig = SCORING,
    thresholds: RarityThresholds = RARITY_THRESHOLDS,
    generation: GenerationConfig = GENERATION,
) -> PrismResult | None:
    """Top-level entry point: score an account and generate its scene.

    Results are cached per (attributes, identity, tables); an unchanged
    record never triggers regeneration.

    Args:
        attributes: Account traits, or None when acquisition produced nothing.
        identity: Account identity string (seed material only).
        scoring: Bonus table.
        thresholds: Rarity thresholds.
        generation: Scene generation tables.

    Returns:
        PrismResult, or None when ``attributes`` is None. Callers show a
        starfield-only view in that case.
    """
    if attributes is None:
        logger.debug("No attribute record for %r; skipping generation", identity)
        return None
    return _compute(attributes, identity, scoring, thresholds, generation)


def build_scene(
    attributes: AttributeRecord | None,
    identity: str,
    generation: GenerationConfig = GENERATION,
) -> SceneDescriptor | None:
    """Scene for an account, or None when there is no attribute record."""
    result = run(attributes, identity, generation=generation)
    return None if result is None else result.scene


def clear_scene_cache() -> None:
    _compute.cache_clear()


def scene_cache_info():
    return _compute.cache_info()


def demo_attributes(identity: str | None = None) -> AttributeRecord:
    """Deterministic stand-in record for previews without real account data.

    Every trait is derived from the sum of the identity's character codes
    (777 when no identity is given).
    """
    seed = sum(ord(ch) for ch in identity) if identity else _DEMO_FALLBACK_SEED
    has_seeker = seed % 3 == 0
    has_preorder = seed % 2 == 0
    nft_count = seed % 500 + 50
    unique_tokens = seed % 80 + 15
    tx_count = seed % 2000 + 250
    meme_coins_held = sum((seed >> i) & 1 for i in range(_MEME_COIN_COUNT))
    days_since_last_tx = seed % 120
    wallet_age_years = min(3, seed % 4 + 1)
    return AttributeRecord(
        has_seeker=has_seeker,
        has_preorder=has_preorder,
        has_combo=has_seeker and has_preorder,
        is_blue_chip=seed % 3 == 0,
        is_defi_king=seed % 4 == 0,
        is_meme_lord=meme_coins_held >= 3,
        diamond_hands=days_since_last_tx >= _DIAMOND_HANDS_DAYS,
        hyperactive=seed % 100 > 55,
        unique_token_count=unique_tokens,
        nft_count=nft_count,
        tx_count=tx_count,
        avg_tx_per_day=tx_count / 30,
        sol_balance=seed % 20 + 0.25,
        wallet_age_days=wallet_age_years * _DAYS_PER_YEAR,
        total_asset_count=unique_tokens + nft_count,
    )
