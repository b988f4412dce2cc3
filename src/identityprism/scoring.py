"""Scoring engine — attribute record to bounded score and rarity tier."""

import math

from identityprism.config import RARITY_THRESHOLDS, SCORING, RarityThresholds, ScoringConfig
from identityprism.models import AttributeRecord, RarityTier, ScoreBreakdown

_DAYS_PER_YEAR = 365


def _trait_bonuses(config: ScoringConfig) -> tuple[tuple[str, int], ...]:
    # (AttributeRecord flag, bonus) in display order
    return (
        ("has_seeker", config.seeker_bonus),
        ("has_preorder", config.preorder_bonus),
        ("has_combo", config.combo_bonus),
        ("is_blue_chip", config.blue_chip_bonus),
        ("is_meme_lord", config.meme_lord_bonus),
        ("is_defi_king", config.defi_king_bonus),
        ("diamond_hands", config.diamond_hands_bonus),
        ("hyperactive", config.hyperactive_bonus),
    )


def balance_bonus(sol_balance: float, config: ScoringConfig = SCORING) -> int:
    """Bonus of the highest balance threshold met (not cumulative)."""
    bonus = 0
    for amount, tier_bonus in config.balance_tiers:
        if sol_balance >= amount:
            bonus = tier_bonus
    return bonus


def wallet_age_bonus(wallet_age_days: int, config: ScoringConfig = SCORING) -> int:
    years = wallet_age_days // _DAYS_PER_YEAR
    return min(years * config.wallet_age_per_year, config.wallet_age_max)


def activity_bonus(tx_count: int, config: ScoringConfig = SCORING) -> float:
    return min(tx_count * config.tx_multiplier, config.tx_cap)


def score_breakdown(
    attributes: AttributeRecord, config: ScoringConfig = SCORING
) -> ScoreBreakdown:
    """Compute every scoring term for an attribute record.

    Args:
        attributes: Account traits. Numerics must be non-negative.
        config: Bonus table.

    Returns:
        ScoreBreakdown with per-term values and the names of contributing flags.
    """
    contributing = tuple(
        name for name, _ in _trait_bonuses(config) if getattr(attributes, name)
    )
    trait_total = sum(
        bonus for name, bonus in _trait_bonuses(config) if getattr(attributes, name)
    )
    return ScoreBreakdown(
        trait_bonus=trait_total,
        balance_bonus=balance_bonus(attributes.sol_balance, config),
        wallet_age_bonus=wallet_age_bonus(attributes.wallet_age_days, config),
        activity_bonus=activity_bonus(attributes.tx_count, config),
        contributing_traits=contributing,
    )


def clamp_score(raw_total: float, config: ScoringConfig = SCORING) -> int:
    # Round half up, then bound to [0, max_score]
    rounded = math.floor(raw_total + 0.5)
    return max(0, min(rounded, config.max_score))


def score(attributes: AttributeRecord, config: ScoringConfig = SCORING) -> int:
    """Bounded integer score in [0, config.max_score]."""
    return clamp_score(score_breakdown(attributes, config).raw_total, config)


def resolve_tier(
    value: int, thresholds: RarityThresholds = RARITY_THRESHOLDS
) -> RarityTier:
    """Highest tier whose threshold does not exceed the score."""
    tier = RarityTier.COMMON
    for threshold, candidate in thresholds.ascending():
        if value >= threshold:
            tier = candidate
    return tier
