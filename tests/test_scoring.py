from __future__ import annotations

from dataclasses import replace

from identityprism.config import SCORING, RarityThresholds, ScoringConfig
from identityprism.models import AttributeRecord, RarityTier
from identityprism.scoring import (
    activity_bonus,
    balance_bonus,
    resolve_tier,
    score,
    score_breakdown,
    wallet_age_bonus,
)

SCENARIO = AttributeRecord(
    has_seeker=True,
    has_preorder=True,
    has_combo=True,
    is_blue_chip=True,
    unique_token_count=45,
    nft_count=230,
    tx_count=1500,
    sol_balance=6,
    wallet_age_days=900,
)


def test_empty_record_scores_zero_common() -> None:
    value = score(AttributeRecord())

    assert value == 0
    assert resolve_tier(value) == RarityTier.COMMON


def test_scenario_record_reaches_mythic() -> None:
    breakdown = score_breakdown(SCENARIO)

    assert breakdown.trait_bonus == 200 + 150 + 200 + 100
    assert breakdown.balance_bonus == 150
    assert breakdown.wallet_age_bonus == 200
    assert breakdown.activity_bonus == 200
    assert breakdown.contributing_traits == ("has_seeker", "has_preorder", "has_combo", "is_blue_chip")
    assert score(SCENARIO) == 1200
    assert resolve_tier(score(SCENARIO)) == RarityTier.MYTHIC


def test_score_is_clamped_to_max() -> None:
    everything = replace(
        SCENARIO,
        is_meme_lord=True,
        is_defi_king=True,
        diamond_hands=True,
        hyperactive=True,
        wallet_age_days=5000,
    )

    assert score(everything) == SCORING.max_score
    assert score(everything, ScoringConfig(max_score=500)) == 500


def test_combo_bonus_is_additive_on_top_of_badges() -> None:
    base = AttributeRecord(unique_token_count=12, tx_count=40, sol_balance=0.5)
    one_badge = replace(base, has_seeker=True)
    both = replace(base, has_seeker=True, has_preorder=True, has_combo=True)

    assert score(both) == score(one_badge) + SCORING.preorder_bonus + SCORING.combo_bonus
    assert score(both) >= score(one_badge) + SCORING.combo_bonus


def test_every_flag_contributes_its_own_bonus() -> None:
    flags = {
        "has_seeker": SCORING.seeker_bonus,
        "has_preorder": SCORING.preorder_bonus,
        "has_combo": SCORING.combo_bonus,
        "is_blue_chip": SCORING.blue_chip_bonus,
        "is_meme_lord": SCORING.meme_lord_bonus,
        "is_defi_king": SCORING.defi_king_bonus,
        "diamond_hands": SCORING.diamond_hands_bonus,
        "hyperactive": SCORING.hyperactive_bonus,
    }
    for flag, bonus in flags.items():
        attrs = replace(AttributeRecord(), **{flag: True})
        assert score(attrs) == bonus, flag


def test_balance_bonus_takes_highest_threshold_only() -> None:
    assert balance_bonus(0.0) == 0
    assert balance_bonus(0.05) == 0
    assert balance_bonus(0.1) == 30
    assert balance_bonus(4.99) == 70
    assert balance_bonus(5) == 150
    assert balance_bonus(1000) == 150


def test_wallet_age_bonus_is_capped_per_year() -> None:
    assert wallet_age_bonus(364) == 0
    assert wallet_age_bonus(365) == 100
    assert wallet_age_bonus(900) == 200
    assert wallet_age_bonus(5000) == 300


def test_activity_bonus_is_capped() -> None:
    assert activity_bonus(0) == 0
    assert activity_bonus(3) == 1.5
    assert activity_bonus(400) == 200
    assert activity_bonus(1_000_000) == 200


def test_half_points_round_up() -> None:
    assert score(AttributeRecord(tx_count=3)) == 2
    assert score(AttributeRecord(tx_count=1)) == 1


def test_tier_thresholds_are_inclusive() -> None:
    assert resolve_tier(200) == RarityTier.COMMON
    assert resolve_tier(201) == RarityTier.RARE
    assert resolve_tier(450) == RarityTier.RARE
    assert resolve_tier(451) == RarityTier.EPIC
    assert resolve_tier(650) == RarityTier.EPIC
    assert resolve_tier(651) == RarityTier.LEGENDARY
    assert resolve_tier(850) == RarityTier.LEGENDARY
    assert resolve_tier(851) == RarityTier.MYTHIC
    assert resolve_tier(1200) == RarityTier.MYTHIC


def test_tier_is_monotonic_in_score() -> None:
    tiers = [resolve_tier(s) for s in range(0, SCORING.max_score + 1)]

    assert all(a <= b for a, b in zip(tiers, tiers[1:]))
    assert set(tiers) == set(RarityTier)


def test_custom_thresholds() -> None:
    thresholds = RarityThresholds(rare=10, epic=20, legendary=30, mythic=40)

    assert resolve_tier(9, thresholds) == RarityTier.COMMON
    assert resolve_tier(40, thresholds) == RarityTier.MYTHIC


def test_tier_labels_round_trip() -> None:
    for tier in RarityTier:
        assert RarityTier.from_label(tier.label) is tier
    assert RarityTier.MYTHIC.label == "mythic"
