from __future__ import annotations

from identityprism.compute import (
    build_scene,
    clear_scene_cache,
    demo_attributes,
    run,
    scene_cache_info,
)
from identityprism.config import ScoringConfig
from identityprism.models import AttributeRecord, RarityTier


def test_missing_record_yields_nothing() -> None:
    assert run(None, "wallet") is None
    assert build_scene(None, "wallet") is None


def test_unchanged_record_is_served_from_cache() -> None:
    clear_scene_cache()
    attrs = AttributeRecord(unique_token_count=30, nft_count=90)

    first = run(attrs, "cached-wallet")
    second = run(attrs, "cached-wallet")

    assert first is second
    info = scene_cache_info()
    assert info.misses == 1
    assert info.hits == 1


def test_changed_inputs_regenerate() -> None:
    clear_scene_cache()
    attrs = AttributeRecord(unique_token_count=30)

    a = run(attrs, "wallet-a")
    b = run(attrs, "wallet-b")

    assert a is not b
    assert scene_cache_info().misses == 2


def test_scoring_table_is_part_of_cache_key() -> None:
    attrs = AttributeRecord(has_seeker=True)

    default = run(attrs, "w")
    boosted = run(attrs, "w", scoring=ScoringConfig(seeker_bonus=900))

    assert default is not None and boosted is not None
    assert default.score == 200
    assert boosted.score == 900
    assert boosted.tier == RarityTier.MYTHIC


def test_result_carries_breakdown() -> None:
    result = run(AttributeRecord(is_blue_chip=True, tx_count=100), "w")
    assert result is not None

    assert result.breakdown.trait_bonus == 100
    assert result.breakdown.activity_bonus == 50
    assert result.score == 150
    assert result.scene.score == result.score
    assert result.scene.rarity_tier == result.tier


def test_build_scene_matches_run() -> None:
    attrs = AttributeRecord(nft_count=60)

    result = run(attrs, "same")
    assert result is not None
    assert build_scene(attrs, "same") == result.scene


def test_demo_attributes_fallback() -> None:
    d = demo_attributes()

    assert d == demo_attributes(None)
    assert d.has_seeker is True
    assert d.has_preorder is False
    assert d.has_combo is False
    assert d.nft_count == 327
    assert d.unique_token_count == 72
    assert d.tx_count == 1027
    assert d.sol_balance == 17.25
    assert d.wallet_age_days == 730
    assert d.total_asset_count == 72 + 327


def test_demo_attributes_follow_identity() -> None:
    a = demo_attributes("wallet-one")

    assert a == demo_attributes("wallet-one")
    assert a.has_combo == (a.has_seeker and a.has_preorder)
    assert run(a, "wallet-one") is not None
