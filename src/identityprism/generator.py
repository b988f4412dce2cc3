"""Scene generation — attributes, tier and seed to a deterministic star system.

Every random draw comes from a single SeededRandom in a fixed order, so the
same inputs always reproduce the same floats, counts and ordering.

Stellar profile precedence (each rule may replace any field set before it):
    1. tier default: preset palette, star mode, plasma bridge, nebula
    2. combo override: badge colours, at least binary, nova + plasma bridges
    3. badge palette: single-badge holders get that badge's colours
    4. score override: score above ``binary_score_threshold`` lifts a single
       star to binary, independently of the tier default
    5. mythic override: binary pulsar + nebula, keeping combo colours
"""

import colorsys
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, replace

from identityprism.config import GENERATION, GenerationConfig, TierPreset
from identityprism.models import (
    AttributeRecord,
    DustFieldConfig,
    MoonDescriptor,
    NebulaConfig,
    Palette,
    PlanetDescriptor,
    PlanetGeometry,
    PlanetType,
    RarityTier,
    SceneDescriptor,
    StellarMode,
    StellarProfile,
)
from identityprism.rng import SeededRandom

logger = logging.getLogger(__name__)

_MATERIAL_SEED_RANGE = 2**31 - 1


@dataclass(frozen=True)
class _StellarDraft:
    mode: StellarMode
    palette: Palette
    plasma_bridge: bool
    nova_bridge: bool
    nova_palette: Palette | None
    nebula: bool


@dataclass(frozen=True)
class _RuleContext:
    attributes: AttributeRecord
    tier: RarityTier
    score: int
    preset: TierPreset
    config: GenerationConfig


StellarRule = Callable[[_StellarDraft, _RuleContext], _StellarDraft]


def _tier_default(draft: _StellarDraft, ctx: _RuleContext) -> _StellarDraft:
    return _StellarDraft(
        mode=ctx.preset.star_mode,
        palette=ctx.preset.palette,
        plasma_bridge=ctx.preset.plasma_bridge,
        nova_bridge=False,
        nova_palette=None,
        nebula=ctx.preset.nebula,
    )


def _combo_override(draft: _StellarDraft, ctx: _RuleContext) -> _StellarDraft:
    if not ctx.attributes.has_combo:
        return draft
    mode = draft.mode if draft.mode == StellarMode.binary_pulsar else StellarMode.binary
    return replace(
        draft,
        mode=mode,
        palette=ctx.config.combo_palette,
        plasma_bridge=True,
        nova_bridge=True,
        nova_palette=ctx.config.combo_palette,
    )


def _badge_palette(draft: _StellarDraft, ctx: _RuleContext) -> _StellarDraft:
    attrs = ctx.attributes
    if attrs.has_combo:
        return draft
    if attrs.has_seeker and not attrs.has_preorder:
        return replace(draft, palette=ctx.config.seeker_palette)
    if attrs.has_preorder and not attrs.has_seeker:
        return replace(draft, palette=ctx.config.preorder_palette)
    return draft


def _score_override(draft: _StellarDraft, ctx: _RuleContext) -> _StellarDraft:
    if ctx.score > ctx.config.binary_score_threshold and draft.mode == StellarMode.single:
        return replace(draft, mode=StellarMode.binary)
    return draft


def _mythic_override(draft: _StellarDraft, ctx: _RuleContext) -> _StellarDraft:
    if ctx.tier != RarityTier.MYTHIC:
        return draft
    return replace(draft, mode=StellarMode.binary_pulsar, nebula=True)


STELLAR_RULES: tuple[StellarRule, ...] = (
    _tier_default,
    _combo_override,
    _badge_palette,
    _score_override,
    _mythic_override,
)

_BLANK_DRAFT = _StellarDraft(
    mode=StellarMode.single,
    palette=Palette("#ffffff", "#ffffff"),
    plasma_bridge=False,
    nova_bridge=False,
    nova_palette=None,
    nebula=False,
)


def _resolve_stellar(ctx: _RuleContext) -> tuple[StellarProfile, bool]:
    """Apply STELLAR_RULES in order.

    Returns:
        (StellarProfile, whether a nebula is enabled).
    """
    draft = _BLANK_DRAFT
    for rule in STELLAR_RULES:
        draft = rule(draft, ctx)
    profile = StellarProfile(
        mode=draft.mode,
        palette=draft.palette,
        intensity=ctx.config.stellar_intensity,
        plasma_bridge=draft.plasma_bridge,
        nova_bridge=draft.nova_bridge,
        nova_palette=draft.nova_palette,
        aurora=ctx.attributes.diamond_hands,
    )
    return profile, draft.nebula


def planet_count(
    attributes: AttributeRecord, preset: TierPreset, config: GenerationConfig = GENERATION
) -> int:
    low, high = preset.planet_range
    estimate = max(low, attributes.unique_token_count // config.tokens_per_planet)
    return min(max(estimate, low), high)


def moon_counts(
    count: int,
    attributes: AttributeRecord,
    preset: TierPreset,
    config: GenerationConfig = GENERATION,
) -> list[int]:
    """Spread the NFT-derived moon budget over ``count`` planets, innermost first.

    An empty budget on a tier that guarantees moons yields one moon per planet.
    """
    if count <= 0:
        return []
    budget = attributes.nft_count // config.nfts_per_moon
    if budget == 0:
        return [1 if preset.ensure_moons else 0] * count
    base, extra = divmod(budget, count)
    return [
        min(base + (1 if i < extra else 0), config.max_moons_per_planet)
        for i in range(count)
    ]


def _uniform(rng: SeededRandom, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return low + rng.next() * (high - low)


def _pick_planet_type(
    rng: SeededRandom, attributes: AttributeRecord, config: GenerationConfig
) -> PlanetType:
    # Always two draws: one for the group, one within it
    roll = rng.next()
    pick = rng.next()
    catalogue = config.planet_types
    cursor = 0.0
    biased: set[str] = set()
    for bias in config.type_biases:
        if not getattr(attributes, bias.trait):
            continue
        group = [t for t in catalogue if t.name in bias.type_names]
        if not group:
            continue
        biased.update(bias.type_names)
        cursor += bias.weight
        if roll < cursor:
            return group[int(pick * len(group))]
    rest = [t for t in catalogue if t.name not in biased] or list(catalogue)
    return rest[int(pick * len(rest))]


def _pick_geometry(roll: float) -> PlanetGeometry:
    bucket = int(roll * 10)
    if bucket < 7:
        return PlanetGeometry.sphere
    if bucket < 9:
        return PlanetGeometry.oblate
    return PlanetGeometry.crystalline


def _moon_color(hue: float) -> str:
    r, g, b = colorsys.hls_to_rgb(hue, 0.7, 0.3)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


def _build_moons(
    rng: SeededRandom, count: int, config: GenerationConfig
) -> tuple[MoonDescriptor, ...]:
    moons: list[MoonDescriptor] = []
    for j in range(count):
        size = _uniform(rng, config.moon_size_range)
        orbit_radius = _uniform(rng, config.moon_orbit_range)
        orbit_speed = config.moon_orbit_speed * (0.8 + rng.next() * 0.4)
        if count == 2 and j == 1:
            # Pairs sit exactly opposite each other
            initial_angle = moons[0].initial_angle + math.pi
        else:
            initial_angle = rng.next() * math.tau
        moons.append(
            MoonDescriptor(
                size=size,
                orbit_radius=orbit_radius,
                orbit_speed=orbit_speed,
                initial_angle=initial_angle,
                color=_moon_color(rng.next()),
            )
        )
    return tuple(moons)


def _build_planets(
    rng: SeededRandom,
    attributes: AttributeRecord,
    preset: TierPreset,
    stellar: StellarProfile,
    config: GenerationConfig,
) -> tuple[PlanetDescriptor, ...]:
    count = planet_count(attributes, preset, config)
    moons_per_planet = moon_counts(count, attributes, preset, config)
    base_radius = config.min_orbit_radius
    if stellar.mode != StellarMode.single:
        base_radius += config.multi_star_orbit_offset

    planets: list[PlanetDescriptor] = []
    largest_index = 0
    largest_size = 0.0
    for i in range(count):
        planet_type = _pick_planet_type(rng, attributes, config)
        size = _uniform(rng, config.planet_size_range)
        if size > largest_size:
            largest_size = size
            largest_index = i
        orbit_radius = base_radius + i * config.orbit_spacing + rng.next() * config.orbit_jitter
        geometry = _pick_geometry(rng.next())
        rotation_speed = config.planet_rotation_speed * (0.5 + rng.next())
        initial_angle = rng.next() * math.tau
        material_seed = int(rng.next() * _MATERIAL_SEED_RANGE)
        moons = _build_moons(rng, moons_per_planet[i], config)
        planets.append(
            PlanetDescriptor(
                index=i,
                size=size,
                orbit_radius=orbit_radius,
                orbit_speed=config.planet_orbit_speed / (1 + i * config.orbit_speed_falloff),
                rotation_speed=rotation_speed,
                planet_type=planet_type,
                initial_angle=initial_angle,
                has_ring=False,
                moons=moons,
                material_seed=material_seed,
                geometry=geometry,
            )
        )

    if planets and (attributes.is_blue_chip or preset.ensure_rings):
        planets[largest_index] = replace(planets[largest_index], has_ring=True)
    return tuple(planets)


def _build_dust(
    attributes: AttributeRecord,
    preset: TierPreset,
    stellar: StellarProfile,
    count: int,
    config: GenerationConfig,
) -> DustFieldConfig:
    base = config.dust_base + (attributes.tx_count // 100) * config.dust_per_hundred_tx
    particles = min(math.floor(base * preset.dust_multiplier), config.dust_max)
    spread = config.dust_spread_base + count * config.dust_spread_per_planet
    if stellar.mode != StellarMode.single:
        spread += config.dust_spread_multi_star
    return DustFieldConfig(
        particle_count=particles,
        spread_radius=spread,
        colors=(stellar.palette.primary, stellar.palette.secondary, "#ffffff"),
    )


def generate_scene(
    attributes: AttributeRecord,
    tier: RarityTier,
    seed: int,
    score: int,
    config: GenerationConfig = GENERATION,
) -> SceneDescriptor:
    """Generate the star system for one account.

    Args:
        attributes: Account traits.
        tier: Rarity tier resolved from ``score``.
        seed: Identity-derived seed (see ``rng.derive_seed``).
        score: Resolved score; only the binary-promotion rule reads it.
        config: Generation tables.

    Returns:
        Immutable SceneDescriptor. Identical inputs give identical output.
    """
    preset = config.preset(tier)
    rng = SeededRandom(seed)
    ctx = _RuleContext(attributes=attributes, tier=tier, score=score, preset=preset, config=config)
    stellar, has_nebula = _resolve_stellar(ctx)

    planets = _build_planets(rng, attributes, preset, stellar, config)
    dust = _build_dust(attributes, preset, stellar, len(planets), config)
    nebula = (
        NebulaConfig(
            colors=config.nebula_colors,
            intensity=config.nebula_intensity,
            radius=dust.spread_radius * config.nebula_radius_factor,
        )
        if has_nebula
        else None
    )

    logger.debug(
        "Generated %s scene: %d planets, %d moons, mode=%s, seed=%d",
        tier.label,
        len(planets),
        sum(len(p.moons) for p in planets),
        stellar.mode.value,
        seed,
    )
    return SceneDescriptor(
        stellar=stellar,
        planets=planets,
        dust=dust,
        starfield_density=config.starfield_base + preset.starfield_bonus,
        nebula=nebula,
        rarity_tier=tier,
        score=score,
        orbit_color=preset.orbit_color,
    )
