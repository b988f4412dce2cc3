"""Tuning tables and runtime settings.

The scoring, rarity, generation and texture tables are frozen dataclasses so
each engine takes its configuration as an argument and tests can pass
alternative tables. Runtime settings come from the environment
(``IDENTITY_PRISM_*``); entry points call ``load_dotenv()`` first.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from pydantic import PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from identityprism.models import Palette, PlanetType, RarityTier, StellarMode, SurfaceCategory

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Malformed runtime setting."""


# =============================================================================
# Scoring
# =============================================================================


@dataclass(frozen=True)
class ScoringConfig:
    seeker_bonus: int = 200
    preorder_bonus: int = 150
    combo_bonus: int = 200  # Added on top of both badge bonuses
    blue_chip_bonus: int = 100
    meme_lord_bonus: int = 70
    defi_king_bonus: int = 70
    diamond_hands_bonus: int = 50
    hyperactive_bonus: int = 40
    # (minimum balance, bonus), ascending; only the highest threshold met pays
    balance_tiers: tuple[tuple[float, int], ...] = ((0.1, 30), (1.0, 70), (5.0, 150))
    wallet_age_per_year: int = 100
    wallet_age_max: int = 300
    tx_multiplier: float = 0.5
    tx_cap: float = 200.0
    max_score: int = 1200


@dataclass(frozen=True)
class RarityThresholds:
    """Inclusive lower bounds of each tier above common."""

    rare: int = 201
    epic: int = 451
    legendary: int = 651
    mythic: int = 851

    def ascending(self) -> tuple[tuple[int, RarityTier], ...]:
        return (
            (self.rare, RarityTier.RARE),
            (self.epic, RarityTier.EPIC),
            (self.legendary, RarityTier.LEGENDARY),
            (self.mythic, RarityTier.MYTHIC),
        )


SCORING = ScoringConfig()
RARITY_THRESHOLDS = RarityThresholds()


# =============================================================================
# Scene generation
# =============================================================================

SEEKER_COLOR = "#00D4FF"  # Cyan
PREORDER_COLOR = "#FFD700"  # Gold
DEFAULT_SUN_COLOR = "#FF6B35"
ORBIT_DEFAULT = "#4488ff"
ORBIT_GOLDEN = "#ffd479"


@dataclass(frozen=True)
class TierPreset:
    """Per-tier visual defaults."""

    planet_range: tuple[int, int]  # Inclusive (min, max)
    star_mode: StellarMode
    palette: Palette
    ensure_rings: bool
    ensure_moons: bool
    orbit_color: str
    dust_multiplier: float
    starfield_bonus: float  # Added to the base starfield density
    plasma_bridge: bool = False
    nebula: bool = False


TIER_PRESETS: tuple[tuple[RarityTier, TierPreset], ...] = (
    (
        RarityTier.COMMON,
        TierPreset(
            planet_range=(1, 3),
            star_mode=StellarMode.single,
            palette=Palette(DEFAULT_SUN_COLOR, "#FF9D57"),
            ensure_rings=False,
            ensure_moons=False,
            orbit_color=ORBIT_DEFAULT,
            dust_multiplier=1.0,
            starfield_bonus=0.1,
        ),
    ),
    (
        RarityTier.RARE,
        TierPreset(
            planet_range=(4, 5),
            star_mode=StellarMode.single,
            palette=Palette("#8CFFE3", "#FFD19A"),
            ensure_rings=True,
            ensure_moons=False,
            orbit_color=ORBIT_DEFAULT,
            dust_multiplier=1.2,
            starfield_bonus=0.2,
        ),
    ),
    (
        RarityTier.EPIC,
        TierPreset(
            planet_range=(5, 6),
            star_mode=StellarMode.single,
            palette=Palette("#C3A3FF", "#FF7AE2"),
            ensure_rings=True,
            ensure_moons=True,
            orbit_color=ORBIT_DEFAULT,
            dust_multiplier=1.35,
            starfield_bonus=0.3,
        ),
    ),
    (
        RarityTier.LEGENDARY,
        TierPreset(
            planet_range=(6, 8),
            star_mode=StellarMode.binary,
            palette=Palette("#6AD9FF", "#8CFFE3"),
            ensure_rings=True,
            ensure_moons=True,
            orbit_color=ORBIT_GOLDEN,
            dust_multiplier=1.5,
            starfield_bonus=0.4,
        ),
    ),
    (
        RarityTier.MYTHIC,
        TierPreset(
            planet_range=(8, 10),
            star_mode=StellarMode.binary_pulsar,
            palette=Palette("#FF9C6D", "#7F5BFF"),
            ensure_rings=True,
            ensure_moons=True,
            orbit_color=ORBIT_GOLDEN,
            dust_multiplier=1.8,
            starfield_bonus=0.5,
            plasma_bridge=True,
            nebula=True,
        ),
    ),
)

_SURF = SurfaceCategory

PLANET_TYPES: tuple[PlanetType, ...] = (
    PlanetType("earth", "#2E8B57", "#8ddbe0", 0.5, 0.15, _SURF.terrestrial),
    PlanetType("oceanic", "#118cd6", "#f5f8ff", 0.25, 0.08, _SURF.terrestrial),
    PlanetType("rocky", "#8B7355", "#d1bfa5", 0.9, 0.12, _SURF.rocky),
    PlanetType("cratered", "#777777", "#cfcfcf", 0.85, 0.2, _SURF.rocky),
    PlanetType("gaseous", "#D9A066", "#f0d8b0", 0.12, 0.02, _SURF.gas),
    PlanetType("gas_striped", "#b980ff", "#f8b4ff", 0.1, 0.05, _SURF.gas),
    PlanetType("icy", "#B0E0E6", "#f7fdff", 0.3, 0.22, _SURF.ice),
    PlanetType("volcanic", "#8B0000", "#ff7b00", 0.75, 0.25, _SURF.volcanic),
    PlanetType("desert", "#DAA520", "#f9e4a4", 0.95, 0.05, _SURF.rocky),
    PlanetType("toxic", "#9ACD32", "#f0ffb3", 0.6, 0.15, _SURF.terrestrial),
    PlanetType("crystal", "#E0FFFF", "#baf5ff", 0.1, 0.8, _SURF.ice),
    PlanetType("lava", "#FF4500", "#ffd74d", 0.65, 0.25, _SURF.volcanic),
)


@dataclass(frozen=True)
class PlanetTypeBias:
    """Probability mass reserved for a type group when an account flag is set."""

    trait: str  # AttributeRecord boolean field name
    type_names: tuple[str, ...]
    weight: float


@dataclass(frozen=True)
class GenerationConfig:
    tier_presets: tuple[tuple[RarityTier, TierPreset], ...] = TIER_PRESETS
    planet_types: tuple[PlanetType, ...] = PLANET_TYPES
    type_biases: tuple[PlanetTypeBias, ...] = (
        PlanetTypeBias("is_meme_lord", ("volcanic", "lava"), 0.45),
        PlanetTypeBias("is_defi_king", ("icy", "crystal"), 0.45),
    )
    tokens_per_planet: int = 10
    min_orbit_radius: float = 6.0
    multi_star_orbit_offset: float = 4.0  # Room for two stars
    orbit_spacing: float = 2.5
    orbit_jitter: float = 0.7
    planet_size_range: tuple[float, float] = (0.3, 0.8)
    planet_orbit_speed: float = 0.0004
    orbit_speed_falloff: float = 0.25
    planet_rotation_speed: float = 0.0006
    nfts_per_moon: int = 50
    max_moons_per_planet: int = 4
    moon_size_range: tuple[float, float] = (0.05, 0.15)
    moon_orbit_range: tuple[float, float] = (0.8, 1.5)
    moon_orbit_speed: float = 0.0008
    dust_base: int = 150
    dust_per_hundred_tx: int = 8
    dust_max: int = 3000
    dust_spread_base: float = 50.0
    dust_spread_per_planet: float = 6.0
    dust_spread_multi_star: float = 10.0
    starfield_base: float = 0.35
    binary_score_threshold: int = 600  # score > this promotes a single star to binary
    stellar_intensity: float = 4.0
    combo_palette: Palette = Palette(SEEKER_COLOR, PREORDER_COLOR)
    seeker_palette: Palette = Palette(SEEKER_COLOR, "#007C99")
    preorder_palette: Palette = Palette(PREORDER_COLOR, "#FFB347")
    nebula_colors: tuple[str, ...] = ("#2b1055", "#7a00ff", "#ff8e53")
    nebula_intensity: float = 0.65
    nebula_radius_factor: float = 1.2

    def preset(self, tier: RarityTier) -> TierPreset:
        for key, preset in self.tier_presets:
            if key == tier:
                return preset
        raise KeyError(tier)


GENERATION = GenerationConfig()


# =============================================================================
# Texture synthesis
# =============================================================================


@dataclass(frozen=True)
class TextureConfig:
    width: int = 256
    height: int = 128
    octaves: int = 5
    base_scale: float = 4.0  # Lattice cells across the texture at octave 0
    sea_level: float = 0.5
    ice_latitude: float = 0.78  # |latitude| fraction where polar caps start
    gas_bands: float = 7.0
    gas_turbulence: float = 1.6
    crater_threshold: float = 0.36
    vein_threshold: float = 0.985  # Ridge cut; lines cover a few percent of pixels
    crack_threshold: float = 0.99
    frost_threshold: float = 0.66


TEXTURE = TextureConfig()


# =============================================================================
# Runtime settings
# =============================================================================

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Environment-driven runtime settings (``IDENTITY_PRISM_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="IDENTITY_PRISM_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    texture_width: PositiveInt = 256
    texture_height: PositiveInt = 128
    texture_octaves: PositiveInt = 5
    texture_workers: PositiveInt = 4  # Thread pool size for batch synthesis
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    def texture_config(self) -> TextureConfig:
        return TextureConfig(
            width=self.texture_width,
            height=self.texture_height,
            octaves=self.texture_octaves,
        )


def load_settings() -> Settings:
    """Read Settings from the environment and ``.env``.

    Returns:
        Settings with defaults for any unset or empty variable.

    Raises:
        ConfigError: On non-integer or non-positive sizes, or an unknown log level.
    """
    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigError(str(e)) from e
    logger.debug("Loaded settings: %s", settings)
    return settings


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging once for script and app entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
