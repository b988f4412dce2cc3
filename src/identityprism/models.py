"""Frozen value types shared by the scoring, generation and rendering layers."""

from dataclasses import dataclass
from enum import Enum, IntEnum

import numpy as np


@dataclass(frozen=True)
class AttributeRecord:
    """Measured account traits. Produced by the acquisition layer, never mutated."""

    has_seeker: bool = False  # Badge A (Seeker Genesis)
    has_preorder: bool = False  # Badge B (Chapter 2 preorder)
    has_combo: bool = False  # Holds both badges
    is_blue_chip: bool = False
    is_defi_king: bool = False  # DeFi-active
    is_meme_lord: bool = False  # Meme-active
    diamond_hands: bool = False  # Dormant long-term holder
    hyperactive: bool = False
    unique_token_count: int = 0
    nft_count: int = 0
    tx_count: int = 0  # Lifetime transaction count
    avg_tx_per_day: float = 0.0  # Recent (30d) tx/day
    sol_balance: float = 0.0  # Native balance
    wallet_age_days: int = 0
    total_asset_count: int = 0


class RarityTier(IntEnum):
    """Discrete rarity classification. Int order is tier order."""

    COMMON = 0
    RARE = 1
    EPIC = 2
    LEGENDARY = 3
    MYTHIC = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "RarityTier":
        return cls[label.upper()]


class StellarMode(str, Enum):
    single = "single"
    binary = "binary"
    binary_pulsar = "binary_pulsar"


class SurfaceCategory(str, Enum):
    """Texture family used by the synthesizer."""

    terrestrial = "terrestrial"
    gas = "gas"
    volcanic = "volcanic"
    ice = "ice"
    rocky = "rocky"


class PlanetGeometry(str, Enum):
    sphere = "sphere"
    oblate = "oblate"
    crystalline = "crystalline"


@dataclass(frozen=True)
class Palette:
    primary: str  # Hex colour ("#00D4FF")
    secondary: str


@dataclass(frozen=True)
class PlanetType:
    """Material category from the planet catalogue."""

    name: str  # "earth", "volcanic", ...
    base_color: str
    accent: str
    roughness: float
    metalness: float
    surface: SurfaceCategory


@dataclass(frozen=True)
class StellarProfile:
    """Star configuration of a scene."""

    mode: StellarMode
    palette: Palette
    intensity: float
    plasma_bridge: bool  # Plasma stream between binary stars
    nova_bridge: bool  # Two-colour bridge, combo holders only
    nova_palette: Palette | None
    aurora: bool  # Polar aurora halo for long-term holders


@dataclass(frozen=True)
class MoonDescriptor:
    size: float
    orbit_radius: float  # Distance from parent planet
    orbit_speed: float
    initial_angle: float  # Radians
    color: str  # Hex colour


@dataclass(frozen=True)
class PlanetDescriptor:
    index: int  # Position from the star (0 = innermost)
    size: float
    orbit_radius: float
    orbit_speed: float
    rotation_speed: float
    planet_type: PlanetType
    initial_angle: float  # Radians
    has_ring: bool
    moons: tuple[MoonDescriptor, ...]
    material_seed: int  # Input to the texture synthesizer
    geometry: PlanetGeometry


@dataclass(frozen=True)
class DustFieldConfig:
    particle_count: int
    spread_radius: float
    colors: tuple[str, ...]


@dataclass(frozen=True)
class NebulaConfig:
    colors: tuple[str, ...]
    intensity: float
    radius: float


@dataclass(frozen=True)
class SceneDescriptor:
    """The sole input to renderers. Fully generated state."""

    stellar: StellarProfile
    planets: tuple[PlanetDescriptor, ...]
    dust: DustFieldConfig
    starfield_density: float
    nebula: NebulaConfig | None  # None = no nebula at all
    rarity_tier: RarityTier
    score: int
    orbit_color: str


@dataclass(frozen=True)
class ScoreBreakdown:
    """Every scoring term, before clamping."""

    trait_bonus: int  # Sum of boolean trait bonuses
    balance_bonus: int
    wallet_age_bonus: int
    activity_bonus: float
    contributing_traits: tuple[str, ...]  # Names of flags that added points

    @property
    def raw_total(self) -> float:
        return (
            self.trait_bonus
            + self.balance_bonus
            + self.wallet_age_bonus
            + self.activity_bonus
        )


@dataclass(frozen=True, eq=False)
class TextureSet:
    """Pixel buffers for one planet surface."""

    color_map: np.ndarray  # uint8 (H, W, 3)
    bump_map: np.ndarray | None  # uint8 (H, W); None for smooth surfaces
    bump_scale: float


@dataclass(frozen=True)
class PrismResult:
    """Output of the top-level pipeline for one account."""

    score: int
    tier: RarityTier
    breakdown: ScoreBreakdown
    scene: SceneDescriptor
