"""Procedural planet textures — (seed, surface category) to pixel buffers.

Textures are equirectangular: columns span longitude, rows span latitude
from the north pole (row 0) to the south pole. Output depends only on the
seed, the category and the TextureConfig.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from identityprism.config import TEXTURE, TextureConfig
from identityprism.models import SceneDescriptor, SurfaceCategory, TextureSet
from identityprism.noise import fbm, ridged, seed_offset, value_noise

logger = logging.getLogger(__name__)


def _rgb(hex_color: str) -> np.ndarray:
    value = hex_color.lstrip("#")
    return np.array([int(value[i : i + 2], 16) for i in (0, 2, 4)], dtype=np.float64) / 255.0


def _mix(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Blend colours a→b per pixel; t has shape (H, W)."""
    t = np.clip(t, 0.0, 1.0)[..., None]
    return a * (1.0 - t) + b * t


_OCEAN_DEEP = _rgb("#0b2e59")
_OCEAN_SHALLOW = _rgb("#1f7fbf")
_LOWLAND = _rgb("#3f8f4a")
_HIGHLAND = _rgb("#8b7355")
_PEAK = _rgb("#e6e2d6")
_POLAR_ICE = _rgb("#f4f9ff")

_GAS_BASE = _rgb("#c98b4f")
_GAS_ACCENT = _rgb("#f3dcb2")

_BASALT_DARK = _rgb("#1c1412")
_BASALT = _rgb("#4a2a22")
_CRATER = _rgb("#0d0908")
_LAVA_DEEP = _rgb("#c23b00")
_LAVA_BRIGHT = _rgb("#ffd25a")

_ICE_DEEP = _rgb("#7fb6d6")
_ICE_PALE = _rgb("#d8eef7")
_ICE_CRACK = _rgb("#3d6f8f")
_FROST = _rgb("#ffffff")

_DUST_DARK = _rgb("#5a4a3c")
_DUST_LIGHT = _rgb("#b8a07e")

_BUMP_SCALE: dict[SurfaceCategory, float] = {
    SurfaceCategory.terrestrial: 0.04,
    SurfaceCategory.gas: 0.0,
    SurfaceCategory.volcanic: 0.06,
    SurfaceCategory.ice: 0.03,
    SurfaceCategory.rocky: 0.05,
}


class _Grid:
    """Pixel coordinates for one texture."""

    def __init__(self, seed: int, config: TextureConfig) -> None:
        rows, cols = np.mgrid[0 : config.height, 0 : config.width]
        u = (cols + 0.5) / config.width
        v = (rows + 0.5) / config.height
        off_x, off_y = seed_offset(seed)
        # Width covers twice the lattice cells of the height (2:1 equirectangular)
        self.x = u * config.base_scale * 2.0 + off_x
        self.y = v * config.base_scale + off_y
        self.v = v
        self.latitude = (v - 0.5) * 2.0  # -1 north pole … 1 south pole


SurfaceShader = Callable[[_Grid, int, TextureConfig], tuple[np.ndarray, np.ndarray | None]]


def _shade_terrestrial(grid: _Grid, seed: int, config: TextureConfig):
    n = fbm(grid.x, grid.y, seed, config.octaves)
    ocean = n < config.sea_level
    depth = (config.sea_level - n) / config.sea_level
    ocean_rgb = _mix(_OCEAN_SHALLOW, _OCEAN_DEEP, depth * 2.0)

    elevation = np.clip((n - config.sea_level) / (1.0 - config.sea_level), 0.0, 1.0)
    land_rgb = np.where(
        (elevation < 0.5)[..., None],
        _mix(_LOWLAND, _HIGHLAND, elevation * 2.0),
        _mix(_HIGHLAND, _PEAK, (elevation - 0.5) * 2.0),
    )
    rgb = np.where(ocean[..., None], ocean_rgb, land_rgb)

    edge_noise = fbm(grid.x * 2.0, grid.y * 2.0, seed + 7, 3)
    ice_edge = config.ice_latitude + (edge_noise - 0.5) * 0.15
    polar = np.abs(grid.latitude) > ice_edge
    rgb[polar] = _POLAR_ICE

    height = np.where(ocean, 0.0, elevation)
    height[polar] = np.maximum(height[polar], 0.3)
    return rgb, height


def _shade_gas(grid: _Grid, seed: int, config: TextureConfig):
    n = fbm(grid.x, grid.y * 0.35, seed, config.octaves)
    phase = grid.v * config.gas_bands + (n - 0.5) * config.gas_turbulence
    bands = (np.sin(phase * 2.0 * np.pi) + 1.0) / 2.0
    rgb = _mix(_GAS_BASE, _GAS_ACCENT, bands)
    rgb *= (0.85 + 0.3 * n)[..., None]
    return rgb, None


def _shade_volcanic(grid: _Grid, seed: int, config: TextureConfig):
    n = fbm(grid.x, grid.y, seed, config.octaves)
    flow = ridged(fbm(grid.x * 1.7, grid.y * 1.7, seed + 101, config.octaves))
    rgb = _mix(_BASALT_DARK, _BASALT, n)

    craters = n < config.crater_threshold
    rgb[craters] = _CRATER

    veins = flow > config.vein_threshold
    glow = (flow - config.vein_threshold) / (1.0 - config.vein_threshold)
    rgb = np.where(veins[..., None], _mix(_LAVA_DEEP, _LAVA_BRIGHT, glow), rgb)

    height = n.copy()
    height[craters] *= 0.5
    height[veins] = 0.15
    return rgb, height


def _shade_ice(grid: _Grid, seed: int, config: TextureConfig):
    n = fbm(grid.x, grid.y, seed, config.octaves)
    fracture = ridged(fbm(grid.x * 2.3, grid.y * 2.3, seed + 211, config.octaves))
    rgb = _mix(_ICE_DEEP, _ICE_PALE, n)

    frost = n > config.frost_threshold
    frost_t = (n - config.frost_threshold) / (1.0 - config.frost_threshold)
    rgb = np.where(frost[..., None], _mix(rgb, _FROST, frost_t), rgb)

    cracks = fracture > config.crack_threshold
    rgb[cracks] = _ICE_CRACK

    height = n.copy()
    height[cracks] = np.clip(height[cracks] - 0.3, 0.0, 1.0)
    return rgb, height


def _shade_rocky(grid: _Grid, seed: int, config: TextureConfig):
    n = fbm(grid.x, grid.y, seed, config.octaves)
    pits = value_noise(grid.x * 3.0, grid.y * 3.0, seed + 307) < config.crater_threshold * 0.6
    rgb = _mix(_DUST_DARK, _DUST_LIGHT, n)
    rgb[pits] *= 0.6
    height = n - pits * 0.25
    return rgb, height


_SHADERS: dict[SurfaceCategory, SurfaceShader] = {
    SurfaceCategory.terrestrial: _shade_terrestrial,
    SurfaceCategory.gas: _shade_gas,
    SurfaceCategory.volcanic: _shade_volcanic,
    SurfaceCategory.ice: _shade_ice,
    SurfaceCategory.rocky: _shade_rocky,
}


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.round(np.clip(values, 0.0, 1.0) * 255.0).astype(np.uint8)


def synthesize(
    seed: int, category: SurfaceCategory, config: TextureConfig = TEXTURE
) -> TextureSet:
    """Synthesize colour and bump maps for one planet surface.

    Args:
        seed: Planet material seed (``PlanetDescriptor.material_seed``).
        category: Surface family selecting the colour rules.
        config: Resolution, octave count and per-category thresholds.

    Returns:
        TextureSet with a (H, W, 3) uint8 colour map and, for non-gas
        surfaces, a (H, W) uint8 bump map.
    """
    grid = _Grid(seed, config)
    rgb, height = _SHADERS[SurfaceCategory(category)](grid, seed, config)
    return TextureSet(
        color_map=_to_uint8(rgb),
        bump_map=None if height is None else _to_uint8(height),
        bump_scale=_BUMP_SCALE[SurfaceCategory(category)],
    )


def synthesize_scene_textures(
    scene: SceneDescriptor, config: TextureConfig = TEXTURE, max_workers: int = 4
) -> dict[int, TextureSet]:
    """Synthesize every planet's texture in a scene, keyed by planet index.

    Planets are independent, so they run on a thread pool.
    """
    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        textures = list(
            pool.map(
                lambda planet: synthesize(planet.material_seed, planet.planet_type.surface, config),
                scene.planets,
            )
        )
    logger.info(
        "Synthesized %d textures (%dx%d) in %.2fs",
        len(textures),
        config.width,
        config.height,
        time.perf_counter() - started,
    )
    return {planet.index: tex for planet, tex in zip(scene.planets, textures)}
