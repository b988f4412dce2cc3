"""Matplotlib static PNG renderer — top-down preview of a scene at t=0."""

import math
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from identityprism.models import SceneDescriptor, StellarMode, TextureSet

_ROOT = Path(__file__).parent.parent.parent.parent
_BG = "#02030a"
_STARFIELD_POINTS = 1500  # At density 1.0
_EMPTY_DENSITY = 0.35
_BINARY_OFFSET = 1.6
_PLANET_SCALE = 1.4  # Exaggerate bodies so they read at chart scale
_MOON_DISTANCE_SCALE = 1.8


def _starfield(ax, extent: float, density: float, seed: int) -> None:
    rng = np.random.default_rng(seed)
    count = int(_STARFIELD_POINTS * density)
    xs = rng.uniform(-extent, extent, count)
    ys = rng.uniform(-extent, extent, count)
    sizes = rng.uniform(0.2, 2.5, count)
    ax.scatter(xs, ys, s=sizes, color="white", alpha=0.55, linewidths=0, zorder=0)


def _star_positions(mode: StellarMode) -> list[tuple[float, float]]:
    if mode == StellarMode.single:
        return [(0.0, 0.0)]
    return [(-_BINARY_OFFSET, 0.0), (_BINARY_OFFSET, 0.0)]


def render_static_scene(scene: SceneDescriptor | None, chart_size: int = 10) -> Figure:
    """Render a SceneDescriptor as a static top-down matplotlib image.

    Args:
        scene: Generated scene, or None for a starfield-only image.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    if scene is None:
        _starfield(ax, 60.0, _EMPTY_DENSITY, 0)
        ax.set_xlim(-60, 60)
        ax.set_ylim(-60, 60)
        ax.set_aspect("equal")
        ax.axis("off")
        return fig

    outer = max((p.orbit_radius for p in scene.planets), default=10.0)
    extent = outer + 6.0
    seed = sum(p.material_seed for p in scene.planets) + scene.dust.particle_count
    _starfield(ax, extent, scene.starfield_density, seed)

    if scene.nebula is not None:
        for i, color in enumerate(scene.nebula.colors):
            radius = min(scene.nebula.radius, extent * 1.4) * (1 - i * 0.2)
            ax.add_patch(
                Circle((0, 0), radius, color=color, alpha=scene.nebula.intensity / (i + 5), zorder=0)
            )

    # Dust: ring-shaped band scaled into the visible extent
    rng = np.random.default_rng(seed + 1)
    n = scene.dust.particle_count
    theta = rng.uniform(0, 2 * math.pi, n)
    r = rng.uniform(0.15, 1.0, n) * extent
    dust_colors = [scene.dust.colors[i] for i in rng.integers(0, len(scene.dust.colors), n)]
    ax.scatter(r * np.cos(theta), r * np.sin(theta), s=0.6, c=dust_colors, alpha=0.25, linewidths=0, zorder=1)

    for planet in scene.planets:
        ax.add_patch(
            Circle(
                (0, 0),
                planet.orbit_radius,
                fill=False,
                edgecolor=scene.orbit_color,
                linewidth=0.5,
                alpha=0.4,
                zorder=2,
            )
        )

    palette = scene.stellar.palette
    for (sx, sy), color in zip(_star_positions(scene.stellar.mode), (palette.primary, palette.secondary)):
        ax.add_patch(Circle((sx, sy), 1.6, color=color, alpha=0.25, zorder=3))
        ax.add_patch(Circle((sx, sy), 1.0, color=color, zorder=4))
    if scene.stellar.plasma_bridge and scene.stellar.mode != StellarMode.single:
        bridge = scene.stellar.nova_palette.secondary if scene.stellar.nova_palette else palette.secondary
        ax.plot([-_BINARY_OFFSET, _BINARY_OFFSET], [0, 0], color=bridge, linewidth=2, alpha=0.7, zorder=3)

    for planet in scene.planets:
        px = planet.orbit_radius * math.cos(planet.initial_angle)
        py = planet.orbit_radius * math.sin(planet.initial_angle)
        body = planet.size * _PLANET_SCALE
        ax.add_patch(Circle((px, py), body, color=planet.planet_type.base_color, zorder=5))
        if planet.has_ring:
            ax.add_patch(
                Circle((px, py), body * 2.0, fill=False, edgecolor="#daa520", linewidth=1.5, alpha=0.8, zorder=5)
            )
        for moon in planet.moons:
            dist = body + moon.orbit_radius * _MOON_DISTANCE_SCALE
            mx = px + dist * math.cos(moon.initial_angle)
            my = py + dist * math.sin(moon.initial_angle)
            ax.add_patch(Circle((mx, my), moon.size * _PLANET_SCALE * 1.5, color=moon.color, zorder=6))

    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig


def save_static_scene(scene: SceneDescriptor | None, output_path: Path | None = None) -> Path:
    """Save a scene preview as a PNG file.

    Args:
        scene: Generated scene, or None for a starfield-only image.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = "empty.png" if scene is None else f"{scene.rarity_tier.label}_{scene.score}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_scene(scene)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path


def save_texture_png(texture: TextureSet, output_path: Path) -> Path:
    """Save a texture's colour map as a PNG file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(output_path, texture.color_map)
    return output_path
