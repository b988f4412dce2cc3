"""Plotly 3D interactive scene preview.

Bodies are placed at their t=0 positions in the orbital (x, z) plane with y
up. Supports drag rotation and wheel zoom; there is no animation.
"""

import math

import numpy as np
import plotly.graph_objects as go

from identityprism.models import SceneDescriptor, StellarMode

_BG = "#02030a"
_STAR_COLOR = "#ffffff"
_STARFIELD_POINTS = 1200  # At density 1.0
_STARFIELD_RADIUS = 120.0
_EMPTY_DENSITY = 0.35
_ORBIT_SEGMENTS = 96


def _starfield_trace(density: float, seed: int) -> go.Scatter3d:
    # Uniform points on a sphere shell around the system
    rng = np.random.default_rng(seed)
    count = int(_STARFIELD_POINTS * density)
    theta = rng.uniform(0, 2 * math.pi, count)
    phi = np.arccos(rng.uniform(-1, 1, count))
    r = _STARFIELD_RADIUS
    return go.Scatter3d(
        x=r * np.sin(phi) * np.cos(theta),
        y=r * np.cos(phi),
        z=r * np.sin(phi) * np.sin(theta),
        mode="markers",
        marker=dict(size=1.2, color=_STAR_COLOR, opacity=0.6),
        hoverinfo="skip",
        name="starfield",
    )


def _layout(fig: go.Figure) -> None:
    hidden = dict(visible=False, showbackground=False)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        scene=dict(xaxis=hidden, yaxis=hidden, zaxis=hidden, aspectmode="data", bgcolor=_BG),
    )


def render_plotly_scene(scene: SceneDescriptor | None) -> go.Figure:
    """Render a SceneDescriptor as a Plotly 3D figure.

    Args:
        scene: Generated scene, or None for a starfield-only figure.

    Returns:
        Plotly Figure object.
    """
    if scene is None:
        fig = go.Figure(data=[_starfield_trace(_EMPTY_DENSITY, 0)])
        _layout(fig)
        return fig

    seed = sum(p.material_seed for p in scene.planets)
    traces = [_starfield_trace(scene.starfield_density, seed)]

    # Orbit paths: single trace using None separators
    ox: list[float | None] = []
    oz: list[float | None] = []
    steps = np.linspace(0, 2 * math.pi, _ORBIT_SEGMENTS + 1)
    for planet in scene.planets:
        ox += list(planet.orbit_radius * np.cos(steps)) + [None]
        oz += list(planet.orbit_radius * np.sin(steps)) + [None]
    traces.append(
        go.Scatter3d(
            x=ox,
            y=[0.0 if v is not None else None for v in ox],
            z=oz,
            mode="lines",
            line=dict(color=scene.orbit_color, width=1),
            opacity=0.3,
            hoverinfo="skip",
            name="orbits",
        )
    )

    palette = scene.stellar.palette
    star_x = [0.0] if scene.stellar.mode == StellarMode.single else [-1.6, 1.6]
    traces.append(
        go.Scatter3d(
            x=star_x,
            y=[0.0] * len(star_x),
            z=[0.0] * len(star_x),
            mode="markers",
            marker=dict(size=18, color=[palette.primary, palette.secondary][: len(star_x)]),
            hoverinfo="skip",
            name="stars",
        )
    )

    px = [p.orbit_radius * math.cos(p.initial_angle) for p in scene.planets]
    pz = [p.orbit_radius * math.sin(p.initial_angle) for p in scene.planets]
    traces.append(
        go.Scatter3d(
            x=px,
            y=[0.0] * len(px),
            z=pz,
            mode="markers",
            marker=dict(
                size=[6 + p.size * 12 for p in scene.planets],
                color=[p.planet_type.base_color for p in scene.planets],
                line=dict(width=0),
            ),
            text=[p.planet_type.name + (" (ringed)" if p.has_ring else "") for p in scene.planets],
            hoverinfo="text",
            name="planets",
        )
    )

    mx: list[float] = []
    my: list[float] = []
    mz: list[float] = []
    colors: list[str] = []
    for planet, x, z in zip(scene.planets, px, pz):
        for moon in planet.moons:
            mx.append(x + moon.orbit_radius * math.cos(moon.initial_angle))
            my.append(0.0)
            mz.append(z + moon.orbit_radius * math.sin(moon.initial_angle))
            colors.append(moon.color)
    if mx:
        traces.append(
            go.Scatter3d(
                x=mx, y=my, z=mz,
                mode="markers",
                marker=dict(size=3, color=colors),
                hoverinfo="skip",
                name="moons",
            )
        )

    fig = go.Figure(data=traces)
    _layout(fig)
    return fig
