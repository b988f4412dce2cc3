from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from identityprism.compute import run  # noqa: E402
from identityprism.config import TextureConfig  # noqa: E402
from identityprism.models import AttributeRecord, SurfaceCategory  # noqa: E402
from identityprism.renderers.plotly_3d import render_plotly_scene  # noqa: E402
from identityprism.renderers.static import (  # noqa: E402
    render_static_scene,
    save_static_scene,
    save_texture_png,
)
from identityprism.texture import synthesize  # noqa: E402

RICH = AttributeRecord(
    has_seeker=True,
    has_preorder=True,
    has_combo=True,
    is_blue_chip=True,
    diamond_hands=True,
    unique_token_count=60,
    nft_count=300,
    tx_count=1500,
    sol_balance=6,
    wallet_age_days=900,
)


def _scene():
    result = run(RICH, "render-wallet")
    assert result is not None
    return result.scene


def test_static_render_returns_figure() -> None:
    fig = render_static_scene(_scene())

    assert isinstance(fig, Figure)
    plt.close(fig)


def test_static_render_without_scene() -> None:
    fig = render_static_scene(None)

    assert isinstance(fig, Figure)
    plt.close(fig)


def test_save_static_scene(tmp_path) -> None:
    path = save_static_scene(_scene(), tmp_path / "out" / "scene.png")

    assert path.exists()
    assert path.stat().st_size > 0


def test_save_texture_png(tmp_path) -> None:
    tex = synthesize(7, SurfaceCategory.volcanic, TextureConfig(width=32, height=16, octaves=2))

    path = save_texture_png(tex, tmp_path / "tex.png")

    assert path.exists()


def test_plotly_scene_traces() -> None:
    scene = _scene()
    fig = render_plotly_scene(scene)

    names = [trace.name for trace in fig.data]
    assert names == ["starfield", "orbits", "stars", "planets", "moons"]
    assert len(fig.data[3].x) == len(scene.planets)
    assert len(fig.data[2].x) == 2


def test_plotly_without_scene_is_starfield_only() -> None:
    fig = render_plotly_scene(None)

    assert [trace.name for trace in fig.data] == ["starfield"]


def test_plotly_figure_leaves_chart_config_to_caller() -> None:
    fig = render_plotly_scene(_scene())

    # The app passes scrollZoom/displayModeBar to st.plotly_chart
    assert getattr(fig, "_config", None) in (None, {})
