"""Script entry point for scene previews.

Edit the identity variable at the top, then run:
    uv run python src/identityprism/prismchart.py
"""

from dotenv import load_dotenv

load_dotenv()

from identityprism.compute import demo_attributes, run  # noqa: E402
from identityprism.config import configure_logging, load_settings  # noqa: E402
from identityprism.renderers.static import save_static_scene, save_texture_png  # noqa: E402
from identityprism.texture import synthesize_scene_textures  # noqa: E402

identity = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"

settings = load_settings()
configure_logging(settings.log_level)

result = run(demo_attributes(identity), identity)
assert result is not None
path = save_static_scene(result.scene)
print(f"Saved: {path} (score={result.score}, tier={result.tier.label})")

textures = synthesize_scene_textures(result.scene, settings.texture_config(), settings.texture_workers)
for planet in result.scene.planets:
    tex_path = path.parent / f"{path.stem}_planet{planet.index}_{planet.planet_type.name}.png"
    save_texture_png(textures[planet.index], tex_path)
    print(f"Saved: {tex_path}")
