from __future__ import annotations

import tomllib
from pathlib import Path

_PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


def _project() -> dict:
    with _PYPROJECT.open("rb") as f:
        return tomllib.load(f)["project"]


def test_runtime_libraries_are_declared() -> None:
    names = {dep.split(">")[0].split("=")[0].strip() for dep in _project()["dependencies"]}

    assert {"numpy", "matplotlib", "plotly", "pydantic-settings", "python-dotenv", "streamlit"} <= names


def test_no_readme_points_at_design_notes() -> None:
    assert _project().get("readme") in (None, "README.md")
