"""Project metadata in pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def _project() -> dict:
    with open(ROOT / "pyproject.toml", "rb") as fh:
        return tomllib.load(fh)["project"]


def test_readme_points_at_an_existing_file() -> None:
    readme = _project().get("readme")
    if readme is not None:
        assert (ROOT / readme).is_file()
        assert not readme.startswith("SPEC")


def test_runtime_stack_is_declared() -> None:
    names = {dep.split(">")[0].split("=")[0] for dep in _project()["dependencies"]}
    assert {"loguru", "pygame", "rich", "typer"} <= names
