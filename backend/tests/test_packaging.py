from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")
setuptools = pytest.importorskip("setuptools")

ROOT = Path(__file__).resolve().parents[2]


def test_wheel_ships_the_app_but_not_the_tests():
    config = tomllib.loads((ROOT / "pyproject.toml").read_text())
    find = config["tool"]["setuptools"]["packages"]["find"]

    packages = setuptools.find_namespace_packages(
        where=str(ROOT),
        include=find["include"],
        exclude=find.get("exclude", []),
    )

    assert "backend.app" in packages
    assert "backend.app.api.endpoints" in packages
    assert not [p for p in packages if p.startswith("backend.tests")]
