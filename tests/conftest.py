"""Pytest fixtures for polygeom tests."""

import json

import pytest

from polygeom import Polygon, Rectangle


@pytest.fixture
def unit_square() -> Polygon:
    """Clockwise unit square with its first edge running up the y axis."""
    return Polygon([(0, 0), (0, 1), (1, 1), (1, 0)])


@pytest.fixture
def diamond() -> Polygon:
    """Diamond centred on the origin with vertices on the axes."""
    return Polygon([(-1, 0), (0, 1), (1, 0), (0, -1)])


@pytest.fixture
def two_square() -> Polygon:
    """Square spanning (0, 0) to (2, 2)."""
    return Rectangle(0, 0, 2, 2).to_polygon()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run inside an empty project directory with no user config.

    The ``.git`` marker stops the project config search at ``tmp_path``.
    """
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("polygeom.config.USER_CONFIG_PATH", tmp_path / "no-user-config.toml")
    return tmp_path


@pytest.fixture
def write_shape(tmp_path):
    """Factory writing a list of points to a JSON shape file."""

    def _write(name: str, points) -> str:
        path = tmp_path / name
        path.write_text(json.dumps([list(p) for p in points]))
        return str(path)

    return _write
