"""
Shape files for polygons.

A shape file holds the boundary walk of one polygon, either as a bare list
of ``[x, y]`` pairs or as a mapping with a ``points`` key. JSON and YAML
are supported, chosen by file extension.

Example YAML format:
    points:
      - [0, 0]
      - [0, 1]
      - [1, 1]
      - [1, 0]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from polygeom.exceptions import FileFormatError
from polygeom.polygon import Polygon

__all__ = ["load_polygon", "save_polygon", "polygon_to_dict", "SUPPORTED_SUFFIXES"]

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def _read_data(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise FileFormatError(
            f"Unsupported shape file type: {suffix or '(none)'}",
            file_path=path,
            suggestions=[f"Use one of: {', '.join(SUPPORTED_SUFFIXES)}"],
        )

    try:
        with open(path) as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise FileFormatError("Shape file not found", file_path=path) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise FileFormatError(
            "Shape file could not be parsed",
            context={"reason": str(e)},
            file_path=path,
        ) from e


def _parse_points(data: Any, path: Path) -> list[tuple[float, float]]:
    if isinstance(data, dict):
        if "points" not in data:
            raise FileFormatError(
                "Shape mapping has no 'points' key",
                context={"keys": ", ".join(map(str, data))},
                file_path=path,
            )
        data = data["points"]

    if not isinstance(data, list):
        raise FileFormatError(
            "Expected a list of [x, y] pairs",
            context={"found": type(data).__name__},
            file_path=path,
        )

    points = []
    for index, item in enumerate(data):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise FileFormatError(
                "Point is not an [x, y] pair",
                context={"index": index, "value": repr(item)},
                file_path=path,
            )
        try:
            points.append((float(item[0]), float(item[1])))
        except (TypeError, ValueError) as e:
            raise FileFormatError(
                "Point coordinates must be numbers",
                context={"index": index, "value": repr(item)},
                file_path=path,
            ) from e
    return points


def load_polygon(path: str | Path) -> Polygon:
    """
    Load a polygon from a JSON or YAML shape file.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        The polygon, normalized to clockwise winding

    Raises:
        FileFormatError: If the file is missing, unparseable or malformed
        InvalidPolygonError: If the points do not form a valid polygon
    """
    path = Path(path)
    return Polygon(_parse_points(_read_data(path), path))


def polygon_to_dict(polygon: Polygon) -> dict[str, Any]:
    """Serializable mapping form: ``{"points": [[x, y], ...]}``."""
    return {"points": [[v.x, v.y] for v in polygon.vertices]}


def save_polygon(polygon: Polygon, path: str | Path) -> None:
    """
    Write a polygon to a shape file.

    The format follows the file extension.

    Args:
        polygon: Polygon to save
        path: Output file path
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise FileFormatError(
            f"Unsupported shape file type: {suffix or '(none)'}",
            file_path=path,
            suggestions=[f"Use one of: {', '.join(SUPPORTED_SUFFIXES)}"],
        )

    data = polygon_to_dict(polygon)
    with open(path, "w") as f:
        if suffix == ".json":
            json.dump(data, f, indent=2)
            f.write("\n")
        else:
            yaml.dump(data, f, default_flow_style=None, sort_keys=False)
