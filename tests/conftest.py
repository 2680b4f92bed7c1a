"""Pytest fixtures for boundary-lookup tests."""

import ast
import json
import re
from pathlib import Path

import pytest


# =============================================================================
# Import enforcement: tests should only use the public API
# =============================================================================

# Allowed import patterns for boundary_lookup
# - "boundary_lookup" (the public API)
# - "boundary_lookup.cli" or "boundary_lookup.cli.commands" (CLI testing is allowed)
ALLOWED_IMPORT_PATTERNS = [
    r"^boundary_lookup$",  # Public API root
    r"^boundary_lookup\.cli(\..+)?$",  # CLI module and submodules
]


def _is_allowed_import(module_name: str) -> bool:
    """Check if a boundary_lookup import is allowed."""
    if not module_name.startswith("boundary_lookup"):
        return True  # Not a boundary_lookup import, always allowed
    return any(re.match(pattern, module_name) for pattern in ALLOWED_IMPORT_PATTERNS)


def _check_file_imports(filepath: Path) -> list[str]:
    """Check a test file for disallowed internal imports.

    Returns list of error messages for any violations found.
    """
    try:
        content = filepath.read_text()
        tree = ast.parse(content)
    except (SyntaxError, UnicodeDecodeError):
        return []  # Skip files that can't be parsed

    errors = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if not _is_allowed_import(alias.name):
                    errors.append(
                        f"{filepath}:{node.lineno}: "
                        f"Internal import not allowed: 'import {alias.name}'. "
                        f"Use 'from boundary_lookup import ...' instead."
                    )
        elif isinstance(node, ast.ImportFrom):
            if node.module and not _is_allowed_import(node.module):
                names = ", ".join(a.name for a in node.names)
                errors.append(
                    f"{filepath}:{node.lineno}: "
                    f"Internal import not allowed: 'from {node.module} import {names}'. "
                    f"Use 'from boundary_lookup import ...' instead."
                )
    return errors


def pytest_collect_file(parent, file_path):
    """Check test files for internal imports during collection."""
    if file_path.suffix == ".py" and file_path.name.startswith("test_"):
        errors = _check_file_imports(file_path)
        if errors:
            error_msg = "\n".join(errors)
            pytest.fail(
                f"\n\nInternal import violations detected:\n{error_msg}\n\n"
                "Tests should only import from the public API:\n"
                "  - from boundary_lookup import BoundaryLookup, SearchIndex, ...\n"
                "  - from boundary_lookup.cli.commands import cli  (for CLI tests)\n"
            )


# =============================================================================
# Feature builders
# =============================================================================


def square(west, south, east, north):
    """Closed counter-clockwise ring of (lon, lat) pairs."""
    return [[west, south], [east, south], [east, north], [west, north], [west, south]]


def feature_dict(names, ids, rings=None, polygons=None):
    """GeoJSON Feature mapping with NAME_0..NAME_5 and ID_0..ID_5."""
    properties = {f"NAME_{i}": name for i, name in enumerate(names)}
    properties.update({f"ID_{i}": value for i, value in enumerate(ids)})
    if polygons is not None:
        geometry = {"type": "MultiPolygon", "coordinates": polygons}
    else:
        geometry = {"type": "Polygon", "coordinates": rings}
    return {"type": "Feature", "geometry": geometry, "properties": properties}


@pytest.fixture
def make_feature():
    """Factory for GeoJSON Feature mappings."""
    return feature_dict


@pytest.fixture
def make_square():
    """Factory for square rings."""
    return square


@pytest.fixture
def sample_collection():
    """
    Six villages in two provinces.

    0  Rugando   Kigali City / Gasabo / Remera / Rukiri I
    1  Amahoro   Kigali City / Gasabo / Remera / Rukiri I
    2  Kabeza    Kigali City / Gasabo / Remera / Nyabisindu   (square with a hole)
    3  Kigali    Kigali City / Nyarugenge / Nyarugenge / Kigali (two-part multipolygon)
    4  Rugando   Southern Province / Huye / Huye / Gako
    5  Café      Southern Province / Huye / Ngoma / Ngoma
    """
    kigali = ("Rwanda", "Kigali City")
    southern = ("Rwanda", "Southern Province")
    return {
        "type": "FeatureCollection",
        "features": [
            feature_dict(
                kigali + ("Gasabo", "Remera", "Rukiri I", "Rugando"),
                (1, 1, 1, 1, 1, 1),
                rings=[square(30.0, -2.0, 30.1, -1.9)],
            ),
            feature_dict(
                kigali + ("Gasabo", "Remera", "Rukiri I", "Amahoro"),
                (1, 1, 1, 1, 1, 2),
                rings=[square(30.1, -2.0, 30.2, -1.9)],
            ),
            feature_dict(
                kigali + ("Gasabo", "Remera", "Nyabisindu", "Kabeza"),
                (1, 1, 1, 1, 2, 3),
                rings=[square(30.0, -1.9, 30.1, -1.8), square(30.04, -1.86, 30.06, -1.84)],
            ),
            feature_dict(
                kigali + ("Nyarugenge", "Nyarugenge", "Kigali", "Kigali"),
                (1, 1, 2, 2, 3, 4),
                polygons=[
                    [square(30.2, -2.0, 30.3, -1.9)],
                    [square(30.2, -1.8, 30.3, -1.7)],
                ],
            ),
            feature_dict(
                southern + ("Huye", "Huye", "Gako", "Rugando"),
                (1, 2, 3, 3, 4, 5),
                rings=[square(29.7, -2.6, 29.8, -2.5)],
            ),
            feature_dict(
                southern + ("Huye", "Ngoma", "Ngoma", "Café"),
                (1, 2, 3, 4, 5, 6),
                rings=[square(29.8, -2.6, 29.9, -2.5)],
            ),
        ],
    }


@pytest.fixture
def sample_features(sample_collection):
    """Sample collection as Feature objects."""
    from boundary_lookup import features_from_geojson

    return features_from_geojson(sample_collection)


@pytest.fixture
def sample_geojson_path(tmp_path, sample_collection):
    """Sample collection written to a GeoJSON file."""
    path = tmp_path / "villages.geojson"
    path.write_text(json.dumps(sample_collection, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def twin_cells():
    """
    Two Cell-level features named "Kigali" in sectors "A" and "B" of
    district "X". Village names are blank, so no Village entries exist.
    """
    return [
        feature_dict(
            ("Rwanda", "P", "X", sector, "Kigali", " "),
            (1, 1, 1, i, i, 0),
            rings=[square(i, 0, i + 1, 1)],
        )
        for i, sector in enumerate(("A", "B"))
    ]
