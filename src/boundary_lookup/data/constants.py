"""Dataset attribute names and configuration defaults."""

from pathlib import Path
from typing import Tuple

# Hierarchy name attributes, country (0) through village (5)
NAME_KEYS: Tuple[str, ...] = ("NAME_0", "NAME_1", "NAME_2", "NAME_3", "NAME_4", "NAME_5")

# Matching identifier attributes
ID_KEYS: Tuple[str, ...] = ("ID_0", "ID_1", "ID_2", "ID_3", "ID_4", "ID_5")

# Substituted for missing, null or empty attributes
UNKNOWN = "Unknown"

# Joins ancestor names in display breadcrumbs
PARENT_SEPARATOR = " • "

# Joins ancestor names in matching keys
PARENT_KEY_SEPARATOR = "|"

# Default dataset location
DEFAULT_DATA_DIR = Path.home() / ".boundary-lookup"
DEFAULT_DATASET = "boundaries.geojson"

# Environment variable read by the CLI for the dataset path
DATA_ENV_VAR = "BOUNDARY_LOOKUP_DATA"

# Geometry types the index can test for containment
POLYGON_TYPES = ("Polygon", "MultiPolygon")


def default_dataset_path() -> Path:
    """Return the dataset path used when none is configured."""
    return DEFAULT_DATA_DIR / DEFAULT_DATASET
