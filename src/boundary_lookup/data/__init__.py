"""Dataset constants for boundary-lookup.

Loading functions live in boundary_lookup.data.loader and are exported from
the package root.
"""

from boundary_lookup.data.constants import DATA_ENV_VAR, UNKNOWN, default_dataset_path

__all__ = [
    "DATA_ENV_VAR",
    "UNKNOWN",
    "default_dataset_path",
]
