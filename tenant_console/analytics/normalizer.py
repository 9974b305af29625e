"""
Route normalization for request paths.

Concrete request paths are folded into route templates so that
``/tenants/42`` and ``/tenants/7`` count as the same endpoint.
"""

import re
from typing import Optional


UNKNOWN_PATH = "/unknown"
ID_PLACEHOLDER = ":id"

# Canonical UUID: version nibble 1-5, variant nibble 8/9/a/b.
# Paths are lowercased before matching.
UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"
)

# A segment made only of digits, up to the next separator or end of path
NUMERIC_SEGMENT_PATTERN = re.compile(r"/[0-9]+(?=[/?#]|$)")

TRAILING_SLASHES_PATTERN = re.compile(r"/+$")


def normalize_path(path: Optional[str]) -> str:
    """
    Canonicalize a raw request path into a route template.

    Args:
        path: Raw request path, possibly None or empty

    Returns:
        Lowercased path with UUIDs and numeric segments replaced by
        ``:id`` and trailing slashes removed; ``/unknown`` when nothing
        usable is left
    """
    if not path:
        return UNKNOWN_PATH

    normalized = path.lower()
    normalized = UUID_PATTERN.sub(ID_PLACEHOLDER, normalized)
    normalized = NUMERIC_SEGMENT_PATTERN.sub("/" + ID_PLACEHOLDER, normalized)
    normalized = TRAILING_SLASHES_PATTERN.sub("", normalized)

    return normalized or UNKNOWN_PATH
