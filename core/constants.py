"""Shared constants used by the report CLI."""

from __future__ import annotations

import os
from typing import Tuple

# -----------------------------------------------------------------------------
# Config paths
# -----------------------------------------------------------------------------

APP_CONFIG_DIR = "swim-reports"
LOCATIONS_FILENAME = "locations.yaml"
LOCATIONS_ENV = "REPORTS_LOCATIONS"


def _config_roots() -> list[str]:
    """Return ordered list of config root directories."""
    roots: list[str] = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        roots.append(os.path.expanduser(xdg))
    roots.append(os.path.expanduser("~/.config"))
    return roots


def locations_config_paths() -> list[str]:
    """Return ordered list of known-locations YAML paths to search."""
    paths: list[str] = []

    # Environment override first
    env_path = os.environ.get(LOCATIONS_ENV)
    if env_path:
        paths.append(os.path.expanduser(env_path))

    for root in _config_roots():
        paths.append(os.path.join(root, APP_CONFIG_DIR, LOCATIONS_FILENAME))

    # Dedupe while preserving order
    seen: set[str] = set()
    unique: list[str] = []
    for p in paths:
        if p and p not in seen:
            seen.add(p)
            unique.append(p)
    return unique


# -----------------------------------------------------------------------------
# HTTP and timeouts
# -----------------------------------------------------------------------------

# Default timeout for HTTP requests: (connect_seconds, read_seconds)
DEFAULT_REQUEST_TIMEOUT: Tuple[int, int] = (10, 30)

# Report files picked up by directory scans
REPORT_FILE_SUFFIXES = (".html", ".htm")
