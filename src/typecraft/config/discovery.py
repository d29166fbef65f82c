"""Locate ``typecraft.toml``.

The nearest file walking up from the start directory wins, the way git
finds ``.git/``. ``TYPECRAFT_CONFIG`` names a file directly and disables
the search.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "typecraft.toml"
CONFIG_ENV_VAR = "TYPECRAFT_CONFIG"


def config_candidates(start: Path | None = None) -> Iterator[Path]:
    """Yield candidate paths from *start* (default: cwd) up to the root."""
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file to use, or None.

    A ``TYPECRAFT_CONFIG`` value pointing at a missing file yields None
    rather than falling back to the search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((p for p in config_candidates(start) if p.is_file()), None)
