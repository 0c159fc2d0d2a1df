"""prwatch package exports."""

from __future__ import annotations

from importlib import metadata as _importlib_metadata

try:
    __version__ = _importlib_metadata.version("prwatch")
except _importlib_metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    __version__ = "0.0.0"

__all__ = ["__version__"]
