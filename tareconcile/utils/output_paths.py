"""Utilities for building run artifact paths.

Paths in the configuration are relative to the run root. Values given on
the command line are relative to the current working directory, like any
other CLI path, so they are resolved by the caller before reaching here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from tareconcile.model.outcome import CLASSIFICATIONS


def resolve_under_root(root: Path, value: Optional[str]) -> Optional[Path]:
    """Resolve a config path value against ``root``.

    - None stays None.
    - Absolute paths are returned as-is.
    - Relative paths are joined to ``root``.
    """
    if value is None:
        return None
    path = Path(value)
    if path.is_absolute():
        return path
    return root / path


def output_dir_for_run(
    root: Path, configured: Optional[str], override: Optional[Path]
) -> Path:
    """Return the directory derived manifests are written to.

    ``override`` (from the command line) wins over ``configured`` (from the
    config file); with neither, outputs go to ``root``.
    """
    if override is not None:
        return override
    return resolve_under_root(root, configured) or root


def output_paths_for_run(output_dir: Path, names: Dict[str, str]) -> Dict[str, Path]:
    """Map each classification to its output file under ``output_dir``."""
    return {
        name: output_dir / names.get(name, f"{name}.xml") for name in CLASSIFICATIONS
    }


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)
