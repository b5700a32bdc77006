"""Utility helpers used across tareconcile.

This package contains small, self-contained utilities that do not depend on
the reconciliation logic.
"""

from tareconcile.utils.output_paths import (
    ensure_parent_dir,
    output_dir_for_run,
    output_paths_for_run,
    resolve_under_root,
)

__all__ = [
    "ensure_parent_dir",
    "output_dir_for_run",
    "output_paths_for_run",
    "resolve_under_root",
]
