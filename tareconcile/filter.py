"""Derive filtered manifests from the master manifest."""

from __future__ import annotations

from typing import AbstractSet, Dict

from tareconcile.errors import UnknownTestCaseError
from tareconcile.model.manifest import Manifest
from tareconcile.model.outcome import CLASSIFICATIONS, OutcomeSet


def filter_manifest(manifest: Manifest, ids: AbstractSet[str]) -> Manifest:
    """Return a manifest holding only the entries whose id is in ``ids``.

    Entries keep their master order and field values; plan metadata is
    copied unchanged.

    Raises:
        UnknownTestCaseError: If ``ids`` names an id the manifest lacks.
    """
    missing = set(ids).difference(manifest.ids())
    if missing:
        raise UnknownTestCaseError(missing, context="manifest filter")
    return manifest.with_entries(
        entry for entry in manifest.entries if entry.test_case_id in ids
    )


def split_manifest(manifest: Manifest, outcomes: OutcomeSet) -> Dict[str, Manifest]:
    """Return the passed, failed and remaining manifests keyed by name."""
    return {
        name: filter_manifest(manifest, outcomes.get(name)) for name in CLASSIFICATIONS
    }
