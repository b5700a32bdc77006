"""Data model for manifests and reconciliation outcomes."""

from __future__ import annotations

from tareconcile.model.manifest import Manifest, ManifestEntry
from tareconcile.model.outcome import Observation, Outcome, OutcomeSet

__all__ = [
    "Manifest",
    "ManifestEntry",
    "Observation",
    "Outcome",
    "OutcomeSet",
]
