"""tareconcile: reconcile test reports against a master test plan.

Given a run directory with one ``master_*.xml`` test-plan manifest and
folders of report files named ``report_<id>_<STATUS>_<suffix>``, tareconcile
splits the master into ``passed.xml``, ``failed.xml`` and ``remaining.xml``.
A test case that passed at least once counts as passed, even if other
reports for it failed.

Primary API:
    run_reconciliation() - Full run including export of derived manifests
    analyze_run() - Same without writing files
    reconcile() - Outcome set from observations and manifest ids
    filter_manifest() - Manifest restricted to a set of ids
    classify_filename() - Observation from one report file name

Example:
    from pathlib import Path
    from tareconcile import run_reconciliation

    result = run_reconciliation(Path("."))
    print(result.outcomes.counts())
"""

from __future__ import annotations

from tareconcile import cli, logging
from tareconcile._version import __version__
from tareconcile.classify import FilenameClassifier, classify_filename
from tareconcile.config import ReconcileConfig, load_config
from tareconcile.diagnostics import DiagnosticEvent, Diagnostics
from tareconcile.errors import (
    ExportError,
    ManifestParseError,
    ReconcileError,
    SetupError,
    UnknownTestCaseError,
)
from tareconcile.filter import filter_manifest, split_manifest
from tareconcile.manifest_io import (
    load_manifest,
    manifest_to_xml,
    parse_manifest,
    write_manifest,
)
from tareconcile.model import Manifest, ManifestEntry, Observation, Outcome, OutcomeSet
from tareconcile.reconcile import reconcile
from tareconcile.runner import RunResult, analyze_run, run_reconciliation

__all__ = [
    # Version
    "__version__",
    # Model
    "Manifest",
    "ManifestEntry",
    "Observation",
    "Outcome",
    "OutcomeSet",
    # Core
    "FilenameClassifier",
    "classify_filename",
    "reconcile",
    "filter_manifest",
    "split_manifest",
    # Manifest I/O
    "parse_manifest",
    "load_manifest",
    "manifest_to_xml",
    "write_manifest",
    # Runs
    "ReconcileConfig",
    "load_config",
    "RunResult",
    "analyze_run",
    "run_reconciliation",
    "Diagnostics",
    "DiagnosticEvent",
    # Errors
    "ReconcileError",
    "SetupError",
    "ManifestParseError",
    "UnknownTestCaseError",
    "ExportError",
    # Utilities
    "cli",
    "logging",
]
