"""End-to-end reconciliation of one run directory.

``analyze_run`` performs every read-only step: setup checks, master
discovery, report scan, reconciliation and filtering. ``run_reconciliation``
adds the export. All three documents are serialized before the first file
is written so that a failure during serialization leaves no partial output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from tareconcile.classify import FilenameClassifier
from tareconcile.config import ReconcileConfig
from tareconcile.diagnostics import Diagnostics
from tareconcile.discovery import (
    check_dir_exists,
    find_master_file,
    scan_reports,
    split_by_outcome,
)
from tareconcile.errors import ExportError
from tareconcile.filter import split_manifest
from tareconcile.logging import get_logger
from tareconcile.manifest_io import load_manifest, manifest_to_xml, write_manifest
from tareconcile.model.manifest import Manifest
from tareconcile.model.outcome import CLASSIFICATIONS, OutcomeSet
from tareconcile.reconcile import reconcile
from tareconcile.utils.output_paths import (
    ensure_parent_dir,
    output_dir_for_run,
    output_paths_for_run,
)

logger = get_logger(__name__)


@dataclass
class RunResult:
    """Everything one run produced.

    Attributes:
        root: Run root directory.
        master_path: Master manifest that was used.
        manifest: Parsed master manifest.
        outcomes: Reconciled outcome set.
        derived: Filtered manifests keyed by classification.
        written: Output paths keyed by classification; empty if nothing was
            written.
        diagnostics: Events and counters collected during the run.
    """

    root: Path
    master_path: Path
    manifest: Manifest
    outcomes: OutcomeSet
    derived: Dict[str, Manifest]
    diagnostics: Diagnostics
    written: Dict[str, Path] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "master": str(self.master_path),
            "plan": {
                "project_id": self.manifest.project_id,
                "plan_id": self.manifest.plan_id,
                "build_result": self.manifest.build_result,
                "verification_loop": self.manifest.verification_loop,
                "entries": len(self.manifest),
            },
            "counts": self.outcomes.counts(),
            "outcomes": self.outcomes.to_dict(),
            "outputs": {name: str(path) for name, path in self.written.items()},
            "diagnostics": self.diagnostics.to_dict(),
        }


def analyze_run(
    root: Path,
    config: Optional[ReconcileConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> RunResult:
    """Reconcile the reports under ``root`` without writing anything.

    Raises:
        SetupError: Missing report folder, or zero or several master files.
        ManifestParseError: Master manifest cannot be read or parsed.
        UnknownTestCaseError: A report names an id the manifest lacks.
    """
    config = config or ReconcileConfig()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    report_dirs = [root / name for name in config.report_dirs]
    for directory in report_dirs:
        check_dir_exists(directory)

    master_path = find_master_file(root, config.master_pattern)
    manifest = load_manifest(master_path)
    diagnostics.count("manifest_entries", len(manifest))

    classifier = FilenameClassifier(
        prefix=config.report_prefix, pass_token=config.pass_token
    )
    observations = scan_reports(report_dirs, classifier, diagnostics)
    passed_ids, failed_ids = split_by_outcome(observations)
    logger.debug(f"Passed {passed_ids}")
    logger.debug(f"Failed {failed_ids}")

    outcomes = reconcile(observations, manifest.ids(), diagnostics)
    derived = split_manifest(manifest, outcomes)

    return RunResult(
        root=root,
        master_path=master_path,
        manifest=manifest,
        outcomes=outcomes,
        derived=derived,
        diagnostics=diagnostics,
    )


def run_reconciliation(
    root: Path,
    config: Optional[ReconcileConfig] = None,
    output_dir: Optional[Path] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> RunResult:
    """Reconcile the reports under ``root`` and write the derived manifests.

    Args:
        root: Run root holding the master manifest and report folders.
        config: Run configuration; defaults when None.
        output_dir: Overrides the configured output directory.
        diagnostics: Collector for run events; a new one when None.

    Raises:
        ReconcileError: Any fatal condition; see ``analyze_run``. Write
            failures raise ``ExportError``.
    """
    config = config or ReconcileConfig()
    result = analyze_run(root, config, diagnostics)

    target_dir = output_dir_for_run(root, config.output_dir, output_dir)
    paths = output_paths_for_run(target_dir, config.outputs)
    texts = {name: manifest_to_xml(result.derived[name]) for name in CLASSIFICATIONS}

    for name in CLASSIFICATIONS:
        path = paths[name]
        try:
            ensure_parent_dir(path)
        except OSError as exc:
            raise ExportError(path, exc) from exc
        write_manifest(result.derived[name], path, text=texts[name])
        result.written[name] = path
    return result
