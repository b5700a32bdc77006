"""Locate the master manifest and report files under a run root."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from tareconcile.classify import FilenameClassifier
from tareconcile.diagnostics import SKIPPED_FILE, Diagnostics
from tareconcile.errors import SetupError
from tareconcile.logging import get_logger
from tareconcile.model.outcome import Observation, Outcome

logger = get_logger(__name__)

DEFAULT_MASTER_PATTERN = r"^master_.*?\.xml$"


def check_dir_exists(path: Path) -> None:
    """Raise ``SetupError`` unless ``path`` is an existing directory."""
    if not path.is_dir():
        raise SetupError(f"'{path.name}' folder does not exist in {path.parent}. Please create it!")


def find_master_file(root: Path, pattern: str = DEFAULT_MASTER_PATTERN) -> Path:
    """Return the single file directly under ``root`` matching ``pattern``.

    Raises:
        SetupError: If ``root`` is not a directory, or if zero or more than
            one file matches.
    """
    check_dir_exists(root)
    try:
        master_re = re.compile(pattern)
    except re.error as exc:
        raise SetupError(f"Invalid master file pattern {pattern!r}: {exc}") from exc

    candidates = sorted(
        entry.name
        for entry in root.iterdir()
        if entry.is_file() and master_re.search(entry.name)
    )
    if not candidates:
        raise SetupError(
            f"Couldn't find master file matching {pattern!r} in {root}. "
            "Please make sure it is in the run directory."
        )
    if len(candidates) > 1:
        raise SetupError(
            f"Found {len(candidates)} master files in {root}: "
            f"{', '.join(candidates)}. Keep exactly one."
        )
    logger.info(f"Found master file '{candidates[0]}'")
    return root / candidates[0]


def iter_files(root: Path) -> Iterator[Path]:
    """Yield regular files under ``root`` recursively, in sorted order.

    Walk errors propagate.
    """

    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def scan_reports(
    report_dirs: Iterable[Path],
    classifier: Optional[FilenameClassifier] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> List[Observation]:
    """Classify every file under ``report_dirs``.

    Each directory must exist. Files whose names are not report names are
    skipped and counted.

    Returns:
        Observations in walk order.
    """
    classifier = classifier or FilenameClassifier()
    observations: List[Observation] = []
    skipped: List[str] = []

    for directory in report_dirs:
        check_dir_exists(directory)
        found = 0
        for path in iter_files(directory):
            obs = classifier.classify(path.name, source=str(path))
            if obs is None:
                skipped.append(str(path))
                continue
            observations.append(obs)
            found += 1
        logger.debug("Classified %d report file(s) under %s", found, directory)

    if diagnostics is not None:
        diagnostics.count("report_files", len(observations))
        diagnostics.count("skipped_files", len(skipped))
        if skipped:
            diagnostics.record(SKIPPED_FILE, "Skipped non-report files", skipped)
    for name in skipped:
        logger.debug(f"Skipping non-report file: {name}")
    return observations


def split_by_outcome(observations: Iterable[Observation]) -> Tuple[List[str], List[str]]:
    """Return (passed ids, failed ids) as observed, repeats included."""
    passed: List[str] = []
    failed: List[str] = []
    for obs in observations:
        (passed if obs.outcome is Outcome.PASSED else failed).append(obs.test_case_id)
    return passed, failed
