"""Merge per-file observations into one authoritative outcome set.

A test case may be reported many times because of re-runs. Classification
depends only on which outcomes are present for an id, never on file order
or timestamps:

- at least one passing report: passed, whatever failures exist;
- only failing reports: failed;
- no report but listed in the manifest: remaining.

An observed id that is missing from the manifest is fatal
(``UnknownTestCaseError``). The same rule applies in ``filter_manifest``.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from tareconcile.diagnostics import (
    FAILED_MULTIPLE_TIMES,
    FAILED_THEN_PASSED,
    UNKNOWN_TEST_CASE,
    Diagnostics,
)
from tareconcile.errors import UnknownTestCaseError
from tareconcile.logging import get_logger
from tareconcile.model.outcome import Observation, Outcome, OutcomeSet

logger = get_logger(__name__)


def group_observations(
    observations: Iterable[Observation],
) -> Dict[str, Dict[Outcome, int]]:
    """Count observations per test-case id and outcome."""
    grouped: Dict[str, Dict[Outcome, int]] = defaultdict(
        lambda: {Outcome.PASSED: 0, Outcome.FAILED: 0}
    )
    for obs in observations:
        grouped[obs.test_case_id][obs.outcome] += 1
    return dict(grouped)


def reconcile(
    observations: Iterable[Observation],
    manifest_ids: Iterable[str],
    diagnostics: Optional[Diagnostics] = None,
) -> OutcomeSet:
    """Classify every manifest id as passed, failed or remaining.

    Args:
        observations: Classified report files, in any order. Repeats allowed.
        manifest_ids: All test-case ids of the master manifest.
        diagnostics: Optional collector for counters and anomaly events.

    Returns:
        Disjoint outcome set covering exactly the manifest ids.

    Raises:
        UnknownTestCaseError: If any observed id is not a manifest id.
    """
    diag = diagnostics if diagnostics is not None else Diagnostics()
    known = set(manifest_ids)
    grouped = group_observations(observations)

    unknown = sorted(tc_id for tc_id in grouped if tc_id not in known)
    if unknown:
        diag.record(
            UNKNOWN_TEST_CASE, "Reported test cases missing from master", unknown
        )
        raise UnknownTestCaseError(unknown, context="report files")

    passed: List[str] = []
    failed: List[str] = []
    failed_repeatedly: List[str] = []
    failed_then_passed: List[str] = []

    for tc_id, counts in grouped.items():
        n_pass = counts[Outcome.PASSED]
        n_fail = counts[Outcome.FAILED]
        if n_fail > 1:
            failed_repeatedly.append(tc_id)
        if n_pass:
            passed.append(tc_id)
            if n_fail:
                failed_then_passed.append(tc_id)
        else:
            failed.append(tc_id)

    if failed_repeatedly:
        diag.record(FAILED_MULTIPLE_TIMES, "Failed multiple times", failed_repeatedly)
    if failed_then_passed:
        diag.record(
            FAILED_THEN_PASSED, "Failed and later passed", failed_then_passed
        )

    remaining = known.difference(passed, failed)
    outcomes = OutcomeSet(
        passed=frozenset(passed),
        failed=frozenset(failed),
        remaining=frozenset(remaining),
    )

    for name, value in outcomes.counts().items():
        diag.count(name, value)
    logger.debug(
        "Reconciled %d observed ids against %d manifest ids",
        len(grouped),
        len(known),
    )
    return outcomes
