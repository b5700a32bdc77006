"""Reconciliation properties and the reference scenarios."""

import itertools
import random

import pytest

from tareconcile.classify import classify_filename
from tareconcile.diagnostics import (
    FAILED_MULTIPLE_TIMES,
    FAILED_THEN_PASSED,
    UNKNOWN_TEST_CASE,
    Diagnostics,
)
from tareconcile.errors import UnknownTestCaseError
from tareconcile.reconcile import group_observations, reconcile

MANIFEST_IDS = ["T1-1", "T2-1", "T3-1", "T4-1"]


def _observe(*names: str):
    observations = [classify_filename(name) for name in names]
    assert all(obs is not None for obs in observations)
    return observations


def test_basic_split() -> None:
    outcomes = reconcile(
        _observe("report_T1-1_PASS_x", "report_T2-1_FAIL_x"),
        ["T1-1", "T2-1", "T3-1"],
    )
    assert outcomes.passed == {"T1-1"}
    assert outcomes.failed == {"T2-1"}
    assert outcomes.remaining == {"T3-1"}


@pytest.mark.parametrize(
    "names",
    list(itertools.permutations(["report_T1-1_FAIL_a", "report_T1-1_PASS_b"])),
)
def test_pass_overrides_fail_in_any_order(names) -> None:
    outcomes = reconcile(_observe(*names), ["T1-1"])
    assert outcomes.passed == {"T1-1"}
    assert outcomes.failed == frozenset()


def test_later_failure_does_not_revoke_pass() -> None:
    outcomes = reconcile(
        _observe("report_T1-1_PASS_1", "report_T1-1_FAIL_2", "report_T1-1_ERROR_3"),
        ["T1-1"],
    )
    assert outcomes.passed == {"T1-1"}


def test_properties_hold_for_random_report_sets() -> None:
    rng = random.Random(7)
    statuses = ["PASS", "FAIL", "ERROR"]
    for _ in range(50):
        names = [
            f"report_{rng.choice(MANIFEST_IDS)}_{rng.choice(statuses)}_{i}"
            for i in range(rng.randint(0, 12))
        ]
        observations = _observe(*names)
        outcomes = reconcile(observations, MANIFEST_IDS)

        assert not (outcomes.passed & outcomes.failed)
        assert outcomes.passed | outcomes.failed | outcomes.remaining == set(MANIFEST_IDS)
        assert not (outcomes.remaining & (outcomes.passed | outcomes.failed))

        shuffled = list(observations)
        rng.shuffle(shuffled)
        assert reconcile(shuffled, MANIFEST_IDS) == outcomes


def test_no_observations_leaves_everything_remaining() -> None:
    outcomes = reconcile([], MANIFEST_IDS)
    assert outcomes.remaining == set(MANIFEST_IDS)
    assert not outcomes.passed and not outcomes.failed


def test_diagnostics_track_repeats_and_recoveries() -> None:
    diag = Diagnostics()
    outcomes = reconcile(
        _observe(
            "report_T1-1_FAIL_a",
            "report_T1-1_FAIL_b",
            "report_T2-1_FAIL_a",
            "report_T2-1_PASS_b",
            "report_T3-1_FAIL_a",
            "report_T3-1_FAIL_b",
            "report_T3-1_PASS_c",
        ),
        MANIFEST_IDS,
        diag,
    )

    assert diag.subjects_of(FAILED_MULTIPLE_TIMES) == ["T1-1", "T3-1"]
    assert diag.subjects_of(FAILED_THEN_PASSED) == ["T2-1", "T3-1"]
    # Diagnostics are informational only
    assert outcomes.passed == {"T2-1", "T3-1"}
    assert outcomes.failed == {"T1-1"}
    assert diag.counters == {"passed": 2, "failed": 1, "remaining": 1}


def test_unknown_id_is_fatal_and_recorded() -> None:
    diag = Diagnostics()
    with pytest.raises(UnknownTestCaseError) as exc_info:
        reconcile(
            _observe("report_T1-1_PASS_x", "report_Z9-9_FAIL_x", "report_Z1-1_PASS_x"),
            ["T1-1"],
            diag,
        )
    assert exc_info.value.ids == ["Z1-1", "Z9-9"]
    assert "Z9-9" in str(exc_info.value)
    assert diag.subjects_of(UNKNOWN_TEST_CASE) == ["Z1-1", "Z9-9"]


def test_group_observations_counts_per_outcome() -> None:
    grouped = group_observations(
        _observe("report_T1-1_PASS_a", "report_T1-1_FAIL_b", "report_T1-1_FAIL_c")
    )
    counts = grouped["T1-1"]
    assert sorted(v for v in counts.values()) == [1, 2]
