import pytest

from tareconcile.model import OutcomeSet


def test_outcome_set_rejects_overlap() -> None:
    with pytest.raises(ValueError, match="disjoint"):
        OutcomeSet(passed=frozenset({"T1-1"}), failed=frozenset({"T1-1"}))


def test_counts_and_to_dict_are_sorted() -> None:
    outcomes = OutcomeSet(
        passed=frozenset({"T3-1", "T1-1"}),
        failed=frozenset({"T2-1"}),
        remaining=frozenset(),
    )
    assert outcomes.counts() == {"passed": 2, "failed": 1, "remaining": 0}
    assert outcomes.to_dict() == {
        "passed": ["T1-1", "T3-1"],
        "failed": ["T2-1"],
        "remaining": [],
    }
    assert outcomes.all_ids() == {"T1-1", "T2-1", "T3-1"}


def test_get_unknown_classification() -> None:
    with pytest.raises(KeyError):
        OutcomeSet().get("skipped")
