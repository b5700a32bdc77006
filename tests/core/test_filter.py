import pytest

from tareconcile.errors import UnknownTestCaseError
from tareconcile.filter import filter_manifest, split_manifest
from tareconcile.model import Manifest, ManifestEntry, OutcomeSet


@pytest.fixture
def manifest() -> Manifest:
    return Manifest(
        project_id="P1",
        plan_id="PLAN-1",
        build_result="BUILD_42",
        verification_loop="VL1",
        entries=tuple(
            ManifestEntry("P1", tc_id, f"scripts/{tc_id}.py")
            for tc_id in ["T3-1", "T1-1", "T2-1"]
        ),
    )


def test_filter_by_all_ids_is_identity(manifest: Manifest) -> None:
    assert filter_manifest(manifest, set(manifest.ids())) == manifest


def test_filter_preserves_master_order(manifest: Manifest) -> None:
    subset = filter_manifest(manifest, {"T2-1", "T3-1"})
    assert subset.ids() == ["T3-1", "T2-1"]
    assert subset.entries[0] is manifest.entries[0]
    assert subset.plan_id == manifest.plan_id


def test_filter_empty_set_keeps_metadata(manifest: Manifest) -> None:
    subset = filter_manifest(manifest, set())
    assert subset.entries == ()
    assert subset.build_result == "BUILD_42"


def test_filter_unknown_id_raises(manifest: Manifest) -> None:
    with pytest.raises(UnknownTestCaseError, match="X1-1"):
        filter_manifest(manifest, {"T1-1", "X1-1"})


def test_split_manifest_produces_three_documents(manifest: Manifest) -> None:
    outcomes = OutcomeSet(
        passed=frozenset({"T1-1"}),
        failed=frozenset({"T2-1"}),
        remaining=frozenset({"T3-1"}),
    )
    derived = split_manifest(manifest, outcomes)
    assert list(derived) == ["passed", "failed", "remaining"]
    assert derived["passed"].ids() == ["T1-1"]
    assert derived["failed"].ids() == ["T2-1"]
    assert derived["remaining"].ids() == ["T3-1"]
