import pytest

from tareconcile.classify import FilenameClassifier, classify_filename
from tareconcile.model import Outcome


def test_pass_token_maps_to_passed() -> None:
    obs = classify_filename("report_T1-1_PASS_x")
    assert obs is not None
    assert obs.test_case_id == "T1-1"
    assert obs.outcome is Outcome.PASSED
    assert obs.status == "PASS"


@pytest.mark.parametrize("status", ["FAIL", "ERROR", "BLOCKED", "PASSED"])
def test_any_other_status_is_failed(status: str) -> None:
    obs = classify_filename(f"report_ABC12-345_{status}_20240101T1015.xml")
    assert obs is not None
    assert obs.test_case_id == "ABC12-345"
    assert obs.outcome is Outcome.FAILED


@pytest.mark.parametrize(
    "name",
    [
        "notes.txt",
        "master_plan.xml",
        "report_T1-1.xml",  # id but no status
        "report_T1-1_PASS",  # status without the suffix separator
        "report_T1_PASS_x",  # id lacks the numeric part
        "report_T1-1_pass_x",  # lowercase status
        "xreport_T1-1_PASS_x",
    ],
)
def test_non_report_names_are_skipped(name: str) -> None:
    assert classify_filename(name) is None


def test_empty_suffix_is_accepted() -> None:
    obs = classify_filename("report_T1-1_FAIL_")
    assert obs is not None and obs.outcome is Outcome.FAILED


def test_custom_prefix_and_pass_token() -> None:
    classifier = FilenameClassifier(prefix="run.log", pass_token="OK")
    assert classifier.classify("run.log_T1-1_OK_1").outcome is Outcome.PASSED
    assert classifier.classify("run.log_T1-1_PASS_1").outcome is Outcome.FAILED
    # Prefix is literal, not a regex
    assert classifier.classify("runxlog_T1-1_OK_1") is None


def test_source_is_recorded() -> None:
    obs = FilenameClassifier().classify("report_T1-1_PASS_x", source="/r/report_T1-1_PASS_x")
    assert obs.source == "/r/report_T1-1_PASS_x"


def test_empty_tokens_rejected() -> None:
    with pytest.raises(ValueError):
        FilenameClassifier(prefix="")
    with pytest.raises(ValueError):
        FilenameClassifier(pass_token="")
