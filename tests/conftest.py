"""Global pytest configuration and run-directory fixtures.

``write_master`` renders a master manifest for a list of test-case ids and
``make_run`` lays out a complete run directory with report files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Tuple

import pytest

from tareconcile.logging import reset_logging


def build_master_xml(
    ids: Sequence[str],
    project_id: str = "P1",
    plan_id: str = "PLAN-1",
    build_result: str = "BUILD_42",
    verification_loop: str = "VL1",
) -> str:
    protocols = "\n".join(
        f'      <protocol project-id="{project_id}" id="{tc_id}">\n'
        f"        <test-script-reference>scripts/{tc_id}.py</test-script-reference>\n"
        "      </protocol>"
        for tc_id in ids
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<ta-tool-export>\n"
        f'  <dv-plan project-id="{project_id}" id="{plan_id}">\n'
        f"    <build-result>{build_result}</build-result>\n"
        f"    <verification-loop>{verification_loop}</verification-loop>\n"
        "    <protocols>\n"
        f"{protocols}\n"
        "    </protocols>\n"
        "  </dv-plan>\n"
        "</ta-tool-export>\n"
    )


@pytest.fixture
def master_xml() -> Callable[..., str]:
    return build_master_xml


@pytest.fixture
def make_run(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that builds a run directory under ``tmp_path``.

    Args of the factory:
        ids: Master manifest ids; None skips writing a master file.
        reports: (folder, file name) pairs, created empty.
        folders: Report folders to create even when they hold no reports.
        master_name: File name of the master manifest.
    """

    def _make(
        ids: Optional[Sequence[str]] = ("T1-1", "T2-1", "T3-1"),
        reports: Iterable[Tuple[str, str]] = (),
        folders: Sequence[str] = ("passed", "failed"),
        master_name: str = "master_plan.xml",
    ) -> Path:
        root = tmp_path / "run"
        root.mkdir(exist_ok=True)
        for folder in folders:
            (root / folder).mkdir(parents=True, exist_ok=True)
        if ids is not None:
            (root / master_name).write_text(build_master_xml(ids), encoding="utf-8")
        for folder, name in reports:
            path = root / folder / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        return root

    return _make


@pytest.fixture(autouse=True)
def _reset_logging_each_test():
    """Reset logging state so handlers do not leak between tests."""
    reset_logging()
    yield
    reset_logging()
