"""Run diagnostics collected during reconciliation.

Components record structured events here instead of writing to a global
logger. The caller decides how to render them: the CLI logs them and can
dump them to the JSON run summary. Nothing reads them back to make
decisions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

# Event kinds
FAILED_MULTIPLE_TIMES = "failed_multiple_times"
FAILED_THEN_PASSED = "failed_then_passed"
UNKNOWN_TEST_CASE = "unknown_test_case"
SKIPPED_FILE = "skipped_file"

# Kinds rendered at WARNING; everything else is informational
_WARNING_KINDS = frozenset({UNKNOWN_TEST_CASE})


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single observation worth reporting.

    Attributes:
        kind: Event kind (one of the module-level constants).
        message: Human-readable description.
        subjects: Test-case ids or file names the event refers to, sorted.
    """

    kind: str
    message: str
    subjects: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "subjects": list(self.subjects),
        }


@dataclass
class Diagnostics:
    """Collector for events and counters of one run."""

    events: List[DiagnosticEvent] = field(default_factory=list)
    counters: Dict[str, int] = field(default_factory=dict)

    def record(self, kind: str, message: str, subjects: Iterable[str] = ()) -> None:
        self.events.append(
            DiagnosticEvent(kind=kind, message=message, subjects=tuple(sorted(subjects)))
        )

    def count(self, name: str, value: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def of_kind(self, kind: str) -> List[DiagnosticEvent]:
        return [event for event in self.events if event.kind == kind]

    def subjects_of(self, kind: str) -> List[str]:
        """Return the sorted union of subjects across events of ``kind``."""
        out = set()
        for event in self.of_kind(kind):
            out.update(event.subjects)
        return sorted(out)

    def emit(self, logger: logging.Logger) -> None:
        """Render counters and events to ``logger``."""
        for name in sorted(self.counters):
            logger.info(f"{name}: {self.counters[name]}")
        for event in self.events:
            level = logging.WARNING if event.kind in _WARNING_KINDS else logging.INFO
            if event.subjects:
                logger.log(level, f"{event.message}: {', '.join(event.subjects)}")
            else:
                logger.log(level, event.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "counters": dict(sorted(self.counters.items())),
            "events": [event.to_dict() for event in self.events],
        }
