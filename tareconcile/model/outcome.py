"""Report outcomes and the reconciled outcome set."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class Outcome(str, Enum):
    """Outcome encoded in a single report file name."""

    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class Observation:
    """A single classified report file.

    Attributes:
        test_case_id: Test-case id parsed from the file name.
        outcome: Outcome derived from the status token.
        status: Raw status token as it appeared in the name (e.g. ``FAIL``).
        source: Path of the report file, when known.
    """

    test_case_id: str
    outcome: Outcome
    status: str
    source: Optional[str] = None


# Classification names, in the order outputs are produced
CLASSIFICATIONS = ("passed", "failed", "remaining")


@dataclass(frozen=True)
class OutcomeSet:
    """Disjoint classification of every manifest id for one run.

    Attributes:
        passed: Ids with at least one passing report.
        failed: Ids with only failing reports.
        remaining: Manifest ids with no report at all.
    """

    passed: FrozenSet[str] = field(default_factory=frozenset)
    failed: FrozenSet[str] = field(default_factory=frozenset)
    remaining: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        overlap = (
            (self.passed & self.failed)
            | (self.passed & self.remaining)
            | (self.failed & self.remaining)
        )
        if overlap:
            raise ValueError(
                f"Outcome sets must be disjoint; overlapping ids: {sorted(overlap)}"
            )

    def get(self, classification: str) -> FrozenSet[str]:
        """Return the id set for ``passed``, ``failed`` or ``remaining``."""
        if classification not in CLASSIFICATIONS:
            raise KeyError(f"Unknown classification: {classification}")
        return getattr(self, classification)

    def all_ids(self) -> FrozenSet[str]:
        return self.passed | self.failed | self.remaining

    def counts(self) -> Dict[str, int]:
        return {name: len(self.get(name)) for name in CLASSIFICATIONS}

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly representation with sorted id lists."""
        return {name: sorted(self.get(name)) for name in CLASSIFICATIONS}
