"""Master manifest model.

A manifest is read once from the master XML and never mutated afterwards.
Derived manifests are produced with ``Manifest.with_entries``, which copies
the plan-level metadata verbatim and swaps in a new entry collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class ManifestEntry:
    """One test case as listed in the master manifest.

    Attributes:
        project_id: Owning project id (``project-id`` attribute).
        test_case_id: Test-case id (``id`` attribute). Join key against
            report file names.
        test_script_reference: Reference to the test script.
    """

    project_id: str
    test_case_id: str
    test_script_reference: str = ""


@dataclass(frozen=True)
class Manifest:
    """Plan-level wrapper around an ordered collection of entries.

    Attributes:
        project_id: Project id of the plan.
        plan_id: Plan document id.
        build_result: Build result text.
        verification_loop: Verification-loop identifier text.
        entries: Entries in master order.
    """

    project_id: str
    plan_id: str
    build_result: str = ""
    verification_loop: str = ""
    entries: Tuple[ManifestEntry, ...] = field(default_factory=tuple)

    def with_entries(self, entries: Iterable[ManifestEntry]) -> "Manifest":
        """Return a copy of this manifest holding ``entries`` instead."""
        return replace(self, entries=tuple(entries))

    def ids(self) -> List[str]:
        """Return test-case ids in manifest order."""
        return [entry.test_case_id for entry in self.entries]

    def entry_map(self) -> Dict[str, ManifestEntry]:
        """Return a mapping of test-case id to entry."""
        return {entry.test_case_id: entry for entry in self.entries}

    def __len__(self) -> int:
        return len(self.entries)
