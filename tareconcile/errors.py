"""Exception hierarchy for reconciliation runs.

Every failure is a setup or environment problem rather than a transient one,
so nothing here is retried. The CLI catches ``ReconcileError`` at the top
level, logs it, and exits with a non-zero status.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union


class ReconcileError(Exception):
    """Base class for all fatal reconciliation errors."""


class SetupError(ReconcileError):
    """Run inputs are missing, ambiguous, or misconfigured."""


class ManifestParseError(ReconcileError):
    """The master manifest could not be read or does not fit the schema."""

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None):
        self.source = str(source) if source is not None else None
        if self.source is not None:
            message = f"{self.source}: {message}"
        super().__init__(message)


class UnknownTestCaseError(ReconcileError):
    """One or more test-case ids are not present in the master manifest."""

    def __init__(self, ids: Iterable[str], context: str = "") -> None:
        self.ids = sorted(set(ids))
        where = f" ({context})" if context else ""
        super().__init__(
            f"{len(self.ids)} test case id(s) not in master manifest{where}: "
            f"{', '.join(self.ids)}. Faulty report names or master XML."
        )


class ExportError(ReconcileError):
    """A derived manifest could not be written."""

    def __init__(self, destination: Union[str, Path], cause: BaseException) -> None:
        self.destination = str(destination)
        self.cause = cause
        super().__init__(
            f"Failed to write '{self.destination}': {type(cause).__name__}: {cause}"
        )
