"""Report file name classification.

Report files are named ``<prefix>_<test-case-id>_<STATUS>_<suffix>``, for
example ``report_ABC1-42_FAIL_20240101T101500.xml``. The test-case id is
``[A-Za-z0-9]+-[0-9]+`` and the status is an uppercase token. Only the pass
token maps to ``Outcome.PASSED``; any other status token is a failure.
"""

from __future__ import annotations

import re
from typing import Optional

from tareconcile.model.outcome import Observation, Outcome

DEFAULT_REPORT_PREFIX = "report"
DEFAULT_PASS_TOKEN = "PASS"

TEST_CASE_ID_PATTERN = r"[A-Za-z0-9]+-[0-9]+"


class FilenameClassifier:
    """Classify report file names into observations.

    Args:
        prefix: Literal token that starts every report name.
        pass_token: Status token that means the test case passed.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_REPORT_PREFIX,
        pass_token: str = DEFAULT_PASS_TOKEN,
    ) -> None:
        if not prefix:
            raise ValueError("Report prefix must be a non-empty string")
        if not pass_token:
            raise ValueError("Pass token must be a non-empty string")
        self.prefix = prefix
        self.pass_token = pass_token
        # Status group is mandatory: an id without a status is not a report.
        self._pattern = re.compile(
            rf"^{re.escape(prefix)}_(?P<id>{TEST_CASE_ID_PATTERN})"
            r"_(?P<status>[A-Z]+)_(?P<suffix>.*)$",
            re.DOTALL,
        )

    def classify(self, filename: str, source: Optional[str] = None) -> Optional[Observation]:
        """Return the observation encoded in ``filename``, or None.

        Args:
            filename: Base file name. Directory components are not stripped.
            source: Optional full path recorded on the observation.

        Returns:
            The observation, or None if the name is not a report name.
        """
        match = self._pattern.match(filename)
        if match is None:
            return None
        status = match.group("status")
        outcome = Outcome.PASSED if status == self.pass_token else Outcome.FAILED
        return Observation(
            test_case_id=match.group("id"),
            outcome=outcome,
            status=status,
            source=source,
        )

    def __repr__(self) -> str:
        return f"FilenameClassifier(prefix={self.prefix!r}, pass_token={self.pass_token!r})"


_DEFAULT_CLASSIFIER = FilenameClassifier()


def classify_filename(filename: str) -> Optional[Observation]:
    """Classify ``filename`` with the default prefix and pass token."""
    return _DEFAULT_CLASSIFIER.classify(filename)
