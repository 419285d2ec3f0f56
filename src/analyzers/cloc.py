"""Line counting with the external ``cloc`` tool."""

import logging
import re
import subprocess
from pathlib import Path

from ..crawler.models import LineCountSummary
from ..errors import AnalysisError

logger = logging.getLogger(__name__)

SUM_TOKENS = ("SUM", "SUM:")
SUMMARY_FIELDS = ("files", "blank", "comment", "code")


def parse_cloc_report(report: str) -> LineCountSummary | None:
    """Extract the totals from a cloc text report.

    Uses the first line whose first token is ``SUM`` (cloc prints ``SUM:``).
    The four columns after it are files, blank, comment and code. Returns
    None when the report has no such line.
    """
    for line in report.splitlines():
        columns = re.split(r"\s+", line.strip())
        if columns[0] not in SUM_TOKENS:
            continue

        values = columns[1 : 1 + len(SUMMARY_FIELDS)]
        if len(values) < len(SUMMARY_FIELDS):
            raise AnalysisError(f"Incomplete SUM line in cloc report: {line!r}")

        try:
            numbers = [int(value) for value in values]
        except ValueError as e:
            raise AnalysisError(f"Non-numeric SUM line in cloc report: {line!r}") from e

        return LineCountSummary(**dict(zip(SUMMARY_FIELDS, numbers)))

    return None


class ClocRunner:
    """Runs cloc over a directory."""

    def __init__(
        self,
        executable: str = "cloc",
        extra_args: list[str] | None = None,
        timeout: float | None = None,
    ):
        self.executable = executable
        self.extra_args = list(extra_args or [])
        self.timeout = timeout

    def run(self, path: Path | str) -> str:
        """Run cloc and return its text report."""
        cmd = [self.executable, *self.extra_args, str(path)]
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise AnalysisError(f"cloc timed out after {self.timeout}s") from e
        except OSError as e:
            raise AnalysisError(str(e)) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise AnalysisError(detail)

        return result.stdout

    def count(self, path: Path | str) -> LineCountSummary | None:
        """Run cloc and parse its totals."""
        return parse_cloc_report(self.run(path))
