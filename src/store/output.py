"""Output generators for run reports."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console

from ..crawler.models import RepoResult, RepoStatus
from ..analyzers.cloc import SUMMARY_FIELDS

console = Console()


def summarize(results: list[RepoResult]) -> dict:
    """Aggregate a run.

    Totals only include repositories that produced figures; empty and
    failed entries are counted separately.
    """
    totals = {name: 0 for name in SUMMARY_FIELDS}
    for result in results:
        if result.status == RepoStatus.COUNTED and result.summary:
            for name in SUMMARY_FIELDS:
                totals[name] += getattr(result.summary, name)

    return {
        "generated_at": datetime.now().isoformat(),
        "repositories_processed": len(results),
        "counted": sum(1 for r in results if r.status == RepoStatus.COUNTED),
        "empty": sum(1 for r in results if r.status == RepoStatus.EMPTY),
        "failed": sum(1 for r in results if not r.success),
        "totals": totals,
    }


class OutputGenerator:
    """Write run results as JSON and Markdown."""

    def __init__(self, results: list[RepoResult], output_dir: Path | str = "./output"):
        self.results = results
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate_all(self) -> None:
        """Generate all output formats."""
        self.generate_json()
        self.generate_markdown()

    def generate_json(self) -> Path:
        """Generate ``results.json``."""
        path = self.output_dir / "results.json"
        self._write_json(path, {
            "summary": summarize(self.results),
            "repositories": [r.to_dict() for r in self.results],
        })
        console.print(f"[green]✓[/green] Wrote JSON report to {path}")
        return path

    def _write_json(self, path: Path, data: Any) -> None:
        """Write data as JSON."""
        path.write_text(json.dumps(data, indent=2, default=str))

    def generate_markdown(self) -> Path:
        """Generate ``results.md`` with one table row per repository."""
        path = self.output_dir / "results.md"
        summary = summarize(self.results)
        totals = summary["totals"]

        content = f"""# Line Count Report

Generated: {summary['generated_at']}

## Summary

| Metric | Count |
|--------|-------|
| Repositories Processed | {summary['repositories_processed']} |
| Counted | {summary['counted']} |
| No Figures | {summary['empty']} |
| Failed | {summary['failed']} |
| Files | {totals['files']} |
| Blank | {totals['blank']} |
| Comment | {totals['comment']} |
| Code | {totals['code']} |

## Repositories

| Repository | Status | Files | Blank | Comment | Code |
|------------|--------|-------|-------|---------|------|
"""
        for result in self.results:
            content += self._render_row(result)

        path.write_text(content)
        console.print(f"[green]✓[/green] Wrote Markdown report to {path}")
        return path

    def _render_row(self, result: RepoResult) -> str:
        """Render one repository as a table row."""
        name = result.repo.full_path if result.repo else result.url
        if result.summary:
            s = result.summary
            return f"| {name} | {result.status.value} | {s.files} | {s.blank} | {s.comment} | {s.code} |\n"

        status = result.status.value
        if result.status == RepoStatus.FAILED:
            status = f"failed ({result.step})"
        return f"| {name} | {status} | - | - | - | - |\n"
