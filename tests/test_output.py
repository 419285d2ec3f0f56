"""Tests for run reports."""

import json

from src.crawler.models import LineCountSummary, RepoResult, RepoStatus, parse_repo_url
from src.store.output import OutputGenerator, summarize


def _results():
    return [
        RepoResult(
            url="https://host/alice/repo1",
            repo=parse_repo_url("https://host/alice/repo1"),
            status=RepoStatus.COUNTED,
            summary=LineCountSummary(files=12, blank=34, comment=56, code=78),
        ),
        RepoResult(
            url="https://host/bob/repo2",
            repo=parse_repo_url("https://host/bob/repo2"),
            status=RepoStatus.COUNTED,
            summary=LineCountSummary(files=1, blank=1, comment=1, code=2),
        ),
        RepoResult(
            url="https://host/carol/empty",
            repo=parse_repo_url("https://host/carol/empty"),
            status=RepoStatus.EMPTY,
        ),
        RepoResult(
            url="bogus",
            repo=None,
            status=RepoStatus.FAILED,
            error="Cannot determine owner",
            step="parse",
        ),
    ]


def test_summary_totals_only_counted():
    summary = summarize(_results())
    assert summary["repositories_processed"] == 4
    assert summary["counted"] == 2
    assert summary["empty"] == 1
    assert summary["failed"] == 1
    assert summary["totals"] == {"files": 13, "blank": 35, "comment": 57, "code": 80}


def test_generate_json(tmp_path):
    path = OutputGenerator(_results(), output_dir=tmp_path).generate_json()
    data = json.loads(path.read_text())

    assert data["summary"]["totals"]["code"] == 80
    assert [r["status"] for r in data["repositories"]] == ["counted", "counted", "empty", "failed"]
    assert data["repositories"][0]["owner"] == "alice"


def test_generate_markdown(tmp_path):
    path = OutputGenerator(_results(), output_dir=tmp_path).generate_markdown()
    content = path.read_text()

    assert "| alice/repo1 | counted | 12 | 34 | 56 | 78 |" in content
    assert "| carol/empty | empty | - | - | - | - |" in content
    assert "| bogus | failed (parse) |" in content


def test_failed_count_uses_result_success():
    results = _results()
    assert [r.success for r in results] == [True, True, True, False]
    assert summarize(results)["failed"] == 1
