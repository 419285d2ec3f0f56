"""Shared test fixtures."""

import subprocess
from pathlib import Path

import pytest

from src.analyzers.cloc import ClocRunner
from src.crawler.repo_manager import RepoManager
from src.processor import RepositoryProcessor

SAMPLE_REPORT = """\
github.com/AlDanial/cloc v 1.98  T=0.05 s (120.0 files/s, 9600.0 lines/s)
-------------------------------------------------------------------------------
Language                     files          blank        comment           code
-------------------------------------------------------------------------------
Python                           8             20             40             60
Markdown                         4             14             16             18
-------------------------------------------------------------------------------
SUM:                            12             34             56             78
-------------------------------------------------------------------------------
"""


class FakeRunner:
    """Stands in for ``subprocess.run`` and records every command."""

    def __init__(self, report: str = SAMPLE_REPORT):
        self.report = report
        self.calls: list[list[str]] = []
        self.fail_clone_for: set[str] = set()
        self.fail_cloc = False

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))

        if cmd[0] == "git":
            url, dest = cmd[-2], Path(cmd[-1])
            if any(name in url for name in self.fail_clone_for):
                return subprocess.CompletedProcess(
                    cmd, 128, stdout="", stderr=f"fatal: repository '{url}' not found"
                )
            dest.mkdir(parents=True)
            (dest / "README.md").write_text(url)
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        if cmd[0] == "cloc":
            if self.fail_cloc:
                return subprocess.CompletedProcess(cmd, 2, stdout="", stderr="cloc exploded")
            return subprocess.CompletedProcess(cmd, 0, stdout=self.report, stderr="")

        raise FileNotFoundError(cmd[0])

    def commands(self, program: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == program]


@pytest.fixture
def sample_report():
    return SAMPLE_REPORT


@pytest.fixture
def fake_run(monkeypatch):
    """Patch subprocess.run so git and cloc never really run."""
    runner = FakeRunner()
    monkeypatch.setattr(subprocess, "run", runner)
    return runner


@pytest.fixture
def processor(tmp_path, fake_run):
    """A processor cloning into a temporary directory."""
    return RepositoryProcessor(
        repo_manager=RepoManager(base_path=tmp_path / "repositories"),
        counter=ClocRunner(),
    )


@pytest.fixture
def make_script(tmp_path):
    """Write an executable shell script standing in for git or cloc."""

    def _make(name: str, body: str) -> str:
        path = tmp_path / "bin" / name
        path.parent.mkdir(exist_ok=True)
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(0o755)
        return str(path)

    return _make
