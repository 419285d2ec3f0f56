"""Sequential clone-and-count workflow over a repository list."""

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .analyzers.cloc import ClocRunner
from .crawler.models import RepoResult, RepoStatus, parse_repo_url
from .crawler.repo_manager import RepoManager
from .errors import RepoCountError

logger = logging.getLogger(__name__)


class RepositoryProcessor:
    """Clones and counts each repository of a list, one at a time.

    Usage::

        processor = RepositoryProcessor(RepoManager(token=token), ClocRunner())
        for result in processor.process("repolist.txt"):
            print(result.status)
    """

    def __init__(
        self,
        repo_manager: RepoManager | None = None,
        counter: ClocRunner | None = None,
        on_start: Callable[[str], None] | None = None,
    ):
        self.repo_manager = repo_manager or RepoManager()
        self.counter = counter or ClocRunner()
        self.on_start = on_start

    def process(self, list_source: Path | str | Iterable[str]) -> Iterator[RepoResult]:
        """Yield one result per non-blank line, in list order.

        ``list_source`` is a path to the list file or an iterable of lines.
        Errors opening or reading the list propagate; errors for a single
        repository end up in its result.
        """
        for line in self._iter_lines(list_source):
            url = line.strip()
            if not url:
                continue

            if self.on_start:
                self.on_start(url)

            yield self.process_entry(url)

    def process_entry(self, url: str) -> RepoResult:
        """Clone and count a single repository."""
        repo = None
        try:
            repo = parse_repo_url(url)
            local_path = self.repo_manager.clone_repo(repo)
            summary = self.counter.count(local_path)
        except RepoCountError as e:
            logger.debug("Failed to process %s during %s: %s", url, e.step, e)
            return RepoResult(
                url=url,
                repo=repo,
                status=RepoStatus.FAILED,
                error=str(e),
                step=e.step,
            )

        if summary is None:
            logger.debug("No SUM line in report for %s", repo.full_path)
            return RepoResult(url=url, repo=repo, status=RepoStatus.EMPTY)

        return RepoResult(
            url=url,
            repo=repo,
            status=RepoStatus.COUNTED,
            summary=summary,
        )

    @staticmethod
    def _iter_lines(list_source: Path | str | Iterable[str]) -> Iterator[str]:
        if isinstance(list_source, (str, Path)):
            with open(list_source, encoding="utf-8") as handle:
                yield from handle
        else:
            yield from list_source
