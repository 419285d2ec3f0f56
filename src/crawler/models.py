"""Shared data models for repository processing."""

from dataclasses import asdict, dataclass
from enum import Enum

from ..errors import MalformedUrlError


@dataclass(frozen=True)
class RepoSpec:
    """A repository parsed from one line of the repository list."""
    url: str
    owner: str
    name: str

    @property
    def full_path(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class LineCountSummary:
    """Totals from the ``SUM`` line of a cloc report."""
    files: int
    blank: int
    comment: int
    code: int

    def to_dict(self) -> dict:
        return asdict(self)


class RepoStatus(str, Enum):
    """Outcome of processing one repository."""

    COUNTED = "counted"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class RepoResult:
    """Result emitted for every non-blank entry of the list."""
    url: str
    repo: RepoSpec | None
    status: RepoStatus
    summary: LineCountSummary | None = None
    error: str | None = None
    step: str | None = None

    @property
    def success(self) -> bool:
        return self.status != RepoStatus.FAILED

    def to_dict(self) -> dict:
        """Convert the result to a plain dictionary."""
        return {
            "url": self.url,
            "owner": self.repo.owner if self.repo else None,
            "name": self.repo.name if self.repo else None,
            "status": self.status.value,
            "summary": self.summary.to_dict() if self.summary else None,
            "error": self.error,
            "step": self.step,
        }


def parse_repo_url(url: str) -> RepoSpec:
    """Split ``scheme://host/owner/name[.git]`` into a RepoSpec.

    The owner is the segment right after the host and the name is the last
    segment with a trailing ``.git`` removed.
    """
    url = url.strip()
    parts = url.split("/")
    if len(parts) < 4:
        raise MalformedUrlError(f"Cannot determine owner from URL: {url!r}")

    owner = parts[3]
    name = parts[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]

    if not owner or not name:
        raise MalformedUrlError(f"Cannot determine owner and name from URL: {url!r}")

    return RepoSpec(url=url, owner=owner, name=name)
