"""Errors raised while processing a single repository entry."""


class RepoCountError(Exception):
    """Base class for per-repository failures.

    ``step`` names the stage of the workflow that failed and is used when
    reporting the error.
    """

    step = "processing"


class MalformedUrlError(RepoCountError):
    """The repository URL could not be split into owner and name."""

    step = "parse"


class WorkspaceCleanupError(RepoCountError):
    """The local workspace could not be created or removed."""

    step = "workspace"


class FetchError(RepoCountError):
    """Cloning the repository failed."""

    step = "git clone"


class AnalysisError(RepoCountError):
    """Running or parsing the line-count report failed."""

    step = "cloc"
