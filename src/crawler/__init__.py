"""Repository list parsing and cloning."""

from .models import LineCountSummary, RepoResult, RepoSpec, RepoStatus, parse_repo_url
from .repo_manager import RepoManager

__all__ = [
    "LineCountSummary",
    "RepoResult",
    "RepoSpec",
    "RepoStatus",
    "RepoManager",
    "parse_repo_url",
]
