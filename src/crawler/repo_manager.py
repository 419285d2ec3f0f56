"""Repository workspaces and cloning."""

import logging
import shutil
import subprocess
from pathlib import Path

from ..errors import FetchError, MalformedUrlError, WorkspaceCleanupError
from .models import RepoSpec

logger = logging.getLogger(__name__)

HTTPS_PREFIX = "https://"


class RepoManager:
    """Manages local repository clones under ``base_path/<owner>/<name>``."""

    def __init__(
        self,
        base_path: Path | str = "repositories",
        token: str | None = None,
        depth: int = 0,
        timeout: float | None = None,
        git_executable: str = "git",
    ):
        self.base_path = Path(base_path)
        self.token = token or None
        self.depth = depth
        self.timeout = timeout
        self.git_executable = git_executable

    def get_repo_path(self, repo: RepoSpec) -> Path:
        """Get local path for a repository."""
        return self.base_path / repo.owner / repo.name

    def prepare_workspace(self, repo: RepoSpec) -> Path:
        """Create the owner directory and delete any previous clone.

        Removal is recursive and irreversible: local changes in an earlier
        clone of the same repository are lost.
        """
        local_path = self.get_repo_path(repo)

        try:
            local_path.parent.mkdir(parents=True, exist_ok=True)
            if local_path.exists():
                logger.debug("Removing existing workspace %s", local_path)
                shutil.rmtree(local_path)
        except OSError as e:
            raise WorkspaceCleanupError(
                f"Could not reset workspace {local_path}: {e}"
            ) from e

        return local_path

    def build_clone_url(self, url: str) -> str:
        """Return the URL to clone from, with the token spliced in if set.

        Only ``https://`` URLs can carry the token.
        """
        if not self.token:
            return url

        if not url.startswith(HTTPS_PREFIX):
            raise MalformedUrlError(
                f"Access token can only be used with https:// URLs: {url}"
            )

        return f"{HTTPS_PREFIX}{self.token}@{url[len(HTTPS_PREFIX):]}"

    def mask(self, text: str) -> str:
        """Hide the access token in text shown to the user."""
        if self.token:
            return text.replace(f"{HTTPS_PREFIX}{self.token}@", f"{HTTPS_PREFIX}***@")
        return text

    def clone_repo(self, repo: RepoSpec) -> Path:
        """Clone a single repository into a fresh workspace."""
        local_path = self.prepare_workspace(repo)
        clone_url = self.build_clone_url(repo.url)

        cmd = [self.git_executable, "clone"]
        if self.depth > 0:
            cmd.extend(["--depth", str(self.depth)])
        cmd.extend([clone_url, str(local_path)])

        logger.debug("Running %s", self.mask(" ".join(cmd)))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise FetchError(f"Clone timed out after {self.timeout}s") from e
        except OSError as e:
            raise FetchError(self.mask(str(e))) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise FetchError(self.mask(detail))

        return local_path
