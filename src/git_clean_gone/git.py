"""Git repository operations."""

import logging
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git operation error."""


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository."""
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
            if self.repo.bare:
                raise GitError("Cannot operate on bare repository")
        except InvalidGitRepositoryError as err:
            raise GitError(f"Not in a git repository: {path}") from err
        except (GitCommandError, NoSuchPathError, ValueError) as err:
            raise GitError(f"Failed to open repository: {err}") from err

    def fetch_and_prune(self) -> str:
        """Fetch all remotes and prune remote-tracking refs that no longer exist.

        Returns:
            Output of git fetch, including the ref updates git reports on stderr

        Raises:
            GitError: If the fetch fails
        """
        try:
            _, stdout, stderr = self.repo.git.fetch("--all", "--prune", with_extended_output=True)
            return "\n".join(part for part in (stdout, stderr) if part)
        except GitCommandError as err:
            raise GitError(f"Failed to fetch and prune remotes: {err}") from err

    def list_branches_verbose(self) -> str:
        """Get the output of ``git branch -vv``."""
        try:
            return str(self.repo.git.branch("-vv"))
        except GitCommandError as err:
            raise GitError(f"Failed to list branches: {err}") from err

    def delete_branch_forced(self, name: str) -> None:
        """Delete a local branch even if it has unmerged commits.

        Raises:
            GitError: If git refuses to delete the branch
        """
        logger.debug("Running git branch -D %s", name)
        try:
            self.repo.git.branch("-D", name)
        except GitCommandError as err:
            message = err.stderr.strip() if err.stderr else str(err)
            raise GitError(f"Failed to delete {name}: {message}") from err

    def list_all_branches(self) -> str:
        """Get the output of ``git branch -a``."""
        try:
            return str(self.repo.git.branch("-a"))
        except GitCommandError as err:
            raise GitError(f"Failed to list branches: {err}") from err
