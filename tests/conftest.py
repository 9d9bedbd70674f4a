"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    The local repository has these branches:
    - main: tracks origin/main, checked out
    - feature/tracked: tracks a remote branch that still exists
    - feature/gone: its remote branch was deleted directly on the remote
    - feature/unmerged-gone: like feature/gone, with a commit that was never pushed
    - local-only: never pushed

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    remote_repo = Repo.init(remote_path, bare=True)
    local_repo = Repo.init(local_path)

    author = Actor("Test User", "test@example.com")
    local_repo.config_writer().set_value("user", "name", author.name).release()
    local_repo.config_writer().set_value("user", "email", author.email).release()

    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=author)

    if "main" not in local_repo.heads:
        local_repo.create_head("main")
    main_branch = local_repo.heads.main
    main_branch.checkout()

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")
    main_branch.set_tracking_branch(origin.refs.main)

    def commit_file(name: str, content: str) -> None:
        """Write a file and commit it on the checked out branch."""
        test_file = local_path / f"{name}.txt"
        test_file.parent.mkdir(parents=True, exist_ok=True)
        test_file.write_text(content)
        local_repo.index.add([f"{name}.txt"])
        local_repo.index.commit(f"Add {name}", author=author)

    def create_branch(name: str, push: bool = True) -> None:
        """Create a branch from main with one commit, optionally pushed and tracked."""
        main_branch.checkout()
        branch = local_repo.create_head(name)
        branch.checkout()
        commit_file(name, f"{name} content")
        if push:
            origin.push(name)
            branch.set_tracking_branch(origin.refs[name])

    create_branch("feature/tracked")
    create_branch("feature/gone")
    create_branch("feature/unmerged-gone")
    commit_file("feature/unmerged-gone-extra", "never pushed")
    create_branch("local-only", push=False)

    # Delete on the remote only, so the local repo learns about it on the next fetch
    remote_repo.git.branch("-D", "feature/gone")
    remote_repo.git.branch("-D", "feature/unmerged-gone")

    main_branch.checkout()

    yield local_path, remote_path


@pytest.fixture
def local_repo(test_env: tuple[Path, Path]) -> Repo:
    """GitPython handle on the local repository."""
    local_path, _ = test_env
    return Repo(local_path)
