"""Current branch, base ref resolution and commit range queries."""

import logging
from pathlib import Path

from gitpr.errors import NoCommitsError, RepositoryError
from gitpr.git._run import _run_git


def get_current_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the checked out branch name.

    Raises:
        RepositoryError: On a detached HEAD.
    """
    branch = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_dir, log=log).stdout.strip()
    if not branch or branch == "HEAD":
        raise RepositoryError("Not on a branch (detached HEAD)")
    return branch


def get_git_dir(repo_dir: Path | None = None, log: logging.Logger | None = None) -> Path:
    """Return the repository metadata directory (usually .git)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    git_dir = Path(_run_git(["rev-parse", "--git-dir"], cwd=cwd, log=log).stdout.strip())
    return git_dir if git_dir.is_absolute() else cwd / git_dir


def ref_exists(ref: str, repo_dir: Path | None = None, log: logging.Logger | None = None) -> bool:
    """Return True if ref resolves to a commit in the local repository."""
    result = _run_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=repo_dir, log=log, check=False)
    return result.ok


def count_commits(
    base_ref: str,
    branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> int:
    """Count commits reachable from branch but not from base_ref.

    Raises:
        RepositoryError: If base_ref does not exist locally.
        NoCommitsError: If the range is empty.
    """
    if not ref_exists(base_ref, repo_dir=repo_dir, log=log):
        raise RepositoryError(f"Base branch '{base_ref}' not found")
    out = _run_git(["rev-list", "--count", f"{base_ref}..{branch}"], cwd=repo_dir, log=log).stdout
    count = int(out.strip() or 0)
    if count == 0:
        raise NoCommitsError(f"No commits between '{base_ref}' and '{branch}'")
    return count


def last_commit_subject(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the first line of the last commit message."""
    return _run_git(["log", "-1", "--format=%s"], cwd=repo_dir, log=log).stdout.strip()


def commit_log(
    base_ref: str,
    branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> list[str]:
    """Return one line ("<short sha> <subject>") per commit in base_ref..branch."""
    out = _run_git(["log", "--format=%h %s", f"{base_ref}..{branch}"], cwd=repo_dir, log=log).stdout
    return [line for line in out.splitlines() if line.strip()]
