"""Remote URL parsing, fetch and push."""

import logging
import re
from pathlib import Path

from gitpr.errors import PushError, RepositoryError
from gitpr.git._run import _run_git

# scp-style (git@github.com:o/r.git) and URL-style (https://, ssh://, git://)
_GITHUB_URL_RE = re.compile(
    r"^(?:[a-z+]+://)?(?:[^@/]+@)?github\.com(?::\d+)?[:/](?P<path>[^?#]+?)(?:\.git)?/?$",
    re.IGNORECASE,
)
_OWNER_REPO_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?/[A-Za-z0-9._-]+$")


def parse_github_repo(url: str) -> str:
    """Extract "owner/repo" from a GitHub remote URL.

    Args:
        url: Remote URL as stored in git config.

    Returns:
        Identifier like "octocat/hello-world".

    Raises:
        RepositoryError: If the URL is not a GitHub URL or the path is not
            owner/repo.
    """
    match = _GITHUB_URL_RE.match(url.strip())
    if not match:
        raise RepositoryError(f"Remote is not a GitHub repository: {url}")
    repo = match.group("path").strip("/")
    if not _OWNER_REPO_RE.match(repo):
        raise RepositoryError(f"Cannot extract owner/repo from remote: {url}")
    return repo


def get_remote_url(
    remote: str = "origin",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return the configured URL of the remote."""
    result = _run_git(["config", "--get", f"remote.{remote}.url"], cwd=repo_dir, log=log, check=False)
    url = result.stdout.strip()
    if not result.ok or not url:
        raise RepositoryError(f"No URL configured for remote '{remote}'")
    return url


def fetch_branch(
    branch: str,
    remote: str = "origin",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> bool:
    """Fetch the branch from the remote.

    Returns False instead of raising when the fetch fails; the caller
    decides from the resulting ref whether that is fatal.
    """
    result = _run_git(["fetch", remote, branch], cwd=repo_dir, log=log, check=False)
    if not result.ok:
        if log:
            log.warning("Fetching %s/%s failed: %s", remote, branch, result.stderr.strip())
        return False
    if log:
        log.info("Fetched %s/%s", remote, branch)
    return True


def has_upstream(
    branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> bool:
    """Return True if the branch already tracks a remote branch."""
    result = _run_git(
        ["rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{upstream}}"],
        cwd=repo_dir,
        log=log,
        check=False,
    )
    return result.ok and bool(result.stdout.strip())


def push_branch(
    branch_name: str,
    remote: str = "origin",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Push the branch to the remote, setting upstream if it has none.

    git prints its own progress and errors to the terminal.

    Raises:
        PushError: If git push exits non-zero.
    """
    if has_upstream(branch_name, repo_dir=repo_dir, log=log):
        args = ["push", remote, branch_name]
    else:
        args = ["push", "--set-upstream", remote, branch_name]
    result = _run_git(args, cwd=repo_dir, log=log, check=False, capture=False)
    if not result.ok:
        raise PushError(f"git push exited with status {result.returncode}")
    if log:
        log.info("Pushed branch %s to %s", branch_name, remote)
