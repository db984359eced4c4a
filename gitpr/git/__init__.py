"""Git operations: remote, branches, credentials, push."""

from gitpr.git._run import GitResult, GitRunnerError
from gitpr.git.branches import (
    commit_log,
    count_commits,
    get_current_branch,
    get_git_dir,
    last_commit_subject,
    ref_exists,
)
from gitpr.git.credentials import fill_credentials
from gitpr.git.remote import fetch_branch, get_remote_url, has_upstream, parse_github_repo, push_branch

__all__ = [
    "GitResult",
    "GitRunnerError",
    "commit_log",
    "count_commits",
    "fetch_branch",
    "fill_credentials",
    "get_current_branch",
    "get_git_dir",
    "get_remote_url",
    "has_upstream",
    "last_commit_subject",
    "parse_github_repo",
    "push_branch",
    "ref_exists",
]
