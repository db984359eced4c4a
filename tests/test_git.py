"""Tests for gitpr.git (run helper, remote, branches, push)."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gitpr.errors import NoCommitsError, PushError, RepositoryError
from gitpr.git import (
    GitResult,
    GitRunnerError,
    commit_log,
    count_commits,
    fetch_branch,
    get_current_branch,
    get_git_dir,
    get_remote_url,
    has_upstream,
    last_commit_subject,
    parse_github_repo,
    push_branch,
)
from gitpr.git._run import _run_git


class TestRunGit:
    """gitpr.git._run._run_git: exit status, output capture, errors."""

    def test_returns_result_with_output(self) -> None:
        """Captured stdout/stderr and exit code end up in GitResult."""
        proc = MagicMock(returncode=0, stdout="main\n", stderr="")
        with patch("gitpr.git._run.subprocess.run", return_value=proc) as mock_run:
            result = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=Path("/tmp/repo"))
        assert result == GitResult(returncode=0, stdout="main\n", stderr="")
        assert result.ok
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "rev-parse", "--abbrev-ref", "HEAD"]
        assert kwargs["cwd"] == Path("/tmp/repo")
        assert kwargs["capture_output"] is True

    def test_check_raises_on_non_zero(self) -> None:
        """With check=True a failing command raises GitRunnerError carrying the result."""
        proc = MagicMock(returncode=128, stdout="", stderr="fatal: not a git repository\n")
        with patch("gitpr.git._run.subprocess.run", return_value=proc):
            with pytest.raises(GitRunnerError, match="not a git repository") as exc_info:
                _run_git(["status"])
        assert exc_info.value.result is not None
        assert exc_info.value.result.returncode == 128

    def test_no_check_returns_failure(self) -> None:
        """With check=False a failing command is returned, not raised."""
        proc = MagicMock(returncode=1, stdout="", stderr="")
        with patch("gitpr.git._run.subprocess.run", return_value=proc):
            result = _run_git(["config", "--get", "core.editor"], check=False)
        assert not result.ok
        assert result.returncode == 1

    def test_uncaptured_output_is_empty(self) -> None:
        """capture=False passes through to the terminal and leaves output empty."""
        proc = MagicMock(returncode=0, stdout=None, stderr=None)
        with patch("gitpr.git._run.subprocess.run", return_value=proc) as mock_run:
            result = _run_git(["push", "origin", "feature"], capture=False)
        assert result == GitResult(returncode=0)
        assert mock_run.call_args[1]["capture_output"] is False

    def test_missing_git_binary(self) -> None:
        """FileNotFoundError becomes GitRunnerError."""
        with patch("gitpr.git._run.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(GitRunnerError, match="git not found"):
                _run_git(["status"])

    def test_input_forwarded(self) -> None:
        """Stdin text is passed to subprocess.run."""
        proc = MagicMock(returncode=0, stdout="", stderr="")
        with patch("gitpr.git._run.subprocess.run", return_value=proc) as mock_run:
            _run_git(["credential", "fill"], input="host=github.com\n\n")
        assert mock_run.call_args[1]["input"] == "host=github.com\n\n"

    def test_uses_cwd_when_no_repo_dir(self) -> None:
        proc = MagicMock(returncode=0, stdout="", stderr="")
        with patch("gitpr.git._run.subprocess.run", return_value=proc) as mock_run:
            _run_git(["status"])
        assert mock_run.call_args[1]["cwd"] == Path.cwd()

    def test_exit_status_not_checked_by_subprocess(self) -> None:
        """subprocess.run is called with check=False; _run_git inspects the exit code."""
        proc = MagicMock(returncode=0, stdout="", stderr="")
        with patch("gitpr.git._run.subprocess.run", return_value=proc) as mock_run:
            _run_git(["status"])
        assert mock_run.call_args[1]["check"] is False


class TestParseGithubRepo:
    """gitpr.git.remote.parse_github_repo: owner/repo extraction."""

    @pytest.mark.parametrize(
        "url",
        [
            "git@github.com:octocat/hello-world.git",
            "git@github.com:octocat/hello-world",
            "https://github.com/octocat/hello-world.git",
            "https://github.com/octocat/hello-world",
            "https://github.com/octocat/hello-world/",
            "https://user@github.com/octocat/hello-world.git",
            "ssh://git@github.com/octocat/hello-world.git",
            "ssh://git@github.com:22/octocat/hello-world.git",
            "git://github.com/octocat/hello-world.git",
        ],
    )
    def test_github_urls(self, url: str) -> None:
        assert parse_github_repo(url) == "octocat/hello-world"

    def test_repo_with_dots(self) -> None:
        """Dots inside the repo name are kept; only the .git suffix is dropped."""
        assert parse_github_repo("git@github.com:octocat/octocat.github.io.git") == "octocat/octocat.github.io"

    @pytest.mark.parametrize(
        "url",
        [
            "git@gitlab.com:octocat/hello-world.git",
            "https://bitbucket.org/octocat/hello-world",
            "https://notgithub.com/octocat/hello-world",
            "https://github.com.example.com/octocat/hello-world",
            "/srv/git/hello-world.git",
        ],
    )
    def test_non_github_remote_raises(self, url: str) -> None:
        with pytest.raises(RepositoryError, match="not a GitHub repository"):
            parse_github_repo(url)

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/octocat",
            "https://github.com/octocat/hello-world/tree/main",
            "https://github.com/-octocat/hello-world",
        ],
    )
    def test_malformed_path_raises(self, url: str) -> None:
        with pytest.raises(RepositoryError, match="owner/repo"):
            parse_github_repo(url)


class TestRemote:
    """gitpr.git.remote: remote URL, fetch, upstream, push."""

    def test_get_remote_url(self) -> None:
        with patch("gitpr.git.remote._run_git", return_value=GitResult(0, "git@github.com:o/r.git\n")) as mock_run:
            assert get_remote_url("origin", repo_dir=Path("/tmp/repo")) == "git@github.com:o/r.git"
        assert mock_run.call_args[0][0] == ["config", "--get", "remote.origin.url"]

    def test_get_remote_url_missing_remote(self) -> None:
        with patch("gitpr.git.remote._run_git", return_value=GitResult(1)):
            with pytest.raises(RepositoryError, match="origin"):
                get_remote_url("origin")

    def test_fetch_branch_success(self) -> None:
        with patch("gitpr.git.remote._run_git", return_value=GitResult(0)) as mock_run:
            assert fetch_branch("master", remote="origin") is True
        assert mock_run.call_args[0][0] == ["fetch", "origin", "master"]
        assert mock_run.call_args[1]["check"] is False

    def test_fetch_branch_failure_is_not_raised(self) -> None:
        """Fetching a missing branch returns False; the base ref check decides."""
        result = GitResult(128, "", "fatal: couldn't find remote ref nope\n")
        with patch("gitpr.git.remote._run_git", return_value=result):
            assert fetch_branch("nope") is False

    def test_has_upstream(self) -> None:
        with patch("gitpr.git.remote._run_git", return_value=GitResult(0, "origin/feature\n")) as mock_run:
            assert has_upstream("feature") is True
        assert mock_run.call_args[0][0][-1] == "feature@{upstream}"

    def test_has_no_upstream(self) -> None:
        with patch("gitpr.git.remote._run_git", return_value=GitResult(128, "", "fatal: no upstream")):
            assert has_upstream("feature") is False

    def test_push_with_upstream_keeps_tracking(self) -> None:
        """Branch with an upstream is pushed without --set-upstream."""
        with patch("gitpr.git.remote.has_upstream", return_value=True):
            with patch("gitpr.git.remote._run_git", return_value=GitResult(0)) as mock_run:
                push_branch("feature", remote="origin")
        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == ["push", "origin", "feature"]
        assert mock_run.call_args[1]["capture"] is False

    def test_push_without_upstream_sets_tracking(self) -> None:
        """Branch without an upstream is pushed with --set-upstream."""
        with patch("gitpr.git.remote.has_upstream", return_value=False):
            with patch("gitpr.git.remote._run_git", return_value=GitResult(0)) as mock_run:
                push_branch("feature", remote="origin")
        assert mock_run.call_args[0][0] == ["push", "--set-upstream", "origin", "feature"]

    def test_push_failure_raises_push_error(self) -> None:
        with patch("gitpr.git.remote.has_upstream", return_value=True):
            with patch("gitpr.git.remote._run_git", return_value=GitResult(1)):
                with pytest.raises(PushError):
                    push_branch("feature")


class TestBranches:
    """gitpr.git.branches: current branch, commit counting, log."""

    def test_get_current_branch(self) -> None:
        with patch("gitpr.git.branches._run_git", return_value=GitResult(0, "feature\n")) as mock_run:
            assert get_current_branch() == "feature"
        assert mock_run.call_args[0][0] == ["rev-parse", "--abbrev-ref", "HEAD"]

    def test_detached_head_raises(self) -> None:
        with patch("gitpr.git.branches._run_git", return_value=GitResult(0, "HEAD\n")):
            with pytest.raises(RepositoryError, match="detached"):
                get_current_branch()

    def test_get_git_dir_relative(self) -> None:
        with patch("gitpr.git.branches._run_git", return_value=GitResult(0, ".git\n")):
            assert get_git_dir(repo_dir=Path("/tmp/repo")) == Path("/tmp/repo/.git")

    def test_get_git_dir_absolute(self) -> None:
        with patch("gitpr.git.branches._run_git", return_value=GitResult(0, "/srv/wt/.git/worktrees/x\n")):
            assert get_git_dir(repo_dir=Path("/tmp/repo")) == Path("/srv/wt/.git/worktrees/x")

    def test_count_commits(self) -> None:
        with patch("gitpr.git.branches._run_git") as mock_run:
            mock_run.side_effect = [GitResult(0, "abc123\n"), GitResult(0, "3\n")]
            assert count_commits("origin/master", "feature") == 3
        assert mock_run.call_args_list[0][0][0][:3] == ["rev-parse", "--verify", "--quiet"]
        assert mock_run.call_args_list[1][0][0] == ["rev-list", "--count", "origin/master..feature"]

    def test_count_commits_missing_base_ref(self) -> None:
        """Unknown base ref is reported as not found; no counting happens."""
        with patch("gitpr.git.branches._run_git", return_value=GitResult(1)) as mock_run:
            with pytest.raises(RepositoryError, match="origin/nope' not found"):
                count_commits("origin/nope", "feature")
        assert mock_run.call_count == 1

    def test_count_commits_zero(self) -> None:
        with patch("gitpr.git.branches._run_git") as mock_run:
            mock_run.side_effect = [GitResult(0, "abc123\n"), GitResult(0, "0\n")]
            with pytest.raises(NoCommitsError):
                count_commits("origin/master", "feature")

    def test_last_commit_subject(self) -> None:
        with patch("gitpr.git.branches._run_git", return_value=GitResult(0, "Fix login redirect\n")) as mock_run:
            assert last_commit_subject() == "Fix login redirect"
        assert mock_run.call_args[0][0] == ["log", "-1", "--format=%s"]

    def test_commit_log(self) -> None:
        out = "abc1234 Add form\ndef5678 Fix typo\n\n"
        with patch("gitpr.git.branches._run_git", return_value=GitResult(0, out)) as mock_run:
            assert commit_log("origin/master", "feature") == ["abc1234 Add form", "def5678 Fix typo"]
        assert mock_run.call_args[0][0][-1] == "origin/master..feature"
