"""git-pr entry point.

Pushes the current branch and opens a GitHub pull request for it:
resolve remote/branch/credentials, collect title and body (arguments or
editor), push, confirm, POST to the Pulls API and report the outcome.
Every failure is fatal and exits with status 1.
"""

import logging
import sys
import webbrowser
from pathlib import Path
from typing import Callable, TextIO

from gitpr.adapters.github import GitHubAdapter
from gitpr.cli import parse_args
from gitpr.config import AppConfig, load_config
from gitpr.editor import collect_message, resolve_editor
from gitpr.errors import AbortedError, GitPRError, PushError
from gitpr.git import (
    GitRunnerError,
    commit_log,
    count_commits,
    fetch_branch,
    fill_credentials,
    get_current_branch,
    get_git_dir,
    get_remote_url,
    last_commit_subject,
    parse_github_repo,
    push_branch,
)
from gitpr.logging import GitPRLogging
from gitpr.models import (
    ApiError,
    AuthError,
    BranchContext,
    NetworkError,
    PullRequestCreated,
    PullRequestMessage,
    PullRequestOptions,
    PullRequestResult,
)

log = logging.getLogger("gitpr.main")

CONFIRM_ANSWERS = ("", "y", "Y")


def resolve_context(
    options: PullRequestOptions,
    config: AppConfig,
    repo_dir: Path | None = None,
) -> BranchContext:
    """Resolve owner/repo, fetch the base and count commits to submit."""
    remote = config.pr.remote
    base = options.base or config.pr.base
    repo = parse_github_repo(get_remote_url(remote, repo_dir=repo_dir, log=log))
    fetch_branch(base, remote=remote, repo_dir=repo_dir, log=log)
    branch = get_current_branch(repo_dir=repo_dir, log=log)
    base_ref = f"{remote}/{base}"
    count = count_commits(base_ref, branch, repo_dir=repo_dir, log=log)
    log.info("%s: %d commit(s) on %s ahead of %s", repo, count, branch, base_ref)
    return BranchContext(repo=repo, branch=branch, base=base, base_ref=base_ref, commit_count=count)


def format_summary(context: BranchContext, message: PullRequestMessage) -> str:
    """One-line summary shown before confirmation, body on following lines."""
    plural = "" if context.commit_count == 1 else "s"
    line = f"{context.commit_count} commit{plural}: {context.branch} -> {context.base}: {message.title}"
    if message.body:
        line += f"\n\n{message.body}\n"
    return line


def confirm(
    context: BranchContext,
    message: PullRequestMessage,
    input_fn: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> None:
    """Print the summary and ask for confirmation.

    Raises:
        AbortedError: On any answer other than empty, "y" or "Y".
    """
    print(format_summary(context, message), file=out or sys.stdout)
    try:
        answer = input_fn("Create pull request? [Y/n] ").strip()
    except EOFError:
        answer = "n"
    if answer not in CONFIRM_ANSWERS:
        raise AbortedError("Aborted")


def open_in_browser(url: str) -> None:
    """Open url with the OS handler; failures are ignored."""
    try:
        webbrowser.open(url)
    except webbrowser.Error as e:
        log.debug("Could not open browser for %s: %s", url, e)


def describe_error(result: PullRequestResult) -> str:
    """Human-readable line for a failed API call."""
    if isinstance(result, AuthError):
        return "Wrong username or password/token"
    if isinstance(result, NetworkError):
        return f"Network error: {result.reason}"
    if isinstance(result, ApiError):
        if result.code == "invalid" and result.field:
            return f"Invalid field: {result.field}"
        if result.code == "custom":
            return result.message or result.raw
        return f"Unknown API error: {result.raw}"
    raise TypeError(f"Not an error result: {result!r}")


def report_result(
    result: PullRequestResult,
    browse: bool = False,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Print the API outcome and return the exit code."""
    out = out or sys.stdout
    err = err or sys.stderr
    if isinstance(result, PullRequestCreated):
        if result.html_url is None:
            log.warning("Response has no html_url")
            print(result.raw, file=out)
            return 0
        print(result.html_url, file=out)
        if browse:
            open_in_browser(result.html_url)
        return 0
    print(f"error: {describe_error(result)}", file=err)
    return 1


def create_pull_request(
    options: PullRequestOptions,
    config: AppConfig,
    repo_dir: Path | None = None,
) -> int:
    """Run the whole flow; raises GitPRError or GitRunnerError on failure."""
    context = resolve_context(options, config, repo_dir=repo_dir)
    credentials = fill_credentials(config.github.host, repo_dir=repo_dir, log=log)

    title = options.title
    if options.commit_message:
        title = last_commit_subject(repo_dir=repo_dir, log=log)
    skip_confirm = options.yes

    if title:
        message = PullRequestMessage(title=title, body=options.body or "")
    else:
        path = get_git_dir(repo_dir=repo_dir, log=log) / config.pr.message_file
        editor = resolve_editor(config.pr.editor, repo_dir=repo_dir, log=log)
        commits = commit_log(context.base_ref, context.branch, repo_dir=repo_dir, log=log)
        message = collect_message(path, editor, context.repo, context.branch, context.base, commits, log=log)
        skip_confirm = True

    push_branch(context.branch, remote=config.pr.remote, repo_dir=repo_dir, log=log)

    if not skip_confirm:
        confirm(context, message)

    adapter = GitHubAdapter(
        credentials.username,
        credentials.password,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )
    result = adapter.create_pr(
        context.repo,
        title=message.title,
        body=message.body,
        head=context.branch,
        base=context.base,
    )
    return report_result(result, browse=options.browse)


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse, configure logging, create the pull request."""
    try:
        options = parse_args(argv)
        config = load_config(Path(options.config) if options.config else None)
    except GitPRError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    GitPRLogging(config.logging, verbose=options.verbose).setup()

    try:
        return create_pull_request(options, config)
    except PushError as e:
        log.debug("%s", e)
        return 1
    except (GitPRError, GitRunnerError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1
    except Exception as e:
        log.exception("Fatal error: %s", e)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
