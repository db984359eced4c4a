"""Command line parsing for git-pr.

Usage: git-pr [options] ["title"] ["description"]

Flags are only recognized before the first positional token; everything
after it (or after "--") is title and description text.
"""

import argparse
import sys
from typing import NoReturn

from gitpr.errors import UsageError
from gitpr.models import PullRequestOptions

# Short flags that consume the following token as their value
_VALUE_SHORT_FLAGS = ("b",)
_VALUE_LONG_FLAGS = ("--base", "--config")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser raising UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="git-pr",
        usage='%(prog)s [options] ["title"] ["description"]',
        description=(
            "Push the current branch and open a GitHub pull request for it. "
            "Without a title, your editor is opened to write one."
        ),
        allow_abbrev=False,
    )
    parser.add_argument("-b", "--base", metavar="NAME", help="Base branch to merge into (default: master)")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    parser.add_argument(
        "-c",
        "--commit-message",
        action="store_true",
        help="Use the last commit's subject as title; the first argument becomes the description",
    )
    parser.add_argument("-o", "--browse", action="store_true", help="Open the pull request in a web browser")
    parser.add_argument("--config", metavar="PATH", help="YAML config file (default: ~/.config/git-pr/config.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log git commands and API calls")
    return parser


def _takes_value(token: str) -> bool:
    if token in _VALUE_LONG_FLAGS:
        return True
    return not token.startswith("--") and "=" not in token and token[-1] in _VALUE_SHORT_FLAGS


def split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv into the leading run of flags and the positional tokens."""
    flags: list[str] = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token == "--":
            return flags, argv[i + 1 :]
        if not token.startswith("-") or token == "-":
            break
        flags.append(token)
        if _takes_value(token) and i + 1 < len(argv):
            flags.append(argv[i + 1])
            i += 1
        i += 1
    return flags, argv[i:]


def parse_args(argv: list[str] | None = None) -> PullRequestOptions:
    """Parse the command line into PullRequestOptions.

    With --commit-message the title is filled in later from git, so the
    first positional is the description.

    Raises:
        UsageError: On an unknown flag or a missing flag value.
    """
    argv = argv if argv is not None else sys.argv[1:]
    flags, positionals = split_argv(list(argv))
    ns = build_parser().parse_args(flags)
    title: str | None = None
    body: str | None = None
    if ns.commit_message:
        body = positionals[0] if positionals else None
    else:
        title = positionals[0] if positionals else None
        body = positionals[1] if len(positionals) > 1 else None
    return PullRequestOptions(
        base=ns.base,
        yes=ns.yes,
        commit_message=ns.commit_message,
        browse=ns.browse,
        title=title,
        body=body,
        config=ns.config,
        verbose=ns.verbose,
    )
