"""Collect pull request title and body through the user's editor.

The template is written to <git-dir>/PULLREQ_EDITMSG. Lines starting with
"#" are ignored; the first remaining line is the title and the rest is the
body.
"""

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Sequence

from gitpr.errors import EditorError
from gitpr.git._run import _run_git
from gitpr.models import PullRequestMessage

DEFAULT_EDITOR = "vi"
COMMENT_PREFIX = "#"
EDITOR_ENV_VARS = ("GIT_EDITOR", "VISUAL", "EDITOR")


def resolve_editor(
    configured: str | None = None,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Pick the editor command.

    Order: git config core.editor, the configured editor, $GIT_EDITOR,
    $VISUAL, $EDITOR, then vi.
    """
    result = _run_git(["config", "--get", "core.editor"], cwd=repo_dir, log=log, check=False)
    if result.ok and result.stdout.strip():
        return result.stdout.strip()
    if configured:
        return configured
    for var in EDITOR_ENV_VARS:
        value = os.environ.get(var, "").strip()
        if value:
            return value
    return DEFAULT_EDITOR


def render_template(repo: str, branch: str, base: str, commits: Sequence[str]) -> str:
    """Build the edit-message text: empty title line, then comments."""
    lines = [
        "",
        f"# Requesting a pull to {repo} from {branch} into {base}",
        "#",
        "# Write a message for this pull request. The first line is the",
        "# title and the rest is the description. Lines starting with",
        "# '#' are ignored; an empty title aborts the pull request.",
        "#",
        f"# Changes ({len(commits)}):",
        "#",
    ]
    lines.extend(f"# {commit}" for commit in commits)
    return "\n".join(lines) + "\n"


def write_template(path: Path, repo: str, branch: str, base: str, commits: Sequence[str]) -> Path:
    """Write (overwrite) the edit-message file and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_template(repo, branch, base, commits), encoding="utf-8")
    return path


def launch_editor(editor: str, path: Path, log: logging.Logger | None = None) -> None:
    """Run the editor on path and block until it exits.

    Raises:
        EditorError: If the editor cannot be started or exits non-zero.
    """
    cmd = shlex.split(editor) + [str(path)]
    if log:
        log.debug("Launching editor %s", cmd)
    try:
        proc = subprocess.run(cmd, check=False)
    except (FileNotFoundError, PermissionError) as e:
        raise EditorError(f"Cannot run editor '{editor}': {e}") from e
    if proc.returncode != 0:
        raise EditorError(f"Editor '{editor}' exited with status {proc.returncode}")


def parse_message(text: str) -> PullRequestMessage:
    """Split edited text into title and body.

    Comment lines are dropped. Leading blank lines of the body are removed
    and trailing whitespace trimmed; interior blank lines are kept.

    Raises:
        EditorError: If the title is empty.
    """
    lines = [line.rstrip("\r") for line in text.splitlines() if not line.startswith(COMMENT_PREFIX)]
    title = lines[0].strip() if lines else ""
    if not title:
        raise EditorError("Aborting pull request due to empty title")
    rest = lines[1:]
    while rest and not rest[0].strip():
        rest.pop(0)
    body = "\n".join(rest).rstrip()
    return PullRequestMessage(title=title, body=body)


def collect_message(
    path: Path,
    editor: str,
    repo: str,
    branch: str,
    base: str,
    commits: Sequence[str],
    log: logging.Logger | None = None,
) -> PullRequestMessage:
    """Write the template, let the user edit it and parse the result.

    The file is removed once its content has been read.
    """
    write_template(path, repo, branch, base, commits)
    launch_editor(editor, path, log=log)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise EditorError(f"Cannot read {path}: {e}") from e
    path.unlink(missing_ok=True)
    return parse_message(text)
