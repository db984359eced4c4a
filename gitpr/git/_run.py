"""Internal helpers: run git commands, GitResult, GitRunnerError."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GitResult:
    """Exit status and output of one git invocation.

    stdout/stderr are empty when output was not captured.
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitRunnerError(Exception):
    """Raised when a git command fails."""

    def __init__(self, message: str, result: GitResult | None = None) -> None:
        super().__init__(message)
        self.result = result


def _run_git(
    args: list[str],
    cwd: Path | None = None,
    log: logging.Logger | None = None,
    check: bool = True,
    capture: bool = True,
    input: str | None = None,
) -> GitResult:
    """Run git command and return its result.

    With check=True a non-zero exit raises GitRunnerError. With
    capture=False git writes straight to the terminal (used for push).
    """
    cmd = ["git"] + args
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    if log:
        log.debug("Running %s", cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            capture_output=capture,
            text=True,
            input=input,
        )
    except FileNotFoundError as e:
        raise GitRunnerError("git not found") from e
    result = GitResult(
        returncode=proc.returncode,
        stdout=(proc.stdout or "") if capture else "",
        stderr=(proc.stderr or "") if capture else "",
    )
    if check and not result.ok:
        err = (result.stderr or result.stdout).strip()
        if log:
            log.warning("Git %s failed: %s", args, err)
        raise GitRunnerError(f"git {' '.join(args)}: {err}", result)
    return result
