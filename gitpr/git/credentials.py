"""Look up GitHub credentials through `git credential fill`."""

import logging
from pathlib import Path

from gitpr.errors import CredentialError
from gitpr.git._run import _run_git
from gitpr.models import Credentials


def _parse_credential_output(text: str) -> dict[str, str]:
    """Parse key=value lines printed by git credential fill."""
    values: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            values[key.strip()] = value
    return values


def fill_credentials(
    host: str = "github.com",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> Credentials:
    """Ask the configured credential helpers for username and password.

    git may prompt on the terminal when no helper has an answer.

    Raises:
        CredentialError: If the helper fails or username/password is missing.
    """
    request = f"protocol=https\nhost={host}\n\n"
    result = _run_git(["credential", "fill"], cwd=repo_dir, log=log, check=False, input=request)
    if not result.ok:
        raise CredentialError(f"Could not read credentials for {host}")
    values = _parse_credential_output(result.stdout)
    username = values.get("username", "").strip()
    password = values.get("password", "")
    if not username:
        raise CredentialError(f"No username found for {host}")
    if not password:
        raise CredentialError(f"No password or token found for {host}")
    if log:
        log.debug("Using credentials of %s for %s", username, host)
    return Credentials(username=username, password=password)
