"""Fatal errors raised while preparing a pull request.

Each one ends the run with a single line on stderr and exit code 1.
"""


class GitPRError(Exception):
    """Base class for all git-pr failures."""

    pass


class UsageError(GitPRError):
    """Bad command line."""

    pass


class ConfigError(GitPRError):
    """Config file could not be read or validated."""

    pass


class RepositoryError(GitPRError):
    """Remote, branch or base ref cannot be resolved."""

    pass


class NoCommitsError(GitPRError):
    """Nothing to submit between base and current branch."""

    pass


class CredentialError(GitPRError):
    """Git credential store did not return a username and password."""

    pass


class PushError(GitPRError):
    """git push exited non-zero; git already printed the reason."""

    pass


class EditorError(GitPRError):
    """Editor failed or left an empty title."""

    pass


class AbortedError(GitPRError):
    """User declined the confirmation prompt."""

    pass
