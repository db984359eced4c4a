"""git-pr: push the current branch and open a GitHub pull request."""

__version__ = "0.1.0"
