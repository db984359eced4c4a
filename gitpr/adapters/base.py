"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from gitpr.models import PullRequestResult


class GitPlatformAdapter(ABC):
    """Interface for Git hosting platforms that accept pull requests."""

    @abstractmethod
    def create_pr(
        self,
        repo: str,
        title: str,
        body: str,
        head: str,
        base: str,
    ) -> PullRequestResult:
        """Create a pull request and return the outcome as a value."""
        ...
