"""Git platform adapters (base and implementations)."""

from gitpr.adapters.base import GitPlatformAdapter
from gitpr.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitHubAdapter"]
