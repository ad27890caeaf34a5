"""Git platform adapters."""

from verbranch.adapters.base import GitPlatformAdapter, GitPlatformError
from verbranch.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
