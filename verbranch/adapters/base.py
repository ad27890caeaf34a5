"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from verbranch.models import PR, Comment, RefLookup


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitPlatformAdapter(ABC):
    """Abstract interface for the remote calls the versioning pipeline makes.

    ``repo`` is always the full ``owner/name`` of the repository.
    """

    @abstractmethod
    def get_file_content(self, repo: str, path: str, ref: str) -> str:
        """Return the raw content of a file at the given branch or ref."""
        ...

    @abstractmethod
    def get_commit_sha(self, repo: str, ref: str) -> str:
        """Return the SHA of the commit a ref (e.g. refs/heads/main) points at."""
        ...

    @abstractmethod
    def get_ref(self, repo: str, ref: str) -> RefLookup:
        """Look up a fully qualified ref; never raises for a missing ref."""
        ...

    @abstractmethod
    def create_ref(self, repo: str, ref: str, sha: str) -> None:
        """Create a fully qualified ref pointing at sha."""
        ...

    @abstractmethod
    def list_pull_requests(
        self,
        repo: str,
        head: str,
        base: str,
        state: str = "all",
        sort: str = "updated",
        direction: str = "desc",
    ) -> List[PR]:
        """List pull requests for a (head branch, base branch) pair."""
        ...

    @abstractmethod
    def get_pr(self, repo: str, pr_number: int) -> PR:
        """Fetch PR by number."""
        ...

    @abstractmethod
    def update_pr(
        self,
        repo: str,
        pr_number: int,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
    ) -> PR:
        """Update a pull request; None fields are left unchanged."""
        ...

    @abstractmethod
    def create_pr(
        self,
        repo: str,
        title: str,
        body: str | None,
        head: str,
        base: str,
        draft: bool = False,
    ) -> PR:
        """Create a pull request."""
        ...

    @abstractmethod
    def list_issue_comments(self, repo: str, issue_number: int) -> List[Comment]:
        """List all comments on an issue or PR."""
        ...

    @abstractmethod
    def update_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        """Replace the body of an issue comment."""
        ...

    @abstractmethod
    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """Post a comment on an issue or PR."""
        ...

    @abstractmethod
    def check_assignable(self, repo: str, login: str) -> bool:
        """Return True if the user can be assigned to issues in repo.

        Called from several threads at once; implementations must be thread-safe.
        """
        ...

    @abstractmethod
    def add_assignees(self, repo: str, issue_number: int, assignees: List[str]) -> None:
        """Add assignees to an issue or PR."""
        ...

    @abstractmethod
    def request_reviewers(
        self,
        repo: str,
        pr_number: int,
        reviewers: List[str],
        team_reviewers: List[str],
    ) -> None:
        """Request reviews from users and teams."""
        ...

    @abstractmethod
    def add_labels(self, repo: str, issue_number: int, labels: List[str]) -> None:
        """Add labels to an issue or PR."""
        ...
