"""Ensure the versioning branch ref exists on the remote."""

import logging

from verbranch.adapters.base import GitPlatformAdapter, GitPlatformError
from verbranch.errors import BaseBranchNotFoundError, UnexpectedRefStateError
from verbranch.models import RefStatus
from verbranch.services.branches import branch_ref

LOG = logging.getLogger("verbranch.services.refs")

# GitHub answers 422 ("No commit found for SHA") for some unknown refs
_MISSING_STATUSES = (404, 422)


def resolve_base_sha(adapter: GitPlatformAdapter, repo: str, base_branch: str) -> str:
    """Return the head commit SHA of the base branch."""
    try:
        sha = adapter.get_commit_sha(repo, branch_ref(base_branch))
    except GitPlatformError as e:
        if e.status_code in _MISSING_STATUSES:
            raise BaseBranchNotFoundError(base_branch) from e
        raise
    LOG.debug("Base branch %s is at %s", base_branch, sha)
    return sha


def ensure_branch_ref(
    adapter: GitPlatformAdapter,
    repo: str,
    base_branch: str,
    head_branch_ref: str,
    base_sha: str | None = None,
) -> bool:
    """Create head_branch_ref at the base branch head unless it already exists.

    base_sha skips the base lookup when the caller already resolved it.
    Returns True when the ref was created. An existing ref is left untouched.
    A failed creation (e.g. someone created it in between) is not retried.
    """
    sha = base_sha or resolve_base_sha(adapter, repo, base_branch)
    lookup = adapter.get_ref(repo, head_branch_ref)

    if lookup.status is RefStatus.FOUND:
        LOG.info("Branch ref %s already exists", head_branch_ref)
        return False
    if lookup.status is RefStatus.NOT_FOUND:
        adapter.create_ref(repo, head_branch_ref, sha)
        LOG.info("Branch ref %s created at %s", head_branch_ref, sha)
        return True
    raise UnexpectedRefStateError(head_branch_ref, lookup.http_status)
