"""Open or update the pull request of a versioning branch."""

import logging

from verbranch.adapters.base import GitPlatformAdapter
from verbranch.errors import DuplicatePullRequestError
from verbranch.models import PR, PRState

LOG = logging.getLogger("verbranch.services.pull_requests")


def find_canonical_pr(adapter: GitPlatformAdapter, repo: str, head: str, base: str) -> PR | None:
    """Most recently updated PR (open or closed) for head -> base, if any."""
    prs = adapter.list_pull_requests(repo, head=head, base=base, state="all", sort="updated", direction="desc")
    if len(prs) > 1:
        LOG.debug("Found %s pull requests for %s -> %s, using #%s", len(prs), head, base, prs[0].number)
    return prs[0] if prs else None


def reconcile_pull_request(
    adapter: GitPlatformAdapter,
    repo: str,
    head: str,
    base: str,
    title: str | None = None,
    body: str | None = None,
    draft: bool = False,
    fail_if_existing_open: bool = False,
) -> PR:
    """Update (and reopen) the canonical PR for head -> base, or create one.

    Title and body are only sent when given. A new PR without a title is
    named after the head branch. The draft flag only applies on creation.

    Raises:
        DuplicatePullRequestError: fail_if_existing_open is set and the
            canonical PR is open. Nothing is changed in that case.
    """
    existing = find_canonical_pr(adapter, repo, head, base)

    if existing is not None and existing.is_open and fail_if_existing_open:
        raise DuplicatePullRequestError(existing.number, existing.html_url)

    if existing is not None:
        pr = adapter.update_pr(repo, existing.number, title=title, body=body, state=PRState.OPEN.value)
        if existing.state is PRState.CLOSED:
            LOG.info("Pull request #%s reopened", pr.number)
        else:
            LOG.info("Pull request #%s updated", pr.number)
        return pr

    pr = adapter.create_pr(repo, title=title or head, body=body, head=head, base=base, draft=draft)
    LOG.info("Pull request #%s created: %s", pr.number, pr.html_url)
    return pr
