"""Apply assignees, reviewers and labels to the versioning pull request."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, List

from pydantic import BaseModel, Field

from verbranch.adapters.base import GitPlatformAdapter

LOG = logging.getLogger("verbranch.services.collaborators")

MAX_ASSIGNABLE_CHECKS = 8


class CollaboratorResult(BaseModel):
    """What was applied to the pull request."""

    assignees: List[str] = Field(default_factory=list)
    reviewers: List[str] = Field(default_factory=list)
    team_reviewers: List[str] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)

    def as_outputs(self) -> dict[str, str]:
        return {
            "assignees": ",".join(self.assignees),
            "reviewers": ",".join(self.reviewers),
            "team-reviewers": ",".join(self.team_reviewers),
            "labels": ",".join(self.labels),
        }


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(v.strip() for v in values if v and v.strip()))


def filter_assignable(
    adapter: GitPlatformAdapter,
    repo: str,
    logins: Iterable[str],
    max_workers: int = MAX_ASSIGNABLE_CHECKS,
) -> List[str]:
    """Return the logins the platform confirms as assignable, in request order.

    All checks run concurrently and are waited for before deciding. A check
    that fails only drops its own login.
    """
    candidates = _unique(logins)
    if not candidates:
        return []

    futures: List[tuple[str, Future]] = []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(candidates))) as pool:
        for login in candidates:
            futures.append((login, pool.submit(adapter.check_assignable, repo, login)))

    confirmed: List[str] = []
    for login, future in futures:
        error = future.exception()
        if error is not None:
            LOG.warning("Could not check whether %s is assignable: %s", login, error)
        elif future.result():
            confirmed.append(login)
        else:
            LOG.info("%s is not assignable in %s, skipping", login, repo)
    return confirmed


def reconcile_collaborators(
    adapter: GitPlatformAdapter,
    repo: str,
    pr_number: int,
    assignees: Iterable[str] = (),
    reviewers: Iterable[str] = (),
    team_reviewers: Iterable[str] = (),
    labels: Iterable[str] = (),
) -> CollaboratorResult:
    """Apply each non-empty group with a single call.

    Assignees are filtered through filter_assignable and only the confirmed
    ones are applied. Reviewers and teams are requested without a check.
    """
    result = CollaboratorResult()

    confirmed = filter_assignable(adapter, repo, assignees)
    if confirmed:
        adapter.add_assignees(repo, pr_number, confirmed)
        result.assignees = confirmed
        LOG.info("PR #%s: assignees %s", pr_number, ", ".join(confirmed))

    reviewers = _unique(reviewers)
    team_reviewers = _unique(team_reviewers)
    if reviewers or team_reviewers:
        adapter.request_reviewers(repo, pr_number, reviewers, team_reviewers)
        result.reviewers = reviewers
        result.team_reviewers = team_reviewers
        LOG.info("PR #%s: review requested from %s", pr_number, ", ".join(reviewers + team_reviewers))

    labels = _unique(labels)
    if labels:
        adapter.add_labels(repo, pr_number, labels)
        result.labels = labels
        LOG.info("PR #%s: labels %s", pr_number, ", ".join(labels))

    return result
