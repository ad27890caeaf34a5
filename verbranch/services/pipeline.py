"""Versioning pipeline: resolve the version, then converge branch, PR, comment and collaborators.

Stages run one after another and any error stops the run. Nothing already
changed on the remote is rolled back.
"""

import logging

from pydantic import BaseModel, Field

from verbranch.adapters.base import GitPlatformAdapter
from verbranch.config import ActionInputs
from verbranch.models import ResolvedVersion
from verbranch.services.branches import branch_name, branch_ref, version_from_branch
from verbranch.services.collaborators import CollaboratorResult, reconcile_collaborators
from verbranch.services.info_comment import load_template, reconcile_info_comment, render_info_comment
from verbranch.services.manifest import read_version
from verbranch.services.pull_requests import reconcile_pull_request
from verbranch.services.refs import ensure_branch_ref, resolve_base_sha
from verbranch.services.version import describe_version, parse_version, resolve_version

LOG = logging.getLogger("verbranch.services.pipeline")


def _flag(value: bool) -> str:
    return "true" if value else "false"


class PipelineResult(BaseModel):
    """Everything a run reports back."""

    base_branch: str
    base_version: str
    head_branch: str
    head_version: ResolvedVersion
    is_new_branch: bool = False
    pull_request_number: int | None = None
    pull_request_url: str | None = None
    collaborators: CollaboratorResult = Field(default_factory=CollaboratorResult)

    def as_outputs(self) -> dict[str, str]:
        version = self.head_version
        outputs = {
            "base-branch": self.base_branch,
            "base-version": self.base_version,
            "head-branch": self.head_branch,
            "head-version": version.version,
            "is-new-branch": _flag(self.is_new_branch),
            "is-prerelease": _flag(version.is_prerelease),
            "major": str(version.major),
            "minor": str(version.minor),
            "patch": str(version.patch),
            "pre-id": version.pre_id,
            "pre-inc": version.pre_inc,
            "pull-request-number": str(self.pull_request_number) if self.pull_request_number else "",
            "pull-request-url": self.pull_request_url or "",
        }
        outputs.update(self.collaborators.as_outputs())
        return outputs


def describe_pull_request(adapter: GitPlatformAdapter, repo: str, inputs: ActionInputs) -> PipelineResult:
    """Report on an existing versioning PR without changing anything."""
    pr = adapter.get_pr(repo, inputs.pr_number)
    head_version = version_from_branch(inputs.name_prefix, pr.head_branch)
    base_version = read_version(adapter, repo, pr.base_branch, inputs.version_file)
    is_prerelease = parse_version(head_version).prerelease is not None
    LOG.info("PR #%s: %s (%s) -> %s (%s)", pr.number, pr.head_branch, head_version, pr.base_branch, base_version)
    return PipelineResult(
        base_branch=pr.base_branch,
        base_version=base_version,
        head_branch=pr.head_branch,
        head_version=describe_version(head_version, is_prerelease=is_prerelease),
        pull_request_number=pr.number,
        pull_request_url=pr.html_url,
    )


def run_pipeline(adapter: GitPlatformAdapter, repo: str, inputs: ActionInputs) -> PipelineResult:
    """Run every stage for repo (owner/name) and return the outputs to report."""
    if inputs.pr_number is not None:
        return describe_pull_request(adapter, repo, inputs)

    base_branch = inputs.base_branch
    base_sha = resolve_base_sha(adapter, repo, base_branch)
    base_version = read_version(adapter, repo, base_sha, inputs.version_file)
    resolved = resolve_version(base_version, inputs.version_level, inputs.pre_id, inputs.custom_version)
    LOG.info(
        "Version %s -> %s (%s)",
        base_version,
        resolved.version,
        resolved.release_type.value if resolved.release_type else "custom-version",
    )

    head_branch = branch_name(inputs.name_prefix, resolved.version)
    is_new_branch = ensure_branch_ref(adapter, repo, base_branch, branch_ref(head_branch), base_sha)
    result = PipelineResult(
        base_branch=base_branch,
        base_version=base_version,
        head_branch=head_branch,
        head_version=resolved,
        is_new_branch=is_new_branch,
    )
    if not inputs.pr_create:
        return result

    pr = reconcile_pull_request(
        adapter,
        repo,
        head=head_branch,
        base=base_branch,
        title=inputs.pr_title,
        body=inputs.pr_description,
        draft=inputs.pr_draft,
        fail_if_existing_open=inputs.pr_fail_if_exist,
    )
    result = result.model_copy(update={"pull_request_number": pr.number, "pull_request_url": pr.html_url})

    if inputs.pr_info_comment:
        template = load_template(inputs.pr_info_comment_template)
        body = render_info_comment(template, result.as_outputs())
        reconcile_info_comment(adapter, repo, pr.number, body, bot_login=inputs.bot_login, bot_id=inputs.bot_id)

    collaborators = reconcile_collaborators(
        adapter,
        repo,
        pr.number,
        assignees=inputs.pr_assignees,
        reviewers=inputs.pr_reviewers,
        team_reviewers=inputs.pr_team_reviewers,
        labels=inputs.pr_labels,
    )
    return result.model_copy(update={"collaborators": collaborators})
