"""Tests for pull request reconciliation."""

from unittest.mock import Mock

import pytest

from verbranch.errors import DuplicatePullRequestError
from verbranch.models import PRState
from verbranch.services.pull_requests import reconcile_pull_request


def test_creates_pr_when_none_exists(adapter: Mock, make_pr) -> None:
    adapter.list_pull_requests.return_value = []
    adapter.create_pr.return_value = make_pr(number=12)

    pr = reconcile_pull_request(adapter, "owner/repo", "rel_1.3.0", "main", title="Release 1.3.0", draft=True)

    assert pr.number == 12
    adapter.list_pull_requests.assert_called_once_with(
        "owner/repo", head="rel_1.3.0", base="main", state="all", sort="updated", direction="desc"
    )
    adapter.create_pr.assert_called_once_with(
        "owner/repo", title="Release 1.3.0", body=None, head="rel_1.3.0", base="main", draft=True
    )
    adapter.update_pr.assert_not_called()


def test_new_pr_without_title_uses_head_branch(adapter: Mock, make_pr) -> None:
    adapter.list_pull_requests.return_value = []
    adapter.create_pr.return_value = make_pr()

    reconcile_pull_request(adapter, "owner/repo", "rel_1.3.0", "main")

    assert adapter.create_pr.call_args.kwargs["title"] == "rel_1.3.0"
    assert adapter.create_pr.call_args.kwargs["draft"] is False


def test_closed_pr_is_reopened(adapter: Mock, make_pr) -> None:
    adapter.list_pull_requests.return_value = [make_pr(number=5, state=PRState.CLOSED)]
    adapter.update_pr.return_value = make_pr(number=5, state=PRState.OPEN)

    pr = reconcile_pull_request(adapter, "owner/repo", "rel_1.3.0", "main", body="New body")

    assert pr.number == 5
    adapter.update_pr.assert_called_once_with("owner/repo", 5, title=None, body="New body", state="open")
    adapter.create_pr.assert_not_called()


def test_most_recently_updated_pr_is_canonical(adapter: Mock, make_pr) -> None:
    adapter.list_pull_requests.return_value = [make_pr(number=9), make_pr(number=3, state=PRState.CLOSED)]
    adapter.update_pr.return_value = make_pr(number=9)

    reconcile_pull_request(adapter, "owner/repo", "rel_1.3.0", "main", title="T")

    adapter.update_pr.assert_called_once_with("owner/repo", 9, title="T", body=None, state="open")


def test_open_pr_with_fail_if_exist_raises_without_mutation(adapter: Mock, make_pr) -> None:
    adapter.list_pull_requests.return_value = [make_pr(number=4)]

    with pytest.raises(DuplicatePullRequestError) as exc_info:
        reconcile_pull_request(adapter, "owner/repo", "rel_1.3.0", "main", fail_if_existing_open=True)

    assert exc_info.value.number == 4
    adapter.update_pr.assert_not_called()
    adapter.create_pr.assert_not_called()


def test_closed_pr_with_fail_if_exist_is_reopened(adapter: Mock, make_pr) -> None:
    """Only an open PR counts as a duplicate."""
    adapter.list_pull_requests.return_value = [make_pr(number=4, state=PRState.CLOSED)]
    adapter.update_pr.return_value = make_pr(number=4)

    pr = reconcile_pull_request(adapter, "owner/repo", "rel_1.3.0", "main", fail_if_existing_open=True)

    assert pr.number == 4
    adapter.update_pr.assert_called_once()
