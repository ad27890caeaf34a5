"""Shared fixtures: mocked adapter and platform objects as the GitHub adapter returns them."""

from datetime import datetime
from typing import Callable
from unittest.mock import Mock

import pytest

from verbranch.adapters.base import GitPlatformAdapter
from verbranch.models import PR, Comment, PRState


def _pr(number: int = 7, state: PRState = PRState.OPEN, head: str = "rel_1.3.0", base: str = "main") -> PR:
    return PR(
        number=number,
        title=f"Release {head}",
        body="",
        head_branch=head,
        base_branch=base,
        state=state,
        html_url=f"https://github.com/owner/repo/pull/{number}",
    )


def _comment(comment_id: int, author: str, author_id: int | None = None, body: str = "text") -> Comment:
    dt = datetime(2024, 1, 15, 10, 0, 0)
    return Comment(id=comment_id, body=body, author=author, author_id=author_id, created_at=dt, updated_at=dt)


@pytest.fixture
def adapter() -> Mock:
    return Mock(spec=GitPlatformAdapter)


@pytest.fixture
def make_pr() -> Callable[..., PR]:
    return _pr


@pytest.fixture
def make_comment() -> Callable[..., Comment]:
    return _comment
