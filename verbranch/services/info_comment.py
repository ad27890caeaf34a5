"""Keep one bot-authored info comment on the versioning pull request up to date."""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from jinja2 import StrictUndefined, Template

from verbranch.adapters.base import GitPlatformAdapter
from verbranch.models import Comment

LOG = logging.getLogger("verbranch.services.info_comment")

DEFAULT_BOT_LOGIN = "github-actions[bot]"
DEFAULT_BOT_ID = 41898282

DEFAULT_TEMPLATE = """\
## Versioning branch

| | branch | version |
|---|---|---|
| base | `{{ base_branch }}` | `{{ base_version }}` |
| head | `{{ head_branch }}` | `{{ head_version }}` |

{% if is_prerelease == "true" %}This is a **pre-release**.{% else %}This is a release.{% endif %}
{% if is_new_branch == "true" %}The branch was created for this run.{% endif %}
"""


def load_template(path: Path | str | None = None) -> str:
    """Read a template file, or return the built-in template when no path is set."""
    if not path:
        return DEFAULT_TEMPLATE
    return Path(path).read_text(encoding="utf-8")


def render_info_comment(template: str, values: Mapping[str, Any]) -> str:
    """Render the comment body; output keys may use hyphens (base-branch -> base_branch)."""
    context = {key.replace("-", "_"): value for key, value in values.items()}
    return Template(template, undefined=StrictUndefined, keep_trailing_newline=True).render(**context)


def is_bot_comment(comment: Comment, bot_login: str | None, bot_id: int | None) -> bool:
    """True if authored by the automation identity; login or numeric id is enough."""
    if bot_login and comment.author == bot_login:
        return True
    return bot_id is not None and comment.author_id == bot_id


def find_bot_comments(
    comments: Iterable[Comment],
    bot_login: str | None = DEFAULT_BOT_LOGIN,
    bot_id: int | None = DEFAULT_BOT_ID,
) -> list[Comment]:
    return [c for c in comments if is_bot_comment(c, bot_login, bot_id)]


def reconcile_info_comment(
    adapter: GitPlatformAdapter,
    repo: str,
    pr_number: int,
    body: str,
    bot_login: str | None = DEFAULT_BOT_LOGIN,
    bot_id: int | None = DEFAULT_BOT_ID,
) -> Comment:
    """Update the first bot comment on the PR with body, or create one.

    Additional bot comments are left as they are.
    """
    matches = find_bot_comments(adapter.list_issue_comments(repo, pr_number), bot_login, bot_id)
    if len(matches) > 1:
        LOG.warning(
            "PR #%s: %s info comments found, updating only comment %s",
            pr_number,
            len(matches),
            matches[0].id,
        )
    if matches:
        comment = adapter.update_comment(repo, matches[0].id, body)
        LOG.info("PR #%s: info comment %s updated", pr_number, comment.id)
        return comment
    comment = adapter.create_comment(repo, pr_number, body)
    LOG.info("PR #%s: info comment %s created", pr_number, comment.id)
    return comment
