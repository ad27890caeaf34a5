"""GitHub API adapter."""

import threading
from datetime import datetime
from typing import Any, Dict, List

import requests

from verbranch.adapters.base import GitPlatformAdapter, GitPlatformError
from verbranch.models import PR, Comment, PRState, RefLookup, RefStatus

PER_PAGE = 100
RAW_MEDIA_TYPE = "application/vnd.github.raw"


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    created = _parse_iso(data["created_at"])
    updated = _parse_iso(data.get("updated_at") or data["created_at"])
    return Comment(
        id=data["id"],
        body=data.get("body") or "",
        author=user.get("login", ""),
        author_id=user.get("id"),
        created_at=created,
        updated_at=updated,
    )


def _pr_from_api(data: Dict[str, Any]) -> PR:
    head = data.get("head") or {}
    base = data.get("base") or {}
    updated = data.get("updated_at")
    return PR(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        head_branch=head.get("ref", ""),
        base_branch=base.get("ref", ""),
        state=PRState(data.get("state", "open")),
        draft=bool(data.get("draft", False)),
        html_url=data.get("html_url"),
        updated_at=_parse_iso(updated) if updated else None,
    )


def _error_message(resp: requests.Response) -> str:
    msg = resp.text or resp.reason or str(resp.status_code)
    try:
        data = resp.json()
    except ValueError:
        return msg
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return msg


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com", timeout: float = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
        }
        # requests.Session is not thread-safe; assignability checks run on a pool
        self._local = threading.local()
        self._local.session = self._new_session()

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(self._headers)
        return session

    @property
    def _session(self) -> requests.Session:
        """Session of the calling thread, created on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = self._new_session()
        return session

    def _url(self, path: str) -> str:
        return f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
        headers: Dict[str, str] | None = None,
    ) -> requests.Response:
        resp = self._session.request(
            method,
            self._url(path),
            params=params,
            json=json,
            headers=headers,
            timeout=self._timeout,
        )
        if resp.status_code >= 400:
            raise GitPlatformError(f"{resp.status_code}: {_error_message(resp)}", status_code=resp.status_code)
        return resp

    def _paginate(self, path: str, params: Dict[str, Any] | None = None) -> List[Dict[str, Any]]:
        """GET every page of a list endpoint."""
        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            page_params = {**(params or {}), "per_page": PER_PAGE, "page": page}
            data = self._request("GET", path, params=page_params).json() or []
            items.extend(data)
            if len(data) < PER_PAGE:
                return items
            page += 1

    def get_file_content(self, repo: str, path: str, ref: str) -> str:
        resp = self._request(
            "GET",
            f"/repos/{repo}/contents/{path.lstrip('/')}",
            params={"ref": ref},
            headers={"Accept": RAW_MEDIA_TYPE},
        )
        return resp.text

    def get_commit_sha(self, repo: str, ref: str) -> str:
        data = self._request("GET", f"/repos/{repo}/commits/{ref}").json()
        return data["sha"]

    def get_ref(self, repo: str, ref: str) -> RefLookup:
        # git/ref/ (singular) matches exactly; git/refs/ would also return prefix matches
        short = ref[len("refs/") :] if ref.startswith("refs/") else ref
        resp = self._session.request("GET", self._url(f"/repos/{repo}/git/ref/{short}"), timeout=self._timeout)
        if resp.status_code == 200:
            data = resp.json() or {}
            sha = (data.get("object") or {}).get("sha")
            return RefLookup(ref=ref, status=RefStatus.FOUND, sha=sha, http_status=200)
        if resp.status_code == 404:
            return RefLookup(ref=ref, status=RefStatus.NOT_FOUND, http_status=404)
        return RefLookup(ref=ref, status=RefStatus.ERROR, http_status=resp.status_code)

    def create_ref(self, repo: str, ref: str, sha: str) -> None:
        self._request("POST", f"/repos/{repo}/git/refs", json={"ref": ref, "sha": sha})

    def list_pull_requests(
        self,
        repo: str,
        head: str,
        base: str,
        state: str = "all",
        sort: str = "updated",
        direction: str = "desc",
    ) -> List[PR]:
        owner = repo.split("/", 1)[0]
        params = {
            "head": f"{owner}:{head}",
            "base": base,
            "state": state,
            "sort": sort,
            "direction": direction,
        }
        return [_pr_from_api(d) for d in self._paginate(f"/repos/{repo}/pulls", params)]

    def get_pr(self, repo: str, pr_number: int) -> PR:
        resp = self._request("GET", f"/repos/{repo}/pulls/{pr_number}")
        return _pr_from_api(resp.json())

    def update_pr(
        self,
        repo: str,
        pr_number: int,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
    ) -> PR:
        payload: Dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if body is not None:
            payload["body"] = body
        if state is not None:
            payload["state"] = state
        resp = self._request("PATCH", f"/repos/{repo}/pulls/{pr_number}", json=payload)
        return _pr_from_api(resp.json())

    def create_pr(
        self,
        repo: str,
        title: str,
        body: str | None,
        head: str,
        base: str,
        draft: bool = False,
    ) -> PR:
        payload: Dict[str, Any] = {"title": title, "head": head, "base": base, "draft": draft}
        if body is not None:
            payload["body"] = body
        resp = self._request("POST", f"/repos/{repo}/pulls", json=payload)
        return _pr_from_api(resp.json())

    def list_issue_comments(self, repo: str, issue_number: int) -> List[Comment]:
        data = self._paginate(f"/repos/{repo}/issues/{issue_number}/comments")
        return [_comment_from_api(d) for d in data]

    def update_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        resp = self._request("PATCH", f"/repos/{repo}/issues/comments/{comment_id}", json={"body": body})
        return _comment_from_api(resp.json())

    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        resp = self._request("POST", f"/repos/{repo}/issues/{issue_number}/comments", json={"body": body})
        return _comment_from_api(resp.json())

    def check_assignable(self, repo: str, login: str) -> bool:
        resp = self._session.request("GET", self._url(f"/repos/{repo}/assignees/{login}"), timeout=self._timeout)
        if resp.status_code == 204:
            return True
        if resp.status_code == 404:
            return False
        raise GitPlatformError(f"{resp.status_code}: {_error_message(resp)}", status_code=resp.status_code)

    def add_assignees(self, repo: str, issue_number: int, assignees: List[str]) -> None:
        self._request("POST", f"/repos/{repo}/issues/{issue_number}/assignees", json={"assignees": assignees})

    def request_reviewers(
        self,
        repo: str,
        pr_number: int,
        reviewers: List[str],
        team_reviewers: List[str],
    ) -> None:
        self._request(
            "POST",
            f"/repos/{repo}/pulls/{pr_number}/requested_reviewers",
            json={"reviewers": reviewers, "team_reviewers": team_reviewers},
        )

    def add_labels(self, repo: str, issue_number: int, labels: List[str]) -> None:
        self._request("POST", f"/repos/{repo}/issues/{issue_number}/labels", json={"labels": labels})
