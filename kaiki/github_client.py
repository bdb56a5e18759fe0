"""A small asynchronous client for the GitHub REST API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from kaiki.notify import NotifyFailedError, NotifyHttpError

DEFAULT_BASE_URL = "https://api.github.com"
_ACCEPT = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class IssueComment:
    """A comment on an issue or pull request."""

    id: int
    body: str


class HttpGitHubClient:
    """GitHub REST client for commit statuses and issue comments."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(headers={"User-Agent": "kaiki"})

    @property
    def base_url(self) -> str:
        """The API root requests are sent to."""
        return self._base_url

    async def __aenter__(self) -> HttpGitHubClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, action: str, payload: Any = None
    ) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": _ACCEPT,
            "User-Agent": "kaiki",
        }
        kwargs: dict[str, Any] = {"headers": headers}
        if payload is not None:
            kwargs["json"] = payload
        try:
            resp = await self._client.request(method, f"{self._base_url}{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise NotifyHttpError(str(exc)) from exc
        if not resp.is_success:
            status = f"{resp.status_code} {resp.reason_phrase}".strip()
            raise NotifyFailedError(f"{action} failed ({status}): {resp.text}")
        return resp

    async def create_commit_status(
        self, owner: str, repo: str, sha: str, payload: Mapping[str, Any]
    ) -> None:
        """Create a commit status on ``sha``."""
        await self._request(
            "POST", f"/repos/{owner}/{repo}/statuses/{sha}", "commit status", dict(payload)
        )

    async def list_issue_comments(
        self, owner: str, repo: str, issue_number: int
    ) -> list[IssueComment]:
        """List the comments on an issue or pull request."""
        resp = await self._request(
            "GET", f"/repos/{owner}/{repo}/issues/{issue_number}/comments", "list comments"
        )
        try:
            raw = resp.json()
        except ValueError as exc:
            raise NotifyHttpError(str(exc)) from exc
        if not isinstance(raw, list):
            raise NotifyHttpError("expected a JSON array of comments")
        comments = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            comment_id = entry.get("id")
            body = entry.get("body")
            if (
                isinstance(comment_id, int)
                and not isinstance(comment_id, bool)
                and comment_id >= 0
                and isinstance(body, str)
            ):
                comments.append(IssueComment(id=comment_id, body=body))
        return comments

    async def create_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> None:
        """Post a new comment on an issue or pull request."""
        await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            "create comment",
            {"body": body},
        )

    async def update_issue_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> None:
        """Replace the body of an existing comment."""
        await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            "update comment",
            {"body": body},
        )