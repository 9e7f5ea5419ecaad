"""GitHub access for the release workflows.

The workflows only see the ``Forge`` protocol. ``GitHubForge`` implements it
over the GitHub REST API with an ``httpx.AsyncClient``; it owns pagination and
authentication, and leaves HTTP errors to propagate as
``httpx.HTTPStatusError``. There is no retry logic here.
"""

from __future__ import annotations

from datetime import datetime
from types import TracebackType
from typing import Any, Protocol

import httpx

from .models import ChangeRequest, Release, ReleaseDraft
from .versions import Bump

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100
REQUEST_TIMEOUT = 30.0


class Forge(Protocol):
    async def list_releases(self, owner: str, repo: str) -> list[Release]: ...

    async def list_merged_change_requests(
        self, owner: str, repo: str, since: datetime
    ) -> list[ChangeRequest]: ...

    async def create_release(self, owner: str, repo: str, draft: ReleaseDraft) -> None: ...


class GitHubForge:
    """GitHub REST client for releases and pull requests.

    Usage:
        async with GitHubForge(token) as forge:
            releases = await forge.list_releases("octo", "hello")

    Args:
        token: Token sent as a bearer credential.
        api_url: Base URL of the REST API (differs on GitHub Enterprise).
        client: Pre-built client to use instead of creating one. The forge
            does not close a client it was given.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._api_url = api_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)

    async def __aenter__(self) -> GitHubForge:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        response = await self._client.request(
            method, url, headers=self._headers, **kwargs
        )
        response.raise_for_status()
        return response

    async def _paginate(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Fetch every page of a list endpoint by following ``rel="next"``.

        Only the first request carries ``params``; the next-page URLs GitHub
        returns already include them.
        """
        items: list[dict[str, Any]] = []
        url: str | None = f"{self._api_url}{path}"
        query: dict[str, Any] | None = {"per_page": PER_PAGE, **(params or {})}
        while url is not None:
            response = await self._request("GET", url, params=query)
            items.extend(response.json())
            url = response.links.get("next", {}).get("url")
            query = None
        return items

    async def list_releases(self, owner: str, repo: str) -> list[Release]:
        """List all releases, newest first."""
        payload = await self._paginate(f"/repos/{owner}/{repo}/releases")
        return [Release.from_github(item) for item in payload]

    async def list_merged_change_requests(
        self, owner: str, repo: str, since: datetime
    ) -> list[ChangeRequest]:
        """List pull requests merged strictly after ``since``.

        Closed pull requests are listed in full and filtered locally on
        ``merged_at``; unmerged ones have no merge time and are dropped.
        """
        payload = await self._paginate(
            f"/repos/{owner}/{repo}/pulls", {"state": "closed"}
        )
        changes = [ChangeRequest.from_github(item) for item in payload]
        return [c for c in changes if c.merged_at is not None and c.merged_at > since]

    async def create_release(self, owner: str, repo: str, draft: ReleaseDraft) -> None:
        await self._request(
            "POST",
            f"{self._api_url}/repos/{owner}/{repo}/releases",
            json=draft.to_github(),
        )

    async def dispatch(
        self, owner: str, repo: str, action: str, release_type: Bump
    ) -> None:
        """Send a ``repository_dispatch`` event that starts a release run."""
        await self._request(
            "POST",
            f"{self._api_url}/repos/{owner}/{repo}/dispatches",
            json={"event_type": action, "client_payload": {"release_type": release_type}},
        )
