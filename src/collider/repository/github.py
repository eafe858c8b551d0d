"""GitHub API client for the Electron release catalog.

Provides a lightweight REST client for listing repository tags page by page
and fetching the release published for a tag. API failures are translated
into three outcomes callers can act on: release not found, rate limited,
and any other API error.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import quote

from collider.constants import Constants
from collider.common.http_client import get_json
from collider.errors import (
    ColliderError,
    GitHubApiError,
    GitHubApiLimitError,
    ReleaseNotFoundError,
)
from collider.versioning.models import Asset, Release

logger = logging.getLogger(__name__)


def is_rate_limit_error(message: Optional[str]) -> bool:
    """Return True when a GitHub error message signals rate limiting.

    GitHub reports primary rate limits only through the message text.
    """
    return bool(message) and Constants.RATE_LIMIT_MESSAGE in message.lower()


def classify_api_error(status_code: int, data: Any) -> ColliderError:
    """Map a non-success API response to the engine's error taxonomy."""
    message = None
    if isinstance(data, dict):
        message = data.get("message")
    if not message:
        message = f"GitHub API request failed with HTTP {status_code}"
    if is_rate_limit_error(message):
        return GitHubApiLimitError(message)
    return GitHubApiError(message, status_code=status_code)


class GitHubClient:
    """Lightweight REST client for GitHub tag and release lookups.

    Supports optional authentication with a personal access token.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        owner: str = Constants.ELECTRON_REPO_OWNER,
        repo: str = Constants.ELECTRON_REPO_NAME,
        base_url: Optional[str] = None,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token, sent as a bearer token
            owner: Repository owner
            repo: Repository name
            base_url: Base URL for the GitHub API (defaults to Constants.GITHUB_API_BASE)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.owner = owner
        self.repo = repo
        self.token = token

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {
            'Accept': 'application/vnd.github+json',
            'User-Agent': Constants.PRODUCT_NAME,
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    @property
    def _repo_url(self) -> str:
        return f"{self.base_url}/repos/{quote(self.owner, safe='')}/{quote(self.repo, safe='')}"

    def list_tags(self, page: int) -> List[str]:
        """Fetch one page of tag names, newest first.

        Args:
            page: Page index; callers start at 0 and stop at the first empty page

        Returns:
            List of tag names (at most Constants.REPO_API_PER_PAGE)
        """
        # GitHub pages are 1-based
        url = f"{self._repo_url}/tags?per_page={Constants.REPO_API_PER_PAGE}&page={page + 1}"
        status, _, data = get_json(url, headers=self._get_headers())
        if status != 200:
            raise classify_api_error(status, data)
        if not isinstance(data, list):
            return []
        return [tag["name"] for tag in data if isinstance(tag, dict) and tag.get("name")]

    def iter_tags(self) -> Iterator[str]:
        """Yield every tag name across all pages, newest first.

        Each call starts over from page 0.
        """
        page = 0
        while True:
            tags = self.list_tags(page)
            if not tags:
                return
            yield from tags
            page += 1

    def get_release_by_tag(self, tag: str) -> Release:
        """Fetch the release published for ``tag``.

        Raises:
            ReleaseNotFoundError: The tag has no published release (HTTP 404)
            GitHubApiLimitError: The API rate limit was exceeded
            GitHubApiError: Any other API failure
        """
        url = f"{self._repo_url}/releases/tags/{quote(tag, safe='')}"
        status, _, data = get_json(url, headers=self._get_headers())
        if status == 404:
            raise ReleaseNotFoundError(tag)
        if status != 200 or not isinstance(data, dict):
            raise classify_api_error(status, data)
        assets = tuple(
            Asset(name=asset["name"], url=asset["browser_download_url"])
            for asset in data.get("assets") or []
            if isinstance(asset, dict) and asset.get("name") and asset.get("browser_download_url")
        )
        return Release(tag_name=data.get("tag_name") or tag, assets=assets)
