"""Constraint resolver: pick the release that satisfies a version range.

Two tiers:

1. Fast path: when the locally installed tool version satisfies the range,
   look up the release for exactly that tag and skip catalog pagination.
2. Scan path: page through the catalog (newest first) and accept the first
   satisfying tag whose release can be fetched.

Per-tag lookup failures (no published release, API errors, transport
errors such as timeouts) are skipped; a rate-limit error aborts
immediately. Failures while listing tags always abort.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, List, Tuple

from collider.errors import (
    GitHubApiError,
    HttpError,
    MatchingVersionNotFoundError,
    ReleaseNotFoundError,
)
from collider.common.logging_utils import extra_context, is_debug_enabled
from .models import Range, Release, Version, allows, format_tag, parse_tag

logger = logging.getLogger(__name__)


class ReleaseCatalog(Protocol):
    """The subset of the catalog client the resolver needs."""

    def list_tags(self, page: int) -> List[str]:
        ...

    def get_release_by_tag(self, tag: str) -> Release:
        ...


class ConstraintResolver:
    """Resolve a Range to a concrete (Version, Release) pair."""

    def __init__(
        self,
        catalog: ReleaseCatalog,
        current_version: Optional[Version] = None,
        include_prerelease: bool = False,
    ):
        """Initialize resolver.

        Args:
            catalog: Release catalog client
            current_version: Version of the locally installed tool, if known
            include_prerelease: Allow prerelease versions to be selected
        """
        self.catalog = catalog
        self.current_version = current_version
        self.include_prerelease = include_prerelease

    def resolve(self, version_range: Range) -> Tuple[Version, Release]:
        """Return the selected version and its release metadata.

        Raises:
            GitHubApiLimitError: Rate limited at any point
            VersionParseError: A catalog tag is not valid semver
            MatchingVersionNotFoundError: No tag satisfies the range
        """
        if self.current_version is not None:
            release = self._release_for(self.current_version, version_range)
            if release is not None:
                logger.debug("Using current collider version %s", self.current_version)
                return self.current_version, release

        page = 0
        while True:
            tags = self.catalog.list_tags(page)
            if not tags:
                break
            for tag in tags:
                version = parse_tag(tag)
                release = self._release_for(version, version_range)
                if release is not None:
                    return version, release
            page += 1

        raise MatchingVersionNotFoundError(version_range)

    def _release_for(self, version: Version, version_range: Range) -> Optional[Release]:
        """Fetch the release for ``version`` if it is acceptable, else None."""
        if not allows(version_range, version, self.include_prerelease):
            return None
        tag = format_tag(version)
        try:
            return self.catalog.get_release_by_tag(tag)
        except (ReleaseNotFoundError, GitHubApiError, HttpError) as e:
            if is_debug_enabled(logger):
                logger.debug(
                    "Skipping tag without usable release",
                    extra=extra_context(
                        event="decision",
                        component="resolver",
                        action="get_release_by_tag",
                        outcome=e.kind.value,
                        target=tag
                    )
                )
            return None
