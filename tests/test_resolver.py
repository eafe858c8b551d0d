"""Tests for the two-tier constraint resolver."""

import pytest

from collider.errors import (
    GitHubApiError,
    GitHubApiLimitError,
    HttpError,
    MatchingVersionNotFoundError,
    ReleaseNotFoundError,
    VersionParseError,
)
from collider.versioning.models import Range, Release, parse_version
from collider.versioning.resolver import ConstraintResolver


class FakeCatalog:
    """In-memory catalog recording every call made to it."""

    def __init__(self, pages, failures=None):
        self.pages = pages
        self.failures = failures or {}
        self.pages_requested = []
        self.releases_requested = []

    def list_tags(self, page):
        self.pages_requested.append(page)
        return list(self.pages[page]) if page < len(self.pages) else []

    def get_release_by_tag(self, tag):
        self.releases_requested.append(tag)
        failure = self.failures.get(tag)
        if failure is not None:
            raise failure
        return Release(tag_name=tag)


CATALOG = [["v3.0.0", "v2.5.0", "v2.0.0", "v1.9.0"]]


class TestScanPath:

    def test_newest_satisfying_release(self):
        catalog = FakeCatalog(CATALOG)

        version, release = ConstraintResolver(catalog).resolve(Range("^2.0.0"))

        assert version == parse_version("2.5.0")
        assert release.tag_name == "v2.5.0"
        assert catalog.releases_requested == ["v2.5.0"]

    def test_wildcard_picks_newest(self):
        version, _ = ConstraintResolver(FakeCatalog(CATALOG)).resolve(Range.any())
        assert version == parse_version("3.0.0")

    def test_skips_tag_without_release(self):
        catalog = FakeCatalog(CATALOG, {"v2.5.0": ReleaseNotFoundError("v2.5.0")})

        version, _ = ConstraintResolver(catalog).resolve(Range("^2.0.0"))

        assert version == parse_version("2.0.0")
        assert catalog.releases_requested == ["v2.5.0", "v2.0.0"]

    def test_skips_transient_api_error(self):
        catalog = FakeCatalog(CATALOG, {"v2.5.0": GitHubApiError("Server Error", 502)})
        version, _ = ConstraintResolver(catalog).resolve(Range("^2.0.0"))
        assert version == parse_version("2.0.0")

    def test_skips_transport_error_on_one_tag(self):
        catalog = FakeCatalog(CATALOG, {"v2.5.0": HttpError("Request timed out")})

        version, _ = ConstraintResolver(catalog).resolve(Range("^2.0.0"))

        assert version == parse_version("2.0.0")
        assert catalog.releases_requested == ["v2.5.0", "v2.0.0"]

    def test_transport_error_while_paging_aborts(self):
        class UnreachableCatalog(FakeCatalog):
            def list_tags(self, page):
                raise HttpError("Request timed out")

        with pytest.raises(HttpError):
            ConstraintResolver(UnreachableCatalog([])).resolve(Range.any())

    def test_rate_limit_aborts(self):
        catalog = FakeCatalog(CATALOG, {"v2.5.0": GitHubApiLimitError("API rate limit exceeded")})

        with pytest.raises(GitHubApiLimitError):
            ConstraintResolver(catalog).resolve(Range("^2.0.0"))

        assert "v2.0.0" not in catalog.releases_requested

    def test_rate_limit_while_paging(self):
        class LimitedCatalog(FakeCatalog):
            def list_tags(self, page):
                raise GitHubApiLimitError("API rate limit exceeded")

        with pytest.raises(GitHubApiLimitError):
            ConstraintResolver(LimitedCatalog([])).resolve(Range.any())

    def test_no_match(self):
        catalog = FakeCatalog(CATALOG)
        with pytest.raises(MatchingVersionNotFoundError) as exc:
            ConstraintResolver(catalog).resolve(Range("^5.0.0"))
        assert exc.value.range == Range("^5.0.0")
        assert "electron@^5.0.0" in str(exc.value)
        assert catalog.pages_requested == [0, 1]

    def test_all_matches_unavailable(self):
        failures = {tag: ReleaseNotFoundError(tag) for tag in ("v2.5.0", "v2.0.0")}
        with pytest.raises(MatchingVersionNotFoundError):
            ConstraintResolver(FakeCatalog(CATALOG, failures)).resolve(Range("^2.0.0"))

    def test_malformed_tag_is_fatal(self):
        catalog = FakeCatalog([["v3.0.0", "nightly", "v2.0.0"]])
        with pytest.raises(VersionParseError):
            ConstraintResolver(catalog).resolve(Range("^2.0.0"))

    def test_continues_to_later_pages(self):
        catalog = FakeCatalog([["v4.0.0", "v3.0.0"], ["v2.1.0"], ["v1.0.0"]])

        version, _ = ConstraintResolver(catalog).resolve(Range("^2.0.0"))

        assert version == parse_version("2.1.0")
        assert catalog.pages_requested == [0, 1]


class TestPrereleases:

    PAGES = [["v3.0.0-beta.2", "v3.0.0-beta.1"]]

    def test_excluded_by_default(self):
        with pytest.raises(MatchingVersionNotFoundError):
            ConstraintResolver(FakeCatalog(self.PAGES)).resolve(Range("^3.0.0-beta.1"))

    def test_included_when_requested(self):
        resolver = ConstraintResolver(FakeCatalog(self.PAGES), include_prerelease=True)
        version, _ = resolver.resolve(Range("^3.0.0-beta.1"))
        assert version == parse_version("3.0.0-beta.2")

    def test_plain_range_skips_prerelease_even_when_included(self):
        pages = [["v3.1.0-beta.1", "v3.0.0"]]
        resolver = ConstraintResolver(FakeCatalog(pages), include_prerelease=True)
        version, _ = resolver.resolve(Range("^3.0.0"))
        assert version == parse_version("3.0.0")


class TestFastPath:

    def test_current_version_skips_pagination(self):
        catalog = FakeCatalog(CATALOG)
        resolver = ConstraintResolver(catalog, current_version=parse_version("2.0.0"))

        version, _ = resolver.resolve(Range("^2.0.0"))

        assert version == parse_version("2.0.0")
        assert catalog.pages_requested == []
        assert catalog.releases_requested == ["v2.0.0"]

    def test_current_version_outside_range(self):
        catalog = FakeCatalog(CATALOG)
        resolver = ConstraintResolver(catalog, current_version=parse_version("1.9.0"))

        version, _ = resolver.resolve(Range("^2.0.0"))

        assert version == parse_version("2.5.0")
        assert "v1.9.0" not in catalog.releases_requested

    def test_falls_back_when_current_has_no_release(self):
        catalog = FakeCatalog(CATALOG, {"v2.0.0": ReleaseNotFoundError("v2.0.0")})
        resolver = ConstraintResolver(catalog, current_version=parse_version("2.0.0"))

        version, _ = resolver.resolve(Range("^2.0.0"))

        assert version == parse_version("2.5.0")
        assert catalog.pages_requested == [0]

    def test_rate_limit_on_fast_path(self):
        catalog = FakeCatalog(CATALOG, {"v2.0.0": GitHubApiLimitError("API rate limit exceeded")})
        resolver = ConstraintResolver(catalog, current_version=parse_version("2.0.0"))
        with pytest.raises(GitHubApiLimitError):
            resolver.resolve(Range("^2.0.0"))
        assert catalog.pages_requested == []

    def test_transport_error_on_fast_path_falls_back_to_scan(self):
        catalog = FakeCatalog(CATALOG, {"v2.0.0": HttpError("Connection reset")})
        resolver = ConstraintResolver(catalog, current_version=parse_version("2.0.0"))

        version, _ = resolver.resolve(Range("^2.0.0"))

        assert version == parse_version("2.5.0")
        assert catalog.pages_requested == [0]
