"""Data models for versions, ranges and catalog releases."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import semantic_version

from collider.errors import VersionParseError

Version = semantic_version.Version


def parse_version(text: str) -> Version:
    """Parse a bare semver string such as ``13.0.0`` or ``14.0.0-beta.3``."""
    try:
        return semantic_version.Version(text.strip())
    except ValueError as e:
        raise VersionParseError(f"Invalid version '{text}': {e}") from e


def parse_tag(tag: str) -> Version:
    """Parse a catalog tag by stripping its one-character prefix (``v13.0.0``).

    Malformed tags raise ``VersionParseError``; they are not skipped.
    """
    if len(tag) < 2:
        raise VersionParseError(f"Invalid version tag '{tag}'")
    return parse_version(tag[1:])


def format_tag(version: Version) -> str:
    """Inverse of ``parse_tag``."""
    return f"v{version}"


class Range:
    """Immutable npm-style semver constraint (``^13.0.0``, ``~1.2``, ``*``)."""

    __slots__ = ("_raw", "_spec")

    def __init__(self, expression: str):
        raw = (expression or "").strip() or "*"
        try:
            spec = semantic_version.NpmSpec(raw)
        except ValueError as e:
            raise VersionParseError(f"Invalid version range '{raw}': {e}") from e
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_spec", spec)

    def __setattr__(self, name, value):
        raise AttributeError("Range is immutable")

    @classmethod
    def any(cls) -> "Range":
        """The unconstrained wildcard range."""
        return cls("*")

    @classmethod
    def exact(cls, version: Version) -> "Range":
        """Range matching exactly ``version``."""
        return cls(str(version))

    @property
    def is_any(self) -> bool:
        return self._raw in ("*", "x", "X")

    def satisfies(self, version: Version) -> bool:
        """npm semantics: prereleases only match comparators on the same patch."""
        return self._spec.match(version)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"Range({self._raw!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Range) and self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)


def allows(version_range: Range, version: Version, include_prerelease: bool) -> bool:
    """Range satisfaction plus the prerelease-inclusion rule."""
    if version.prerelease and not include_prerelease:
        return False
    return version_range.satisfies(version)


@dataclass(frozen=True)
class Asset:
    """Downloadable file attached to a release."""
    name: str
    url: str


@dataclass(frozen=True)
class Release:
    """Catalog release metadata; held only while resolving."""
    tag_name: str
    assets: Tuple[Asset, ...] = field(default_factory=tuple)

    def find_asset(self, name: str) -> Optional[Asset]:
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None
