"""Token parsing utilities for user-supplied versions and ranges."""

from typing import Optional

from .models import Range, Version, parse_version

WILDCARDS = ("*", "x", "X", "latest")


def parse_range(raw: Optional[str]) -> Range:
    """Parse a CLI/config range token.

    An empty token or ``latest`` means "any version". A leading ``v`` on an
    otherwise exact version (``v13.1.0``) is accepted for convenience.
    """
    if raw is None or raw.strip() == '' or raw.strip().lower() == 'latest':
        return Range.any()
    spec = raw.strip()
    if spec[0] in ('v', 'V') and spec[1:2].isdigit():
        spec = spec[1:]
    return Range(spec)


def parse_bound(raw: str) -> Optional[Version]:
    """Parse a bisection bound.

    Returns None for a wildcard, which the caller resolves against the
    catalog (oldest entry for a start bound, newest for an end bound).
    An explicit version is parsed directly without consulting the catalog.
    """
    token = raw.strip()
    if token in WILDCARDS:
        return None
    if token[:1] in ('v', 'V'):
        token = token[1:]
    return parse_version(token)
