"""Semantic version model and the constraint resolver."""

from .models import Asset, Range, Release, Version, format_tag, parse_tag, parse_version
from .parser import parse_bound, parse_range

__all__ = [
    "Asset",
    "Range",
    "Release",
    "Version",
    "format_tag",
    "parse_tag",
    "parse_version",
    "parse_bound",
    "parse_range",
]
