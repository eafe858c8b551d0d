"""Clients for remote release catalogs."""

from .github import GitHubClient, classify_api_error, is_rate_limit_error

__all__ = ["GitHubClient", "classify_api_error", "is_rate_limit_error"]
