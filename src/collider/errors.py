"""Error taxonomy for Electron acquisition and bisection.

Every failure raised by the engine is a ``ColliderError`` tagged with an
``ErrorKind``. Payloads from third-party libraries are carried as plain
strings or fields so callers never need to import ``requests`` or
``zipfile`` to inspect them.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from collider.constants import ExitCodes


class ErrorKind(Enum):
    """Tag identifying which branch of the taxonomy an error belongs to."""
    HTTP = "http_error"
    IO = "io_error"
    ARCHIVE = "zip_error"
    BAD_JSON = "bad_package_json"
    SEMVER = "semver_error"
    RATE_LIMITED = "github_api::request_limit"
    GITHUB_API = "github_api"
    NOT_FOUND = "release_not_found"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    UNSUPPORTED_ARCH = "unsupported_arch"
    MISSING_ELECTRON_FILES = "missing_electron_files"
    MATCHING_VERSION_NOT_FOUND = "matching_version_not_found"
    NO_PROJECT_DIR = "no_project_dir"
    NO_CANDIDATES = "no_candidates"
    ELECTRON_FAILED = "electron_error"


_EXIT_CODES = {
    ErrorKind.HTTP: ExitCodes.CONNECTION_ERROR,
    ErrorKind.RATE_LIMITED: ExitCodes.CONNECTION_ERROR,
    ErrorKind.GITHUB_API: ExitCodes.CONNECTION_ERROR,
    ErrorKind.IO: ExitCodes.FILE_ERROR,
    ErrorKind.ARCHIVE: ExitCodes.FILE_ERROR,
    ErrorKind.BAD_JSON: ExitCodes.FILE_ERROR,
    ErrorKind.NO_PROJECT_DIR: ExitCodes.FILE_ERROR,
    ErrorKind.ELECTRON_FAILED: ExitCodes.ELECTRON_FAILED,
}


class ColliderError(Exception):
    """Base class for all engine errors."""

    kind: ErrorKind = ErrorKind.IO
    help: Optional[str] = None

    @property
    def code(self) -> str:
        """Diagnostic code, e.g. ``collider::electron::zip_error``."""
        return f"collider::electron::{self.kind.value}"

    @property
    def exit_code(self) -> ExitCodes:
        """Process exit code the CLI should use for this error."""
        return _EXIT_CODES.get(self.kind, ExitCodes.RESOLUTION_ERROR)


class HttpError(ColliderError):
    """Transport-level failure talking to the catalog or downloading an asset."""
    kind = ErrorKind.HTTP


class IoError(ColliderError):
    """Filesystem failure with a description of the operation that failed."""
    kind = ErrorKind.IO

    def __init__(self, description: str, cause: Optional[BaseException] = None):
        super().__init__(description if cause is None else f"{description}: {cause}")
        self.description = description
        self.cause = cause


class ArchiveError(ColliderError):
    """Downloaded archive is not a readable zip file."""
    kind = ErrorKind.ARCHIVE


class BadJsonError(ColliderError):
    """A package.json file could not be parsed."""
    kind = ErrorKind.BAD_JSON

    def __init__(self, path: str, offset: int, snippet: str, reason: str):
        super().__init__(f"Found some bad JSON in {path} at byte {offset}: {reason}")
        self.path = path
        self.offset = offset
        self.snippet = snippet
        self.reason = reason


class VersionParseError(ColliderError):
    """A version or range string is not valid semver."""
    kind = ErrorKind.SEMVER


class GitHubApiLimitError(ColliderError):
    """The GitHub API refused the request because of rate limiting."""
    kind = ErrorKind.RATE_LIMITED
    help = "Consider passing in a GitHub API Token using `--github-token`, or using a different one."


class GitHubApiError(ColliderError):
    """Any GitHub API failure other than rate limiting or a missing release."""
    kind = ErrorKind.GITHUB_API

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ReleaseNotFoundError(ColliderError):
    """A tag exists but has no published release."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, tag: str):
        super().__init__(f"No release published for tag {tag}")
        self.tag = tag


class UnsupportedPlatformError(ColliderError):
    """Host operating system has no Electron build."""
    kind = ErrorKind.UNSUPPORTED_PLATFORM
    help = "Electron only supports win32, linux, and darwin."

    def __init__(self, platform: str):
        super().__init__(f"Unsupported platform: {platform}.")
        self.platform = platform


class UnsupportedArchError(ColliderError):
    """Host CPU architecture has no Electron build."""
    kind = ErrorKind.UNSUPPORTED_ARCH
    help = "Electron only supports ia32, x64, and arm64."

    def __init__(self, arch: str):
        super().__init__(f"Unsupported architecture: {arch}.")
        self.arch = arch


class MissingElectronFilesError(ColliderError):
    """The selected release has no asset for the current target."""
    kind = ErrorKind.MISSING_ELECTRON_FILES

    def __init__(self, version, target: str):
        super().__init__(f"Could not find matching Electron files for release: {target}.")
        self.version = version
        self.target = target


class MatchingVersionNotFoundError(ColliderError):
    """No catalog entry satisfies the requested range."""
    kind = ErrorKind.MATCHING_VERSION_NOT_FOUND

    def __init__(self, version_range):
        super().__init__(
            f"A matching electron version could not be found for `electron@{version_range}`"
        )
        self.range = version_range


class NoProjectDirError(ColliderError):
    """Per-user data/cache directories could not be determined."""
    kind = ErrorKind.NO_PROJECT_DIR

    def __init__(self, message: str = "Platform-specific project directory could not be determined."):
        super().__init__(message)


class NoCandidatesError(ColliderError):
    """Bisection was asked to search an empty version list."""
    kind = ErrorKind.NO_CANDIDATES


class ElectronFailedError(ColliderError):
    """The launched Electron process exited with a non-zero status."""
    kind = ErrorKind.ELECTRON_FAILED

    def __init__(self, status: Optional[int] = None):
        super().__init__("Electron process exited with an error")
        self.status = status
