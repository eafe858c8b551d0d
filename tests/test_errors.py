"""Tests for the error taxonomy."""

from collider.constants import ExitCodes
from collider.errors import (
    ArchiveError,
    BadJsonError,
    ColliderError,
    ErrorKind,
    GitHubApiLimitError,
    HttpError,
    IoError,
    MissingElectronFilesError,
    NoProjectDirError,
    UnsupportedPlatformError,
)
from collider.versioning.models import parse_version


class TestErrors:

    def test_codes(self):
        assert ArchiveError("bad zip").code == "collider::electron::zip_error"
        assert GitHubApiLimitError("x").code == "collider::electron::github_api::request_limit"

    def test_exit_codes(self):
        assert HttpError("x").exit_code is ExitCodes.CONNECTION_ERROR
        assert IoError("x").exit_code is ExitCodes.FILE_ERROR
        assert NoProjectDirError().exit_code is ExitCodes.FILE_ERROR
        assert UnsupportedPlatformError("sunos").exit_code is ExitCodes.RESOLUTION_ERROR

    def test_io_error_carries_cause(self):
        cause = PermissionError(13, "Permission denied")
        err = IoError("Failed to create cache directory, at /x", cause)
        assert err.cause is cause
        assert str(err).startswith("Failed to create cache directory, at /x: ")

    def test_messages(self):
        err = MissingElectronFilesError(parse_version("2.5.0"), "electron-v2.5.0-linux-x64.zip")
        assert str(err) == "Could not find matching Electron files for release: electron-v2.5.0-linux-x64.zip."
        assert str(UnsupportedPlatformError("sunos")) == "Unsupported platform: sunos."
        assert UnsupportedPlatformError("sunos").help

    def test_bad_json_fields(self):
        err = BadJsonError(path="/a/package.json", offset=12, snippet='{"a": }', reason="Expecting value")
        assert err.kind is ErrorKind.BAD_JSON
        assert "byte 12" in str(err)

    def test_all_are_collider_errors(self):
        assert issubclass(GitHubApiLimitError, ColliderError)
        assert issubclass(ArchiveError, ColliderError)
