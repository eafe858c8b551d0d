"""Acquisition orchestrator: ensure an Electron matching a range is on disk."""

from __future__ import annotations

import logging
import platform as _platform
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from collider.errors import IoError, MissingElectronFilesError
from collider.repository.github import GitHubClient
from collider.versioning.models import Range, Release, Version, allows
from collider.versioning.resolver import ConstraintResolver, ReleaseCatalog
from .cache import ArtifactCache
from .dirs import ProjectDirs
from .manifest import find_current_version
from .target import TargetDescriptor, host_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Electron:
    """Handle to an extracted Electron executable."""
    exe: Path
    version: Version
    os: str
    arch: str

    def copy_files(self, to: Union[str, Path]) -> "Electron":
        """Copy the extracted release into ``to`` and return a handle to the copy.

        The copy is taken from the directory that contains the executable,
        so on macOS only the bundle's ``MacOS`` folder is copied.
        """
        to = Path(to)
        try:
            to.mkdir(parents=True, exist_ok=True)
            shutil.copytree(self.exe.parent, to, symlinks=True, dirs_exist_ok=True)
        except OSError as e:
            raise IoError("Failed to copy electron files into {}".format(to), e) from e
        return Electron(exe=to / self.exe.name, version=self.version, os=self.os, arch=self.arch)


class ElectronOpts:
    """Builder for one acquisition.

    Example:
        electron = ElectronOpts().range(Range("^13.0.0")).force(True).ensure_electron()
    """

    def __init__(self):
        self._force = False
        self._range: Optional[Range] = None
        self._include_prerelease = False
        self._github_token: Optional[str] = None
        self._target: Optional[TargetDescriptor] = None
        self._dirs: Optional[ProjectDirs] = None
        self._exe_path: Optional[Path] = None
        self._catalog: Optional[ReleaseCatalog] = None
        self._cache: Optional[ArtifactCache] = None

    def force(self, force: bool) -> "ElectronOpts":
        self._force = force
        return self

    def range(self, version_range: Range) -> "ElectronOpts":
        self._range = version_range
        return self

    def include_prerelease(self, include_prerelease: bool) -> "ElectronOpts":
        self._include_prerelease = include_prerelease
        return self

    def github_token(self, github_token: Optional[str]) -> "ElectronOpts":
        self._github_token = github_token
        return self

    def target(self, target: TargetDescriptor) -> "ElectronOpts":
        self._target = target
        return self

    def dirs(self, dirs: ProjectDirs) -> "ElectronOpts":
        self._dirs = dirs
        return self

    def exe_path(self, exe_path: Union[str, Path]) -> "ElectronOpts":
        """Path of the running collider executable, used to find its package.json."""
        self._exe_path = Path(exe_path)
        return self

    def catalog(self, catalog: ReleaseCatalog) -> "ElectronOpts":
        self._catalog = catalog
        return self

    def cache(self, cache: ArtifactCache) -> "ElectronOpts":
        self._cache = cache
        return self

    def ensure_electron(self) -> Electron:
        """Resolve, download if needed, and return a handle to the executable.

        Raises:
            UnsupportedPlatformError, UnsupportedArchError: Host not supported
            GitHubApiLimitError: Rate limited by GitHub
            MatchingVersionNotFoundError: No release satisfies the range
            MissingElectronFilesError: Release has no zip for this target
            HttpError, IoError, ArchiveError: Download or install failed
        """
        target = self._target or host_target()
        version_range = self._range or Range.any()
        cache = self._cache or self._default_cache()

        # Fast path: the installed collider version may already be cached,
        # which avoids any network access.
        logger.debug("Looking up current collider version.")
        current = find_current_version(self._exe_path or Path(sys.argv[0]).resolve())
        if (current is not None and not self._force
                and allows(version_range, current, self._include_prerelease)):
            entry = cache.lookup(current, target)
            if entry is not None:
                logger.debug("Using cached electron@%s from %s", current, entry)
                return self._handle(entry / target.exe_name, current, target)

        logger.debug(
            "Current collider version missing or not usable. "
            "Looking up matching Electron releases on GitHub"
        )
        catalog = self._catalog or GitHubClient(token=self._github_token)
        resolver = ConstraintResolver(
            catalog,
            current_version=current,
            include_prerelease=self._include_prerelease,
        )
        version, release = resolver.resolve(version_range)
        logger.info("Selected electron@%s (%s)", version, target.triple(version))

        url = pick_electron_zip(version, release, target)
        exe = cache.ensure(version, target, url, force=self._force)
        return self._handle(exe, version, target)

    def _default_cache(self) -> ArtifactCache:
        dirs = self._dirs or ProjectDirs.for_host(_platform.system())
        return ArtifactCache(dirs.data_local_dir, dirs.cache_dir)

    @staticmethod
    def _handle(exe: Path, version: Version, target: TargetDescriptor) -> Electron:
        return Electron(exe=exe, version=version, os=target.platform.value, arch=target.arch.value)


def pick_electron_zip(version: Version, release: Release, target: TargetDescriptor) -> str:
    """Download URL of ``electron-v{version}-{platform}-{arch}.zip``.

    Raises:
        MissingElectronFilesError: The release has no such asset
    """
    name = target.zip_name(version)
    asset = release.find_asset(name)
    if asset is None:
        raise MissingElectronFilesError(version=version, target=name)
    return asset.url


def ensure(
    version_range: Optional[Range] = None,
    force: bool = False,
    allow_prerelease: bool = False,
    auth_token: Optional[str] = None,
) -> Electron:
    """Ensure an Electron satisfying ``version_range`` is available locally."""
    opts = ElectronOpts().force(force).include_prerelease(allow_prerelease).github_token(auth_token)
    if version_range is not None:
        opts = opts.range(version_range)
    return opts.ensure_electron()
