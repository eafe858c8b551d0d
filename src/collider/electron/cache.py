"""On-disk cache of extracted Electron releases.

Each entry is a directory named after its target triple
(``v13.1.0-linux-x64``) under the data directory. An entry only ever
appears through an atomic rename of a fully extracted staging directory,
so an interrupted download or extraction never leaves something that a
later run mistakes for a cache hit.
"""
from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
import zipfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Union

from collider.common.http_client import download_to
from collider.common.logging_utils import safe_url, Timer
from collider.errors import ArchiveError, IoError
from collider.versioning.models import Version
from .target import TargetDescriptor

logger = logging.getLogger(__name__)

# Extraction is blocking CPU/IO work; it runs off the calling thread.
_EXTRACT_POOL = ThreadPoolExecutor(max_workers=1, thread_name_prefix="collider-extract")


def _is_within(path: Path, base: Path) -> bool:
    try:
        path.resolve().relative_to(base.resolve())
        return True
    except ValueError:
        return False


def extract_zip(archive: Union[str, Path], dest: Union[str, Path]) -> int:
    """Extract ``archive`` into ``dest`` keeping Unix modes and symlinks.

    ``zipfile.extractall`` drops both, which breaks the executable bit on
    Linux and the framework symlinks inside macOS app bundles.

    Returns:
        Number of members extracted.

    Raises:
        ArchiveError: The archive is unreadable or a member escapes ``dest``
        IoError: Writing a member failed
    """
    dest = Path(dest)
    try:
        zf = zipfile.ZipFile(archive)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"Failed to open zip archive {archive}: {e}") from e

    count = 0
    with zf:
        for member in zf.infolist():
            target = dest / member.filename
            if os.path.isabs(member.filename) or not _is_within(target, dest):
                raise ArchiveError(f"Refusing to extract {member.filename} outside of {dest}")
            mode = member.external_attr >> 16
            try:
                if member.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                elif stat.S_ISLNK(mode):
                    target.parent.mkdir(parents=True, exist_ok=True)
                    link = zf.read(member).decode("utf-8")
                    if os.path.isabs(link) or not _is_within(target.parent / link, dest):
                        raise ArchiveError(f"Refusing symlink {member.filename} -> {link}")
                    if target.is_symlink() or target.exists():
                        target.unlink()
                    os.symlink(link, target)
                else:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with zf.open(member) as src, open(target, "wb") as out:
                        shutil.copyfileobj(src, out)
                    if mode & 0o777:
                        os.chmod(target, mode & 0o777)
            except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
                raise ArchiveError(f"Corrupt member {member.filename} in {archive}: {e}") from e
            except OSError as e:
                raise IoError(f"Failed to extract {member.filename} to {target}", e) from e
            count += 1
    return count


def _make_dirs(path: Path, description: str) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IoError(description.format(path), e) from e


class ArtifactCache:
    """Maps (version, target) to an extracted release on disk."""

    def __init__(
        self,
        data_dir: Union[str, Path],
        scratch_dir: Union[str, Path],
        downloader: Callable[..., int] = download_to,
    ):
        """Initialize cache.

        Args:
            data_dir: Directory holding one subdirectory per cache entry
            scratch_dir: Directory for archives while they download
            downloader: Function streaming a URL into a binary file object
        """
        self.data_dir = Path(data_dir)
        self.scratch_dir = Path(scratch_dir)
        self._download_to = downloader

    def path_for(self, version: Version, target: TargetDescriptor) -> Path:
        return self.data_dir / target.triple(version)

    def lookup(self, version: Version, target: TargetDescriptor) -> Optional[Path]:
        """Return the entry directory when it holds the target's executable.

        An entry without its executable (left empty by an interrupted
        extraction or created by hand) is a miss and gets reinstalled.
        """
        entry = self.path_for(version, target)
        return entry if (entry / target.exe_name).is_file() else None

    def ensure(
        self,
        version: Version,
        target: TargetDescriptor,
        asset_url: str,
        force: bool = False,
    ) -> Path:
        """Return the executable path, installing on a miss or when forced."""
        entry = None if force else self.lookup(version, target)
        if entry is not None:
            logger.debug("Cache hit for %s", entry.name)
            return entry / target.exe_name
        return self.install(version, target, asset_url)

    def install(self, version: Version, target: TargetDescriptor, asset_url: str) -> Path:
        """Download, extract and publish one release; returns the executable path.

        Raises:
            HttpError: The download failed
            ArchiveError: The archive is not a valid zip
            IoError: A filesystem operation failed
        """
        entry = self.path_for(version, target)
        _make_dirs(self.data_dir, "Failed to create destination directory in cache, at {}")
        _make_dirs(self.scratch_dir, "Failed to create cache directory, at {}")

        archive = self._download(asset_url, target.zip_name(version))
        try:
            self._extract_and_publish(archive, entry)
        except BaseException:
            self._remove_archive(archive, strict=False)
            raise
        self._remove_archive(archive, strict=True)

        logger.info("Installed electron@%s into %s", version, entry)
        return entry / target.exe_name

    def _extract_and_publish(self, archive: Path, entry: Path) -> None:
        try:
            staging = Path(tempfile.mkdtemp(prefix=f".{entry.name}-", dir=self.data_dir))
        except OSError as e:
            raise IoError(f"Failed to create staging directory in {self.data_dir}", e) from e
        try:
            logger.debug("Extracting %s to %s", archive, staging)
            with Timer() as t:
                count = _EXTRACT_POOL.submit(extract_zip, archive, staging).result()
            logger.debug("Extracted %d entries in %d ms", count, t.duration_ms())
            self._publish(staging, entry)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

    @staticmethod
    def _remove_archive(archive: Path, strict: bool) -> None:
        """Delete the downloaded zip.

        With ``strict`` unset a failure is only logged, so it never replaces
        the error that is already propagating.
        """
        logger.debug("Deleting zip file %s", archive)
        try:
            archive.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            if strict:
                raise IoError(f"Failed to remove temporary zip file at {archive}", e) from e
            logger.warning("Failed to remove temporary zip file at %s: %s", archive, e)

    def _download(self, url: str, zip_name: str) -> Path:
        """Stream ``url`` into a fresh temporary file in the scratch directory."""
        stem = zip_name[:-len(".zip")] if zip_name.endswith(".zip") else zip_name
        try:
            fd, name = tempfile.mkstemp(prefix=f"{stem}-", suffix=".zip", dir=self.scratch_dir)
        except OSError as e:
            raise IoError(f"Failed to create file in {self.scratch_dir}", e) from e
        archive = Path(name)
        logger.debug("Fetching zip file from %s into %s", safe_url(url), archive)
        try:
            with os.fdopen(fd, "wb") as fh:
                written = self._download_to(url, fh)
        except OSError as e:
            archive.unlink(missing_ok=True)
            raise IoError(f"Failed to write data from {safe_url(url)} to {archive}", e) from e
        except BaseException:
            archive.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", written, archive)
        return archive

    def _publish(self, staging: Path, entry: Path) -> None:
        """Atomically move a completed staging directory to ``entry``.

        An existing directory (forced refresh, or an entry missing its
        executable) is moved aside first and removed afterwards. Losing a
        rename race to another installer of the same key keeps the winner's
        entry.
        """
        retired = None
        if entry.exists():
            try:
                holder = Path(tempfile.mkdtemp(prefix=f".{entry.name}-old-", dir=entry.parent))
            except OSError as e:
                raise IoError(f"Failed to create directory to retire cache entry {entry}", e) from e
            retired = holder / entry.name
            try:
                os.rename(entry, retired)
            except OSError as e:
                shutil.rmtree(holder, ignore_errors=True)
                raise IoError(f"Failed to replace cache entry {entry}", e) from e
        try:
            os.rename(staging, entry)
        except OSError as e:
            if not entry.is_dir():
                raise IoError(f"Failed to move extracted files into {entry}", e) from e
            logger.debug("Another process installed %s first", entry.name)
            shutil.rmtree(staging, ignore_errors=True)
        finally:
            if retired is not None:
                shutil.rmtree(retired.parent, ignore_errors=True)
