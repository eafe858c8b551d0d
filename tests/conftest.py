"""Shared fixtures for collider tests."""

import io
import json
import stat
import zipfile

import pytest

from collider.constants import Arch, Platform
from collider.electron.target import TargetDescriptor


def build_zip(files=(), symlinks=(), dirs=()):
    """Return zip archive bytes.

    ``files`` holds (name, content, mode) tuples, ``symlinks`` (name, link)
    pairs and ``dirs`` directory names ending in "/".
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name in dirs:
            info = zipfile.ZipInfo(name)
            info.external_attr = (stat.S_IFDIR | 0o755) << 16
            zf.writestr(info, b"")
        for name, content, mode in files:
            info = zipfile.ZipInfo(name)
            info.external_attr = (stat.S_IFREG | mode) << 16
            zf.writestr(info, content)
        for name, link in symlinks:
            info = zipfile.ZipInfo(name)
            info.create_system = 3
            info.external_attr = (stat.S_IFLNK | 0o777) << 16
            zf.writestr(info, link)
    return buf.getvalue()


@pytest.fixture
def linux_x64():
    return TargetDescriptor(Platform.LINUX, Arch.X64)


@pytest.fixture
def electron_zip():
    """A minimal Linux Electron release archive."""
    return build_zip(
        dirs=["locales/"],
        files=[
            ("electron", b"#!/bin/sh\nexit 0\n", 0o755),
            ("locales/en-US.pak", b"pak", 0o644),
            ("libffmpeg.so.1", b"ffmpeg", 0o644),
        ],
        symlinks=[("libffmpeg.so", "libffmpeg.so.1")],
    )


@pytest.fixture
def fake_downloader():
    """Downloader factory writing fixed bytes and recording requested URLs."""
    def factory(payload):
        calls = []

        def downloader(url, fileobj):
            calls.append(url)
            fileobj.write(payload)
            return len(payload)

        downloader.calls = calls
        return downloader
    return factory


@pytest.fixture
def collider_install(tmp_path):
    """Fake installed collider package; returns its executable path."""
    def factory(version="13.1.0", name="collider"):
        root = tmp_path / "node_modules" / "collider"
        bin_dir = root / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        (root / "package.json").write_text(json.dumps({"name": name, "version": version}))
        exe = bin_dir / "collider"
        exe.write_text("")
        return exe
    return factory
