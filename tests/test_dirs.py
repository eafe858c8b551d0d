"""Tests for per-user directory resolution."""

from pathlib import Path

import pytest

from collider.electron.dirs import ProjectDirs
from collider.errors import NoProjectDirError


class TestForHost:

    def test_linux_defaults(self):
        dirs = ProjectDirs.for_host("Linux", env={}, home="/home/ada")
        assert dirs.data_local_dir == Path("/home/ada/.local/share/collider")
        assert dirs.cache_dir == Path("/home/ada/.cache/collider")
        assert dirs.config_dir == Path("/home/ada/.config/collider")

    def test_linux_xdg(self):
        env = {"XDG_DATA_HOME": "/xdg/data", "XDG_CACHE_HOME": "/xdg/cache", "XDG_CONFIG_HOME": "/xdg/conf"}
        dirs = ProjectDirs.for_host("Linux", env=env, home="/home/ada")
        assert dirs.data_local_dir == Path("/xdg/data/collider")
        assert dirs.cache_dir == Path("/xdg/cache/collider")
        assert dirs.config_dir == Path("/xdg/conf/collider")

    def test_macos(self):
        dirs = ProjectDirs.for_host("Darwin", env={}, home="/Users/ada")
        assert dirs.data_local_dir == Path("/Users/ada/Library/Application Support/collider")
        assert dirs.cache_dir == Path("/Users/ada/Library/Caches/collider")

    def test_windows(self):
        env = {"LOCALAPPDATA": "C:/Users/ada/AppData/Local", "APPDATA": "C:/Users/ada/AppData/Roaming"}
        dirs = ProjectDirs.for_host("Windows", env=env)
        assert dirs.data_local_dir == Path("C:/Users/ada/AppData/Local/collider/data")
        assert dirs.cache_dir == Path("C:/Users/ada/AppData/Local/collider/cache")
        assert dirs.config_dir == Path("C:/Users/ada/AppData/Roaming/collider/config")

    def test_windows_without_app_data(self):
        with pytest.raises(NoProjectDirError):
            ProjectDirs.for_host("Windows", env={})

    def test_env_overrides(self):
        env = {"COLLIDER_DATA_DIR": "/srv/electron", "COLLIDER_CACHE_DIR": "/srv/tmp"}
        dirs = ProjectDirs.for_host("Linux", env=env, home="/home/ada")
        assert dirs.data_local_dir == Path("/srv/electron")
        assert dirs.cache_dir == Path("/srv/tmp")
        assert dirs.config_dir == Path("/home/ada/.config/collider")


class TestWithOverrides:

    def test_only_given_values_replace(self):
        dirs = ProjectDirs(Path("/d"), Path("/c"), Path("/cfg"))
        assert dirs.with_overrides(data_dir="/x") == ProjectDirs(Path("/x"), Path("/c"), Path("/cfg"))
        assert dirs.with_overrides() == dirs
