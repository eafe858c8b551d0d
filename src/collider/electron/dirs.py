"""Per-user directories for the artifact cache and scratch downloads."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from collider.constants import Constants
from collider.errors import NoProjectDirError


@dataclass(frozen=True)
class ProjectDirs:
    """Resolved per-user directories.

    ``data_local_dir`` holds one extracted release per cache entry and
    persists across runs. ``cache_dir`` only holds archives while they are
    being downloaded. ``config_dir`` is where the optional YAML config lives.
    """
    data_local_dir: Path
    cache_dir: Path
    config_dir: Path

    @classmethod
    def for_host(
        cls,
        system: str,
        env: Optional[Mapping[str, str]] = None,
        home: Optional[str] = None,
        app: str = Constants.PRODUCT_NAME,
    ) -> "ProjectDirs":
        """Resolve directories following each platform's conventions.

        Args:
            system: Host OS as reported by ``platform.system()``
            env: Environment mapping (defaults to ``os.environ``)
            home: Home directory (defaults to ``~`` expansion)
            app: Application directory name

        Raises:
            NoProjectDirError: When no home or app-data directory is available
        """
        env = os.environ if env is None else env
        home = home or env.get("HOME") or os.path.expanduser("~")
        name = system.strip().lower()

        if name in ("windows", "win32"):
            local = env.get("LOCALAPPDATA")
            roaming = env.get("APPDATA") or local
            if not local:
                raise NoProjectDirError()
            base = Path(local) / app
            dirs = cls(base / "data", base / "cache", Path(roaming) / app / "config")
        else:
            if not home or home == "~":
                raise NoProjectDirError()
            if name in ("darwin", "macos"):
                library = Path(home) / "Library"
                dirs = cls(
                    library / "Application Support" / app,
                    library / "Caches" / app,
                    library / "Application Support" / app,
                )
            else:
                dirs = cls(
                    Path(env.get("XDG_DATA_HOME") or Path(home) / ".local" / "share") / app,
                    Path(env.get("XDG_CACHE_HOME") or Path(home) / ".cache") / app,
                    Path(env.get("XDG_CONFIG_HOME") or Path(home) / ".config") / app,
                )

        return dirs.with_overrides(
            data_dir=env.get(Constants.ENV_DATA_DIR),
            cache_dir=env.get(Constants.ENV_CACHE_DIR),
        )

    def with_overrides(
        self,
        data_dir: Optional[str] = None,
        cache_dir: Optional[str] = None,
    ) -> "ProjectDirs":
        """Return a copy with explicitly configured directories applied."""
        return ProjectDirs(
            data_local_dir=Path(data_dir) if data_dir else self.data_local_dir,
            cache_dir=Path(cache_dir) if cache_dir else self.cache_dir,
            config_dir=self.config_dir,
        )
