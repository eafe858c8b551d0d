"""Launch an application with an acquired Electron executable."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from collider.errors import ElectronFailedError, IoError
from collider.electron.acquire import Electron

logger = logging.getLogger(__name__)


def build_command(electron: Electron, app_path: Union[str, Path, None], args: Sequence[str] = ()) -> List[str]:
    """Command line ``<exe> [app_path] [args...]``."""
    cmd = [str(electron.exe)]
    if app_path:
        cmd.append(str(app_path))
    cmd.extend(args)
    return cmd


def launch(
    electron: Electron,
    app_path: Union[str, Path, None],
    args: Sequence[str] = (),
    cwd: Optional[Union[str, Path]] = None,
) -> int:
    """Run the application to completion and return its exit status.

    Raises:
        IoError: The executable could not be started
    """
    cmd = build_command(electron, app_path, args)
    logger.info("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, cwd=cwd, check=False)  # noqa: S603
    except OSError as e:
        raise IoError(f"Failed to start {electron.exe}", e) from e
    logger.debug("electron@%s exited with %s", electron.version, result.returncode)
    return result.returncode


def start(
    electron: Electron,
    app_path: Union[str, Path, None],
    args: Sequence[str] = (),
    cwd: Optional[Union[str, Path]] = None,
) -> None:
    """Run the application and fail on a non-zero exit.

    Raises:
        ElectronFailedError: The process exited with a non-zero status
    """
    status = launch(electron, app_path, args, cwd=cwd)
    if status != 0:
        raise ElectronFailedError(status)
