"""Electron acquisition: target detection, local cache and orchestration."""

from .acquire import Electron, ElectronOpts, ensure, pick_electron_zip
from .cache import ArtifactCache
from .dirs import ProjectDirs
from .target import TargetDescriptor, detect_target, host_target

__all__ = [
    "ArtifactCache",
    "Electron",
    "ElectronOpts",
    "ProjectDirs",
    "TargetDescriptor",
    "detect_target",
    "ensure",
    "host_target",
    "pick_electron_zip",
]
