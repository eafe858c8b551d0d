"""Map host OS/CPU identifiers onto Electron's platform/arch vocabulary."""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from typing import Optional

from collider.constants import Arch, Constants, Platform
from collider.errors import UnsupportedArchError, UnsupportedPlatformError

_PLATFORMS = {
    "windows": Platform.WIN32,
    "win32": Platform.WIN32,
    "darwin": Platform.DARWIN,
    "macos": Platform.DARWIN,
    "linux": Platform.LINUX,
}

_ARCHES = {
    "x86": Arch.IA32,
    "i386": Arch.IA32,
    "i686": Arch.IA32,
    "ia32": Arch.IA32,
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "x64": Arch.X64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
}


@dataclass(frozen=True)
class TargetDescriptor:
    """The (platform, arch) pair used in Electron asset names."""
    platform: Platform
    arch: Arch

    def triple(self, version) -> str:
        """Cache key and asset suffix, e.g. ``v13.1.0-linux-x64``."""
        return f"v{version}-{self.platform.value}-{self.arch.value}"

    def zip_name(self, version) -> str:
        return f"electron-{self.triple(version)}.zip"

    @property
    def exe_name(self) -> str:
        """Executable path relative to the extracted release."""
        return Constants.EXE_NAMES[self.platform]


def detect_target(system: str, machine: str) -> TargetDescriptor:
    """Build a TargetDescriptor from host identifiers.

    Args:
        system: OS name as reported by ``platform.system()`` (or ``sys.platform``)
        machine: CPU name as reported by ``platform.machine()``

    Raises:
        UnsupportedPlatformError: ``system`` has no Electron build
        UnsupportedArchError: ``machine`` has no Electron build
    """
    platform = _PLATFORMS.get((system or "").strip().lower())
    if platform is None:
        raise UnsupportedPlatformError(system)
    arch = _ARCHES.get((machine or "").strip().lower())
    if arch is None:
        raise UnsupportedArchError(machine)
    return TargetDescriptor(platform=platform, arch=arch)


def host_target(system: Optional[str] = None, machine: Optional[str] = None) -> TargetDescriptor:
    """TargetDescriptor for the running host; only the CLI boundary calls this."""
    return detect_target(
        system if system is not None else _platform.system(),
        machine if machine is not None else _platform.machine(),
    )
