"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3
    ELECTRON_FAILED = 4
    INTERRUPTED = 130


class Platform(Enum):
    """Electron platform names as used in release asset names.

    Args:
        Enum (string): Platform identifiers.
    """

    WIN32 = "win32"
    DARWIN = "darwin"
    LINUX = "linux"


class Arch(Enum):
    """Electron architecture names as used in release asset names.

    Args:
        Enum (string): Architecture identifiers.
    """

    IA32 = "ia32"
    X64 = "x64"
    ARM64 = "arm64"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PRODUCT_NAME = "collider"
    PACKAGE_JSON_FILE = "package.json"
    CONFIG_FILE = "collider.yml"
    LOG_FORMAT = "collider [%(levelname)s][%(name)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3  # Doubled after each failed attempt

    # Release catalog
    GITHUB_API_BASE = "https://api.github.com"
    ELECTRON_REPO_OWNER = "electron"
    ELECTRON_REPO_NAME = "electron"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_COLLIDER_GITHUB_TOKEN = "COLLIDER_GITHUB_TOKEN"
    REPO_API_PER_PAGE = 100
    RATE_LIMIT_MESSAGE = "rate limit exceeded"

    # Artifact cache
    ENV_DATA_DIR = "COLLIDER_DATA_DIR"
    ENV_CACHE_DIR = "COLLIDER_CACHE_DIR"
    ENV_LOG_LEVEL = "COLLIDER_LOG_LEVEL"
    DOWNLOAD_CHUNK_SIZE = 64 * 1024
    EXE_NAMES = {
        Platform.WIN32: "electron.exe",
        Platform.DARWIN: "Electron.app/Contents/MacOS/Electron",
        Platform.LINUX: "electron",
    }
