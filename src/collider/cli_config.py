"""Runtime configuration: YAML file, environment, then CLI flags.

Precedence (highest first): CLI arguments, environment variables, the YAML
config file, built-in defaults in ``Constants``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from collider.constants import Constants
from collider.errors import IoError

logger = logging.getLogger(__name__)


@dataclass
class ColliderConfig:
    """Effective settings for one invocation."""
    github_token: Optional[str] = None
    data_dir: Optional[str] = None
    cache_dir: Optional[str] = None
    request_timeout: int = Constants.REQUEST_TIMEOUT
    include_prerelease: bool = False


def load_config_file(path: Optional[Path]) -> Dict[str, Any]:
    """Load a YAML config file.

    A missing default file is not an error; a file that exists but cannot be
    read or parsed is.

    Args:
        path: Path to YAML config file.

    Returns:
        Mapping of config keys, empty when there is no file.
    """
    if path is None or not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as e:
        raise IoError(f"Failed to read config file {path}", e) from e
    except yaml.YAMLError as e:
        raise IoError(f"Failed to parse config file {path}", e) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise IoError(f"Config file {path} must contain a mapping")
    logger.debug("Loaded config from %s", path)
    return data


def resolve_config(
    args: Any = None,
    config_dir: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ColliderConfig:
    """Merge config file, environment and CLI overrides into a ColliderConfig."""
    env = os.environ if env is None else env
    explicit = getattr(args, "CONFIG", None)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise IoError(f"Config file not found: {path}")
    else:
        path = config_dir / Constants.CONFIG_FILE if config_dir else None
    data = load_config_file(path)

    cfg = ColliderConfig()
    cfg.github_token = data.get("github_token") or None
    cfg.data_dir = data.get("data_dir") or None
    cfg.cache_dir = data.get("cache_dir") or None
    if data.get("request_timeout") is not None:
        try:
            cfg.request_timeout = int(data["request_timeout"])
        except (TypeError, ValueError) as e:
            raise IoError(f"Invalid request_timeout in config file {path}", e) from e
    cfg.include_prerelease = bool(data.get("include_prerelease", False))

    cfg.github_token = (
        env.get(Constants.ENV_COLLIDER_GITHUB_TOKEN)
        or env.get(Constants.ENV_GITHUB_TOKEN)
        or cfg.github_token
    )
    cfg.data_dir = env.get(Constants.ENV_DATA_DIR) or cfg.data_dir
    cfg.cache_dir = env.get(Constants.ENV_CACHE_DIR) or cfg.cache_dir

    if getattr(args, "GITHUB_TOKEN", None):
        cfg.github_token = args.GITHUB_TOKEN
    if getattr(args, "INCLUDE_PRERELEASE", False):
        cfg.include_prerelease = True
    return cfg


def apply_runtime_overrides(cfg: ColliderConfig) -> None:
    """Push tunables that live on Constants."""
    Constants.REQUEST_TIMEOUT = cfg.request_timeout
