"""Collider command-line entry point."""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path
from typing import Any, List, Optional

from collider.args import parse_args
from collider.bisection import Bisector, InteractiveOracle, ProcessOracle, build_candidates
from collider.cli_config import ColliderConfig, apply_runtime_overrides, resolve_config
from collider.common.logging_utils import configure_logging, extra_context, is_debug_enabled
from collider.constants import ExitCodes
from collider.electron import ArtifactCache, Electron, ElectronOpts, ProjectDirs, host_target
from collider.errors import ColliderError
from collider import launcher
from collider.repository.github import GitHubClient
from collider.versioning.models import Range
from collider.versioning.parser import parse_range

logger = logging.getLogger(__name__)


def _app_args(args: Any) -> List[str]:
    """Extra application arguments without the leading ``--`` separator."""
    extra = list(getattr(args, "APP_ARGS", None) or [])
    if extra and extra[0] == "--":
        extra = extra[1:]
    return extra


class Session:
    """Everything a command needs, computed once per process."""

    def __init__(self, cfg: ColliderConfig, system: Optional[str] = None, machine: Optional[str] = None):
        system = system or platform.system()
        self.cfg = cfg
        self.target = host_target(system, machine)
        self.dirs = ProjectDirs.for_host(system).with_overrides(cfg.data_dir, cfg.cache_dir)
        self.cache = ArtifactCache(self.dirs.data_local_dir, self.dirs.cache_dir)
        self.client = GitHubClient(token=cfg.github_token)
        self.exe_path = Path(sys.argv[0]).resolve()

    def acquire(self, version_range: Range, force: bool = False) -> Electron:
        return (
            ElectronOpts()
            .range(version_range)
            .force(force)
            .include_prerelease(self.cfg.include_prerelease)
            .github_token(self.cfg.github_token)
            .target(self.target)
            .dirs(self.dirs)
            .exe_path(self.exe_path)
            .catalog(self.client)
            .cache(self.cache)
            .ensure_electron()
        )


def cmd_fetch(session: Session, args: Any) -> int:
    electron = session.acquire(parse_range(args.ELECTRON_RANGE), force=args.FORCE)
    print(electron.exe)
    return ExitCodes.SUCCESS.value


def cmd_start(session: Session, args: Any) -> int:
    electron = session.acquire(parse_range(args.ELECTRON_RANGE), force=args.FORCE)
    launcher.start(electron, args.APP, _app_args(args))
    return ExitCodes.SUCCESS.value


def cmd_bisect(session: Session, args: Any) -> int:
    versions = build_candidates(session.client.iter_tags(), args.START, args.END)
    logger.info("Bisecting %d Electron versions", len(versions))
    if args.INTERACTIVE:
        oracle = InteractiveOracle(args.APP, _app_args(args))
    else:
        oracle = ProcessOracle(args.APP, _app_args(args))
    result = Bisector(versions, session.acquire, oracle).run()
    print(f"Behavior changed between electron@{result.good} and electron@{result.bad}")
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "fetch": cmd_fetch,
    "start": cmd_start,
    "bisect": cmd_bisect,
}


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE, args.QUIET)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        system = platform.system()
        cfg = resolve_config(args, config_dir=ProjectDirs.for_host(system).config_dir)
        apply_runtime_overrides(cfg)
        session = Session(cfg, system)
        return COMMANDS[args.action](session, args)
    except ColliderError as e:
        logger.error("%s", e)
        if e.help:
            logger.error("help: %s", e.help)
        logger.debug("error code: %s", e.code)
        return e.exit_code.value
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return ExitCodes.INTERRUPTED.value


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
