"""Argument parsing functionality for collider."""

import argparse


def _add_acquire_options(parser):
    parser.add_argument("--force",
                        dest="FORCE",
                        help="Download Electron again even if it is already cached.",
                        action="store_true")
    parser.add_argument("--include-prerelease",
                        dest="INCLUDE_PRERELEASE",
                        help="Allow prerelease Electron versions to be selected.",
                        action="store_true")
    parser.add_argument("--github-token",
                        dest="GITHUB_TOKEN",
                        help="GitHub API token, used to avoid API rate limits.",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="collider",
        description="Build and manage your Electron application.",
        add_help=True,
    )
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: $COLLIDER_LOG_LEVEL or WARNING)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Disable all log output on the console.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="action", metavar="<command>")
    subparsers.required = True

    start = subparsers.add_parser("start", help="Start your Electron application.")
    start.add_argument("APP",
                       help="Application directory or entry point passed to Electron (default: .)",
                       nargs="?",
                       default=".")
    start.add_argument("-e", "--electron",
                       dest="ELECTRON_RANGE",
                       help="Electron version range to use, e.g. ^13.0.0 (default: *)",
                       action="store",
                       type=str,
                       default="*")
    _add_acquire_options(start)
    start.add_argument("APP_ARGS",
                       help="Extra arguments for the application, after --",
                       nargs=argparse.REMAINDER)

    fetch = subparsers.add_parser("fetch", help="Download Electron without starting anything.")
    fetch.add_argument("ELECTRON_RANGE",
                       help="Electron version range (default: *)",
                       nargs="?",
                       default="*")
    _add_acquire_options(fetch)

    bisect = subparsers.add_parser("bisect",
                                   help="Bisect the Electron version that caused a breakage.")
    bisect.add_argument("START",
                        help="Oldest version to consider (known good), or * for the oldest release")
    bisect.add_argument("END",
                        help="Newest version to consider (known bad), or * for the newest release")
    bisect.add_argument("APP",
                        help="Application directory or entry point passed to Electron (default: .)",
                        nargs="?",
                        default=".")
    bisect.add_argument("-i", "--interactive",
                        dest="INTERACTIVE",
                        help="Ask whether each version is good instead of trusting the exit status.",
                        action="store_true")
    bisect.add_argument("--github-token",
                        dest="GITHUB_TOKEN",
                        help="GitHub API token, used to avoid API rate limits.",
                        action="store",
                        type=str)
    bisect.add_argument("APP_ARGS",
                        help="Extra arguments for the application, after --",
                        nargs=argparse.REMAINDER)

    return parser.parse_args(argv)
