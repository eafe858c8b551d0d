"""Discover the installed collider version from its package.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from collider.constants import Constants
from collider.errors import BadJsonError, IoError, VersionParseError
from collider.versioning.models import Version, parse_version

logger = logging.getLogger(__name__)

# Characters of context kept on each side of a JSON error.
SNIPPET_RADIUS = 40


def bad_json_error(err: json.JSONDecodeError, path: str, source: str) -> BadJsonError:
    """Build a BadJsonError with a short window of the source around the error.

    package.json files can be very long, so only the relevant bytes are kept.
    """
    offset = len(source[:err.pos].encode("utf-8"))
    start = max(0, err.pos - SNIPPET_RADIUS)
    snippet = source[start:err.pos + SNIPPET_RADIUS]
    return BadJsonError(path=path, offset=offset, snippet=snippet, reason=err.msg)


def read_package_json(path: Path) -> dict:
    """Parse a package.json file.

    Raises:
        IoError: The file could not be read
        BadJsonError: The file is not valid JSON
    """
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IoError(f"Failed to read {path}", e) from e
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise bad_json_error(e, str(path), source) from e
    if not isinstance(data, dict):
        raise BadJsonError(path=str(path), offset=0, snippet=source[:2 * SNIPPET_RADIUS],
                           reason="expected a JSON object")
    return data


def find_current_version(
    exe_path: Union[str, Path],
    product_name: str = Constants.PRODUCT_NAME,
) -> Optional[Version]:
    """Return the version of the installed product, or None.

    Walks from the directory holding ``exe_path`` up through its ancestors,
    returning the version from the first package.json whose ``name`` equals
    ``product_name``. Parse errors propagate; they are never treated as
    "not found".
    """
    start = Path(exe_path).parent
    for directory in (start, *start.parents):
        candidate = directory / Constants.PACKAGE_JSON_FILE
        if not candidate.is_file():
            continue
        pkg = read_package_json(candidate)
        if pkg.get("name") != product_name:
            continue
        raw = pkg.get("version")
        if not isinstance(raw, str):
            raise VersionParseError(f"{candidate} has no valid version field")
        logger.debug("Found %s@%s in %s", product_name, raw, candidate)
        return parse_version(raw)
    return None
