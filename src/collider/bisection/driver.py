"""Binary search over Electron releases for the version that changed behavior.

The candidate list is ordered oldest to newest. The oldest end is assumed
good and the newest bad; each step acquires the pivot release, asks the
oracle, and narrows ``[min_rev, max_rev]`` until the two indices bracket the
change.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from collider.errors import NoCandidatesError
from collider.common.logging_utils import extra_context, is_debug_enabled
from collider.electron.acquire import Electron
from collider.versioning.models import Range, Version, parse_tag
from collider.versioning.parser import parse_bound

logger = logging.getLogger(__name__)

Acquire = Callable[[Range], Electron]


@dataclass
class BisectResult:
    """Outcome of a bisection run."""
    good: Version
    bad: Version
    min_rev: int
    max_rev: int
    steps: List[Tuple[Version, bool]] = field(default_factory=list)


def build_candidates(tags: Iterable[str], start: str, end: str) -> List[Version]:
    """Turn catalog tags (newest first) into the oldest-to-newest search list.

    Prereleases are dropped. ``start``/``end`` are explicit versions or ``*``,
    which selects the oldest and newest catalog entry respectively.
    """
    releases = [version for version in (parse_tag(tag) for tag in tags) if not version.prerelease]
    # Catalog order is newest first but not strictly semver ordered
    releases = sorted(set(releases))
    if not releases:
        return []

    low = parse_bound(start)
    high = parse_bound(end)
    if low is None:
        low = releases[0]
    if high is None:
        high = releases[-1]
    return [version for version in releases if low <= version <= high]


class Bisector:
    """Drives the search; one ``run()`` per bisection session."""

    def __init__(
        self,
        versions: List[Version],
        acquire: Acquire,
        oracle: Callable[[Electron], bool],
        on_step: Optional[Callable[[Version, bool], None]] = None,
    ):
        """Initialize driver.

        Args:
            versions: Candidate versions, oldest first
            acquire: Returns an Electron for an exact-version Range
            oracle: Returns True when the behavior under test is good
            on_step: Optional progress callback
        """
        if not versions:
            raise NoCandidatesError("No Electron versions to bisect between the given bounds")
        self.versions = list(versions)
        self._acquire = acquire
        self._oracle = oracle
        self._on_step = on_step

    def test(self, index: int) -> bool:
        version = self.versions[index]
        electron = self._acquire(Range.exact(version))
        passed = bool(self._oracle(electron))
        logger.info("electron@%s is %s", version, "good" if passed else "bad")
        if self._on_step is not None:
            self._on_step(version, passed)
        return passed

    def run(self) -> BisectResult:
        min_rev = 0
        max_rev = len(self.versions) - 1
        pivot = (min_rev + max_rev) // 2
        steps: List[Tuple[Version, bool]] = []

        while True:
            last = max_rev - min_rev <= 1
            passed = self.test(pivot)
            steps.append((self.versions[pivot], passed))

            if passed:
                min_rev = pivot
                candidate = pivot + (max_rev - pivot) // 2
                converged = candidate in (max_rev, pivot)
            else:
                max_rev = pivot
                candidate = pivot - (pivot - min_rev) // 2
                converged = candidate in (min_rev, pivot)

            if is_debug_enabled(logger):
                logger.debug(
                    "Bisect step",
                    extra=extra_context(
                        event="bisect_step",
                        component="bisect",
                        outcome="good" if passed else "bad",
                        min_rev=min_rev,
                        max_rev=max_rev,
                        pivot=pivot
                    )
                )
            if last or converged:
                break
            pivot = candidate

        return BisectResult(
            good=self.versions[min_rev],
            bad=self.versions[max_rev],
            min_rev=min_rev,
            max_rev=max_rev,
            steps=steps,
        )
