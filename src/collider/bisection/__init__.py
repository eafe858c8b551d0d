"""Bisection over Electron releases."""

from .driver import BisectResult, Bisector, build_candidates
from .oracle import InteractiveOracle, ProcessOracle

__all__ = ["BisectResult", "Bisector", "InteractiveOracle", "ProcessOracle", "build_candidates"]
