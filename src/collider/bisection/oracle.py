"""Oracles deciding whether one Electron version is good or bad."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Union
from pathlib import Path

from collider.electron.acquire import Electron
from collider import launcher

logger = logging.getLogger(__name__)

Oracle = Callable[[Electron], bool]

_YES = ("y", "yes")
_NO = ("n", "no")


class ProcessOracle:
    """Launch the application; exit status 0 means PASS."""

    def __init__(
        self,
        app_path: Union[str, Path, None],
        args: Sequence[str] = (),
        run: Callable[..., int] = launcher.launch,
    ):
        self.app_path = app_path
        self.args = list(args)
        self._run = run

    def __call__(self, electron: Electron) -> bool:
        status = self._run(electron, self.app_path, self.args)
        return status == 0


class InteractiveOracle(ProcessOracle):
    """Launch the application, then ask the user; the answer wins over the exit status."""

    def __init__(
        self,
        app_path: Union[str, Path, None],
        args: Sequence[str] = (),
        run: Callable[..., int] = launcher.launch,
        ask: Callable[[str], str] = input,
    ):
        super().__init__(app_path, args, run)
        self._ask = ask

    def __call__(self, electron: Electron) -> bool:
        exited_ok = super().__call__(electron)
        logger.debug("electron@%s exit status suggests %s", electron.version, "good" if exited_ok else "bad")
        answer = self._prompt(f"Was electron@{electron.version} good? [y/n] ")
        return exited_ok if answer is None else answer

    def _prompt(self, question: str) -> Optional[bool]:
        while True:
            try:
                reply = self._ask(question).strip().lower()
            except EOFError:
                return None
            if reply in _YES:
                return True
            if reply in _NO:
                return False
