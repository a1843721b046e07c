from __future__ import annotations

import logging
import webbrowser
from typing import Protocol

logger = logging.getLogger(__name__)


class HostWindow(Protocol):
    def alert(self, message: str) -> None: ...

    def open_url(self, url: str, target: str = "_blank") -> None: ...


class ConsoleHost:
    """Host for terminal runs: alerts are printed, links go to the system browser."""

    def __init__(self, *, launch_browser: bool = True) -> None:
        self._launch_browser = launch_browser

    def alert(self, message: str) -> None:
        logger.info("alert: %s", message)
        print(message)

    def open_url(self, url: str, target: str = "_blank") -> None:
        logger.info("Opening %s (target=%s)", url, target)
        if not self._launch_browser:
            print(url)
            return
        if not webbrowser.open(url, new=2 if target == "_blank" else 0):
            print(url)
