# debug.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict

COMPONENTS = ("keyboard", "plugboard", "rotor", "stepping", "encipher")
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Debug:
    """Per-component debug switches over one ``ENIGMA`` logger.

    Every instance shares the same switch board, so a module-level
    ``debug = Debug()`` in each module can be steered from the CLI.
    """

    _switches: Dict[str, bool] = {c: False for c in COMPONENTS}
    logger = logging.getLogger("ENIGMA")

    def __init__(self) -> None:
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.DEBUG)
        self.components = Debug._switches

    def log(self, component: str, message: str) -> None:
        if self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def log_to_file(self, path: str | Path) -> logging.FileHandler:
        """Also write every message to *path*; returns the new handler."""
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        self.logger.addHandler(handler)
        return handler

    def enable(self, *components: str) -> None:
        self._set(components, True)

    def disable(self, *components: str) -> None:
        self._set(components, False)

    def toggle_global(self, state: bool) -> None:
        self._set(self.components, state)

    def status(self) -> Dict[str, bool]:
        return self.components.copy()

    def _set(self, components, state: bool) -> None:
        for c in list(components):
            if c not in self.components:
                raise ValueError(f"No such component: {c!r}")
            self.components[c] = state

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug active={active}>"
