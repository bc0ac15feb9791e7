# debug.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Debug:
    _root_configured: bool = False          # class-level guard

    def __init__(self) -> None:
        """Every Debug() shares the "ENIGMA" logger and one root config."""
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format=LOG_FORMAT,
                datefmt=DATE_FORMAT,
                handlers=[logging.StreamHandler()],
            )
            Debug._root_configured = True

        self.logger = logging.getLogger("ENIGMA")
        self.enabled = True        # global switch
        self.components: Dict[str, bool] = {
            "keyboard":   False,
            "plugboard":  False,
            "rotor":      False,
            "reflector":  False,
            "stepping":   False,
            "encipher":   False,
            "config":     False,
            "report":     False,
        }

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.enabled and self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def warn(self, component: str, message: str) -> None:
        """Operator-facing warnings ignore the per-component switches."""
        if self.enabled:
            self.logger.warning("[%s] %s", component.upper(), message)

    # ── file output ──────────────────────────────────────────────
    def log_to_file(self, path: str | Path) -> logging.FileHandler:
        """Also stream every "ENIGMA" record to *path*; returns the handler."""
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        self.logger.addHandler(handler)
        # component switches already gate the debug traces
        self.logger.setLevel(logging.DEBUG)
        return handler

    def close_file(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)
        handler.close()

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def enable_all(self) -> None:
        for c in self.components:
            self.components[c] = True

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"
