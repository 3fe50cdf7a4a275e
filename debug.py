# debug.py
from __future__ import annotations
import logging
from typing import Dict

LOGGER_NAME = "enigma"


class Debug:
    _configured: bool = False          # class-level guard

    def __init__(self, name: str = LOGGER_NAME) -> None:
        self.logger = logging.getLogger(name)
        self.enabled = True        # global switch

        # every component starts silent
        self.components: Dict[str, bool] = {
            "plugboard":  False,
            "rotor":      False,
            "reflector":  False,
            "stepping":   False,
            "encipher":   False,
        }

    # ── handler setup ────────────────────────────────────────────
    @classmethod
    def configure(cls, level: int = logging.DEBUG, *, log_to: str | None = None) -> None:
        """
        Attach a stream handler (and a file handler when `log_to` is given)
        to the "enigma" logger. Safe to call more than once; only the first
        call adds handlers. The root logger is left alone.
        """
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(level)
        if cls._configured:
            return

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        fmt = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        for handler in handlers:
            handler.setFormatter(fmt)
            logger.addHandler(handler)
        cls._configured = True

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str, *args: object) -> None:
        if self.enabled and self.components.get(component, False):
            self.logger.debug("[%s] " + message, component.upper(), *args)

    def active(self, component: str) -> bool:
        """True when messages for `component` would be emitted."""
        return self.enabled and self.components.get(component, False)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

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


# shared by every module of the machine
DEBUG = Debug()
