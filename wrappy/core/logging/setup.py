# wrappy/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from wrappy.app.settings import settings, settingsBool
from .formatters import DevFormatter, JsonFormatter

__all__ = [
    "configureLogging",
]



def configureLogging(level: str | int | None = None) -> None:
    """
    Initiate the global logging configuration.

    Console:
      - DEBUG in dev mode, else `logging.level` from settings (INFO by default)
      - DevFormatter, or JsonFormatter when `logging.json` is set
    File (only when `logging.file` is set):
      - JSON lines with rotation
    An explicit `level` wins over settings.
    """
    devMode = settingsBool("debug.devModeEnabled", False)
    if level is None:
        level = logging.DEBUG if devMode else str(settings("logging.level", "INFO")).upper()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(level)
    consoleHandler.setFormatter(JsonFormatter() if settingsBool("logging.json", False) else DevFormatter())
    root.addHandler(consoleHandler)

    logFile = settings("logging.file")
    if logFile:
        fileHandler = logging.handlers.RotatingFileHandler(
            str(logFile),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        fileHandler.setLevel(level)
        fileHandler.setFormatter(JsonFormatter())
        root.addHandler(fileHandler)
