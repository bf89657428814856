# wrappy/app/settings.py
from __future__ import annotations
import copy
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

import fastjsonschema
import json5
from pydantic import JsonValue

from wrappy.core.dictpath import getByPath

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_ENV_VAR", "SETTINGS_DEFAULTS", "SETTINGS_SCHEMA", "IsolationConfig",
    "userSettingsPath", "loadUserSettings", "loadSettings", "reloadSettings",
    "deepMerge", "settings", "settingsBool", "isolationConfig",
]



SETTINGS_ENV_VAR = "WRAPPY_SETTINGS"

SETTINGS_DEFAULTS: dict[str, JsonValue] = {
    "__source": "WRAPPY_DEFAULTS",
    "debug": {"devModeEnabled": False},
    "logging": {"level": "INFO", "file": None, "json": False},
    # Declared for manifests and tooling; the core never enforces it
    "isolation": {"enabled": True, "network": "restricted", "filesystem": "sandboxed"},
}

SETTINGS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "debug": {
            "type": "object",
            "properties": {"devModeEnabled": {"type": "boolean"}},
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
                "file": {"type": ["string", "null"]},
                "json": {"type": "boolean"},
            },
        },
        "isolation": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "network": {"type": "string"},
                "filesystem": {"type": "string"},
            },
        },
    },
}

_validateSettings = fastjsonschema.compile(SETTINGS_SCHEMA)



@dataclass(frozen=True)
class IsolationConfig:
    enabled: bool = True
    network: str = "restricted"
    filesystem: str = "sandboxed"



def userSettingsPath() -> Path:
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(os.path.expanduser("~/.wrappy/wrappy.json5"))



def loadUserSettings() -> JsonValue:
    """
    Reads the user settings file. A missing file yields {}; a file that does
    not parse or does not fit SETTINGS_SCHEMA is logged and ignored.
    """
    filePath = userSettingsPath()
    if not filePath.exists():
        return {}
    try:
        data = json5.loads(filePath.read_text(encoding="utf-8"))
    except (OSError, ValueError) as err:
        logger.error("Failed to parse '%s': %s", filePath, err)
        return {}
    if not isinstance(data, dict):
        logger.error("Settings file '%s' must contain an object, got %s", filePath, type(data).__name__)
        return {}
    try:
        _validateSettings(data)
    except fastjsonschema.JsonSchemaException as err:
        logger.error("Settings file '%s' rejected: %s", filePath, err.message)
        return {}
    return cast(JsonValue, data)



@lru_cache(maxsize=1)
def loadSettings() -> JsonValue:
    return deepMerge(copy.deepcopy(SETTINGS_DEFAULTS), loadUserSettings())



def reloadSettings() -> JsonValue:
    loadSettings.cache_clear()
    return loadSettings()



def deepMerge(base: JsonValue, override: JsonValue) -> JsonValue:
    """
    Merges `override` onto `base` without mutating either. Objects merge key
    by key; any other value in `override` replaces the one in `base`.
    """
    if not (isinstance(base, dict) and isinstance(override, dict)):
        return override
    merged: dict[str, JsonValue] = dict(base)
    for key, value in override.items():
        merged[key] = deepMerge(merged[key], value) if key in merged else value
    return cast(JsonValue, merged)

# ---------- Accessors over merged settings ----------

def settings(path: str, default: Any = None) -> Any:
    value = getByPath(loadSettings(), path)
    return default if value is None else value



def settingsBool(path: str, default: bool = False) -> bool:
    value = getByPath(loadSettings(), path)
    return default if value is None else bool(value)



def isolationConfig() -> IsolationConfig:
    """Isolation block as declared in settings. Informational: nothing enforces it."""
    return IsolationConfig(
        enabled=settingsBool("isolation.enabled", True),
        network=str(settings("isolation.network", "restricted")),
        filesystem=str(settings("isolation.filesystem", "sandboxed")),
    )
