# wrappy/containers/constants.py
from __future__ import annotations

MANIFEST_FILE = "manifest.json"
DEFAULT_SCRIPT_KEY = "default"
DEFAULT_SCRIPT_PATH = "scripts/default.sh"
REQUIRED_DIRS: tuple[str, ...] = ("scripts", "content", "config")
# Checked in this order
REQUIRED_CONFIG_FILES: tuple[str, ...] = ("config/permissions.json", "config/environment.json")
