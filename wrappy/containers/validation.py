# wrappy/containers/validation.py
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from wrappy.containers.constants import (
    DEFAULT_SCRIPT_KEY,
    MANIFEST_FILE,
    REQUIRED_CONFIG_FILES,
    REQUIRED_DIRS,
)
from wrappy.core.errors import (
    InvalidDependencyError,
    InvalidPathError,
    InvalidStructureError,
    InvalidVersionError,
    ManifestValidationError,
    MissingDefaultScriptError,
    ScriptNotFoundError,
)
from wrappy.semver.semver import Version, parseVersion

if TYPE_CHECKING:
    from wrappy.containers.manifest import ContainerManifest

logger = logging.getLogger(__name__)

__all__ = [
    "NAME_RE",
    "validateManifest",
    "validatePathExists",
    "validateStructure",
]



NAME_RE = re.compile(r"[A-Za-z0-9_-]+")



# ------------------------------------------------------------------ #
# Manifest content
# ------------------------------------------------------------------ #

def validateManifest(manifest: ContainerManifest) -> None:
    """
    Checks a manifest in isolation, without touching the filesystem.

    Rules run in a fixed order and the first failure is raised:
      1. name is non-empty                      -> ManifestValidationError
      2. name matches [A-Za-z0-9_-]+            -> ManifestValidationError
      3. version is a valid Version             -> InvalidVersionError
      4. scripts has a "default" entry          -> MissingDefaultScriptError
      5. every script path is non-empty         -> ManifestValidationError
      6. every dependency has a name, a version
         and the version parses                 -> InvalidDependencyError
    """
    if not manifest.name:
        raise ManifestValidationError("Container name cannot be empty")

    if not NAME_RE.fullmatch(manifest.name):
        raise ManifestValidationError(
            "Container name can only contain alphanumeric characters, hyphens, and underscores"
        )

    _validateVersionValue(manifest.version)

    if DEFAULT_SCRIPT_KEY not in manifest.scripts:
        raise MissingDefaultScriptError()

    for scriptName, scriptPath in manifest.scripts.items():
        if not scriptPath:
            raise ManifestValidationError(f"Script '{scriptName}' has empty path")

    for dependency in manifest.dependencies:
        if not dependency.name:
            raise InvalidDependencyError("", "Dependency name cannot be empty")
        if not dependency.version:
            raise InvalidDependencyError(dependency.name, "Dependency version cannot be empty")
        try:
            parseVersion(dependency.version)
        except InvalidVersionError:
            raise InvalidDependencyError(
                dependency.name,
                f"Invalid version format: {dependency.version}",
            ) from None

    logger.debug("Manifest '%s' v%s passed validation", manifest.name, manifest.version)



def _validateVersionValue(value: object) -> None:
    # Normally a Version already, but model_construct() skips coercion
    if isinstance(value, Version):
        value.validate()
        return
    if isinstance(value, str):
        parseVersion(value)
        return
    raise InvalidVersionError(value)



# ------------------------------------------------------------------ #
# On-disk structure
# ------------------------------------------------------------------ #

def validatePathExists(path: Path) -> None:
    if not path.exists():
        raise InvalidPathError(path, "Path does not exist")
    if not path.is_dir():
        raise InvalidStructureError("Container path must be a directory")



def validateStructure(path: Path | str, manifest: ContainerManifest) -> None:
    """
    Checks that the directory at `path` holds what `manifest` claims.

    Read-only. Checks run in this order:
      1. path exists and is a directory
      2. scripts/, content/ and config/ exist
      3. manifest.json exists
      4. the default script exists
      5. every declared script exists
      6. config/permissions.json and config/environment.json exist
    """
    root = Path(path)
    validatePathExists(root)

    for dirName in REQUIRED_DIRS:
        if not (root / dirName).is_dir():
            raise InvalidStructureError(f"Required directory '{dirName}' not found")

    if not (root / MANIFEST_FILE).is_file():
        raise InvalidStructureError(f"{MANIFEST_FILE} not found")

    if not (root / manifest.defaultScript()).exists():
        raise MissingDefaultScriptError()

    for scriptName, scriptPath in manifest.scripts.items():
        if not (root / scriptPath).exists():
            raise ScriptNotFoundError(manifest.name, scriptName)

    for relPath in REQUIRED_CONFIG_FILES:
        if not (root / relPath).exists():
            raise InvalidStructureError(f"{relPath} not found")

    logger.debug("Container structure at '%s' matches manifest '%s'", root, manifest.name)
