# wrappy/containers/scaffold.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from wrappy.containers.constants import MANIFEST_FILE, REQUIRED_DIRS
from wrappy.containers.manifest import ContainerManifest, writeManifestFile
from wrappy.containers.validation import validateManifest
from wrappy.core.errors import ContainerExistsError, ContainerIOError, InvalidPathError

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SCRIPT_BODY",
    "defaultPermissions",
    "defaultEnvironment",
    "createContainerStructure",
]



DEFAULT_SCRIPT_BODY = """#!/bin/bash

# Default container start script
echo "Starting container..."

# Start your application here, for example:
#   cd content && npm start
#   ./content/app

echo "Container started"
"""



def defaultPermissions() -> dict[str, Any]:
    return {
        "api": [],
        "resources": [],
        "network": False,
        "filesystem": {"read": [], "write": []},
    }



def defaultEnvironment() -> dict[str, Any]:
    return {
        "variables": {},
        "path": [],
        "workingDirectory": "./content",
    }



def _writeJson(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")



def createContainerStructure(basePath: Path | str, manifest: ContainerManifest) -> Path:
    """
    Creates a new container directory `<basePath>/<manifest.name>`.

    Layout written:
        manifest.json
        scripts/<every declared script>     (executable start script template)
        content/
        config/permissions.json
        config/environment.json

    The manifest is validated before anything is written, so the result
    passes loadFromDirectory(). An existing target raises ContainerExistsError.
    """
    validateManifest(manifest)

    containerPath = Path(basePath) / manifest.name
    if containerPath.exists():
        raise ContainerExistsError(manifest.name)

    scriptTargets = [containerPath / scriptPath for scriptPath in manifest.scripts.values()]
    for target in scriptTargets:
        if not target.resolve().is_relative_to(containerPath.resolve()):
            raise InvalidPathError(target, "Script path escapes the container directory")

    try:
        for dirName in REQUIRED_DIRS:
            (containerPath / dirName).mkdir(parents=True, exist_ok=True)

        for target in scriptTargets:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(DEFAULT_SCRIPT_BODY, encoding="utf-8")
            target.chmod(0o755)

        configDir = containerPath / "config"
        _writeJson(configDir / "permissions.json", defaultPermissions())
        _writeJson(configDir / "environment.json", defaultEnvironment())
    except OSError as err:
        raise ContainerIOError(containerPath, err) from err

    writeManifestFile(manifest, containerPath / MANIFEST_FILE)

    logger.info("Created container '%s' at '%s'", manifest.name, containerPath)
    return containerPath
