# wrappy/containers/container.py
from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableSequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from wrappy.bindings.types import BindingsConfig
from wrappy.containers.constants import DEFAULT_SCRIPT_KEY, MANIFEST_FILE
from wrappy.containers.dependencies import checkCircularDependencies, validateDependencies
from wrappy.containers.manifest import ContainerManifest, readManifestFile
from wrappy.containers.validation import validateManifest, validatePathExists, validateStructure
from wrappy.core.errors import InvalidStructureError
from wrappy.core.ids import uuidv7
from wrappy.core.time import utcNow
from wrappy.semver.semver import Version

logger = logging.getLogger(__name__)

__all__ = [
    "ContainerStatus",
    "ContainerRuntime",
    "Container",
    "createContainer",
    "loadFromDirectory",
]



class ContainerStatus(Enum):
    READY = "ready"
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"
    # Only set by the binding installer
    INSTALLING = "installing"
    REMOVING = "removing"



@dataclass
class ContainerRuntime:
    """Mutable lifecycle state of one container. Owned by its Container."""
    id: str = field(default_factory=uuidv7)
    status: ContainerStatus = ContainerStatus.READY
    pid: int | None = None
    startedAt: datetime | None = None
    stoppedAt: datetime | None = None
    exitCode: int | None = None
    errors: list[str] = field(default_factory=list)

    def toDict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "pid": self.pid,
            "startedAt": _isoOrNone(self.startedAt),
            "stoppedAt": _isoOrNone(self.stoppedAt),
            "exitCode": self.exitCode,
            "errors": list(self.errors),
        }



def _isoOrNone(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None



@dataclass(eq=False)
class Container:
    """
    A validated container directory plus its runtime state.

    Build instances with createContainer() / loadFromDirectory() (or the
    Container.create / Container.fromDirectory aliases): both run manifest
    and structure validation first. Not safe for concurrent mutation;
    callers that share a Container must serialize access themselves.
    """
    manifest: ContainerManifest
    path: Path
    runtime: ContainerRuntime
    installedAt: datetime
    lastAccessed: datetime

    # ----- Factories -----

    @classmethod
    def create(cls, manifest: ContainerManifest, path: Path | str) -> Container:
        return createContainer(manifest, path)

    @classmethod
    def fromDirectory(cls, path: Path | str) -> Container:
        return loadFromDirectory(path)

    # ----- Read access -----

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def version(self) -> Version:
        return self.manifest.version

    @property
    def bindings(self) -> BindingsConfig:
        return self.manifest.bindings

    @property
    def isRunning(self) -> bool:
        return self.runtime.status is ContainerStatus.RUNNING

    @property
    def contentPath(self) -> Path:
        return self.path / "content"

    @property
    def configPath(self) -> Path:
        return self.path / "config"

    @property
    def scriptsPath(self) -> Path:
        return self.path / "scripts"

    def scriptPath(self, scriptName: str) -> Path:
        """Absolute path of a declared script; ScriptNotFoundError if undeclared."""
        return self.path / self.manifest.getScript(scriptName)

    def defaultScriptPath(self) -> Path:
        return self.scriptPath(DEFAULT_SCRIPT_KEY)

    # ----- Runtime transitions -----

    def updateLastAccessed(self) -> None:
        self.lastAccessed = utcNow()

    def markRunning(self, pid: int) -> None:
        self.runtime.status = ContainerStatus.RUNNING
        self.runtime.pid = pid
        self.runtime.startedAt = utcNow()
        self.updateLastAccessed()
        logger.debug("Container '%s' running with pid %s", self.name, pid)

    def markStopped(self, exitCode: int) -> None:
        self.runtime.status = ContainerStatus.STOPPED
        self.runtime.pid = None
        self.runtime.stoppedAt = utcNow()
        self.runtime.exitCode = exitCode
        logger.debug("Container '%s' stopped with exit code %s", self.name, exitCode)

    def markError(self, message: str) -> None:
        """
        Records a failure. The process is no longer tracked afterwards, so the
        pid is cleared together with setting stoppedAt.
        """
        self.runtime.status = ContainerStatus.ERROR
        self.runtime.errors.append(message)
        self.runtime.pid = None
        self.runtime.stoppedAt = utcNow()
        logger.warning("Container '%s' failed: %s", self.name, message)

    # ----- Dependency checks -----

    def validateDependencies(self, available: Mapping[str, Version]) -> None:
        validateDependencies(self, available)

    @staticmethod
    def checkCircularDependencies(
        containers: Mapping[str, Container],
        path: MutableSequence[str],
        current: str,
    ) -> None:
        checkCircularDependencies(containers, path, current)

    # ----- Reporting -----

    def snapshot(self) -> dict[str, Any]:
        return {
            "manifest": self.manifest.toDocument(),
            "path": str(self.path),
            "runtime": self.runtime.toDict(),
            "installedAt": self.installedAt.isoformat(),
            "lastAccessed": self.lastAccessed.isoformat(),
        }

    def toJson(self) -> str:
        return json.dumps(self.snapshot(), ensure_ascii=False, indent=2)



def createContainer(manifest: ContainerManifest, path: Path | str) -> Container:
    """
    Validates `manifest`, then the directory at `path` against it, and returns
    a Container in the Ready state. Validation errors propagate unchanged.
    """
    root = Path(path).absolute()
    validateManifest(manifest)
    validateStructure(root, manifest)

    now = utcNow()
    container = Container(
        manifest=manifest,
        path=root,
        runtime=ContainerRuntime(),
        installedAt=now,
        lastAccessed=now,
    )
    logger.info("Container '%s' v%s ready at '%s'", manifest.name, manifest.version, root)
    return container



def loadFromDirectory(path: Path | str) -> Container:
    """
    Reads `<path>/manifest.json` and hands it to createContainer(), which
    runs the manifest and structure validation once.
    """
    root = Path(path).absolute()
    validatePathExists(root)
    manifestPath = root / MANIFEST_FILE
    if not manifestPath.is_file():
        raise InvalidStructureError(f"{MANIFEST_FILE} not found")
    manifest = readManifestFile(manifestPath)
    return createContainer(manifest, root)
