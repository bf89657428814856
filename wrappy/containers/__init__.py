from .manifest import (
    ContainerManifest,
    Dependency,
    newManifest,
    parseManifest,
    readManifestFile,
    loadManifestFile,
    writeManifestFile,
)
from .validation import validateManifest, validateStructure
from .dependencies import (
    validateDependencies,
    checkCircularDependencies,
    findCircularDependencies,
)
from .container import (
    Container,
    ContainerRuntime,
    ContainerStatus,
    createContainer,
    loadFromDirectory,
)
from .registry import ContainerRegistry
from .scaffold import createContainerStructure

__all__ = [
    "ContainerManifest",
    "Dependency",
    "newManifest",
    "parseManifest",
    "readManifestFile",
    "loadManifestFile",
    "writeManifestFile",
    "validateManifest",
    "validateStructure",
    "validateDependencies",
    "checkCircularDependencies",
    "findCircularDependencies",
    "Container",
    "ContainerRuntime",
    "ContainerStatus",
    "createContainer",
    "loadFromDirectory",
    "ContainerRegistry",
    "createContainerStructure",
]
