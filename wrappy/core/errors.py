# wrappy/core/errors.py
from __future__ import annotations

from pathlib import Path

__all__ = [
    "ContainerError",
    "InvalidStructureError",
    "MissingDefaultScriptError",
    "ScriptNotFoundError",
    "InvalidManifestError",
    "ManifestValidationError",
    "InvalidDependencyError",
    "PackageNotFoundError",
    "CircularDependencyError",
    "InvalidVersionError",
    "VersionConflictError",
    "InvalidPathError",
    "ContainerIOError",
    "ContainerExistsError",
    "ContainerNotFoundError",
]



class ContainerError(Exception):
    """
    Base class for everything the container core raises.

    `kind` names the failure category so callers (CLI, reports) can react
    to it without matching on class names.
    """
    kind: str = "Container"



class InvalidStructureError(ContainerError):
    """Directory layout does not match what a container requires."""
    kind = "InvalidStructure"

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid container structure: {message}")
        self.message = message



class MissingDefaultScriptError(ContainerError):
    kind = "MissingDefaultScript"

    def __init__(self) -> None:
        super().__init__("Default startup script not found")



class ScriptNotFoundError(ContainerError):
    kind = "ScriptNotFound"

    def __init__(self, container: str, script: str) -> None:
        super().__init__(f"Script '{script}' not found in container '{container}'")
        self.container = container
        self.script = script



class InvalidManifestError(ContainerError):
    """Manifest document could not be parsed as JSON or does not fit the schema."""
    kind = "InvalidManifest"

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid manifest format: {message}")
        self.message = message



class ManifestValidationError(ContainerError):
    """A named field-level rule of the manifest failed."""
    kind = "ManifestValidation"

    def __init__(self, message: str) -> None:
        super().__init__(f"Manifest validation failed: {message}")
        self.message = message



class InvalidDependencyError(ContainerError):
    kind = "InvalidDependency"

    def __init__(self, package: str, reason: str) -> None:
        super().__init__(f"Invalid package dependency '{package}': {reason}")
        self.package = package
        self.reason = reason



class PackageNotFoundError(ContainerError):
    kind = "PackageNotFound"

    def __init__(self, package: str) -> None:
        super().__init__(f"Package '{package}' not found")
        self.package = package



class CircularDependencyError(ContainerError):
    """
    Raised when a dependency chain revisits a name on the active resolution path.

    `chain` is the resolution path at the moment the repeat was found, joined
    by " -> ". `cycle` holds only the looping part, closed with the repeated name.
    """
    kind = "CircularDependency"

    def __init__(self, chain: str, cycle: list[str] | None = None) -> None:
        super().__init__(f"Circular dependency detected: {chain}")
        self.chain = chain
        self.cycle: list[str] = list(cycle or [])



class InvalidVersionError(ContainerError, ValueError):
    kind = "InvalidVersion"

    def __init__(self, version: object) -> None:
        super().__init__(f"Invalid container version format: {version}")
        self.version = version



class VersionConflictError(ContainerError):
    kind = "VersionConflict"

    def __init__(self, conflict: str) -> None:
        super().__init__(f"Version conflict: {conflict}")
        self.conflict = conflict



class InvalidPathError(ContainerError):
    kind = "InvalidPath"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Invalid file path: {path} - {reason}")
        self.path = Path(path)
        self.reason = reason



class ContainerIOError(ContainerError):
    kind = "IoError"

    def __init__(self, path: Path | str, source: OSError) -> None:
        super().__init__(f"IO error at path '{path}': {source}")
        self.path = Path(path)
        self.source = source



class ContainerExistsError(ContainerError):
    kind = "ContainerExists"

    def __init__(self, name: str) -> None:
        super().__init__(f"Container '{name}' already exists")
        self.name = name



class ContainerNotFoundError(ContainerError):
    kind = "ContainerNotFound"

    def __init__(self, name: str) -> None:
        super().__init__(f"Container '{name}' not found")
        self.name = name
