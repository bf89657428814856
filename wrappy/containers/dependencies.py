# wrappy/containers/dependencies.py
from __future__ import annotations

import logging
from collections.abc import Mapping, MutableSequence
from typing import TYPE_CHECKING

from wrappy.core.errors import (
    CircularDependencyError,
    PackageNotFoundError,
    VersionConflictError,
)
from wrappy.semver.semver import Version, parseVersion

if TYPE_CHECKING:
    from wrappy.containers.container import Container
    from wrappy.containers.manifest import Dependency

logger = logging.getLogger(__name__)

__all__ = [
    "validateDependency",
    "validateDependencies",
    "checkCircularDependencies",
    "findCircularDependencies",
]



# ------------------------------------------------------------------ #
# Version compatibility
# ------------------------------------------------------------------ #

def validateDependency(
    dependency: Dependency,
    available: Mapping[str, Version],
    *,
    containerName: str | None = None,
) -> None:
    """
    Checks one dependency against the available package versions.

    Optional dependencies that are missing from `available` are skipped.
    When present they must still be compatible.

    Raises:
        PackageNotFoundError    required package missing
        VersionConflictError    found version is not compatible
        InvalidVersionError     required version does not parse
    """
    packageVersion = available.get(dependency.name)
    if packageVersion is None:
        if dependency.optional:
            logger.debug(
                "Optional dependency '%s' of '%s' is not available, skipping",
                dependency.name,
                containerName,
            )
            return
        raise PackageNotFoundError(dependency.name)

    requiredVersion = parseVersion(dependency.version)

    if not packageVersion.isCompatibleWith(requiredVersion):
        raise VersionConflictError(
            f"Package '{dependency.name}' version {packageVersion} "
            f"is not compatible with required version {requiredVersion}"
        )



def validateDependencies(container: Container, available: Mapping[str, Version]) -> None:
    """Runs validateDependency for every dependency of `container`, in declaration order."""
    for dependency in container.manifest.dependencies:
        validateDependency(dependency, available, containerName=container.name)



# ------------------------------------------------------------------ #
# Circular dependencies
# ------------------------------------------------------------------ #

def checkCircularDependencies(
    containers: Mapping[str, Container],
    path: MutableSequence[str],
    current: str,
    *,
    explored: set[str] | None = None,
) -> None:
    """
    Depth-first walk from `current` along declared dependency names.

    `path` is the active resolution stack: `current` is pushed before its
    dependencies are visited and popped afterwards, also when an error
    propagates. Reaching a name that is already on `path` raises
    CircularDependencyError with the stack joined by " -> ".

    Names missing from `containers` end the walk silently: packages outside
    the registry are not inspected.

    `explored` collects names whose whole sub-graph is known to be acyclic,
    so shared sub-graphs (diamonds) are walked once. A fresh set is used when
    none is given.
    """
    if explored is None:
        explored = set()
    _visit(containers, path, current, explored)



def _visit(
    containers: Mapping[str, Container],
    path: MutableSequence[str],
    current: str,
    explored: set[str],
) -> None:
    if current in path:
        start = list(path).index(current)
        raise CircularDependencyError(
            chain=" -> ".join(path),
            cycle=[*list(path)[start:], current],
        )

    if current in explored:
        return

    container = containers.get(current)
    if container is None:
        return

    path.append(current)
    try:
        for dependency in container.manifest.dependencies:
            _visit(containers, path, dependency.name, explored)
    finally:
        path.pop()

    explored.add(current)



def findCircularDependencies(containers: Mapping[str, Container]) -> None:
    """Checks every container in `containers`; the first cycle found is raised."""
    explored: set[str] = set()
    for name in sorted(containers):
        _visit(containers, [], name, explored)
