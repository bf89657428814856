# wrappy/containers/registry.py
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from wrappy.containers.constants import MANIFEST_FILE
from wrappy.containers.container import Container, loadFromDirectory
from wrappy.containers.dependencies import (
    checkCircularDependencies,
    findCircularDependencies,
    validateDependencies,
)
from wrappy.core.errors import ContainerError, ContainerExistsError, ContainerNotFoundError
from wrappy.semver.semver import Version

logger = logging.getLogger(__name__)

__all__ = ["ContainerRegistry"]



class ContainerRegistry(Mapping[str, Container]):
    """
    In-memory index of loaded containers, keyed by container name.

    Responsibilities:
      - Hold Container instances loaded from disk (or registered directly).
      - Expose the registry as the `containers` mapping the dependency
        checks expect.
      - Derive the "available packages" view (name -> Version) from what
        is registered.

    The registry is read-only for the dependency checks; register() and
    discover() are the only mutators.
    """

    def __init__(self, containers: Iterable[Container] = ()) -> None:
        self._byName: dict[str, Container] = {}
        # Directories that failed to load during discover(), with the reason
        self.failures: dict[Path, ContainerError] = {}

        for container in containers:
            self.register(container)

    # ----- Mapping protocol -----

    def __getitem__(self, name: str) -> Container:
        return self._byName[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._byName)

    def __len__(self) -> int:
        return len(self._byName)

    # ----- Registration -----

    def register(self, container: Container) -> None:
        if container.name in self._byName:
            raise ContainerExistsError(container.name)
        self._byName[container.name] = container
        logger.debug("Registered container '%s' v%s", container.name, container.version)

    def require(self, name: str) -> Container:
        try:
            return self._byName[name]
        except KeyError:
            raise ContainerNotFoundError(name) from None

    def names(self) -> list[str]:
        return sorted(self._byName)

    # ----- Discovery -----

    def discover(self, root: Path | str) -> list[Container]:
        """
        Loads every immediate subdirectory of `root` that has a manifest.json.

        A directory that fails validation is recorded in `self.failures` and
        logged; the rest are still registered. Returns the containers that
        were added by this call.
        """
        base = Path(root)
        if not base.is_dir():
            logger.warning("Container root does not exist: '%s'", base)
            return []

        added: list[Container] = []
        for entry in sorted(base.iterdir()):
            if not entry.is_dir() or not (entry / MANIFEST_FILE).is_file():
                continue
            try:
                container = loadFromDirectory(entry)
                self.register(container)
            except ContainerError as err:
                self.failures[entry] = err
                logger.warning("Skipping container at '%s': %s", entry, err)
                continue
            added.append(container)

        logger.info("Discovered %d container(s) under '%s'", len(added), base)
        return added

    # ----- Dependency checks -----

    def availableVersions(self) -> dict[str, Version]:
        return {name: container.version for name, container in self._byName.items()}

    def validateDependencies(
        self,
        name: str,
        available: Mapping[str, Version] | None = None,
    ) -> None:
        """Checks `name`'s dependencies against `available`, or the registry's own versions."""
        container = self.require(name)
        validateDependencies(container, self.availableVersions() if available is None else available)

    def checkCircular(self, name: str) -> None:
        self.require(name)
        checkCircularDependencies(self, [], name)

    def checkAllCircular(self) -> None:
        findCircularDependencies(self)
