# wrappy/cli.py
from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from wrappy.containers.container import Container, loadFromDirectory
from wrappy.containers.manifest import newManifest
from wrappy.containers.registry import ContainerRegistry
from wrappy.containers.scaffold import createContainerStructure
from wrappy.core.errors import (
    ContainerError,
    InvalidPathError,
    InvalidStructureError,
    MissingDefaultScriptError,
    ScriptNotFoundError,
)
from wrappy.core.logging import clearLogContext, configureLogging, setLogContext
from wrappy.semver.semver import parseVersion

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SYSTEM = 2


def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wrappy",
        description="Container file system abstraction - manage isolated application environments",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate container structure in the current or specified directory")
    validate.add_argument("-p", "--path", type=Path, default=None, help="Directory to validate (defaults to cwd)")
    validate.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    init = sub.add_parser("init", help="Create a new container skeleton")
    init.add_argument("name")
    init.add_argument("-p", "--path", type=Path, default=None, help="Parent directory (defaults to cwd)")
    init.add_argument("--version", dest="containerVersion", default="0.1.0")
    init.add_argument("--description", default="")
    init.add_argument("--author", default="")

    deps = sub.add_parser("check-deps", help="Check dependencies of the containers under a directory")
    deps.add_argument("-r", "--root", type=Path, default=None, help="Directory holding containers (defaults to cwd)")
    deps.add_argument("-n", "--name", default=None, help="Only check this container")

    return parser


def _resolveDir(path: Path | None) -> Path | None:
    if path is not None:
        return path
    try:
        return Path(os.getcwd())
    except OSError as err:
        print(f"Error: Unable to get current directory: {err}", file=sys.stderr)
        return None


def _suggestionFor(error: ContainerError) -> str | None:
    if isinstance(error, InvalidPathError):
        return "Ensure the path exists and is accessible"
    if isinstance(error, InvalidStructureError) and "manifest.json" in error.message:
        return "Create a manifest.json file in the container directory"
    if isinstance(error, InvalidStructureError) and "directory" in error.message:
        return "Ensure required directories (scripts, content, config) exist"
    if isinstance(error, MissingDefaultScriptError):
        return "Ensure the default script exists in the scripts directory"
    if isinstance(error, ScriptNotFoundError):
        return f"Ensure script '{error.script}' exists in the scripts directory"
    return None


def _printContainerDetails(container: Container) -> None:
    print("Container details:")
    print(f"  Name: {container.name}")
    print(f"  Version: {container.version}")
    print(f"  Path: {container.path}")
    if container.manifest.scripts:
        print("  Scripts:")
        for name, path in container.manifest.scripts.items():
            print(f"    {name}: {path}")
    if container.manifest.dependencies:
        print("  Dependencies:")
        for dep in container.manifest.dependencies:
            suffix = " (optional)" if dep.optional else ""
            print(f"    {dep.name}: {dep.version}{suffix}")


def runValidate(path: Path | None, verbose: bool) -> int:
    containerPath = _resolveDir(path)
    if containerPath is None:
        return EXIT_SYSTEM

    setLogContext(container=containerPath.name)
    if verbose:
        print(f"Validating container at: {containerPath}")

    try:
        container = loadFromDirectory(containerPath)
    except ContainerError as err:
        print(f"Container validation failed: {err}", file=sys.stderr)
        if verbose:
            print(f"Error kind: {err.kind}", file=sys.stderr)
            suggestion = _suggestionFor(err)
            if suggestion:
                print(f"\nSuggestion: {suggestion}", file=sys.stderr)
        return EXIT_INVALID

    print("Container validation successful!")
    if verbose:
        _printContainerDetails(container)
    else:
        print(f"Container '{container.name}' (v{container.version}) is valid")
    return EXIT_OK


def runInit(name: str, path: Path | None, version: str, description: str, author: str) -> int:
    base = _resolveDir(path)
    if base is None:
        return EXIT_SYSTEM

    try:
        manifest = newManifest(name, parseVersion(version))
        manifest.description = description
        manifest.author = author
        containerPath = createContainerStructure(base, manifest)
    except ContainerError as err:
        print(f"Container creation failed: {err}", file=sys.stderr)
        return EXIT_INVALID

    print(f"Created container '{name}' at {containerPath}")
    return EXIT_OK


def runCheckDeps(root: Path | None, name: str | None) -> int:
    base = _resolveDir(root)
    if base is None:
        return EXIT_SYSTEM

    registry = ContainerRegistry()
    registry.discover(base)
    for failedDir, err in registry.failures.items():
        print(f"Skipped {failedDir}: {err}", file=sys.stderr)

    names = [name] if name else registry.names()
    try:
        if name:
            registry.checkCircular(name)
        else:
            registry.checkAllCircular()
        for containerName in names:
            registry.validateDependencies(containerName)
    except ContainerError as err:
        print(f"Dependency check failed: {err}", file=sys.stderr)
        return EXIT_INVALID

    print(f"Dependencies OK for {len(names)} container(s)")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = buildParser().parse_args(list(argv) if argv is not None else None)
    configureLogging(args.log_level)
    setLogContext(command=args.command)

    try:
        if args.command == "validate":
            return runValidate(args.path, args.verbose)

        if args.command == "init":
            return runInit(args.name, args.path, args.containerVersion, args.description, args.author)

        if args.command == "check-deps":
            return runCheckDeps(args.root, args.name)
    finally:
        clearLogContext()

    raise AssertionError(f"Unhandled command: {args.command}")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
