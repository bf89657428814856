# wrappy/containers/manifest.py
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator, ValidationError

from wrappy.bindings.types import BindingsConfig
from wrappy.containers.constants import DEFAULT_SCRIPT_KEY, DEFAULT_SCRIPT_PATH
from wrappy.containers.validation import validateManifest
from wrappy.core.errors import (
    ContainerIOError,
    InvalidManifestError,
    InvalidVersionError,
    MissingDefaultScriptError,
    ScriptNotFoundError,
)
from wrappy.semver.semver import Version, parseVersion

logger = logging.getLogger(__name__)

__all__ = [
    "VersionField",
    "Dependency",
    "ContainerManifest",
    "newManifest",
    "parseManifest",
    "readManifestFile",
    "loadManifestFile",
    "writeManifestFile",
]



def _coerceVersion(value: Any) -> Version:
    if isinstance(value, Version):
        return value
    if isinstance(value, str):
        return parseVersion(value)
    # Structured form: {"major": 1, "minor": 2, "patch": 3}
    if isinstance(value, Mapping) and set(value.keys()) == {"major", "minor", "patch"}:
        return Version(value["major"], value["minor"], value["patch"])
    raise InvalidVersionError(value)



VersionField = Annotated[
    Version,
    PlainValidator(_coerceVersion),
    PlainSerializer(str, return_type=str),
]



class Dependency(BaseModel):
    """
    Requirement on another container or package.

    Holds whatever the document says; name/version are only checked by
    validateManifest.
    """
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    version: str = ""
    optional: bool = False



class ContainerManifest(BaseModel):
    """Represents the `manifest.json` document of a container."""
    model_config = ConfigDict(extra="ignore")

    name: str
    version: VersionField
    description: str = ""
    author: str = ""
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: list[Dependency] = Field(default_factory=list)
    environment: dict[str, str] = Field(default_factory=dict)
    bindings: BindingsConfig = Field(default_factory=BindingsConfig)

    def defaultScript(self) -> str:
        try:
            return self.scripts[DEFAULT_SCRIPT_KEY]
        except KeyError:
            raise MissingDefaultScriptError() from None

    def getScript(self, name: str) -> str:
        try:
            return self.scripts[name]
        except KeyError:
            raise ScriptNotFoundError(self.name, name) from None

    def addScript(self, name: str, path: str) -> None:
        self.scripts[name] = path

    def addDependency(self, dependency: Dependency) -> None:
        self.dependencies.append(dependency)

    def toDocument(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)



def newManifest(name: str, version: Version | str) -> ContainerManifest:
    """Fresh manifest with the default script pointing at scripts/default.sh."""
    return ContainerManifest(
        name=name,
        version=version,
        scripts={DEFAULT_SCRIPT_KEY: DEFAULT_SCRIPT_PATH},
    )



def _describeValidationError(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(piece) for piece in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg')}")
    return "; ".join(parts)



def parseManifest(raw: Any) -> ContainerManifest:
    """
    Turns a decoded manifest document into a ContainerManifest.

    Only the shape is checked here (types, required fields, version format).
    Content rules are left to validateManifest.

    Raises:
        InvalidManifestError
    """
    if not isinstance(raw, Mapping):
        raise InvalidManifestError(f"manifest must be a JSON object, got {type(raw).__name__}")
    try:
        return ContainerManifest.model_validate(dict(raw))
    except ValidationError as err:
        raise InvalidManifestError(_describeValidationError(err)) from err



def _rejectConstant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")



def readManifestFile(path: Path | str) -> ContainerManifest:
    """
    Reads and parses a manifest file without content validation.

    The document must be strict JSON (no comments, trailing commas or
    NaN/Infinity) encoded as UTF-8.

    Raises:
        ContainerIOError        file cannot be read
        InvalidManifestError    not UTF-8, not JSON, or wrong shape
    """
    manifestPath = Path(path)
    try:
        text = manifestPath.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        raise InvalidManifestError(str(err)) from err
    except OSError as err:
        raise ContainerIOError(manifestPath, err) from err

    try:
        raw = json.loads(text, parse_constant=_rejectConstant)
    except ValueError as err:
        raise InvalidManifestError(str(err)) from err

    return parseManifest(raw)



def loadManifestFile(path: Path | str) -> ContainerManifest:
    """readManifestFile() followed by validateManifest()."""
    manifestPath = Path(path)
    manifest = readManifestFile(manifestPath)
    validateManifest(manifest)
    logger.debug("Loaded manifest '%s' v%s from '%s'", manifest.name, manifest.version, manifestPath)
    return manifest



def writeManifestFile(manifest: ContainerManifest, path: Path | str) -> Path:
    """Validates `manifest` and writes it as pretty-printed JSON."""
    validateManifest(manifest)
    manifestPath = Path(path)
    content = json.dumps(manifest.toDocument(), ensure_ascii=False, indent=2)
    try:
        manifestPath.write_text(content + "\n", encoding="utf-8")
    except OSError as err:
        raise ContainerIOError(manifestPath, err) from err
    return manifestPath
