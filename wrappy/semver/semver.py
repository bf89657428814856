# wrappy/semver/semver.py
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from wrappy.core.errors import InvalidVersionError

__all__ = [
    "VERSION_PATTERN_RE",
    "MAX_COMPONENT",
    "Version",
    "parseVersion",
    "compareVersions",
]



VERSION_PATTERN_RE = re.compile(
    r"^(?P<major>0|[1-9][0-9]*)"
    r"\.(?P<minor>0|[1-9][0-9]*)"
    r"\.(?P<patch>0|[1-9][0-9]*)$"
)

# Each component must fit an unsigned 32-bit integer
MAX_COMPONENT = 2**32 - 1



@total_ordering
@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def fromParts(cls, major: int, minor: int, patch: int) -> Version:
        return cls(major, minor, patch)

    def validate(self) -> None:
        """Raises InvalidVersionError unless every component is an in-range int."""
        for part in (self.major, self.minor, self.patch):
            # bool is an int subclass, but True.False.0 is not a version
            if isinstance(part, bool) or not isinstance(part, int):
                raise InvalidVersionError(self._rawText())
            if part < 0 or part > MAX_COMPONENT:
                raise InvalidVersionError(self._rawText())

    def _rawText(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def _cmpKey(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def isCompatibleWith(self, required: Version) -> bool:
        """
        True when this version satisfies `required`: same major line and not older.

        The check is directed. 1.2.4 satisfies 1.2.3, but 1.2.3 does not
        satisfy 1.2.4, and 2.0.0 never satisfies any 1.x requirement.
        """
        return self.major == required.major and self >= required

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmpKey() < other._cmpKey()



def parseVersion(raw: str) -> Version:
    """
    Parse a strict "major.minor.patch" string into a Version.

    Accepted:
        "0.0.0", "1.2.3", "10.20.30"

    Rejected (InvalidVersionError):
        "", "1", "1.2", "1.2.3.4", "v1.2.3", "+1.2.3", "01.2.3",
        "1.2.3-alpha", "1.2.3+build", " 1.2.3", "4294967296.0.0"
    """
    if not isinstance(raw, str):
        raise InvalidVersionError(raw)

    mtch = VERSION_PATTERN_RE.match(raw)
    # `$` also matches before a trailing newline
    if not mtch or raw.endswith("\n"):
        raise InvalidVersionError(raw)

    major = int(mtch.group("major"))
    minor = int(mtch.group("minor"))
    patch = int(mtch.group("patch"))
    if max(major, minor, patch) > MAX_COMPONENT:
        raise InvalidVersionError(raw)

    return Version(major, minor, patch)



def compareVersions(a: Version, b: Version) -> int:
    """Returns -1, 0 or 1 the way classic cmp() does."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0
