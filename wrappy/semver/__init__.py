from .semver import VERSION_PATTERN_RE, MAX_COMPONENT, Version, parseVersion, compareVersions

__all__ = [
    "VERSION_PATTERN_RE",
    "MAX_COMPONENT",
    "Version",
    "parseVersion",
    "compareVersions",
]
