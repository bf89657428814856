# wrappy/core/dictpath.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["splitPath", "getByPath", "hasPath"]



def splitPath(path: str) -> list[str]:
    r"""
    Splits a dotted settings path into its keys.

    A backslash takes the next character literally, so "a\.b.c" addresses
    key "c" under the key "a.b". Raises ValueError on an empty path, an empty
    key or a trailing backslash.
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")

    keys: list[str] = []
    buffer = ""
    chars = iter(path)
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                raise ValueError(f"Path '{path}' ends with a dangling escape")
            buffer += escaped
        elif ch == ".":
            keys.append(buffer)
            buffer = ""
        else:
            buffer += ch
    keys.append(buffer)

    if "" in keys:
        raise ValueError(f"Path '{path}' contains an empty key")
    return keys



_NOT_FOUND = object()



def _lookup(obj: Any, path: str) -> Any:
    try:
        keys = splitPath(path)
    except ValueError:
        return _NOT_FOUND
    node = obj
    for key in keys:
        if not isinstance(node, Mapping) or key not in node:
            return _NOT_FOUND
        node = node[key]
    return node



def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """Value at `path` in nested mappings; `default` when missing or the path is malformed."""
    value = _lookup(obj, path)
    return default if value is _NOT_FOUND else value



def hasPath(obj: Any, path: str) -> bool:
    return _lookup(obj, path) is not _NOT_FOUND
