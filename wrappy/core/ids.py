# wrappy/core/ids.py
from __future__ import annotations

import uuid6

__all__ = ["uuidv7"]



def uuidv7(*, prefix: str = "") -> str:
    """Returns a UUIDv7 string (time-ordered), optionally prefixed."""
    return prefix + str(uuid6.uuid7())
