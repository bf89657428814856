# wrappy/core/logging/context.py
from __future__ import annotations

import contextvars
from collections.abc import Mapping

# Fields attached to every record emitted while a command runs
_fields: contextvars.ContextVar[Mapping[str, object] | None] = contextvars.ContextVar(
    "wrappy.logctx", default=None
)


def setLogContext(**fields: object) -> None:
    """Adds `fields` to the log context; None values are ignored."""
    merged = {**(_fields.get() or {}), **{k: v for k, v in fields.items() if v is not None}}
    _fields.set(merged)


def clearLogContext() -> None:
    _fields.set(None)


def getLogContext() -> dict[str, object] | None:
    current = _fields.get()
    return dict(current) if current is not None else None
