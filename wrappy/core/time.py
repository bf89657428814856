# wrappy/core/time.py
from __future__ import annotations

from datetime import datetime, timezone

__all__ = ["utcNow"]



def utcNow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)
