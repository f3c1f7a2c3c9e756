from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def rfc3339_now() -> str:
    """Current UTC time as RFC3339 with second precision, e.g. 2024-01-01T00:00:00Z."""
    return utcnow().replace(microsecond=0).isoformat().replace("+00:00", "Z")
