"""Identifier and timestamp helpers shared by every entity family."""

import uuid
from datetime import datetime, timezone
from typing import Optional


def generate_id(prefix: str = "") -> str:
    """Return a new identifier.

    The body is a UUID4 in hex form, so it is always 32 characters, safe to
    pass in URLs and navigation params, and needs no network. Two calls in
    one process are not expected to collide; nothing checks that they don't.

    Args:
        prefix: Optional readable tag, joined with an underscore (e.g. "demo")

    Returns:
        str: The identifier
    """
    body = uuid.uuid4().hex
    return f"{prefix}_{body}" if prefix else body


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC string with millisecond precision (now unless a moment is given)."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
