"""Display-name identity of API callers."""

from typing import Optional

from fastapi import Header

ANONYMOUS = "anonymous"


def get_identity(x_display_name: Optional[str] = Header(None)) -> str:
    """FastAPI dependency resolving the caller's display name.

    The name only namespaces saved history; it is not verified.
    """
    name = (x_display_name or "").strip()
    return name or ANONYMOUS
