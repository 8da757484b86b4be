"""URL utilities for Auth0 API operations."""

import re
from urllib.parse import quote

_PROTOCOL_RE = re.compile(r"^https?://", re.IGNORECASE)


def strip_protocol(domain: str | None) -> str:
    """Reduce a configured Auth0 domain to a bare host name.

    Example:
        >>> strip_protocol("https://tenant.eu.auth0.com/")
        'tenant.eu.auth0.com'
    """
    return _PROTOCOL_RE.sub("", str(domain or "")).rstrip("/")


def get_base_url(domain: str) -> str:
    """Return the ``https://`` base URL of an Auth0 tenant."""
    return f"https://{strip_protocol(domain)}"


def get_default_audience(domain: str) -> str:
    """Return the Management API audience for a tenant."""
    return f"{get_base_url(domain)}/api/v2/"


def encode_user_id(user_id: str) -> str:
    """URL encode an Auth0 user ID for use as a path segment.

    Raises:
        ValueError: If user_id is empty
    """
    if not user_id:
        raise ValueError("user ID cannot be empty")
    return quote(user_id, safe="")
