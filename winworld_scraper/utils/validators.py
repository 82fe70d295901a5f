"""
URL Validation Utilities

Validation and normalization of the archive site's base URL.
"""

import re
from typing import Tuple
from urllib.parse import urlparse, urlunparse


_DOMAIN_PATTERN = re.compile(
    r'^[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*$'
)


def validate_base_url(url: str) -> Tuple[bool, str, str]:
    """
    Validate and normalize a site base URL.

    A missing scheme defaults to https. The result is the site origin:
    scheme and host lowercased, any path, query and fragment dropped, so
    site paths can be appended to it directly.

    Returns:
        Tuple of (is_valid, normalized_url, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "", "URL cannot be empty"

    url = url.strip()
    parsed = urlparse(url)

    if parsed.scheme:
        if parsed.scheme not in ['http', 'https']:
            return False, "", "URL must use HTTP or HTTPS protocol"
    else:
        parsed = urlparse('https://' + url)

    if not parsed.netloc:
        return False, "", "URL must have a valid domain"

    try:
        host = parsed.hostname or ""
        port = parsed.port
    except ValueError as e:
        return False, "", f"URL validation error: {e}"

    if not _DOMAIN_PATTERN.match(host):
        return False, "", "Invalid domain format"

    netloc = host if port is None else f"{host}:{port}"
    normalized = urlunparse((parsed.scheme.lower(), netloc, '', '', '', ''))

    return True, normalized, ""


def site_origin(url: str) -> str:
    """Reduce a URL to scheme://host[:port]; links and site paths resolve against it."""
    parsed = urlparse(url)
    return urlunparse((parsed.scheme, parsed.netloc, '', '', '', ''))
