"""
Helpers for logging realized requests without leaking credentials.

Includes:
- URL sanitization (query parameter masking)
- Header sanitization
"""

from typing import Mapping, Optional, Set
from urllib.parse import unquote_plus, urlsplit, urlunsplit


# Query parameter names whose values never reach the logs
DEFAULT_SENSITIVE_PARAMS = {
    'api_key',
    'apikey',
    'api-key',
    'token',
    'access_token',
    'refresh_token',
    'key',
    'secret',
    'password',
    'passwd',
    'client_secret',
    'private_key',
    'session_id',
    'signature',
    'sig',
}

DEFAULT_SENSITIVE_HEADERS = {
    'authorization',
    'proxy-authorization',
    'api-key',
    'x-api-key',
    'x-auth-token',
    'cookie',
    'set-cookie',
    'x-csrf-token',
}


def sanitize_url(
    url: Optional[str],
    extra_params: Optional[Set[str]] = None,
    mask: str = 'REDACTED'
) -> Optional[str]:
    """
    Mask sensitive query parameter values in a URL.

    Only sensitive values are replaced. Every other segment, including
    bare names without "=", is kept byte for byte, so the logged URL
    reflects the query exactly as it was built.

    Args:
        url: URL to sanitize
        extra_params: Additional parameter names to mask (case-insensitive)
        mask: Replacement for masked values

    Returns:
        URL with sensitive values masked

    Examples:
        >>> sanitize_url('https://api.example.com/data?tag=a&token=abc&tag=b')
        'https://api.example.com/data?tag=a&token=REDACTED&tag=b'
        >>> sanitize_url('https://api.example.com/data?flag&token=abc')
        'https://api.example.com/data?flag&token=REDACTED'
    """
    if not url:
        return url

    sensitive = DEFAULT_SENSITIVE_PARAMS | (
        {p.lower() for p in extra_params} if extra_params else set()
    )

    try:
        parts = urlsplit(url)
    except ValueError:
        return '<unparseable URL>'

    if not parts.query:
        return url

    segments = []
    for segment in parts.query.split('&'):
        name, sep, _ = segment.partition('=')
        if sep and unquote_plus(name).lower() in sensitive:
            segment = f"{name}={mask}"
        segments.append(segment)

    query = '&'.join(segments)
    return urlunsplit(parts._replace(query=query))


def sanitize_headers(
    headers: Optional[Mapping[str, str]],
    mask: str = 'REDACTED'
) -> Optional[dict]:
    """
    Mask sensitive header values.

    Examples:
        >>> sanitize_headers({'Authorization': 'Bearer token123', 'Accept': 'text/plain'})
        {'Authorization': 'REDACTED', 'Accept': 'text/plain'}
    """
    if headers is None:
        return None

    return {
        key: mask if key.lower() in DEFAULT_SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
