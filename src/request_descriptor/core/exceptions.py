"""
Exception hierarchy for request descriptors and the executor.

Classification:
- RequestConstructionError - the descriptor cannot be turned into a request
- RequestCancelledError - the cancellation token fired
- TransportError (retryable=True) - network failure while sending
- HTTPError (fatal=True) - the server answered with an error status
"""

from typing import Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestDescriptorException(Exception):
    """Base exception of the package."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REQUEST CONSTRUCTION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestConstructionError(RequestDescriptorException):
    """
    A finalized descriptor could not be realized into a request.

    Raised before anything is sent, so it never hides a transport problem.
    """
    fatal = True

class UnresolvedPlaceholderError(RequestConstructionError):
    """
    Path template placeholder without a matching path parameter.

    Args:
        placeholder: Placeholder name
        path: Path template
    """

    def __init__(self, placeholder: str, path: str):
        self.placeholder = placeholder
        self.path = path
        super().__init__(
            f"No path parameter for placeholder '{{{placeholder}}}' in path '{path}'"
        )

class MalformedHeaderError(RequestConstructionError):
    """
    Header that cannot be put on the wire.

    Args:
        header: Offending raw header token, if known
        reason: Details, e.g. the HTTP library's complaint about CR/LF
    """

    def __init__(self, header: Optional[str], reason: str = ""):
        self.header = header
        self.reason = reason

        msg = "Malformed header"
        if header is not None:
            msg += f": {header!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class BodySerializationError(RequestConstructionError):
    """
    Body cannot be encoded with the requested serialization method.

    Args:
        serialization_method: Tag the body was registered with
        message: Details
    """

    def __init__(self, serialization_method, message: str):
        self.serialization_method = serialization_method
        super().__init__(f"Cannot serialize body as {serialization_method}: {message}")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CANCELLATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestCancelledError(RequestDescriptorException):
    """The request was cancelled through its cancellation token."""

    def __init__(self, url: Optional[str] = None):
        self.url = url
        msg = "Request cancelled"
        if url:
            msg += f" (url: {url})"
        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(RequestDescriptorException):
    """
    Network failure while sending a request.

    Examples: connection refused, DNS failure, timeouts.
    """
    retryable = True

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = f"{message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class TimeoutError(TransportError):
    """
    Request timed out.

    Args:
        message: Error message
        url: Request URL
        timeout: Timeout value in seconds
    """

    def __init__(self, message: str, url: str, timeout: Optional[float] = None):
        self.timeout = timeout
        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"
        super().__init__(msg, url)

class ConnectionError(TransportError):
    """Connection could not be established or was dropped."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP STATUS (fatal=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPError(RequestDescriptorException):
    """
    Error status returned by the server.

    Args:
        status_code: HTTP status
        url: URL
        message: Response excerpt
    """
    fatal = True

    def __init__(self, status_code: int, url: str, message: str = ""):
        self.status_code = status_code
        self.url = url

        msg = f"HTTP {status_code} error for {url}"
        if message:
            msg += f": {message}"

        super().__init__(msg)

class BadRequestError(HTTPError):
    """400 Bad Request."""

    def __init__(self, url: str, message: str = ""):
        super().__init__(400, url, message)

class UnauthorizedError(HTTPError):
    """401 Unauthorized."""

    def __init__(self, url: str, message: str = ""):
        super().__init__(401, url, message)

class ForbiddenError(HTTPError):
    """403 Forbidden."""

    def __init__(self, url: str, message: str = ""):
        super().__init__(403, url, message)

class NotFoundError(HTTPError):
    """404 Not Found."""

    def __init__(self, url: str, message: str = ""):
        super().__init__(404, url, message)

class ServerError(HTTPError):
    """5xx server error. Retryable, unlike other status errors."""
    retryable = True
    fatal = False
