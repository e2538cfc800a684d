# src/request_descriptor/core/error_handler.py

"""Translate requests failures into the package exception hierarchy."""

from typing import NoReturn, Optional

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import RequestException, Timeout

from .exceptions import (
    BadRequestError,
    ConnectionError,
    ForbiddenError,
    HTTPError,
    NotFoundError,
    ServerError,
    TimeoutError,
    TransportError,
    UnauthorizedError,
)

_STATUS_ERRORS = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


class ErrorHandler:
    """Класс для обработки ошибок HTTP запросов"""

    @staticmethod
    def handle_request_exception(
        error: Exception,
        url: str,
        timeout: Optional[float] = None
    ) -> NoReturn:
        """
        Re-raise a requests exception as a TransportError subclass,
        or as an HTTPError subclass when it carries an error response.

        Anything that is not a RequestException propagates unchanged.
        """
        if isinstance(error, Timeout):
            raise TimeoutError(str(error), url, timeout) from error

        if isinstance(error, RequestsConnectionError):
            raise ConnectionError(str(error), url) from error

        if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
            ErrorHandler.handle_http_error(error.response)

        if isinstance(error, RequestException):
            raise TransportError(f"Request failed: {error}", url) from error

        raise error

    @staticmethod
    def handle_http_error(response: requests.Response) -> None:
        """Raise the HTTPError subclass matching an error status code."""
        status_code = response.status_code
        if status_code < 400:
            return

        url = str(response.url)
        message = response.text[:200] if response.text else ""

        error_class = _STATUS_ERRORS.get(status_code)
        if error_class is not None:
            raise error_class(url, message)

        if 500 <= status_code < 600:
            raise ServerError(status_code, url, message)

        raise HTTPError(status_code, url, message)

    @staticmethod
    def is_retryable_error(error: Exception) -> bool:
        """Transport failures and 5xx responses may be retried."""
        return getattr(error, "retryable", False) is True
