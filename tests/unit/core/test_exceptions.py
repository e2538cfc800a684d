"""
Tests for custom exceptions.
"""

import pytest

from request_descriptor.core.descriptor import BodySerializationMethod
from request_descriptor.core.exceptions import (
    BodySerializationError,
    ConnectionError,
    HTTPError,
    MalformedHeaderError,
    NotFoundError,
    RequestCancelledError,
    RequestConstructionError,
    RequestDescriptorException,
    ServerError,
    TimeoutError,
    TransportError,
    UnresolvedPlaceholderError,
)


class TestRequestDescriptorException:
    """Test base exception."""

    def test_exception_message(self):
        exc = RequestDescriptorException("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"

    def test_exception_inheritance(self):
        assert isinstance(RequestDescriptorException("Test"), Exception)

    def test_rejects_unknown_keywords(self):
        with pytest.raises(TypeError):
            RequestDescriptorException("Test", extra=1)


class TestConstructionErrors:
    """Test request construction errors."""

    def test_unresolved_placeholder(self):
        exc = UnresolvedPlaceholderError("id", "/users/{id}")
        assert exc.placeholder == "id"
        assert exc.path == "/users/{id}"
        assert "{id}" in str(exc)
        assert isinstance(exc, RequestConstructionError)

    def test_malformed_header(self):
        exc = MalformedHeaderError(": x")
        assert exc.header == ": x"
        assert isinstance(exc, RequestConstructionError)

    def test_malformed_header_reason_only(self):
        """Test a header rejected by the HTTP library without a raw token."""
        exc = MalformedHeaderError(None, "bad value")
        assert exc.header is None
        assert exc.reason == "bad value"
        assert "bad value" in str(exc)

    def test_body_serialization(self):
        exc = BodySerializationError(BodySerializationMethod.URL_ENCODED, "bad")
        assert exc.serialization_method is BodySerializationMethod.URL_ENCODED
        assert "bad" in str(exc)

    def test_construction_errors_are_fatal(self):
        assert UnresolvedPlaceholderError("id", "/x").fatal is True
        assert UnresolvedPlaceholderError("id", "/x").retryable is False

    def test_not_transport_errors(self):
        assert not isinstance(MalformedHeaderError("x"), TransportError)


class TestRequestCancelledError:
    """Test cancellation error."""

    def test_without_url(self):
        assert str(RequestCancelledError()) == "Request cancelled"

    def test_with_url(self):
        assert "https://example.com" in str(RequestCancelledError("https://example.com"))

    def test_distinct_from_other_categories(self):
        exc = RequestCancelledError()
        assert not isinstance(exc, (TransportError, RequestConstructionError, HTTPError))


class TestTransportErrors:
    """Test transport errors."""

    def test_connection_error_with_url(self):
        exc = ConnectionError("Connection failed", "https://example.com")
        assert "Connection failed" in str(exc)
        assert "https://example.com" in str(exc)
        assert exc.retryable is True

    def test_timeout_error(self):
        exc = TimeoutError("Timeout", "https://example.com", 30)
        assert "30" in str(exc)
        assert exc.timeout == 30
        assert isinstance(exc, TransportError)


class TestHTTPErrors:
    """Test status errors."""

    def test_http_error(self):
        exc = HTTPError(418, "https://example.com", "teapot")
        assert exc.status_code == 418
        assert str(exc) == "HTTP 418 error for https://example.com: teapot"
        assert exc.fatal is True

    def test_not_found(self):
        exc = NotFoundError("https://example.com")
        assert exc.status_code == 404
        assert isinstance(exc, HTTPError)

    def test_server_error_retryable(self):
        exc = ServerError(503, "https://example.com")
        assert exc.retryable is True
        assert exc.fatal is False
