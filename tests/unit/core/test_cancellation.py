"""
Tests for cancellation signals.
"""

import threading

import pytest

from request_descriptor.core.cancellation import (
    CancellationToken,
    is_cancelled,
    raise_if_cancelled,
)
from request_descriptor.core.exceptions import RequestCancelledError


class TestCancellationToken:
    """Test CancellationToken."""

    def test_initial_state(self):
        token = CancellationToken()
        assert token.is_cancelled is False
        assert token.can_be_cancelled is True

    def test_cancel(self):
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.is_cancelled is True

    def test_none_token_cannot_be_cancelled(self):
        token = CancellationToken.none()
        assert token.can_be_cancelled is False
        with pytest.raises(ValueError):
            token.cancel()
        assert token.is_cancelled is False

    def test_raise_if_cancelled(self):
        token = CancellationToken()
        token.raise_if_cancelled()

        token.cancel()
        with pytest.raises(RequestCancelledError) as exc_info:
            token.raise_if_cancelled("https://api.example.com/x")
        assert "https://api.example.com/x" in str(exc_info.value)

    def test_wait_returns_when_cancelled_from_other_thread(self):
        token = CancellationToken()
        timer = threading.Timer(0.01, token.cancel)
        timer.start()

        assert token.wait(timeout=5) is True
        timer.join()

    def test_wait_times_out(self):
        assert CancellationToken().wait(timeout=0.01) is False

    def test_repr(self):
        token = CancellationToken()
        assert "active" in repr(token)
        token.cancel()
        assert "cancelled" in repr(token)


class TestIsCancelled:
    """Test opaque signal inspection."""

    def test_none_is_never_cancelled(self):
        assert is_cancelled(None) is False

    def test_threading_event(self):
        event = threading.Event()
        assert is_cancelled(event) is False
        event.set()
        assert is_cancelled(event) is True

    def test_object_with_attribute(self):
        class Flag:
            is_cancelled = True

        assert is_cancelled(Flag()) is True

    def test_unsupported_signal(self):
        with pytest.raises(TypeError):
            is_cancelled(object())

    def test_raise_if_cancelled_function(self):
        raise_if_cancelled(None)
        token = CancellationToken()
        token.cancel()
        with pytest.raises(RequestCancelledError):
            raise_if_cancelled(token)
