"""Cooperative cancellation signal threaded through request descriptors."""

import threading
from typing import Any, Optional

from .exceptions import RequestCancelledError


class CancellationToken:
    """
    Thread-safe cooperative cancellation signal.

    Descriptors only carry the token. Whoever performs I/O polls it and
    aborts with RequestCancelledError once it fires.

    Example:
        >>> token = CancellationToken()
        >>> token.is_cancelled
        False
        >>> token.cancel()
        >>> token.is_cancelled
        True
    """

    def __init__(self, cancellable: bool = True):
        self._event = threading.Event()
        self._cancellable = cancellable

    @classmethod
    def none(cls) -> "CancellationToken":
        """Token that can never be cancelled."""
        return cls(cancellable=False)

    @property
    def can_be_cancelled(self) -> bool:
        return self._cancellable

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation. Idempotent."""
        if not self._cancellable:
            raise ValueError("This token cannot be cancelled")
        self._event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout expires. Returns is_cancelled."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self, url: Optional[str] = None) -> None:
        if self.is_cancelled:
            raise RequestCancelledError(url)

    def __repr__(self) -> str:
        state = "cancelled" if self.is_cancelled else "active"
        return f"<CancellationToken {state}>"


def is_cancelled(signal: Any) -> bool:
    """
    Check an opaque cancellation signal.

    Accepts None (never cancelled), a CancellationToken, or anything with
    an ``is_cancelled`` attribute or an ``is_set()`` method such as
    ``threading.Event``.
    """
    if signal is None:
        return False

    flag = getattr(signal, "is_cancelled", None)
    if flag is not None:
        return bool(flag() if callable(flag) else flag)

    is_set = getattr(signal, "is_set", None)
    if callable(is_set):
        return bool(is_set())

    raise TypeError(
        f"Unsupported cancellation signal type: {type(signal).__name__}"
    )


def raise_if_cancelled(signal: Any, url: Optional[str] = None) -> None:
    """Raise RequestCancelledError if the signal has fired."""
    if is_cancelled(signal):
        raise RequestCancelledError(url)
