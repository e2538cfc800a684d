"""
Request descriptor: per-call, order-preserving record of an abstract request.

A populator creates one RequestDescriptor per logical call and feeds it
parameters in call-site order. An executor then reads it once and builds
the real HTTP request. The descriptor never escapes, validates or merges
anything; it only records.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

NameValue = Tuple[str, Optional[str]]


class BodySerializationMethod(str, Enum):
    """How the executor should encode a request body."""
    SERIALIZED = "serialized"
    URL_ENCODED = "url_encoded"


@dataclass(frozen=True)
class BodyParameterInfo:
    """
    Body of a request: serialization tag plus opaque payload.

    Attributes:
        serialization_method: Encoding strategy for the executor
        value: Payload, never inspected by the descriptor
    """
    serialization_method: BodySerializationMethod
    value: Any


class ValueKind(Enum):
    """Classification of a parameter value before stringification."""
    ABSENT = "absent"
    TEXT = "text"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def classify_value(value: Any) -> ValueKind:
    """
    Decide how a query parameter value is recorded.

    Examples:
        >>> classify_value(None)
        <ValueKind.ABSENT: 'absent'>
        >>> classify_value("abc")
        <ValueKind.TEXT: 'text'>
        >>> classify_value(["a", "b"])
        <ValueKind.SEQUENCE: 'sequence'>
        >>> classify_value(42)
        <ValueKind.SCALAR: 'scalar'>
    """
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Iterable):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def _to_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class RequestDescriptor:
    """
    Mutable description of one HTTP request, filled before execution.

    Method, path and cancellation token are fixed at construction. Query
    parameters, path parameters, the three header sources and the body
    are appended afterwards. Accessors return tuples, so readers get a
    snapshot they cannot modify.

    Example:
        >>> info = RequestDescriptor("GET", "/users/{id}")
        >>> info.add_path_parameter("id", 42)
        >>> info.add_query_parameter("tag", ["a", "b"])
        >>> info.path_params
        (('id', '42'),)
        >>> info.query_params
        (('tag', 'a'), ('tag', 'b'))

    Not thread-safe: populate from a single thread, then hand off.
    """

    def __init__(self, method: str, path: str, cancellation_token: Any = None):
        self._method = method
        self._path = path
        self._cancellation_token = cancellation_token

        self._query_params: List[NameValue] = []
        self._path_params: List[NameValue] = []
        self._class_headers: List[str] = []
        self._method_headers: List[str] = []
        self._header_params: List[NameValue] = []
        self._body_parameter_info: Optional[BodyParameterInfo] = None

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # READ-ONLY ACCESSORS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @property
    def method(self) -> str:
        return self._method

    @property
    def path(self) -> str:
        """Relative path template, possibly with {name} placeholders."""
        return self._path

    @property
    def cancellation_token(self) -> Any:
        return self._cancellation_token

    @property
    def query_params(self) -> Tuple[NameValue, ...]:
        return tuple(self._query_params)

    @property
    def path_params(self) -> Tuple[NameValue, ...]:
        return tuple(self._path_params)

    @property
    def class_headers(self) -> Tuple[str, ...]:
        """Raw headers declared on the interface."""
        return tuple(self._class_headers)

    @property
    def method_headers(self) -> Tuple[str, ...]:
        """Raw headers declared on the method."""
        return tuple(self._method_headers)

    @property
    def header_params(self) -> Tuple[NameValue, ...]:
        """Headers passed as call arguments."""
        return tuple(self._header_params)

    @property
    def body_parameter_info(self) -> Optional[BodyParameterInfo]:
        return self._body_parameter_info

    @property
    def has_body(self) -> bool:
        return self._body_parameter_info is not None

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # MUTATORS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def add_query_parameter(self, name: str, value: Any) -> None:
        """
        Add a query parameter.

        Iterables other than strings are expanded into one entry per
        element (a None element becomes an empty string), bytes included.
        Strings and other scalars produce a single entry. None is kept as
        an absent value.

        Args:
            name: Parameter name
            value: Parameter value
        """
        kind = classify_value(value)

        if kind is ValueKind.SEQUENCE:
            for item in value:
                self._query_params.append((name, "" if item is None else str(item)))
        else:
            self._query_params.append((name, _to_optional_str(value)))

    def add_path_parameter(self, name: str, value: Any) -> None:
        """
        Add a value for the {name} placeholder in the path.

        Never expanded: a list is stored as its own string form.
        """
        self._path_params.append((name, _to_optional_str(value)))

    def add_class_header(self, header: str) -> None:
        """Add a raw "Name: Value" header declared on the interface."""
        self._class_headers.append(header)

    def add_method_header(self, header: str) -> None:
        """Add a raw "Name: Value" header declared on the method."""
        self._method_headers.append(header)

    def add_header_parameter(self, name: str, value: Optional[str]) -> None:
        """Add a header passed as an argument. The value is stored as given."""
        self._header_params.append((name, value))

    def set_body_parameter_info(
        self,
        serialization_method: BodySerializationMethod,
        value: Any
    ) -> None:
        """
        Set the request body.

        Calling this again replaces the previous body.

        Args:
            serialization_method: How the executor should encode the body
            value: Body payload
        """
        if self._body_parameter_info is not None:
            logger.debug(
                "Replacing body of %s %s (was %s)",
                self._method,
                self._path,
                self._body_parameter_info.serialization_method,
            )
        self._body_parameter_info = BodyParameterInfo(serialization_method, value)

    def __repr__(self) -> str:
        return (
            f"<RequestDescriptor {self._method} {self._path!r} "
            f"query={len(self._query_params)} path={len(self._path_params)} "
            f"headers={len(self._class_headers) + len(self._method_headers) + len(self._header_params)} "
            f"body={'yes' if self.has_body else 'no'}>"
        )
