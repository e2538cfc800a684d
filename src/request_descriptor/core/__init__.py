"""Core modules: descriptor model, executor, config and errors."""

from .cancellation import CancellationToken, is_cancelled, raise_if_cancelled
from .config import ExecutorConfig, TimeoutConfig
from .descriptor import (
    BodyParameterInfo,
    BodySerializationMethod,
    RequestDescriptor,
    ValueKind,
    classify_value,
)
from .error_handler import ErrorHandler
from .exceptions import (
    RequestDescriptorException,
    RequestConstructionError,
    UnresolvedPlaceholderError,
    MalformedHeaderError,
    BodySerializationError,
    RequestCancelledError,
    TransportError,
    TimeoutError,
    ConnectionError,
    HTTPError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ServerError,
)
from .executor import RequestExecutor, encode_query, parse_raw_header
from .utils import sanitize_headers, sanitize_url

__all__ = [
    # Descriptor
    "RequestDescriptor",
    "BodyParameterInfo",
    "BodySerializationMethod",
    "ValueKind",
    "classify_value",
    # Cancellation
    "CancellationToken",
    "is_cancelled",
    "raise_if_cancelled",
    # Config
    "ExecutorConfig",
    "TimeoutConfig",
    # Executor
    "RequestExecutor",
    "ErrorHandler",
    "encode_query",
    "parse_raw_header",
    "sanitize_url",
    "sanitize_headers",
    # Exceptions
    "RequestDescriptorException",
    "RequestConstructionError",
    "UnresolvedPlaceholderError",
    "MalformedHeaderError",
    "BodySerializationError",
    "RequestCancelledError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "HTTPError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ServerError",
]
