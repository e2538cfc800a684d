"""Request descriptor model - per-call request recording and execution."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.descriptor import (
    RequestDescriptor,
    BodyParameterInfo,
    BodySerializationMethod,
)
from .core.cancellation import CancellationToken
from .core.config import ExecutorConfig, TimeoutConfig
from .core.executor import RequestExecutor
from .core.exceptions import (
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
    NotFoundError,
    ServerError,
)

# Library logging: silent unless the application configures 'request_descriptor'
logging.getLogger('request_descriptor').addHandler(logging.NullHandler())

try:
    __version__ = version("request-descriptor")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Descriptor
    "RequestDescriptor",
    "BodyParameterInfo",
    "BodySerializationMethod",
    "CancellationToken",

    # Executor
    "RequestExecutor",
    "ExecutorConfig",
    "TimeoutConfig",

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
    "NotFoundError",
    "ServerError",

    # Version
    "__version__",
]
