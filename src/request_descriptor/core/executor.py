# src/request_descriptor/core/executor.py

"""
Reference executor: realizes a finalized RequestDescriptor with requests.

Responsibilities the descriptor deliberately leaves out live here:
placeholder substitution, URL encoding, header precedence, body
serialization and honoring the cancellation token.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote, quote_plus, urlencode

import requests
from requests.exceptions import (
    InvalidHeader,
    InvalidSchema,
    InvalidURL,
    MissingSchema,
    RequestException,
)
from requests.structures import CaseInsensitiveDict

from .cancellation import is_cancelled, raise_if_cancelled
from .config import ExecutorConfig
from .descriptor import (
    BodyParameterInfo,
    BodySerializationMethod,
    NameValue,
    RequestDescriptor,
    ValueKind,
    classify_value,
)
from .error_handler import ErrorHandler
from .exceptions import (
    BodySerializationError,
    MalformedHeaderError,
    RequestCancelledError,
    RequestConstructionError,
    UnresolvedPlaceholderError,
)
from .utils import sanitize_headers, sanitize_url

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def parse_raw_header(header: str) -> Tuple[str, Optional[str]]:
    """
    Split a raw "Name: Value" token.

    A token without a colon yields (name, None), which removes that header.

    Examples:
        >>> parse_raw_header("Accept: application/json")
        ('Accept', 'application/json')
        >>> parse_raw_header("X-Trace")
        ('X-Trace', None)
    """
    name, sep, value = header.partition(":")
    name = name.strip()
    if not name:
        raise MalformedHeaderError(header)
    if not sep:
        return name, None
    return name, value.strip()


def _merge_layer(pairs: Iterable[NameValue]) -> CaseInsensitiveDict:
    """Collapse one header source; repeated names are comma-joined."""
    layer = CaseInsensitiveDict()
    for name, value in pairs:
        previous = layer.get(name)
        if value is not None and previous is not None:
            layer[name] = f"{previous}, {value}"
        else:
            layer[name] = value
    return layer


def encode_query(params: Iterable[NameValue]) -> str:
    """
    Encode query pairs in order. A None value emits the bare name.

    Examples:
        >>> encode_query([("tag", "a b"), ("tag", "c"), ("flag", None)])
        'tag=a+b&tag=c&flag'
    """
    parts = []
    for name, value in params:
        if value is None:
            parts.append(quote_plus(name))
        else:
            parts.append(f"{quote_plus(name)}={quote_plus(value)}")
    return "&".join(parts)


class RequestExecutor:
    """
    Turns RequestDescriptor objects into requests and sends them.

    Header precedence, lowest to highest: config headers, class headers,
    method headers, header parameters.

    Example:
        >>> with RequestExecutor(ExecutorConfig(base_url="https://api.example.com")) as executor:
        ...     info = RequestDescriptor("GET", "/users/{id}")
        ...     info.add_path_parameter("id", 42)
        ...     response = executor.send(info)
    """

    def __init__(
        self,
        config: Optional[ExecutorConfig] = None,
        session: Optional[requests.Session] = None
    ):
        self._config = config or ExecutorConfig()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    @property
    def session(self) -> requests.Session:
        return self._session

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the session if this executor created it."""
        if self._owns_session:
            self._session.close()

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # URL
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def build_url(self, descriptor: RequestDescriptor) -> str:
        """
        Substitute path parameters, join with base_url and append the query.

        Raises:
            UnresolvedPlaceholderError: placeholder without a path parameter
        """
        path = self._substitute_path_params(descriptor.path, descriptor.path_params)
        url = self._join_base_url(path)

        query = encode_query(descriptor.query_params)
        if query:
            if "?" not in url:
                url += "?"
            elif not url.endswith(("?", "&")):
                url += "&"
            url += query

        return url

    @staticmethod
    def _substitute_path_params(path: str, path_params: Iterable[NameValue]) -> str:
        values: Dict[str, str] = {}
        for name, value in path_params:
            # last value wins
            values[name] = "" if value is None else value

        used = set()

        def replace(match: "re.Match") -> str:
            name = match.group(1)
            if name not in values:
                raise UnresolvedPlaceholderError(name, path)
            used.add(name)
            return quote(values[name], safe="")

        result = _PLACEHOLDER_RE.sub(replace, path)

        unused = [name for name in values if name not in used]
        if unused:
            logger.debug("Path parameters without placeholder in %r: %s", path, unused)

        return result

    def _join_base_url(self, path: str) -> str:
        # absolute paths ignore base_url
        if path.startswith(("http://", "https://")):
            return path

        base = self._config.base_url
        if base:
            return f"{base.rstrip('/')}/{path.lstrip('/')}"
        return path

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # HEADERS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def build_headers(self, descriptor: RequestDescriptor) -> CaseInsensitiveDict:
        """
        Merge config headers and the three descriptor header sources.

        Raises:
            MalformedHeaderError: raw header token with an empty name
        """
        headers, _ = self._merge_headers(descriptor)
        return headers

    def _merge_headers(self, descriptor: RequestDescriptor) -> Tuple[CaseInsensitiveDict, set]:
        """Return merged headers and the lowercased names removed on the way."""
        headers = CaseInsensitiveDict(self._config.headers)
        removed = set()

        layers = (
            _merge_layer(parse_raw_header(h) for h in descriptor.class_headers),
            _merge_layer(parse_raw_header(h) for h in descriptor.method_headers),
            _merge_layer(
                (name, value if value is None or isinstance(value, (str, bytes)) else str(value))
                for name, value in descriptor.header_params
            ),
        )

        for layer in layers:
            for name, value in layer.items():
                if value is None:
                    headers.pop(name, None)
                    removed.add(name.lower())
                else:
                    headers[name] = value
                    removed.discard(name.lower())

        return headers, removed

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # BODY
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @staticmethod
    def encode_body(
        body: Optional[BodyParameterInfo],
        headers: CaseInsensitiveDict,
        removed: Iterable[str] = ()
    ) -> Optional[bytes]:
        """
        Serialize the body and set Content-Type when no header chose one.

        A Content-Type listed in ``removed`` (lowercased names) stays absent.

        str and bytes payloads are sent as they are, whatever the tag.

        Raises:
            BodySerializationError: payload does not fit its serialization method
        """
        if body is None:
            return None

        value = body.value
        method = body.serialization_method
        add_content_type = "content-type" not in removed

        if isinstance(value, str):
            return value.encode("utf-8")
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)

        if method == BodySerializationMethod.SERIALIZED:
            try:
                payload = json.dumps(value, allow_nan=False)
            except (TypeError, ValueError) as e:
                raise BodySerializationError(method, str(e)) from e
            if add_content_type:
                headers.setdefault("Content-Type", JSON_CONTENT_TYPE)
            return payload.encode("utf-8")

        if method == BodySerializationMethod.URL_ENCODED:
            payload = urlencode(_form_pairs(method, value))
            if add_content_type:
                headers.setdefault("Content-Type", FORM_CONTENT_TYPE)
            return payload.encode("ascii")

        raise BodySerializationError(method, "unknown serialization method")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # PREPARE / SEND
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def prepare(self, descriptor: RequestDescriptor) -> requests.PreparedRequest:
        """
        Build the wire-level request without sending it.

        Raises:
            RequestCancelledError: token already cancelled
            RequestConstructionError: descriptor cannot form a valid request
        """
        raise_if_cancelled(descriptor.cancellation_token)

        url = self.build_url(descriptor)
        headers, removed = self._merge_headers(descriptor)
        data = self.encode_body(descriptor.body_parameter_info, headers, removed)

        request_headers: Dict[str, Optional[str]] = dict(headers)
        # None drops the session default of the same name
        for name in removed:
            if name not in headers:
                request_headers[name] = None

        request = requests.Request(
            method=descriptor.method,
            url=url,
            headers=request_headers,
            data=data,
        )

        try:
            prepared = self._session.prepare_request(request)
        except (MissingSchema, InvalidSchema, InvalidURL) as e:
            raise RequestConstructionError(
                f"Invalid request URL {sanitize_url(url)}: {e}"
            ) from e
        except InvalidHeader as e:
            raise MalformedHeaderError(None, str(e)) from e

        logger.debug(
            "Prepared %s %s headers=%s body_bytes=%d",
            prepared.method,
            sanitize_url(prepared.url),
            sanitize_headers(prepared.headers),
            len(data) if data else 0,
        )
        return prepared

    def send(self, descriptor: RequestDescriptor) -> requests.Response:
        """
        Prepare and send a descriptor.

        The cancellation token is checked before sending and again once the
        response arrives; a late cancellation discards the response.

        Raises:
            RequestCancelledError: token cancelled
            RequestConstructionError: descriptor cannot form a valid request
            TransportError: network failure
            HTTPError: error status and config.raise_for_status is set
        """
        token = descriptor.cancellation_token
        prepared = self.prepare(descriptor)
        safe_url = sanitize_url(prepared.url)

        raise_if_cancelled(token, safe_url)

        logger.info("Sending %s %s", prepared.method, safe_url)

        try:
            response = self._session.send(
                prepared,
                timeout=self._config.timeout.as_tuple(),
                verify=self._config.verify_ssl,
            )
        except RequestException as e:
            logger.warning("Request %s %s failed: %s", prepared.method, safe_url, e)
            ErrorHandler.handle_request_exception(e, safe_url, self._config.timeout.read)

        if is_cancelled(token):
            response.close()
            logger.info("Discarding response of cancelled %s %s", prepared.method, safe_url)
            raise RequestCancelledError(safe_url)

        logger.info(
            "Received %s for %s %s",
            response.status_code,
            prepared.method,
            safe_url,
        )

        if self._config.raise_for_status:
            ErrorHandler.handle_http_error(response)

        return response


def _form_pairs(method: BodySerializationMethod, value: Any) -> List[Tuple[str, str]]:
    """Flatten a mapping (or iterable of pairs) for form encoding."""
    if isinstance(value, Mapping):
        items = value.items()
    elif classify_value(value) is ValueKind.SEQUENCE:
        items = value
    else:
        raise BodySerializationError(
            method, f"expected a mapping or pairs, got {type(value).__name__}"
        )

    pairs = []
    for item in items:
        if classify_value(item) is not ValueKind.SEQUENCE:
            raise BodySerializationError(method, f"not a key/value pair: {item!r}")
        try:
            key, item_value = item
        except ValueError as e:
            raise BodySerializationError(method, f"not a key/value pair: {item!r}") from e

        kind = classify_value(item_value)
        if kind is ValueKind.ABSENT:
            continue
        if kind is ValueKind.SEQUENCE:
            pairs.extend((str(key), "" if v is None else str(v)) for v in item_value)
        else:
            pairs.append((str(key), str(item_value)))

    return pairs
