"""
Request construction and signing for the PTV Timetable API.

The API authenticates every call with an HMAC-SHA1 signature computed over
the request path and query string (without scheme and host), keyed by the
developer key. The developer id travels in the clear as the first query
parameter, ``devid``, and the signature is appended last as ``signature``.

Building a URL is a pure function of an ``EndpointRequest`` and a set of
``Credentials``: identical inputs always produce identical URLs.
"""

import hashlib
import hmac
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, urlsplit

from . import endpoints
from .constants import API_HOST, PARAM_DEVID, PARAM_SIGNATURE
from .exceptions import ConfigurationError

Scalar = Union[str, int, float, bool]
ParamValue = Union[Scalar, Sequence[Scalar]]
Parameters = Union[Mapping[str, ParamValue], Sequence[Tuple[str, ParamValue]]]


@dataclass(frozen=True)
class Credentials:
    """Developer id and key issued by PTV."""

    developer_id: Optional[str] = None
    developer_key: Optional[str] = field(default=None, repr=False)

    def validate(self):
        """Fail if either half of the credentials is unset."""
        if not self.developer_id:
            raise ConfigurationError("PTV developer ID not set")
        if not self.developer_key:
            raise ConfigurationError("PTV developer key not set")


@dataclass(frozen=True)
class EndpointRequest:
    """
    Everything needed to build one signed URL.

    Attributes:
        endpoint: Registered endpoint name
        path_params: (placeholder, value) substitutions for the path template
        query_params: Ordered (name, value) pairs; value may be a tuple
        secure: Build an https URL when true, plain http otherwise
    """

    endpoint: str
    path_params: Tuple[Tuple[str, Any], ...] = ()
    query_params: Tuple[Tuple[str, Any], ...] = ()
    secure: bool = True

    def __post_init__(self):
        # Lists become tuples so every sequence value is expanded, not stringified
        object.__setattr__(self, 'path_params', tuple(tuple(pair) for pair in self.path_params))
        object.__setattr__(self, 'query_params', normalize_params(self.query_params))


def normalize_params(parameters: Optional[Parameters]) -> Tuple[Tuple[str, Any], ...]:
    """
    Turn caller parameters into an ordered tuple of (name, value) pairs.

    Mappings are read in iteration order. List values become tuples so the
    result can live in a frozen request.
    """
    if not parameters:
        return ()
    items = parameters.items() if isinstance(parameters, Mapping) else parameters

    normalized = []
    for name, value in items:
        if isinstance(value, (list, tuple)):
            value = tuple(value)
        normalized.append((str(name), value))
    return tuple(normalized)


def to_text(value: Any) -> str:
    """Render a parameter value the way the API expects it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        # IntEnum members (RouteType) must go out as plain numbers
        return str(int(value))
    return str(value)


def encode(value: Any) -> str:
    """Percent-encode a single value; space becomes %20."""
    return quote(to_text(value), safe='')


def render_path(template: str, path_params: Sequence[Tuple[str, Any]]) -> str:
    """
    Substitute every ``{placeholder}`` in ``template``.

    Raises:
        ConfigurationError: If a placeholder is left unfilled or a
            parameter has no matching placeholder
    """
    expected = endpoints.placeholders(template)
    supplied = {name for name, _ in path_params}

    missing = expected - supplied
    if missing:
        raise ConfigurationError(f"missing path parameter(s): {', '.join(sorted(missing))}")
    unexpected = supplied - expected
    if unexpected:
        raise ConfigurationError(f"unexpected path parameter(s): {', '.join(sorted(unexpected))}")

    path = template
    for name, value in path_params:
        path = path.replace('{' + name + '}', encode(value))
    return path


def build_query(developer_id: str, query_params: Sequence[Tuple[str, Any]]) -> str:
    """Serialize query parameters, ``devid`` first, sequences expanded in order."""
    pairs = [f"{PARAM_DEVID}={developer_id}"]
    for name, value in query_params:
        values = value if isinstance(value, tuple) else (value,)
        pairs.extend(f"{name}={encode(v)}" for v in values)
    return '&'.join(pairs)


def signing_input(request: EndpointRequest, developer_id: str) -> str:
    """The exact ``path?query`` string the signature is computed over."""
    template = endpoints.lookup(request.endpoint)
    path = render_path(template, request.path_params)
    return f"{path}?{build_query(developer_id, request.query_params)}"


def sign(message: str, developer_key: str) -> str:
    """Uppercase hex HMAC-SHA1 of ``message`` keyed by ``developer_key``."""
    mac = hmac.new(
        developer_key.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha1
    )
    return mac.hexdigest().upper()


def build_url(request: EndpointRequest, credentials: Credentials, host: str = API_HOST) -> str:
    """
    Build the fully qualified, signed URL for ``request``.

    Raises:
        ConfigurationError: If credentials are incomplete, the endpoint is
            unknown, or path parameters do not match the template
    """
    credentials.validate()

    message = signing_input(request, credentials.developer_id)
    signature = sign(message, credentials.developer_key)

    scheme = 'https' if request.secure else 'http'
    return f"{scheme}://{host}{message}&{PARAM_SIGNATURE}={signature}"


def verify_url(url: str, developer_key: str) -> bool:
    """
    Check the ``signature`` parameter of a signed URL.

    Returns:
        True if the signature matches the path and query it is attached to
    """
    parts = urlsplit(url)
    query, sep, signature = parts.query.rpartition(f"&{PARAM_SIGNATURE}=")
    if not sep:
        return False

    expected = sign(f"{parts.path}?{query}", developer_key)
    return hmac.compare_digest(expected.encode('utf-8'), signature.encode('utf-8'))
