"""
PTV Timetable API Client Library

A Python client library that builds HMAC-SHA1 signed request URLs for the
Public Transport Victoria Timetable API v3 and fetches them.

Example usage:
    from ptv_client import PTVClient, TRAIN

    client = PTVClient("your-developer-id", "your-developer-key")
    departures = client.departures(TRAIN, 1071, {"max_results": 3}).get()
"""

from .client import PTVClient, SignedRequest
from .endpoints import ENDPOINTS
from .exceptions import (
    PTVClientError,
    ConfigurationError,
    TransportError,
    HTTPError
)
from .constants import (
    API_HOST,
    DEFAULT_CONFIG,
    RouteType,
    TRAIN,
    TRAM,
    BUS,
    VLINE,
    NIGHT_BUS
)
from .request import Credentials, EndpointRequest, build_url, sign, verify_url
from .transport import Transport

__version__ = "1.0.0"
__all__ = [
    "PTVClient",
    "SignedRequest",
    "ENDPOINTS",
    "PTVClientError",
    "ConfigurationError",
    "TransportError",
    "HTTPError",
    "API_HOST",
    "DEFAULT_CONFIG",
    "RouteType",
    "TRAIN",
    "TRAM",
    "BUS",
    "VLINE",
    "NIGHT_BUS",
    "Credentials",
    "EndpointRequest",
    "build_url",
    "sign",
    "verify_url",
    "Transport"
]
