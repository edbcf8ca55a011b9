"""
PTV Timetable API v3 client.

Each endpoint method builds and signs a URL and returns it wrapped in a
``SignedRequest``; nothing is sent until ``get()`` is called on it.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from . import endpoints
from .constants import DEFAULT_CONFIG, ENV_DEVELOPER_ID, ENV_DEVELOPER_KEY
from .exceptions import ConfigurationError
from .request import (
    Credentials,
    EndpointRequest,
    Parameters,
    build_url,
    normalize_params
)
from .transport import Transport

Identifier = Union[str, int]


def _is_positive(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _present(value) -> bool:
    """Whether an optional filter should go on the wire; 0 (TRAIN) counts."""
    return value is not None and value != '' and value != ()


@dataclass(frozen=True)
class SignedRequest:
    """A signed URL together with the transport able to fetch it."""

    request: EndpointRequest
    url: str
    transport: Transport = field(repr=False, compare=False)

    def get(self) -> Dict[str, Any]:
        """Send the request and return the decoded, annotated response."""
        return self.transport.dispatch(self.url)


class PTVClient:
    """
    Client for the PTV Timetable API.

    Credentials may be given up front or set later; they are checked each
    time a URL is built.
    """

    def __init__(self, developer_id: Optional[str] = None,
                 developer_key: Optional[str] = None, **config):
        """
        Initialize PTV client.

        Args:
            developer_id: PTV developer id, sent as ``devid``
            developer_key: PTV developer key, used only for signing
            **config: Configuration options (host, use_https,
                connect_timeout, read_timeout)
        """
        self.credentials = Credentials(developer_id, developer_key)

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config()

        self.transport = Transport(
            connect_timeout=self.config['connect_timeout'],
            read_timeout=self.config['read_timeout']
        )

    @classmethod
    def from_env(cls, environ=None, **config) -> 'PTVClient':
        """Create a client from PTV_DEVELOPER_ID and PTV_DEVELOPER_KEY."""
        environ = os.environ if environ is None else environ
        return cls(environ.get(ENV_DEVELOPER_ID), environ.get(ENV_DEVELOPER_KEY), **config)

    def _validate_config(self):
        """Validate client configuration."""
        if not self.config['host']:
            raise ConfigurationError("host cannot be empty")

        if not _is_positive(self.config['connect_timeout']):
            raise ConfigurationError("connect_timeout must be a positive number")

        read_timeout = self.config['read_timeout']
        if read_timeout is not None and not _is_positive(read_timeout):
            raise ConfigurationError("read_timeout must be a positive number or None")

    def set_developer_id(self, developer_id: str):
        """Set the developer id sent as ``devid``."""
        self.credentials = replace(self.credentials, developer_id=developer_id)

    def set_developer_key(self, developer_key: str):
        """Set the developer key used to sign URLs."""
        self.credentials = replace(self.credentials, developer_key=developer_key)

    def use_http(self):
        """Build plain http URLs from now on; earlier requests keep https."""
        self.config['use_https'] = False

    dont_use_https = use_http

    def endpoint(self, name: str) -> str:
        """Path template for a registered endpoint."""
        return endpoints.lookup(name)

    def _signed(self, name: str, path_params: Sequence[Tuple[str, Any]] = (),
                parameters: Optional[Parameters] = None, **specific) -> SignedRequest:
        # Explicit method arguments come first and win over same-named caller parameters
        query = [(key, value) for key, value in normalize_params(specific) if _present(value)]
        supplied = {key for key, _ in query}
        query.extend(pair for pair in normalize_params(parameters) if pair[0] not in supplied)

        request = EndpointRequest(
            endpoint=name,
            path_params=tuple(path_params),
            query_params=tuple(query),
            secure=self.config['use_https']
        )
        url = build_url(request, self.credentials, self.config['host'])
        return SignedRequest(request, url, self.transport)

    # Departures

    def departures(self, route_type: int, stop_id: Identifier,
                   parameters: Optional[Parameters] = None) -> SignedRequest:
        """Departures from a stop for all routes of a route type."""
        return self._signed('departures', [('route_type', route_type), ('stop_id', stop_id)], parameters)

    def departures_route(self, route_type: int, stop_id: Identifier, route_id: Identifier,
                         parameters: Optional[Parameters] = None) -> SignedRequest:
        """Departures from a stop for a single route."""
        return self._signed(
            'departures_route',
            [('route_type', route_type), ('stop_id', stop_id), ('route_id', route_id)],
            parameters
        )

    # Directions

    def directions_by_route(self, route_id: Identifier,
                            parameters: Optional[Parameters] = None) -> SignedRequest:
        """Directions of travel for a route."""
        return self._signed('directions_by_route', [('route_id', route_id)], parameters)

    def direction_routes(self, direction_id: Identifier,
                         parameters: Optional[Parameters] = None) -> SignedRequest:
        """Routes that travel in a direction."""
        return self._signed('direction_routes', [('direction_id', direction_id)], parameters)

    def direction_routes_by_type(self, direction_id: Identifier, route_type: int,
                                 parameters: Optional[Parameters] = None) -> SignedRequest:
        """Routes of one route type that travel in a direction."""
        return self._signed(
            'direction_routes_by_type',
            [('direction_id', direction_id), ('route_type', route_type)],
            parameters
        )

    # Disruptions

    def disruptions(self, route_types=None, disruption_status: Optional[str] = None,
                    parameters: Optional[Parameters] = None) -> SignedRequest:
        """
        All disruptions, optionally filtered.

        Args:
            route_types: A route type or a sequence of them; None for all
            disruption_status: ``current`` or ``planned``; None for both
            parameters: Further query parameters
        """
        return self._signed(
            'disruptions',
            parameters=parameters,
            route_types=route_types,
            disruption_status=disruption_status
        )

    def disruptions_by_route(self, route_id: Identifier, disruption_status: Optional[str] = None,
                             parameters: Optional[Parameters] = None) -> SignedRequest:
        """Disruptions affecting a route, optionally filtered by status."""
        return self._signed(
            'disruptions_by_route',
            [('route_id', route_id)],
            parameters,
            disruption_status=disruption_status
        )

    def disruption(self, disruption_id: Identifier,
                   parameters: Optional[Parameters] = None) -> SignedRequest:
        """A single disruption."""
        return self._signed('disruption', [('disruption_id', disruption_id)], parameters)

    # Patterns

    def patterns(self, run_id: Identifier, route_type: int,
                 parameters: Optional[Parameters] = None) -> SignedRequest:
        """Stopping pattern of a run."""
        return self._signed('patterns', [('run_id', run_id), ('route_type', route_type)], parameters)

    # Routes

    def route(self, route_id: Identifier, parameters: Optional[Parameters] = None) -> SignedRequest:
        """A single route."""
        return self._signed('route', [('route_id', route_id)], parameters)

    def routes(self, route_types=None, route_name: Optional[str] = None,
               parameters: Optional[Parameters] = None) -> SignedRequest:
        """
        All routes, optionally filtered by route type and name.

        Args:
            route_types: A route type or a sequence of them; None for all
            route_name: Full or partial route name; None for all
            parameters: Further query parameters
        """
        return self._signed(
            'routes',
            parameters=parameters,
            route_types=route_types,
            route_name=route_name
        )

    def route_types(self, parameters: Optional[Parameters] = None) -> SignedRequest:
        """All route types and their names."""
        return self._signed('route_types', parameters=parameters)

    # Runs

    def runs(self, route_id: Identifier, parameters: Optional[Parameters] = None) -> SignedRequest:
        """All runs on a route."""
        return self._signed('runs', [('route_id', route_id)], parameters)

    def run(self, run_id: Identifier, parameters: Optional[Parameters] = None) -> SignedRequest:
        """All runs with a run id, across route types."""
        return self._signed('run', [('run_id', run_id)], parameters)

    def run_by_type(self, run_id: Identifier, route_type: int,
                    parameters: Optional[Parameters] = None) -> SignedRequest:
        """A run of a specific route type."""
        return self._signed('run_by_type', [('run_id', run_id), ('route_type', route_type)], parameters)

    # Search

    def search(self, search_term: str, parameters: Optional[Parameters] = None) -> SignedRequest:
        """
        Stops, routes and outlets matching ``search_term``.

        The term is percent-encoded into the path, so pass it unencoded;
        an already encoded term is encoded twice (``%20`` becomes ``%2520``).
        """
        return self._signed('search', [('search_term', search_term)], parameters)

    # Stops

    def stop_facilities(self, stop_id: Identifier, route_type: int,
                        parameters: Optional[Parameters] = None) -> SignedRequest:
        """Facilities and details of a stop."""
        return self._signed('stop_facilities', [('stop_id', stop_id), ('route_type', route_type)], parameters)

    def stops_by_route(self, route_id: Identifier, route_type: int,
                       parameters: Optional[Parameters] = None) -> SignedRequest:
        """Stops served by a route."""
        return self._signed('stops_by_route', [('route_id', route_id), ('route_type', route_type)], parameters)

    def stops_near(self, latitude: float, longitude: float,
                   parameters: Optional[Parameters] = None) -> SignedRequest:
        """Stops near a location, nearest first."""
        return self._signed('stops_near', [('latitude', latitude), ('longitude', longitude)], parameters)

    def close(self):
        """Close HTTP session."""
        self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
