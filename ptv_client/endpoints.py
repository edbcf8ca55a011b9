"""
Registry of PTV Timetable API v3 endpoints.

Maps a logical endpoint name to its path template. Templates carry
``{name}`` placeholders that must all be filled before a URL is signed.
"""

import re
from types import MappingProxyType
from typing import FrozenSet

from .exceptions import ConfigurationError

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

ENDPOINTS = MappingProxyType({
    'departures': '/v3/departures/route_type/{route_type}/stop/{stop_id}',
    'departures_route': '/v3/departures/route_type/{route_type}/stop/{stop_id}/route/{route_id}',
    'directions_by_route': '/v3/directions/route/{route_id}',
    'direction_routes': '/v3/directions/{direction_id}',
    'direction_routes_by_type': '/v3/directions/{direction_id}/route_type/{route_type}',
    'disruptions': '/v3/disruptions',
    'disruptions_by_route': '/v3/disruptions/route/{route_id}',
    'disruption': '/v3/disruptions/{disruption_id}',
    'patterns': '/v3/pattern/run/{run_id}/route_type/{route_type}',
    'routes': '/v3/routes',
    'route': '/v3/routes/{route_id}',
    'route_types': '/v3/route_types',
    'runs': '/v3/runs/route/{route_id}',
    'run': '/v3/runs/{run_id}',
    'run_by_type': '/v3/runs/{run_id}/route_type/{route_type}',
    'search': '/v3/search/{search_term}',
    'stop_facilities': '/v3/stops/{stop_id}/route_type/{route_type}',
    'stops_by_route': '/v3/stops/route/{route_id}/route_type/{route_type}',
    'stops_near': '/v3/stops/location/{latitude},{longitude}',
})


def lookup(name: str) -> str:
    """
    Get the path template registered for an endpoint.

    Raises:
        ConfigurationError: If no endpoint is registered under ``name``
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise ConfigurationError(f"unknown endpoint: {name!r}") from None


def placeholders(template: str) -> FrozenSet[str]:
    """Names of the ``{placeholder}`` tokens in a path template."""
    return frozenset(_PLACEHOLDER.findall(template))
