"""
Constants for PTV client library.
Values are fixed by the PTV Timetable API v3.
"""

from enum import IntEnum

API_HOST = "timetableapi.ptv.vic.gov.au"

# Query parameter names used by the signing scheme
PARAM_DEVID = "devid"
PARAM_SIGNATURE = "signature"

# Environment variables read by PTVClient.from_env()
ENV_DEVELOPER_ID = "PTV_DEVELOPER_ID"
ENV_DEVELOPER_KEY = "PTV_DEVELOPER_KEY"

# Default configuration values
DEFAULT_CONFIG = {
    'host': API_HOST,
    'use_https': True,
    'connect_timeout': 5,   # seconds
    'read_timeout': 30,     # seconds
}

TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class RouteType(IntEnum):
    """Transport modes, as numbered by the remote service."""

    TRAIN = 0
    TRAM = 1
    BUS = 2
    VLINE = 3
    NIGHT_BUS = 4


TRAIN = RouteType.TRAIN
TRAM = RouteType.TRAM
BUS = RouteType.BUS
VLINE = RouteType.VLINE
NIGHT_BUS = RouteType.NIGHT_BUS
