"""
HTTP transport for signed PTV API URLs.

Issues the GET, decodes the JSON body and annotates it with the request
URL, the wall-clock execution time and the server time in UTC.
"""

import datetime
import logging
import time
from typing import Any, Dict, Optional

import requests
from dateutil import parser as date_parser
from dateutil import tz

from .constants import DEFAULT_CONFIG, TIME_FORMAT
from .exceptions import HTTPError, TransportError

logger = logging.getLogger(__name__)

ACCEPT_JSON = {'Accept': 'application/json'}


def server_time(date_header: Optional[str]) -> str:
    """
    UTC timestamp for a response, formatted ``YYYY-MM-DDTHH:MM:SSZ``.

    Uses the ``Date`` header when it is present and parseable, the local
    clock otherwise.
    """
    moment = None
    if date_header:
        try:
            moment = date_parser.parse(date_header)
        except (ValueError, OverflowError):
            logger.debug("Unparseable Date header %r, using local clock", date_header)
    if moment is None:
        moment = datetime.datetime.now(tz.tzutc())
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz.tzutc())
    return moment.astimezone(tz.tzutc()).strftime(TIME_FORMAT)


class Transport:
    """
    Sends GET requests to the PTV API over a ``requests`` session.
    """

    def __init__(self, connect_timeout: float = DEFAULT_CONFIG['connect_timeout'],
                 read_timeout: Optional[float] = DEFAULT_CONFIG['read_timeout'],
                 session: Optional[requests.Session] = None):
        self.timeout = (connect_timeout, read_timeout)
        self.session = session or requests.Session()

    def dispatch(self, url: str) -> Dict[str, Any]:
        """
        Fetch ``url`` and return its decoded JSON body.

        The returned dict carries three extra keys: ``url``, ``execution``
        (seconds, float) and ``time`` (UTC, from the ``Date`` header).

        Raises:
            HTTPError: If the API answers with a non-2xx status
            TransportError: If the request fails or the body is not a JSON object
        """
        logger.debug("GET %s", url)
        started = time.perf_counter()

        try:
            response = self.session.request(
                'GET', url, headers=ACCEPT_JSON, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise HTTPError(
                f"API returned {response.status_code} for {url}",
                response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"Malformed JSON in response from {url}") from e
        if not isinstance(body, dict):
            raise TransportError(f"Expected a JSON object from {url}, got {type(body).__name__}")

        execution = time.perf_counter() - started
        logger.debug("GET %s -> %s in %.3fs", url, response.status_code, execution)

        body['url'] = url
        body['execution'] = execution
        body['time'] = server_time(response.headers.get('Date'))
        return body

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
