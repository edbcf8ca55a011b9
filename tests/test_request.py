"""
Unit tests for request construction and signing.
"""

import hashlib
import hmac
from urllib.parse import urlsplit

import pytest

from ptv_client import (
    API_HOST,
    ENDPOINTS,
    TRAIN,
    ConfigurationError,
    Credentials,
    EndpointRequest,
    build_url,
    sign,
    verify_url
)
from ptv_client.endpoints import placeholders
from ptv_client.request import (
    build_query,
    encode,
    normalize_params,
    render_path,
    signing_input
)


def expected_signature(message: str, key: str) -> str:
    return hmac.new(key.encode('utf-8'), message.encode('utf-8'), hashlib.sha1).hexdigest().upper()


class TestSigning:
    """Test HMAC-SHA1 signing."""

    @pytest.fixture
    def credentials(self):
        return Credentials("1", "test")

    def test_sign(self):
        signature = sign("/v3/route_types?devid=1", "test")

        assert len(signature) == 40  # SHA1 hex = 40 chars
        assert signature == signature.upper()
        assert signature == expected_signature("/v3/route_types?devid=1", "test")

    def test_route_types_scenario(self, credentials):
        url = build_url(EndpointRequest('route_types'), credentials)

        signature = expected_signature("/v3/route_types?devid=1", "test")
        assert url == f"https://{API_HOST}/v3/route_types?devid=1&signature={signature}"

    def test_deterministic(self, credentials):
        request = EndpointRequest(
            'departures',
            path_params=(('route_type', TRAIN), ('stop_id', 1071)),
            query_params=(('max_results', 3), ('expand', ('run', 'route')))
        )

        assert build_url(request, credentials) == build_url(request, credentials)

    def test_signature_verifiable(self, credentials):
        request = EndpointRequest('search', (('search_term', 'Flinders Street'),), (('route_types', (0, 1)),))
        url = build_url(request, credentials)

        parts = urlsplit(url)
        message, _, signature = f"{parts.path}?{parts.query}".rpartition('&signature=')
        assert signature == expected_signature(message, "test")
        assert verify_url(url, "test") is True

    def test_verify_url_wrong_key(self, credentials):
        url = build_url(EndpointRequest('route_types'), credentials)

        assert verify_url(url, "other") is False

    def test_verify_url_tampered(self, credentials):
        url = build_url(EndpointRequest('route', (('route_id', 1),)), credentials)

        assert verify_url(url.replace('/routes/1', '/routes/2'), "test") is False

    def test_verify_url_unsigned(self):
        assert verify_url(f"https://{API_HOST}/v3/route_types?devid=1", "test") is False

    def test_verify_url_non_ascii_signature(self):
        assert verify_url(f"https://{API_HOST}/v3/route_types?devid=1&signature=É", "test") is False

    def test_list_query_value_expanded(self, credentials):
        """Test that a list given directly to a request expands like a tuple."""
        request = EndpointRequest('route_types', query_params=(('expand', ['run', 'route']),))
        url = build_url(request, credentials)

        assert request.query_params == (('expand', ('run', 'route')),)
        assert urlsplit(url).query.startswith("devid=1&expand=run&expand=route&signature=")

    def test_list_params_normalized(self):
        request = EndpointRequest('route', path_params=[['route_id', 1]], query_params={'max_results': 2})

        assert request.path_params == (('route_id', 1),)
        assert request.query_params == (('max_results', 2),)

    def test_http_scheme(self, credentials):
        url = build_url(EndpointRequest('route_types', secure=False), credentials)

        assert url.startswith(f"http://{API_HOST}/v3/route_types?devid=1&signature=")

    def test_custom_host(self, credentials):
        url = build_url(EndpointRequest('route_types'), credentials, host="localhost:8080")

        assert url.startswith("https://localhost:8080/v3/route_types?")


class TestCredentials:
    """Test credential checks."""

    def test_missing_id(self):
        with pytest.raises(ConfigurationError, match="developer ID"):
            build_url(EndpointRequest('route_types'), Credentials(None, "test"))

    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="developer key"):
            build_url(EndpointRequest('route_types'), Credentials("1", ""))

    def test_key_not_in_repr(self):
        assert "secret" not in repr(Credentials("1", "secret"))


class TestQuery:
    """Test query-string construction."""

    def test_devid_only(self):
        assert build_query("1", ()) == "devid=1"

    def test_devid_first(self):
        query = build_query("42", (('b', 2), ('a', 1)))

        assert query.split('&')[0] == "devid=42"
        assert query == "devid=42&b=2&a=1"

    def test_sequence_expansion(self):
        query = build_query("1", (('expand', ('run', 'stop point', 'route')),))

        assert query == "devid=1&expand=run&expand=stop%20point&expand=route"

    def test_encoding(self):
        assert encode("Glen Waverley") == "Glen%20Waverley"
        assert encode("a/b&c=d") == "a%2Fb%26c%3Dd"
        assert encode(True) == "true"
        assert encode(False) == "false"
        assert encode(TRAIN) == "0"
        assert encode(-37.8136) == "-37.8136"

    def test_normalize_mapping(self):
        assert normalize_params({'b': [1, 2], 'a': 'x'}) == (('b', (1, 2)), ('a', 'x'))

    def test_normalize_pairs(self):
        pairs = [('expand', 'run'), ('max_results', 5)]

        assert normalize_params(pairs) == (('expand', 'run'), ('max_results', 5))

    def test_normalize_empty(self):
        assert normalize_params(None) == ()
        assert normalize_params({}) == ()


class TestPath:
    """Test path template substitution."""

    def test_all_templates_complete(self):
        for name, template in ENDPOINTS.items():
            params = [(placeholder, 7) for placeholder in sorted(placeholders(template))]
            path = render_path(template, params)

            assert '{' not in path and '}' not in path, name

    def test_stops_near(self):
        path = render_path(ENDPOINTS['stops_near'], [('latitude', -37.8183), ('longitude', 144.9671)])

        assert path == "/v3/stops/location/-37.8183,144.9671"

    def test_value_encoded(self):
        path = render_path(ENDPOINTS['search'], [('search_term', 'Flinders Street')])

        assert path == "/v3/search/Flinders%20Street"

    def test_missing_placeholder(self):
        with pytest.raises(ConfigurationError, match="missing path parameter"):
            render_path(ENDPOINTS['departures'], [('route_type', 0)])

    def test_unexpected_placeholder(self):
        with pytest.raises(ConfigurationError, match="unexpected path parameter"):
            render_path(ENDPOINTS['route'], [('route_id', 1), ('stop_id', 2)])

    def test_unknown_endpoint(self):
        with pytest.raises(ConfigurationError, match="unknown endpoint"):
            signing_input(EndpointRequest('timetables'), "1")

    def test_signing_input_excludes_host(self):
        message = signing_input(EndpointRequest('run', (('run_id', 951),)), "1")

        assert message == "/v3/runs/951?devid=1"
