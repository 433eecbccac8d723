"""
Tests for HueApiClient request building and error mapping.

requests.Session is mocked; no network traffic is generated.
"""

from unittest.mock import MagicMock

import pytest
import requests

from core.client import HueApiClient
from core.errors import BridgeApiError, TransportError


def make_response(status_code=200, body=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError('No JSON')
        response.text = text or ''
    else:
        response.json.return_value = body
        response.text = text or str(body)
    return response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = make_response(body={'errors': [], 'data': []})
    return session


@pytest.fixture
def client(session):
    return HueApiClient('192.168.1.2', 'user-abc', timeout=3, session=session)


class TestSessionSetup:
    """Session headers and TLS posture."""

    def test_application_key_header(self, client, session):
        assert session.headers['hue-application-key'] == 'user-abc'
        assert session.headers['Content-Type'] == 'application/json'

    def test_no_key_header_without_key(self, session):
        HueApiClient('192.168.1.2', session=session)
        assert 'hue-application-key' not in session.headers

    def test_tls_verification_disabled(self, client, session):
        assert session.verify is False

    def test_base_urls(self, client):
        assert client.base_url == 'https://192.168.1.2/clip/v2'
        assert client.v1_base_url == 'http://192.168.1.2/api'


class TestResourceCrud:
    """Each CRUD call is exactly one request against /clip/v2/resource."""

    def test_get_all(self, client, session):
        session.request.return_value = make_response(body={'errors': [], 'data': [{'id': 'a'}, {'id': 'b'}]})

        assert client.get_all('light') == [{'id': 'a'}, {'id': 'b'}]
        session.request.assert_called_once_with(
            'GET', 'https://192.168.1.2/clip/v2/resource/light', json=None, timeout=3, verify=False
        )

    def test_get_by_id(self, client, session):
        session.request.return_value = make_response(body={'errors': [], 'data': [{'id': 'a'}]})

        assert client.get_by_id('room', 'a') == {'id': 'a'}
        assert session.request.call_args[0] == ('GET', 'https://192.168.1.2/clip/v2/resource/room/a')

    def test_get_by_id_empty(self, client, session):
        assert client.get_by_id('room', 'missing') is None

    def test_update(self, client, session):
        body = {'on': {'on': True}}
        client.update('grouped_light', 'g1', body)

        session.request.assert_called_once_with(
            'PUT', 'https://192.168.1.2/clip/v2/resource/grouped_light/g1', json=body, timeout=3, verify=False
        )

    def test_create(self, client, session):
        client.create('zone', {'metadata': {'name': 'Upstairs'}})
        assert session.request.call_args[0] == ('POST', 'https://192.168.1.2/clip/v2/resource/zone')

    def test_delete(self, client, session):
        client.delete('scene', 's1')
        assert session.request.call_args[0] == ('DELETE', 'https://192.168.1.2/clip/v2/resource/scene/s1')


class TestLegacyApi:
    """v1 endpoints use plain HTTP under /api."""

    def test_create_user(self, client, session):
        session.request.return_value = make_response(body=[{'success': {'username': 'u'}}])

        assert client.create_user('app#dev') == [{'success': {'username': 'u'}}]
        session.request.assert_called_once_with(
            'POST', 'http://192.168.1.2/api',
            json={'devicetype': 'app#dev', 'generateclientkey': True}, timeout=3, verify=False
        )

    def test_config_endpoints(self, client, session):
        session.request.return_value = make_response(body={})

        client.get_config('u')
        assert session.request.call_args[0] == ('GET', 'http://192.168.1.2/api/u/config')

        client.modify_config('u', {'name': 'Bridge'})
        assert session.request.call_args[0] == ('PUT', 'http://192.168.1.2/api/u/config')

        client.get_whitelist('u')
        assert session.request.call_args[0] == ('GET', 'http://192.168.1.2/api/u/config/whitelist')

        client.get_user('u', 'other')
        assert session.request.call_args[0] == ('GET', 'http://192.168.1.2/api/u/config/whitelist/other')

        client.delete_user('u', 'other')
        assert session.request.call_args[0] == ('DELETE', 'http://192.168.1.2/api/u/config/whitelist/other')

        client.get_full_state('u')
        assert session.request.call_args[0] == ('GET', 'http://192.168.1.2/api/u')


class TestErrors:
    """Non-2xx and transport failures surface immediately, without retries."""

    def test_non_2xx_raises_bridge_api_error(self, client, session):
        body = {'errors': [{'description': 'unauthorized user'}], 'data': []}
        session.request.return_value = make_response(status_code=403, body=body)

        with pytest.raises(BridgeApiError) as exc_info:
            client.get_all('light')

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == body
        assert 'unauthorized user' in str(exc_info.value)
        assert session.request.call_count == 1

    def test_non_json_error_body(self, client, session):
        session.request.return_value = make_response(status_code=503, text='Service Unavailable')

        with pytest.raises(BridgeApiError) as exc_info:
            client.update('light', 'x', {})

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == 'Service Unavailable'

    def test_non_json_success_body(self, client, session):
        session.request.return_value = make_response(status_code=200, text='<html>')

        with pytest.raises(BridgeApiError):
            client.get_all('light')

    def test_connection_error_raises_transport_error(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(TransportError, match='No response received'):
            client.get_all('light')
        assert session.request.call_count == 1

    def test_timeout_raises_transport_error(self, client, session):
        session.request.side_effect = requests.exceptions.ReadTimeout('slow')

        with pytest.raises(TransportError, match='Timed out'):
            client.get_all('light')
