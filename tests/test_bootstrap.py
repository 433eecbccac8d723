"""Tests for the one-shot bridge connection in core/bootstrap.py"""

import threading
import time
from unittest.mock import Mock, patch

import pytest

from core.bootstrap import BridgeConnection, ConnectionProvider, connect
from core.errors import DiscoveryError


class TestConnect:
    """connect() wires discovery, credentials and the client together."""

    @patch('core.bootstrap.obtain_credentials')
    @patch('core.bootstrap.resolve_bridge_address')
    def test_builds_client_with_username(self, mock_resolve, mock_obtain, settings):
        mock_resolve.return_value = '192.168.1.2'
        mock_obtain.return_value = {'username': 'user-abc', 'clientKey': 'KEY123'}

        connection = connect(settings)

        mock_resolve.assert_called_once_with('192.168.1.2', timeout=0.1)
        mock_obtain.assert_called_once_with('192.168.1.2', settings)
        assert connection.bridge_ip == '192.168.1.2'
        assert connection.client.application_key == 'user-abc'
        assert connection.client.timeout == 1
        assert connection.client.session.headers['hue-application-key'] == 'user-abc'

    @patch('core.bootstrap.obtain_credentials')
    @patch('core.bootstrap.resolve_bridge_address', side_effect=DiscoveryError('no bridge'))
    def test_discovery_failure_skips_credentials(self, mock_resolve, mock_obtain, settings):
        with pytest.raises(DiscoveryError):
            connect(settings)
        mock_obtain.assert_not_called()


class TestConnectionProvider:
    """The provider connects once and caches only success."""

    def test_connects_once(self, settings, connection):
        connector = Mock(return_value=connection)
        provider = ConnectionProvider(settings, connector=connector)

        assert not provider.is_ready
        assert provider() is connection
        assert provider() is connection
        assert provider.is_ready
        connector.assert_called_once_with(settings)

    def test_failure_is_retried(self, settings, connection):
        connector = Mock(side_effect=[DiscoveryError('no bridge'), connection])
        provider = ConnectionProvider(settings, connector=connector)

        with pytest.raises(DiscoveryError):
            provider()
        assert not provider.is_ready

        assert provider() is connection
        assert connector.call_count == 2

    def test_concurrent_callers_share_one_bootstrap(self, settings, connection):
        calls = []

        def slow_connector(s):
            calls.append(s)
            time.sleep(0.05)
            return connection

        provider = ConnectionProvider(settings, connector=slow_connector)
        results = []
        threads = [threading.Thread(target=lambda: results.append(provider())) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is connection for r in results)

    def test_connection_is_frozen(self, connection):
        with pytest.raises(Exception):
            connection.bridge_ip = '10.0.0.1'
        assert isinstance(connection, BridgeConnection)
