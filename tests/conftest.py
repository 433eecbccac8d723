"""Pytest configuration and fixtures for Hue MCP tests."""

import logging
from unittest.mock import Mock

import pytest

from core.bootstrap import BridgeConnection
from core.client import HueApiClient
from core.config import Settings
from core.controller import HueController
from core.logging_config import LOGGER_NAME

LIGHTS = [
    {'id': 'light-3', 'metadata': {'name': 'Kitchen'}, 'on': {'on': False}, 'dimming': {'brightness': 0.0}},
    {'id': 'light-1', 'metadata': {'name': 'Bedside'}, 'on': {'on': True}, 'dimming': {'brightness': 80.0}},
    {'id': 'light-2', 'metadata': {'name': 'kitchen strip'}, 'on': {'on': False}},
    {'id': 'light-9', 'metadata': {}},
]

ROOMS = [
    {
        'id': 'room-2',
        'metadata': {'name': 'Office'},
        'services': [{'rid': 'light-2', 'rtype': 'light'}],
    },
    {
        'id': 'room-1',
        'metadata': {'name': 'Living Room'},
        'services': [
            {'rid': 'light-1', 'rtype': 'light'},
            {'rid': 'group-1', 'rtype': 'grouped_light'},
        ],
    },
]


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI runs so they never point at a closed stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary credentials file, with no waiting."""
    return Settings(
        bridge_ip='192.168.1.2',
        credentials_path=tmp_path / 'hue' / 'credentials.json',
        link_wait=0,
        discovery_timeout=0.1,
        request_timeout=1,
    )


@pytest.fixture
def mock_client():
    """A HueApiClient mock serving the LIGHTS and ROOMS fixtures."""
    client = Mock(spec=HueApiClient)
    resources = {'light': LIGHTS, 'room': ROOMS}
    client.get_all.side_effect = lambda kind: [dict(r) for r in resources.get(kind, [])]
    client.update.return_value = {'data': [], 'errors': []}
    return client


@pytest.fixture
def connection(mock_client):
    return BridgeConnection(
        bridge_ip='192.168.1.2',
        credentials={'username': 'user-abc', 'clientKey': 'KEY123'},
        client=mock_client,
    )


@pytest.fixture
def controller(connection):
    return HueController(lambda: connection)
