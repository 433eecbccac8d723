"""Tests for environment settings in core/config.py"""

from pathlib import Path

import pytest

from core.config import (
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_LINK_WAIT,
    Settings,
    load_settings,
)
from core.errors import ConfigurationError


class TestConstants:
    """Test that constants are properly defined."""

    def test_default_credentials_file(self):
        """Credentials default to ~/.hue-credentials.json."""
        assert isinstance(DEFAULT_CREDENTIALS_FILE, Path)
        assert DEFAULT_CREDENTIALS_FILE.name == '.hue-credentials.json'
        assert DEFAULT_CREDENTIALS_FILE.parent == Path.home()


class TestLoadSettings:
    """Environment parsing."""

    def test_empty_environment(self):
        settings = load_settings({})

        assert settings == Settings()
        assert settings.bridge_ip is None
        assert settings.link_wait == DEFAULT_LINK_WAIT
        assert settings.log_level == 'INFO'
        assert not settings.has_provisioned_credentials

    def test_all_variables(self, tmp_path):
        settings = load_settings({
            'HUE_BRIDGE_IP': '10.0.0.5',
            'HUE_USERNAME': 'user',
            'HUE_CLIENT_KEY': 'key',
            'HUE_CREDENTIALS_PATH': str(tmp_path / 'c.json'),
            'HUE_LINK_WAIT': '3',
            'HUE_DISCOVERY_TIMEOUT': '2.5',
            'HUE_REQUEST_TIMEOUT': '4',
            'HUE_LOG_LEVEL': 'debug',
        })

        assert settings.bridge_ip == '10.0.0.5'
        assert settings.has_provisioned_credentials
        assert settings.credentials_path == tmp_path / 'c.json'
        assert settings.link_wait == 3.0
        assert settings.discovery_timeout == 2.5
        assert settings.request_timeout == 4.0
        assert settings.log_level == 'DEBUG'

    def test_blank_values_are_unset(self):
        settings = load_settings({'HUE_BRIDGE_IP': '  ', 'HUE_LINK_WAIT': ''})

        assert settings.bridge_ip is None
        assert settings.link_wait == DEFAULT_LINK_WAIT

    def test_only_username_is_not_provisioned(self):
        assert not load_settings({'HUE_USERNAME': 'user'}).has_provisioned_credentials

    def test_home_is_expanded(self):
        settings = load_settings({'HUE_CREDENTIALS_PATH': '~/hue.json'})
        assert settings.credentials_path == Path.home() / 'hue.json'

    @pytest.mark.parametrize('value', ['ten', '-1'])
    def test_invalid_seconds(self, value):
        with pytest.raises(ConfigurationError, match='HUE_REQUEST_TIMEOUT'):
            load_settings({'HUE_REQUEST_TIMEOUT': value})

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv('HUE_BRIDGE_IP', '10.1.1.1')
        assert load_settings().bridge_ip == '10.1.1.1'
