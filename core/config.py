"""Configuration loading from the environment.

This module handles:
- Reading HUE_* environment variables into an immutable Settings object
- Defaults for the credentials file, timeouts and log level
"""

import os
from dataclasses import dataclass
from pathlib import Path

from core.errors import ConfigurationError

# Default credentials file location
DEFAULT_CREDENTIALS_FILE = Path.home() / '.hue-credentials.json'

DEFAULT_LINK_WAIT = 10.0
DEFAULT_DISCOVERY_TIMEOUT = 10.0
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = 'INFO'

# Identifies this application in the bridge whitelist
DEVICE_TYPE = 'hue-mcp-server#server'


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, resolved once at start-up."""
    bridge_ip: str | None = None
    username: str | None = None
    client_key: str | None = None
    credentials_path: Path = DEFAULT_CREDENTIALS_FILE
    link_wait: float = DEFAULT_LINK_WAIT
    discovery_timeout: float = DEFAULT_DISCOVERY_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_provisioned_credentials(self) -> bool:
        """True when both the username and client key came from the environment."""
        return bool(self.username and self.client_key)


def _get_str(environ, name: str) -> str | None:
    value = environ.get(name, '').strip()
    return value or None


def _get_seconds(environ, name: str, default: float) -> float:
    raw = environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


def load_settings(environ=None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings with unset variables falling back to defaults

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed
    """
    if environ is None:
        environ = os.environ

    credentials_path = _get_str(environ, 'HUE_CREDENTIALS_PATH')

    return Settings(
        bridge_ip=_get_str(environ, 'HUE_BRIDGE_IP'),
        username=_get_str(environ, 'HUE_USERNAME'),
        client_key=_get_str(environ, 'HUE_CLIENT_KEY'),
        credentials_path=Path(credentials_path).expanduser() if credentials_path else DEFAULT_CREDENTIALS_FILE,
        link_wait=_get_seconds(environ, 'HUE_LINK_WAIT', DEFAULT_LINK_WAIT),
        discovery_timeout=_get_seconds(environ, 'HUE_DISCOVERY_TIMEOUT', DEFAULT_DISCOVERY_TIMEOUT),
        request_timeout=_get_seconds(environ, 'HUE_REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT),
        log_level=(_get_str(environ, 'HUE_LOG_LEVEL') or DEFAULT_LOG_LEVEL).upper(),
    )
