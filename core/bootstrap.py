"""Bridge connection bootstrap.

A BridgeConnection bundles the resolved address, the credentials and a ready
client. ConnectionProvider builds it once, on first use, behind a lock so
concurrent callers cannot run discovery or registration twice.
"""

import threading
from dataclasses import dataclass

from core.auth import obtain_credentials
from core.client import HueApiClient
from core.config import Settings
from core.discovery import resolve_bridge_address
from core.logging_config import get_logger
from models.types import Credentials

logger = get_logger(__name__)


@dataclass(frozen=True)
class BridgeConnection:
    """Resolved bridge address, identity and HTTP client for one process."""
    bridge_ip: str
    credentials: Credentials
    client: HueApiClient


def connect(settings: Settings) -> BridgeConnection:
    """Resolve the bridge, obtain credentials and build a client.

    Raises:
        DiscoveryError: If the bridge cannot be located
        RegistrationError: If new credentials were needed and registration failed
    """
    bridge_ip = resolve_bridge_address(settings.bridge_ip, timeout=settings.discovery_timeout)
    credentials = obtain_credentials(bridge_ip, settings)
    # The v2 API authenticates with the whitelist username
    client = HueApiClient(bridge_ip, credentials['username'], timeout=settings.request_timeout)
    logger.info("Ready to talk to Hue Bridge at %s", bridge_ip)
    return BridgeConnection(bridge_ip=bridge_ip, credentials=credentials, client=client)


class ConnectionProvider:
    """Callable that returns the process-wide BridgeConnection, creating it on first call.

    A failed bootstrap is not cached; the next call tries again.
    """

    def __init__(self, settings: Settings, connector=None):
        self.settings = settings
        self._connector = connector or connect
        self._connection: BridgeConnection | None = None
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self._connection is not None

    def __call__(self) -> BridgeConnection:
        if self._connection is not None:
            return self._connection
        with self._lock:
            if self._connection is None:
                self._connection = self._connector(self.settings)
            return self._connection
