"""HueApiClient for talking to the Hue Bridge.

One client covers every resource kind of the v2 CLIP API through generic CRUD
methods, plus the handful of legacy v1 endpoints used for user registration and
bridge configuration.

TLS verification is disabled for the bridge: it serves a self-signed certificate
and is only reachable on the local network. This is a deliberate relaxation of
the default TLS posture and applies to this client only.
"""

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.config import DEFAULT_REQUEST_TIMEOUT
from core.errors import BridgeApiError, TransportError
from core.logging_config import get_logger

# Resource kinds exposed under /clip/v2/resource
RESOURCE_KINDS = (
    'light',
    'room',
    'zone',
    'scene',
    'device',
    'bridge',
    'entertainment_configuration',
    'grouped_light',
)

# Disable SSL warnings for self-signed certificate
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

logger = get_logger(__name__)


class HueApiClient:
    """Thin HTTP client for a single bridge."""

    def __init__(self, bridge_ip: str, application_key: str | None = None,
                 timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: requests.Session | None = None):
        """Initialise HueApiClient.

        Args:
            bridge_ip: Bridge IP address or hostname
            application_key: Value of the hue-application-key header (the bridge username);
                not needed for user registration
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (mostly for tests)
        """
        self.bridge_ip = bridge_ip
        self.application_key = application_key
        self.timeout = timeout
        self.base_url = f"https://{bridge_ip}/clip/v2"
        self.v1_base_url = f"http://{bridge_ip}/api"
        self.session = session or requests.Session()
        self.session.verify = False  # Accept self-signed certificate
        self.session.headers.update({'Content-Type': 'application/json'})
        if application_key:
            self.session.headers.update({'hue-application-key': application_key})

    def _request(self, method: str, url: str, data=None):
        """Send one request and return the decoded JSON body.

        Raises:
            TransportError: If no response was received
            BridgeApiError: On a non-2xx status or a body that is not JSON
        """
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=data, timeout=self.timeout, verify=False)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Timed out waiting for Hue Bridge at {self.bridge_ip}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"No response received from Hue Bridge at {self.bridge_ip}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = response.text

        if not 200 <= response.status_code < 300:
            logger.warning("Bridge returned %s for %s %s", response.status_code, method, url)
            raise BridgeApiError(response.status_code, body)

        if isinstance(body, str):
            raise BridgeApiError(response.status_code, body,
                                 f"Hue API Error: unexpected non-JSON response for {method} {url}")
        return body

    def _resource_url(self, kind: str, resource_id: str | None = None) -> str:
        url = f"{self.base_url}/resource/{kind}"
        if resource_id:
            url = f"{url}/{resource_id}"
        return url

    # v2 resource CRUD

    def get_all(self, kind: str) -> list[dict]:
        """Get all resources of a kind."""
        body = self._request('GET', self._resource_url(kind))
        return body.get('data', []) if isinstance(body, dict) else []

    def get_by_id(self, kind: str, resource_id: str) -> dict | None:
        """Get a single resource by ID, or None if the bridge returned no data."""
        body = self._request('GET', self._resource_url(kind, resource_id))
        data = body.get('data', []) if isinstance(body, dict) else []
        return data[0] if data else None

    def create(self, kind: str, data: dict) -> dict:
        """Create a resource."""
        return self._request('POST', self._resource_url(kind), data)

    def update(self, kind: str, resource_id: str, data: dict) -> dict:
        """Update a resource."""
        return self._request('PUT', self._resource_url(kind, resource_id), data)

    def delete(self, kind: str, resource_id: str) -> dict:
        """Delete a resource."""
        return self._request('DELETE', self._resource_url(kind, resource_id))

    # v1 legacy API (plain HTTP)

    def create_user(self, device_type: str, generate_client_key: bool = True) -> list[dict]:
        """Register a new whitelist user; requires the link button to have been pressed."""
        payload = {'devicetype': device_type}
        if generate_client_key:
            payload['generateclientkey'] = True
        return self._request('POST', self.v1_base_url, payload)

    def get_full_state(self, username: str) -> dict:
        """Get the full v1 datastore."""
        return self._request('GET', f"{self.v1_base_url}/{username}")

    def get_config(self, username: str) -> dict:
        """Get the bridge configuration."""
        return self._request('GET', f"{self.v1_base_url}/{username}/config")

    def modify_config(self, username: str, data: dict) -> list[dict]:
        """Modify the bridge configuration."""
        return self._request('PUT', f"{self.v1_base_url}/{username}/config", data)

    def get_whitelist(self, username: str) -> dict:
        """Get all registered users."""
        return self._request('GET', f"{self.v1_base_url}/{username}/config/whitelist")

    def get_user(self, username: str, user: str) -> dict:
        """Get one whitelist entry."""
        return self._request('GET', f"{self.v1_base_url}/{username}/config/whitelist/{user}")

    def delete_user(self, username: str, user: str) -> list[dict]:
        """Remove a user from the whitelist."""
        return self._request('DELETE', f"{self.v1_base_url}/{username}/config/whitelist/{user}")
