"""
Authentication module for Hue Bridge.

Handles the credentials file and link button registration. Credentials are
resolved in priority order: pre-provisioned environment values, the local
credentials file, then a fresh link-button registration.
"""

import json
import os
import time
from pathlib import Path

from core.client import HueApiClient
from core.config import DEFAULT_LINK_WAIT, DEFAULT_REQUEST_TIMEOUT, DEVICE_TYPE, Settings
from core.errors import HueError, RegistrationError
from core.logging_config import get_logger
from models.types import Credentials

logger = get_logger(__name__)


def get_credentials_path(settings: Settings) -> Path:
    """Path of the credentials file for these settings."""
    return Path(settings.credentials_path)


def load_credentials(path: Path) -> Credentials | None:
    """Load credentials from a JSON file.

    Missing, unreadable or malformed files are not errors.

    Returns:
        Dict with 'username' and 'clientKey', or None if not usable
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No credentials file found at %s", path)
        return None
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning("Error reading credentials file %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Invalid credentials in %s", path)
        return None

    username = data.get('username')
    client_key = data.get('clientKey')

    # Validate both values exist and are non-empty strings
    if username and client_key and isinstance(username, str) and isinstance(client_key, str):
        logger.info("Loaded Hue credentials from %s", path)
        return {'username': username, 'clientKey': client_key}

    logger.warning("Invalid credentials in %s", path)
    return None


def save_credentials(path: Path, credentials: Credentials) -> bool:
    """Save credentials to a JSON file.

    Creates the parent directory if it doesn't exist and restricts the file
    to the owner (600). Failures are logged, never raised: the caller already
    holds usable credentials in memory.

    Returns:
        True if saved successfully, False otherwise
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump({'username': credentials['username'], 'clientKey': credentials['clientKey']}, f, indent=2)
        os.chmod(path, 0o600)
    except OSError as e:
        logger.error("Failed to save credentials to %s: %s", path, e)
        return False

    logger.info("Saved new Hue credentials to %s", path)
    return True


def create_user_via_link_button(bridge_ip: str, link_wait: float = DEFAULT_LINK_WAIT,
                                device_type: str = DEVICE_TYPE,
                                timeout: float = DEFAULT_REQUEST_TIMEOUT,
                                client: HueApiClient | None = None) -> Credentials:
    """Create a new API user via link button authentication.

    Asks the operator to press the physical link button, waits link_wait
    seconds, then registers a user through the v1 API.

    Args:
        bridge_ip: Bridge IP address
        link_wait: Seconds to wait for the button press
        device_type: Application identifier (devicetype)
        timeout: Request timeout in seconds
        client: Optional client to use instead of a fresh unauthenticated one

    Raises:
        RegistrationError: If the bridge reports an error or answers unexpectedly
    """
    logger.warning("Creating new Hue user...")
    logger.warning("Press the link button on your Hue Bridge (waiting %ss)...", link_wait)
    time.sleep(link_wait)

    client = client or HueApiClient(bridge_ip, timeout=timeout)

    try:
        response = client.create_user(device_type)
    except HueError as e:
        raise RegistrationError(f"Failed to create Hue user: {e}") from e

    if not isinstance(response, list) or not response or not isinstance(response[0], dict):
        raise RegistrationError("Failed to create Hue user: Unexpected response format")

    entry = response[0]
    if 'error' in entry:
        error = entry['error']
        if isinstance(error, dict):
            description = error.get('description') or 'Unknown error'
        else:
            description = str(error) if error else 'Unknown error'
        raise RegistrationError(f"Failed to create Hue user: {description}")

    success = entry.get('success') or {}
    username = success.get('username')
    if not username:
        raise RegistrationError("Failed to create Hue user: Unexpected response format")

    logger.info("Successfully created Hue user")
    # Bridges that ignore generateclientkey reuse the username as the key
    return {'username': username, 'clientKey': success.get('clientkey') or username}


def obtain_credentials(bridge_ip: str, settings: Settings) -> Credentials:
    """Get usable credentials, registering a new user only as a last resort.

    Priority order:
    1. HUE_USERNAME / HUE_CLIENT_KEY from settings
    2. Credentials file
    3. Link button registration (result saved to the credentials file)

    Raises:
        RegistrationError: If registration was needed and failed
    """
    if settings.has_provisioned_credentials:
        logger.info("Using provided credentials from environment")
        return {'username': settings.username, 'clientKey': settings.client_key}

    path = get_credentials_path(settings)
    credentials = load_credentials(path)
    if credentials:
        return credentials

    credentials = create_user_via_link_button(
        bridge_ip,
        link_wait=settings.link_wait,
        timeout=settings.request_timeout,
    )
    save_credentials(path, credentials)
    return credentials
