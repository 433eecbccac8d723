"""
Bridge discovery.

Resolves the bridge address from, in order: an explicit address, an mDNS browse
for the _hue._tcp service, and the Philips N-UPnP discovery endpoint.
"""

import threading

import requests
from zeroconf import ServiceBrowser, ServiceStateChange, Zeroconf

from core.config import DEFAULT_DISCOVERY_TIMEOUT
from core.errors import DiscoveryError
from core.logging_config import get_logger
from models.types import DiscoveredBridge

HUE_SERVICE_TYPE = '_hue._tcp.local.'
NUPNP_DISCOVERY_URL = 'https://discovery.meethue.com/'

logger = get_logger(__name__)


def _bridge_from_service_info(info) -> DiscoveredBridge | None:
    """Convert a zeroconf ServiceInfo into a DiscoveredBridge, if it carries an address."""
    addresses = info.parsed_addresses()
    if not addresses:
        return None
    # Prefer IPv4, fall back to whatever was announced first
    ipv4 = [a for a in addresses if ':' not in a]
    bridge_id = (info.properties or {}).get(b'bridgeid', b'')
    return {
        'id': bridge_id.decode('utf-8', 'replace') if isinstance(bridge_id, bytes) else str(bridge_id or ''),
        'internalipaddress': (ipv4 or addresses)[0],
        'name': info.name.removesuffix(f".{HUE_SERVICE_TYPE}") if info.name else None,
    }


def discover_bridges_mdns(timeout: float = DEFAULT_DISCOVERY_TIMEOUT,
                          first_only: bool = True) -> list[DiscoveredBridge]:
    """Browse mDNS for Hue bridges.

    Args:
        timeout: Seconds to wait for announcements
        first_only: Stop browsing as soon as one bridge with an address is found

    Returns:
        List of discovered bridges (empty if none answered in time)
    """
    found: list[DiscoveredBridge] = []
    done = threading.Event()
    lock = threading.Lock()

    def on_service_state_change(zeroconf, service_type, name, state_change):
        if state_change is not ServiceStateChange.Added:
            return
        info = zeroconf.get_service_info(service_type, name, timeout=3000)
        if info is None:
            return
        bridge = _bridge_from_service_info(info)
        if bridge is None:
            return
        with lock:
            if any(b['internalipaddress'] == bridge['internalipaddress'] for b in found):
                return
            logger.info("Found Hue Bridge: %s at %s", bridge['name'], bridge['internalipaddress'])
            found.append(bridge)
        if first_only:
            done.set()

    zeroconf = Zeroconf()
    try:
        browser = ServiceBrowser(zeroconf, HUE_SERVICE_TYPE, handlers=[on_service_state_change])
        done.wait(timeout)
        browser.cancel()
    finally:
        zeroconf.close()

    with lock:
        return list(found)


def discover_bridges_cloud(timeout: float = 5) -> list[DiscoveredBridge]:
    """Discover Hue bridges on the network using N-UPnP.

    Uses the Philips discovery service at https://discovery.meethue.com/.

    Returns:
        List of bridge dicts sorted by IP address; empty if discovery fails
    """
    try:
        response = requests.get(NUPNP_DISCOVERY_URL, timeout=timeout)
        response.raise_for_status()
        bridges = response.json()
    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 429:
            logger.warning("Philips discovery service rate limit reached")
        else:
            logger.warning("Bridge discovery failed: %s", e)
        return []
    except requests.exceptions.RequestException as e:
        logger.warning("Bridge discovery failed: %s", e)
        return []
    except ValueError as e:
        logger.warning("Failed to parse discovery response: %s", e)
        return []

    if not isinstance(bridges, list):
        return []
    bridges = [b for b in bridges if isinstance(b, dict) and b.get('internalipaddress')]
    return sorted(bridges, key=lambda b: b.get('internalipaddress', ''))


def resolve_bridge_address(explicit: str | None = None,
                           timeout: float = DEFAULT_DISCOVERY_TIMEOUT,
                           use_cloud_fallback: bool = True) -> str:
    """Return the bridge address to talk to.

    Args:
        explicit: Address supplied by configuration; returned as-is when set
        timeout: Upper bound in seconds for the mDNS browse
        use_cloud_fallback: Ask the N-UPnP endpoint when mDNS finds nothing

    Raises:
        DiscoveryError: If no bridge was found
    """
    if explicit:
        logger.info("Bridge IP is already known: %s", explicit)
        return explicit

    logger.info("Discovering Hue Bridge via mDNS (timeout %ss)...", timeout)
    bridges = discover_bridges_mdns(timeout=timeout)

    if not bridges and use_cloud_fallback:
        logger.info("No bridge answered mDNS, trying %s", NUPNP_DISCOVERY_URL)
        bridges = discover_bridges_cloud()

    if not bridges:
        raise DiscoveryError(
            "Failed to discover bridge: no Hue Bridge found on the network. "
            "Set HUE_BRIDGE_IP to the bridge address."
        )

    return bridges[0]['internalipaddress']
