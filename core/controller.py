"""HueController: name-based light and room control.

This module maps human-readable light and room names to bridge resource IDs
and issues power/brightness updates through the resource client. Nothing is
cached between calls; every lookup fetches a fresh listing from the bridge.
"""

from core.bootstrap import BridgeConnection
from core.client import HueApiClient
from core.errors import NoGroupedLightError, NotFoundError
from core.logging_config import get_logger
from core.resources import list_resources, set_power
from models.utils import find_service_rid, find_similar_strings, resource_name

logger = get_logger(__name__)


def _not_found_message(kind: str, name: str, candidates: list[str]) -> str:
    message = f"{kind} with name '{name}' not found"
    suggestions = find_similar_strings(name, candidates)
    if suggestions:
        message += f". Did you mean: {', '.join(suggestions)}?"
    return message


class HueController:
    """Controls lights and rooms on a Hue Bridge by name."""

    def __init__(self, connection_provider):
        """Initialise HueController.

        Args:
            connection_provider: Zero-argument callable returning a BridgeConnection
                (normally a core.bootstrap.ConnectionProvider)
        """
        self._connection_provider = connection_provider

    @property
    def connection(self) -> BridgeConnection:
        return self._connection_provider()

    @property
    def client(self) -> HueApiClient:
        return self.connection.client

    def find_light_by_name(self, name: str) -> dict:
        """Find a light by exact, case-sensitive display name.

        Raises:
            NotFoundError: If no light has that name
        """
        lights = self.client.get_all('light')
        names = [resource_name(light, 'light') for light in lights]
        for light, light_name in zip(lights, names):
            if light_name == name:
                return light
        raise NotFoundError(_not_found_message('Light', name, names))

    def find_room_by_name(self, name: str) -> dict:
        """Find a room by display name, ignoring case.

        Raises:
            NotFoundError: If no room has that name
        """
        rooms = self.client.get_all('room')
        wanted = name.lower()
        for room in rooms:
            room_name = (room.get('metadata') or {}).get('name')
            if room_name and room_name.lower() == wanted:
                return room
        raise NotFoundError(_not_found_message('Room', name, [resource_name(r, 'room') for r in rooms]))

    def turn_light_on(self, name: str, brightness: float = 100):
        light = self.find_light_by_name(name)
        set_power(self.client, 'light', light['id'], True, brightness)
        logger.info("Light '%s' turned on with brightness %s%%", name, brightness)

    def turn_light_off(self, name: str):
        light = self.find_light_by_name(name)
        set_power(self.client, 'light', light['id'], False)
        logger.info("Light '%s' turned off", name)

    def _grouped_light_id(self, room_name: str) -> str:
        room = self.find_room_by_name(room_name)
        grouped_light_id = find_service_rid(room, 'grouped_light')
        if not grouped_light_id:
            raise NoGroupedLightError(f"No grouped light service found for room '{room_name}'")
        return grouped_light_id

    def turn_on_room_lights(self, name: str, brightness: float = 100):
        """Turn on every light in a room with one grouped_light request."""
        grouped_light_id = self._grouped_light_id(name)
        set_power(self.client, 'grouped_light', grouped_light_id, True, brightness)
        logger.info("All lights in room '%s' turned on with brightness %s%%", name, brightness)

    def turn_off_room_lights(self, name: str):
        """Turn off every light in a room with one grouped_light request."""
        grouped_light_id = self._grouped_light_id(name)
        set_power(self.client, 'grouped_light', grouped_light_id, False)
        logger.info("All lights in room '%s' turned off", name)

    def list_all_lights(self) -> list[str]:
        """Names of all lights, sorted."""
        return [summary['name'] for summary in list_resources(self.client, 'light')]

    def list_all_rooms(self) -> list[str]:
        """Names of all rooms, sorted."""
        return [summary['name'] for summary in list_resources(self.client, 'room')]
