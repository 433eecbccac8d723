"""MCP tool surface.

Each tool calls the controller and always answers with text: failures are
reported in the message rather than as protocol errors.

Controller calls block on HTTP, mDNS and the link-button wait, so every
handler runs them in a worker thread to keep the stdio event loop free.
"""

from functools import partial

import anyio
from mcp.server.fastmcp import FastMCP

from core.controller import HueController
from core.logging_config import get_logger

SERVER_NAME = 'hue-mcp'

logger = get_logger(__name__)


def _error_text(error: Exception) -> str:
    return str(error) or type(error).__name__


class HueTools:
    """The tool handlers, bound to one controller."""

    def __init__(self, controller: HueController):
        self.controller = controller

    async def _call(self, func, *args):
        return await anyio.to_thread.run_sync(partial(func, *args))

    async def turn_light_on(self, name: str) -> str:
        try:
            await self._call(self.controller.turn_light_on, name)
        except Exception as e:
            logger.warning("turnLightOn failed for '%s': %s", name, e)
            return f"Failed to turn on light: {_error_text(e)}"
        return f"Successfully turned on light: {name}"

    async def turn_light_off(self, name: str) -> str:
        try:
            await self._call(self.controller.turn_light_off, name)
        except Exception as e:
            logger.warning("turnLightOff failed for '%s': %s", name, e)
            return f"Failed to turn off light: {_error_text(e)}"
        return f"Successfully turned off light: {name}"

    async def list_all_lights(self) -> str:
        try:
            lights = await self._call(self.controller.list_all_lights)
        except Exception as e:
            logger.warning("listAllLights failed: %s", e)
            return f"Failed to list lights: {_error_text(e)}"
        return f"The available lights are: {', '.join(lights)}"

    async def list_all_rooms(self) -> str:
        try:
            rooms = await self._call(self.controller.list_all_rooms)
        except Exception as e:
            logger.warning("listAllRooms failed: %s", e)
            return f"Failed to list rooms: {_error_text(e)}"
        return f"The available rooms are: {', '.join(rooms)}"

    async def turn_room_lights_on(self, name: str, brightness: float | None = None) -> str:
        try:
            if brightness is None:
                await self._call(self.controller.turn_on_room_lights, name)
            else:
                await self._call(self.controller.turn_on_room_lights, name, brightness)
        except Exception as e:
            logger.warning("turnRoomLightsOn failed for '%s': %s", name, e)
            return f"Failed to turn on room lights: {_error_text(e)}"
        return f"Successfully turned on all lights in room: {name}"

    async def turn_room_lights_off(self, name: str) -> str:
        try:
            await self._call(self.controller.turn_off_room_lights, name)
        except Exception as e:
            logger.warning("turnRoomLightsOff failed for '%s': %s", name, e)
            return f"Failed to turn off room lights: {_error_text(e)}"
        return f"Successfully turned off all lights in room: {name}"


def build_server(controller: HueController, name: str = SERVER_NAME) -> FastMCP:
    """Create a FastMCP server with the light tools registered."""
    tools = HueTools(controller)
    server = FastMCP(name)

    server.add_tool(tools.turn_light_on, name='turnLightOn',
                    description='Turns on a light by providing its name')
    server.add_tool(tools.turn_light_off, name='turnLightOff',
                    description='Turns off a light by providing its name')
    server.add_tool(tools.list_all_lights, name='listAllLights',
                    description='List all the available light names')
    server.add_tool(tools.list_all_rooms, name='listAllRooms',
                    description='List all the available room names')
    server.add_tool(tools.turn_room_lights_on, name='turnRoomLightsOn',
                    description='Turns on all lights in a room by providing the room name')
    server.add_tool(tools.turn_room_lights_off, name='turnRoomLightsOff',
                    description='Turns off all lights in a room by providing the room name')

    return server
