"""
Control commands for direct manipulation of lights and rooms.

Includes power on/off for single lights and whole rooms (via grouped_light).
"""

import click

from commands.context import AppContext, pass_app
from core.errors import HueError

brightness_option = click.option(
    '--brightness', '-b', type=click.FloatRange(0, 100), default=100, show_default=True,
    help='Brightness percentage (0-100)'
)


@click.command()
@click.argument('light_name')
@brightness_option
@pass_app
def on_command(app: AppContext, light_name: str, brightness: float):
    """Turn a light ON (exact, case-sensitive name).

    \b
    Examples:
      hue-mcp on "Kitchen"
      hue-mcp on "Kitchen" -b 40
    """
    try:
        app.controller().turn_light_on(light_name, brightness)
    except HueError as e:
        raise click.ClickException(f"Failed to turn on light: {e}")
    click.secho(f"✓ {light_name} turned ON ({brightness:g}%)", fg='green')


@click.command()
@click.argument('light_name')
@pass_app
def off_command(app: AppContext, light_name: str):
    """Turn a light OFF (exact, case-sensitive name)."""
    try:
        app.controller().turn_light_off(light_name)
    except HueError as e:
        raise click.ClickException(f"Failed to turn off light: {e}")
    click.secho(f"✓ {light_name} turned OFF", fg='green')


@click.command()
@click.argument('room_name')
@brightness_option
@pass_app
def room_on_command(app: AppContext, room_name: str, brightness: float):
    """Turn all lights in a room ON (case-insensitive name).

    \b
    Examples:
      hue-mcp room-on "living room"
      hue-mcp room-on Office --brightness 60
    """
    try:
        app.controller().turn_on_room_lights(room_name, brightness)
    except HueError as e:
        raise click.ClickException(f"Failed to turn on room lights: {e}")
    click.secho(f"✓ All lights in {room_name} turned ON ({brightness:g}%)", fg='green')


@click.command()
@click.argument('room_name')
@pass_app
def room_off_command(app: AppContext, room_name: str):
    """Turn all lights in a room OFF (case-insensitive name)."""
    try:
        app.controller().turn_off_room_lights(room_name)
    except HueError as e:
        raise click.ClickException(f"Failed to turn off room lights: {e}")
    click.secho(f"✓ All lights in {room_name} turned OFF", fg='green')
