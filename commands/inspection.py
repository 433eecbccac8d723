"""
Inspection commands: list the lights and rooms known to the bridge.
"""

import click

from commands.context import AppContext, pass_app
from core.errors import HueError


@click.command(name='lights')
@pass_app
def lights_command(app: AppContext):
    """List all light names (sorted)."""
    try:
        lights = app.controller().list_all_lights()
    except HueError as e:
        raise click.ClickException(f"Failed to list lights: {e}")

    if not lights:
        click.echo("No lights found.")
        return

    click.secho(f"Lights ({len(lights)}):", fg='cyan', bold=True)
    for name in lights:
        click.echo(f"  • {name}")


@click.command(name='rooms')
@pass_app
def rooms_command(app: AppContext):
    """List all room names (sorted)."""
    try:
        rooms = app.controller().list_all_rooms()
    except HueError as e:
        raise click.ClickException(f"Failed to list rooms: {e}")

    if not rooms:
        click.echo("No rooms found.")
        return

    click.secho(f"Rooms ({len(rooms)}):", fg='cyan', bold=True)
    for name in rooms:
        click.echo(f"  • {name}")
