#!/usr/bin/env python3
"""
Hue MCP CLI
Expose Philips Hue lights to MCP hosts and control them from the terminal.
"""

from dataclasses import replace
from pathlib import Path

import click

from commands.context import AppContext
from commands.control import off_command, on_command, room_off_command, room_on_command
from commands.inspection import lights_command, rooms_command
from commands.server import serve_command
from commands.setup import ColouredGroup, discover_command, pair_command, setup_command
from core.config import load_settings
from core.errors import ConfigurationError
from core.logging_config import setup_logging

__version__ = '0.1.0'


@click.group(
    cls=ColouredGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 120,
    }
)
@click.version_option(version=__version__, prog_name='Hue MCP')
@click.option('--bridge-ip', default=None, help='Bridge address (overrides HUE_BRIDGE_IP)')
@click.option('--credentials-path', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help='Credentials file (overrides HUE_CREDENTIALS_PATH)')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Log level (overrides HUE_LOG_LEVEL)')
@click.pass_context
def cli(ctx, bridge_ip, credentials_path, log_level):
    """Hue MCP - Control Philips Hue lights through the Model Context Protocol.

Run 'serve' to start the MCP server on stdio.

Authentication: HUE_USERNAME/HUE_CLIENT_KEY → Credentials file (~/.hue-credentials.json) → Link button
Run 'pair' for first-time setup or 'setup' to check configuration."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    overrides = {}
    if bridge_ip:
        overrides['bridge_ip'] = bridge_ip
    if credentials_path:
        overrides['credentials_path'] = credentials_path
    if log_level:
        overrides['log_level'] = log_level.upper()
    if overrides:
        settings = replace(settings, **overrides)

    setup_logging(settings.log_level)
    ctx.obj = AppContext(settings)


# Register server command
cli.add_command(serve_command, name='serve')

# Register setup commands
cli.add_command(pair_command, name='pair')
cli.add_command(discover_command, name='discover')
cli.add_command(setup_command, name='setup')

# Register inspection commands
cli.add_command(lights_command, name='lights')
cli.add_command(rooms_command, name='rooms')

# Register control commands
cli.add_command(on_command, name='on')
cli.add_command(off_command, name='off')
cli.add_command(room_on_command, name='room-on')
cli.add_command(room_off_command, name='room-off')


if __name__ == '__main__':
    cli()
