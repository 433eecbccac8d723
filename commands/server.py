"""
Serve command: run the MCP server over stdio.
"""

import click

from commands.context import AppContext, pass_app
from core.errors import HueError
from core.logging_config import get_logger
from core.server import build_server

logger = get_logger(__name__)


@click.command()
@click.option('--eager', is_flag=True,
              help='Connect to the bridge before accepting tool calls instead of on first use')
@pass_app
def serve_command(app: AppContext, eager: bool):
    """Run the MCP server on stdin/stdout."""
    if eager:
        try:
            app.provider()
        except HueError as e:
            raise click.ClickException(str(e))

    server = build_server(app.controller())
    logger.info("Starting MCP server on stdio")
    server.run()
