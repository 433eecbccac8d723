"""
Setup commands for the Hue MCP CLI.

Contains the custom Click group class (coloured command list and typo
suggestions) plus the pair, discover and setup commands.
"""

import click

from commands.context import AppContext, pass_app
from core.auth import create_user_via_link_button, load_credentials, save_credentials
from core.discovery import discover_bridges_cloud, discover_bridges_mdns, resolve_bridge_address
from core.errors import HueError
from models.utils import similarity_score


class ColouredGroup(click.Group):
    """Custom Group class that colours the command list and suggests similar commands."""

    def resolve_command(self, ctx, args):
        """Resolve command with suggestions for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg, ctx) from e
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        suggestions = []
        for command in self.list_commands(ctx):
            cmd_obj = self.get_command(ctx, command)
            if cmd_obj and not cmd_obj.hidden:
                score = similarity_score(cmd_name, command)
                if score > 0:
                    suggestions.append((score, command))

        suggestions.sort(reverse=True, key=lambda x: x[0])
        return [cmd for score, cmd in suggestions[:max_suggestions]]

    def format_commands(self, ctx, formatter):
        """Format commands with colour."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=500)))

        if commands:
            formatter.write_paragraph()
            formatter.write_text(click.style('Commands:', fg='yellow', bold=True))

            max_len = max(max(len(cmd[0]) for cmd in commands), 12)

            with formatter.indentation():
                for subcommand, help_text in commands:
                    formatter.write_text(
                        click.style(subcommand.ljust(max_len), fg='green') + '  ' +
                        click.style(help_text, fg='white', dim=True)
                    )


@click.command()
@click.option('--timeout', '-t', type=float, default=None,
              help='Seconds to browse mDNS (default: HUE_DISCOVERY_TIMEOUT)')
@click.option('--cloud/--no-cloud', default=True, help='Also query discovery.meethue.com')
@pass_app
def discover_command(app: AppContext, timeout: float | None, cloud: bool):
    """Find Hue bridges on the local network."""
    timeout = app.settings.discovery_timeout if timeout is None else timeout

    click.echo(f"Browsing mDNS for {timeout:g}s...")
    bridges = discover_bridges_mdns(timeout=timeout, first_only=False)

    if cloud:
        known = {b['internalipaddress'] for b in bridges}
        bridges += [b for b in discover_bridges_cloud() if b['internalipaddress'] not in known]

    if not bridges:
        click.secho("⚠ No bridges found", fg='yellow')
        click.echo("Set HUE_BRIDGE_IP (or pass --bridge-ip) to use a known address.")
        return

    click.echo()
    click.secho(f"Found {len(bridges)} Hue bridge{'s' if len(bridges) > 1 else ''}:", fg='cyan', bold=True)
    for i, bridge in enumerate(bridges, 1):
        name = bridge.get('name') or 'Philips hue'
        click.echo(f"  {click.style(str(i), fg='green', bold=True)}. {name} ({bridge['internalipaddress']})"
                   f" - ID: {bridge.get('id') or 'Unknown'}")


@click.command()
@click.option('--force', is_flag=True, help='Register a new user even if a credentials file exists')
@pass_app
def pair_command(app: AppContext, force: bool):
    """Register with the bridge via the link button and save credentials."""
    settings = app.settings
    path = settings.credentials_path

    if not force and load_credentials(path):
        click.secho(f"✓ Credentials already stored in {path}", fg='green')
        click.echo("Use --force to register a new user.")
        return

    try:
        bridge_ip = resolve_bridge_address(settings.bridge_ip, timeout=settings.discovery_timeout)
    except HueError as e:
        raise click.ClickException(str(e))

    click.echo()
    click.secho("╔═══════════════════════════════════════════════════════╗", fg='yellow', bold=True)
    click.secho("║  Press the LINK BUTTON on your Hue Bridge             ║", fg='yellow', bold=True)
    click.secho(f"║  Registering in {settings.link_wait:>4g} seconds...                      ║", fg='yellow', bold=True)
    click.secho("╚═══════════════════════════════════════════════════════╝", fg='yellow', bold=True)
    click.echo()

    try:
        credentials = create_user_via_link_button(
            bridge_ip, link_wait=settings.link_wait, timeout=settings.request_timeout
        )
    except HueError as e:
        raise click.ClickException(str(e))

    click.secho("✓ Successfully created API credentials!", fg='green', bold=True)

    if save_credentials(path, credentials):
        click.secho(f"✓ Credentials saved to {path}", fg='green')
    else:
        click.secho(f"✗ Failed to save to {path}", fg='red')
        click.echo("Export these instead:")
        click.echo(f"  export HUE_USERNAME={credentials['username']}")
        click.echo(f"  export HUE_CLIENT_KEY={credentials['clientKey']}")


@click.command()
@pass_app
def setup_command(app: AppContext):
    """Show current configuration and test the bridge connection.

    Configuration sources (priority order):
    1. Environment (HUE_BRIDGE_IP, HUE_USERNAME, HUE_CLIENT_KEY)
    2. Credentials file (HUE_CREDENTIALS_PATH, default ~/.hue-credentials.json)
    3. Link button registration (run 'pair')
    """
    settings = app.settings

    click.echo()
    click.secho("=== Hue Bridge Configuration ===", fg='cyan', bold=True)
    click.echo()

    click.echo(click.style("1. Bridge Address", fg='cyan', bold=True))
    if settings.bridge_ip:
        click.echo(f"   Bridge IP:   {settings.bridge_ip}")
    else:
        click.echo(f"   Bridge IP:   {click.style('not set (mDNS discovery)', fg='yellow')}")
    click.echo()

    click.echo(click.style("2. Credentials", fg='cyan', bold=True))
    if settings.has_provisioned_credentials:
        click.echo(f"   Status:      {click.style('✓ Provided by environment', fg='green')}")
    elif load_credentials(settings.credentials_path):
        click.echo(f"   Status:      {click.style('✓ Available', fg='green')}")
        click.echo(f"   Path:        {settings.credentials_path}")
    else:
        click.echo(f"   Status:      {click.style('✗ Not configured', fg='yellow')}")
        click.echo(f"   Path:        {settings.credentials_path} (does not exist)")
        click.echo()
        click.echo("Run this command to register with the bridge:")
        click.echo(click.style("  hue-mcp pair", fg='green', bold=True))
        click.echo()
        return
    click.echo("   App key:     username, sent as hue-application-key (clientKey is stored but not sent)")
    click.echo()

    click.echo(click.style("Connection Test", fg='cyan', bold=True))
    try:
        connection = app.provider()
        bridges = connection.client.get_all('bridge')
    except HueError as e:
        click.secho(f"✗ Connection failed: {e}", fg='red', bold=True)
        click.echo()
        return

    click.secho(f"✓ Successfully connected to bridge at {connection.bridge_ip}!", fg='green', bold=True)
    if bridges:
        click.echo(f"  Bridge ID:  {bridges[0].get('bridge_id', 'Unknown')}")
    click.echo()
