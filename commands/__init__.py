"""CLI command modules.

This package contains:
- context: Shared click context (settings and lazy bridge connection)
- server: MCP server command (serve)
- setup: Setup commands (pair, discover, setup) and the coloured command group
- inspection: Listing commands (lights, rooms)
- control: Direct control commands (on, off, room-on, room-off)
"""
