"""Core functionality for Hue MCP.

This package contains:
- client: HueApiClient for the v2 resource API and the legacy v1 API
- resources: set_power / list_resources built on the client
- discovery: Bridge address resolution (explicit, mDNS, N-UPnP)
- auth: Credentials file and link button registration
- bootstrap: One-shot BridgeConnection set-up
- controller: HueController for name-based light and room control
- server: MCP tool surface
- config, errors, logging_config: Settings, exceptions and logging
"""
