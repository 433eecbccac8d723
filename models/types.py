"""Type definitions for the Hue MCP adapter.

This module provides TypedDict definitions for structured data types used across
the application, improving type safety and IDE autocompletion.
"""

from typing import TypedDict


class Credentials(TypedDict):
    """Bridge-issued identity, stored as-is in the credentials file."""
    username: str
    clientKey: str


class DiscoveredBridge(TypedDict):
    """A bridge found via mDNS or the N-UPnP discovery endpoint."""
    id: str
    internalipaddress: str
    name: str | None


class ResourceSummary(TypedDict):
    """A resource reduced to its id and display name."""
    id: str
    name: str
