"""Exception hierarchy for bridge access.

Every error raised by the core modules derives from HueError so the tool
boundary and the CLI can catch one type and render a message.
"""


class HueError(Exception):
    """Base class for all Hue bridge errors."""


class ConfigurationError(HueError):
    """An environment setting could not be parsed."""


class DiscoveryError(HueError):
    """No bridge could be located on the network."""


class RegistrationError(HueError):
    """The bridge rejected a link-button user registration."""


class TransportError(HueError):
    """The request never received a response (connection refused, timeout, ...)."""


class BridgeApiError(HueError):
    """The bridge answered with a non-2xx status or an unreadable body."""

    def __init__(self, status_code: int, body, message: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Hue API Error: {status_code} {_describe_body(body)}".rstrip())


class NotFoundError(HueError):
    """A light or room name did not match anything on the bridge."""


class NoGroupedLightError(HueError):
    """A room has no grouped_light service to control."""


def _describe_body(body) -> str:
    """Pull the first error description out of a v2 error body, if there is one."""
    if isinstance(body, dict):
        errors = body.get('errors') or []
        if errors and isinstance(errors[0], dict):
            return errors[0].get('description', '')
        return ''
    if isinstance(body, str):
        return body[:200]
    return ''
