"""Light-control operations built on the generic resource client."""

from core.client import HueApiClient
from models.types import ResourceSummary
from models.utils import resource_name


def build_power_state(on: bool, brightness: float | None = None) -> dict:
    """Body for a power update; dimming is only included when brightness is given."""
    state = {'on': {'on': on}}
    if brightness is not None:
        state['dimming'] = {'brightness': brightness}
    return state


def set_power(client: HueApiClient, kind: str, resource_id: str, on: bool,
              brightness: float | None = None) -> dict:
    """Switch a light or grouped_light on or off with a single update request.

    Brightness is a percentage (0-100); the bridge clamps out-of-range values.
    """
    return client.update(kind, resource_id, build_power_state(on, brightness))


def list_resources(client: HueApiClient, kind: str) -> list[ResourceSummary]:
    """List every resource of a kind as {id, name}, ordered by name."""
    summaries = [
        {'id': r.get('id'), 'name': resource_name(r, kind)}
        for r in client.get_all(kind)
    ]
    return sorted(summaries, key=lambda s: s['name'])
