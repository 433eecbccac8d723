"""Shared click context for CLI commands."""

from dataclasses import dataclass, field

import click

from core.bootstrap import ConnectionProvider
from core.config import Settings
from core.controller import HueController


@dataclass
class AppContext:
    """Settings plus a lazily bootstrapped bridge connection."""
    settings: Settings
    provider: ConnectionProvider = field(init=False)

    def __post_init__(self):
        self.provider = ConnectionProvider(self.settings)

    def controller(self) -> HueController:
        return HueController(self.provider)


pass_app = click.make_pass_decorator(AppContext)
