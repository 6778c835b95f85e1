#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    config as config_command,
    plan as plan_command,
    render as render_command,
    shipments as shipments_command,
)


def register(app: typer.Typer) -> None:
    render_command.register(app)
    plan_command.register(app)
    shipments_command.register(app)
    config_command.register(app)
