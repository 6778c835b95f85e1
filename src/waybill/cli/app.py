#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import typer
from rich.traceback import install as install_rich_traceback

from ..config import init_user_config, user_config_needs_init
from . import command_registry
from .core.common import _get_version, _paper_callback
from .ui import configure_ui, console, console_err

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Waybill: shipment tracking documents.",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"waybill {_get_version()}")
        raise typer.Exit()


def _startup(*, quiet: bool, no_color: bool, debug: bool, init_config: bool) -> bool:
    configure_ui(no_color=no_color)
    if debug:
        install_rich_traceback(show_locals=True)
    if init_config:
        config_dir = init_user_config()
        console.print(f"User config ready at {config_dir}")
        return True
    if user_config_needs_init():
        config_dir = init_user_config()
        if not quiet:
            console.print(f"[dim]Initialized user config at {config_dir}[/dim]")
    return False


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help="TOML config to load instead of the per-user file.",
        rich_help_panel="Documents",
    ),
    paper: str | None = typer.Option(
        None,
        "--paper",
        help="Paper size, A4 or LETTER; selects the matching config.",
        callback=_paper_callback,
        rich_help_panel="Documents",
    ),
    store: str | None = typer.Option(
        None,
        "--store",
        help="Shipment store JSON file (overrides [store] path).",
        rich_help_panel="Documents",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show tracebacks instead of short error messages.",
        rich_help_panel="Console",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Only print errors.",
        rich_help_panel="Console",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Plain console output without colour.",
        rich_help_panel="Console",
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help="Install the default configs for every paper size, then exit.",
        is_eager=True,
        rich_help_panel="Documents",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Print the waybill version and exit.",
        callback=_version_callback,
        is_eager=True,
        rich_help_panel="Console",
    ),
) -> None:
    _ = version
    try:
        should_exit = _startup(
            quiet=quiet,
            no_color=no_color,
            debug=debug,
            init_config=init_config,
        )
    except (OSError, RuntimeError, ValueError) as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if should_exit:
        raise typer.Exit()
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "paper": paper,
            "store": store,
            "debug": debug,
            "quiet": quiet,
            "no_color": no_color,
        }
    )
    if ctx.invoked_subcommand is None:
        console_err.print(
            "[red]Error:[/red] No subcommand provided. Run `waybill --help` for available commands."
        )
        raise typer.Exit(code=2)


command_registry.register(app)


def main() -> None:
    app()
