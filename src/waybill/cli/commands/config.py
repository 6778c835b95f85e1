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

"""``waybill config``: locate or edit the TOML file the other commands read."""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path

import typer

from ...config import resolve_config_path
from ..core.common import _ctx_flag, _ctx_value, _run_cli
from ..ui import console

_SYSTEM_OPENERS = frozenset({"default", "system"})

_CONFIG_HELP = (
    "Edit the document config used for rendering.\n\n"
    "The editor comes from --editor, then $VISUAL, then $EDITOR. With none of\n"
    "those set, the platform's file association opens the TOML file.\n\n"
    "Examples:\n"
    "  waybill config\n"
    "  waybill --paper LETTER config --print-path\n"
    '  waybill config -e "code -w"\n'
)


def register(app: typer.Typer) -> None:
    app.command(help=_CONFIG_HELP)(config)


def config(
    ctx: typer.Context,
    editor: str | None = typer.Option(
        None,
        "--editor",
        "-e",
        help="Command used to edit the file; 'default' forces the platform opener.",
        rich_help_panel="Editing",
    ),
    print_path: bool = typer.Option(
        False,
        "--print-path",
        help="Only show which config file is in effect.",
        rich_help_panel="Editing",
    ),
) -> None:
    quiet = _ctx_flag(ctx, "quiet")
    explicit = _ctx_value(ctx, "config")
    paper = _ctx_value(ctx, "paper")

    def _run() -> None:
        target = resolve_config_path(explicit, paper_size=paper)
        if not print_path:
            _open_in_editor(target, editor=editor, quiet=quiet)
            return
        console.print(str(target))

    _run_cli(_run, debug=_ctx_flag(ctx, "debug"))


def _open_in_editor(path: Path, *, editor: str | None, quiet: bool) -> None:
    target = Path(os.path.expandvars(str(path))).expanduser()
    if not target.exists():
        raise FileNotFoundError(f"config file not found: {target}")

    command = _resolve_editor_command(editor)
    if not quiet:
        via = "the system opener" if command is None else " ".join(command)
        console.print(f"[dim]Editing {target} via {via}[/dim]")
    if command is None:
        typer.launch(str(target))
    else:
        subprocess.run([*command, str(target)], check=False)


def _resolve_editor_command(editor: str | None) -> list[str] | None:
    if editor is None:
        editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or ""
    editor = editor.strip()
    if not editor or editor.lower() in _SYSTEM_OPENERS:
        return None
    return shlex.split(editor, posix=os.name != "nt")
