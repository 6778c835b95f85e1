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

import functools
from pathlib import Path

import typer

from ...codes.qr import qr_png
from ...render.service import generate_document
from ...render.sink import FileSink
from ...render.text import safe_filename
from ..core.common import (
    _barcode_encoder,
    _ctx_flag,
    _load_config,
    _open_store,
    _run_cli,
)
from ..core.log import _info, _warning_printer
from ..ui import console

_RENDER_HELP = (
    "Render the tracking document (PDF) for a shipment.\n\n"
    "Examples:\n"
    "  waybill render SWX123456\n"
    "  waybill render SWX123456 -o ./out/\n"
    "  waybill --paper LETTER render SWX123456 -o swx.pdf\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_RENDER_HELP)(render)


def render(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Tracking number (case-insensitive)."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file or directory (defaults to <tracking-number>.pdf).",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = _ctx_flag(ctx, "quiet")
    debug_value = _ctx_flag(ctx, "debug")

    def _run() -> None:
        config = _load_config(ctx)
        store = _open_store(config)
        # Name the file after the stored tracking number, not the typed casing.
        record = store.find_by_tracking_number(code)
        output_path = _output_path(output, record.tracking_number)
        with FileSink(output_path) as sink:
            result = generate_document(
                record.tracking_number,
                store=store,
                spec=config.document,
                qr_encoder=functools.partial(qr_png, config=config.qr_config),
                barcode_encoder=_barcode_encoder(config),
                tracking_url_template=config.tracking_url_template,
                sink=sink,
                warn=_warning_printer(quiet=quiet_value),
            )
        _info(
            f"{result.page_count} page(s), ref {result.document_id}",
            quiet=quiet_value,
        )
        if not quiet_value:
            console.print(str(output_path))

    _run_cli(_run, debug=debug_value)


def _output_path(output: Path | None, code: str) -> Path:
    filename = safe_filename(code)
    if output is None:
        return Path.cwd() / filename
    resolved = output.expanduser()
    if resolved.is_dir() or str(output).endswith(("/", "\\")):
        return resolved / filename
    return resolved
