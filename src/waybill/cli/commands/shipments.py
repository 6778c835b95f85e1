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

from pathlib import Path

import typer

from ...core.models import ShipmentRecord
from ...core.validation import require_dict
from ..core.common import _ctx_flag, _load_config, _open_store, _read_json_file, _run_cli
from ..ui import console, shipments_table

_ADD_HELP = (
    "Import shipments from a JSON file.\n\n"
    "The file holds one shipment document or a list of them; keys may be\n"
    "camelCase (trackingNumber) or snake_case (tracking_number).\n\n"
    "Examples:\n"
    "  waybill add shipment.json\n"
    "  waybill --store ./shipments.json add batch.json\n"
)
_UPDATE_HELP = (
    "Merge fields from a JSON object into a stored shipment.\n\n"
    "Examples:\n"
    "  waybill update SWX123456 changes.json\n"
)


def register(app: typer.Typer) -> None:
    app.command(help="Print a stored shipment as JSON.")(show)
    app.command(name="list", help="List stored shipments.")(list_shipments)
    app.command(help=_ADD_HELP)(add)
    app.command(help=_UPDATE_HELP)(update)
    app.command(help="Delete a stored shipment.")(delete)


def show(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Tracking number (case-insensitive)."),
) -> None:
    def _run() -> None:
        record = _open_store(_load_config(ctx)).find_by_tracking_number(code)
        console.print_json(data=record.to_dict())

    _run_cli(_run, debug=_ctx_flag(ctx, "debug"))


def list_shipments(ctx: typer.Context) -> None:
    quiet_value = _ctx_flag(ctx, "quiet")

    def _run() -> None:
        records = _open_store(_load_config(ctx)).list_records()
        if not records:
            if not quiet_value:
                console.print("[muted]No shipments stored.[/muted]")
            return
        console.print(shipments_table(records))

    _run_cli(_run, debug=_ctx_flag(ctx, "debug"))


def add(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON file with one shipment or a list."),
) -> None:
    quiet_value = _ctx_flag(ctx, "quiet")

    def _run() -> None:
        store = _open_store(_load_config(ctx))
        payload = _read_json_file(file)
        documents = payload if isinstance(payload, list) else [payload]
        records = [
            ShipmentRecord.from_dict(require_dict(item, label="shipment"))
            for item in documents
        ]
        for record in records:
            stored = store.add(record)
            if not quiet_value:
                console.print(f"[success]Added[/success] {stored.tracking_number}")

    _run_cli(_run, debug=_ctx_flag(ctx, "debug"))


def update(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Tracking number (case-insensitive)."),
    file: Path = typer.Argument(..., help="JSON object with the fields to change."),
) -> None:
    quiet_value = _ctx_flag(ctx, "quiet")

    def _run() -> None:
        store = _open_store(_load_config(ctx))
        changes = require_dict(_read_json_file(file), label="shipment changes")
        updated = store.update(code, changes)
        if not quiet_value:
            console.print(f"[success]Updated[/success] {updated.tracking_number}")

    _run_cli(_run, debug=_ctx_flag(ctx, "debug"))


def delete(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Tracking number (case-insensitive)."),
) -> None:
    quiet_value = _ctx_flag(ctx, "quiet")

    def _run() -> None:
        removed = _open_store(_load_config(ctx)).delete(code)
        if not quiet_value:
            console.print(f"[success]Deleted[/success] {removed.tracking_number}")

    _run_cli(_run, debug=_ctx_flag(ctx, "debug"))
