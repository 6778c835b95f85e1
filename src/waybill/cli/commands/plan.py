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

from ...render.document import assemble
from ..core.common import _ctx_flag, _load_config, _open_store, _run_cli
from ..ui import console, plan_table

_PLAN_HELP = (
    "Show how a shipment's document is paginated, without rendering it.\n\n"
    "Examples:\n"
    "  waybill plan SWX123456\n"
    "  waybill --paper LETTER plan SWX123456\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PLAN_HELP)(plan)


def plan(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Tracking number (case-insensitive)."),
) -> None:
    debug_value = _ctx_flag(ctx, "debug")

    def _run() -> None:
        config = _load_config(ctx)
        record = _open_store(config).find_by_tracking_number(code)
        document = config.document
        render_plan = assemble(record, document.geometry(), document)
        console.print(plan_table(render_plan))

    _run_cli(_run, debug=debug_value)
