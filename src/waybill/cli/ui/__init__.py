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

import sys
from dataclasses import dataclass
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from ...core.models import ShipmentRecord
from ...render.document import RenderPlan
from ...render.text import display

THEME = Theme(
    {
        "title": "bold cyan",
        "accent": "cyan",
        "muted": "dim",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "status.delivered": "green",
        "status.transit": "cyan",
        "status.other": "white",
    }
)


@dataclass
class UIContext:
    theme: Theme
    console: Console
    console_err: Console


def isatty(stream, fallback) -> bool:
    if stream is not None:
        try:
            return bool(stream.isatty())
        except (OSError, ValueError, AttributeError):
            return False
    return bool(getattr(fallback, "isatty", lambda: False)())


def _build_console(*, stderr: bool) -> Console:
    raw = sys.__stderr__ if stderr else sys.__stdout__
    fallback = sys.stderr if stderr else sys.stdout
    return Console(stderr=stderr, theme=THEME, force_terminal=isatty(raw, fallback))


DEFAULT_CONTEXT = UIContext(
    theme=THEME,
    console=_build_console(stderr=False),
    console_err=_build_console(stderr=True),
)
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def configure_ui(*, no_color: bool, context: UIContext | None = None) -> None:
    context = context or DEFAULT_CONTEXT
    context.console.no_color = no_color
    context.console_err.no_color = no_color


def _status_style(label: str) -> str:
    key = "".join(ch for ch in label.lower() if ch.isalnum())
    if key == "delivered":
        return "status.delivered"
    if key in {"intransit", "outfordelivery"}:
        return "status.transit"
    return "status.other"


def shipments_table(records: Sequence[ShipmentRecord]) -> Table:
    table = Table(title="Shipments", header_style="title")
    table.add_column("Tracking number", style="accent", no_wrap=True)
    table.add_column("Status")
    table.add_column("Origin")
    table.add_column("Destination")
    table.add_column("Packages", justify="right")
    table.add_column("Events", justify="right")
    for record in records:
        label = record.status_label
        table.add_row(
            record.tracking_number,
            f"[{_status_style(label)}]{label}[/]",
            display(record.origin),
            display(record.destination),
            str(len(record.packages)),
            str(len(record.history)),
        )
    return table


def plan_table(plan: RenderPlan) -> Table:
    """One row per page: what is drawn on it and which list rows it holds."""
    table = Table(
        title=f"{plan.record.tracking_number} ({plan.page_count} pages, ref {plan.document_id})",
        header_style="title",
    )
    table.add_column("Page", justify="right", no_wrap=True)
    table.add_column("Content")
    table.add_column("Rows")
    for page in plan.pages:
        content: list[str] = []
        rows: list[str] = []
        if page.draws_summary:
            content.append("summary")
            rows.append("-")
        for section in page.sections:
            label = f"{section.section} (continued)" if section.continued else section.section
            content.append(label)
            rows.append(f"{section.start_index + 1}-{section.end_index}")
        for marker in page.markers:
            content.append(f"{marker.section} marker")
            rows.append(f"+{marker.omitted} omitted")
        table.add_row(str(page.page_number), "\n".join(content), "\n".join(rows))
    return table


__all__ = [
    "DEFAULT_CONTEXT",
    "THEME",
    "UIContext",
    "configure_ui",
    "console",
    "console_err",
    "isatty",
    "plan_table",
    "shipments_table",
]
