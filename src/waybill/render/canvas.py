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

"""Drawing capability used by the renderer, and its fpdf2 backend.

Coordinates are page-local millimetres with the origin at the top-left
corner. Text is positioned by the top of its line box; rotated text pivots
on the centre of that box.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Protocol, cast

from fpdf import FPDF

from ..core.errors import DecorativeDrawError
from .geometry import PageGeometry
from .text import font_line_height, hex_color, pdf_safe


class Canvas(Protocol):
    def add_page(self) -> None: ...

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: float,
        bold: bool = False,
        color: str = "#000000",
        width: float = 0.0,
        align: str = "L",
        angle: float = 0.0,
    ) -> None: ...

    def draw_image(self, data: bytes, x: float, y: float, w: float, h: float) -> None: ...

    def draw_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        *,
        fill: str | None = None,
        stroke: str | None = None,
        line_width: float = 0.2,
    ) -> None: ...

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: str = "#000000",
        line_width: float = 0.2,
    ) -> None: ...

    def draw_circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        *,
        fill: str | None = None,
        stroke: str | None = None,
    ) -> None: ...

    def string_width(self, text: str, *, size: float, bold: bool = False) -> float: ...

    def output(self) -> bytes: ...


class FpdfCanvas:
    """Canvas backed by an in-memory fpdf2 document."""

    def __init__(self, geometry: PageGeometry, *, font_family: str = "Helvetica") -> None:
        self._font_family = font_family
        self._pdf = FPDF(unit="mm", format=cast(Any, (geometry.page_w, geometry.page_h)))
        self._pdf.set_auto_page_break(False)
        self._pdf.set_margins(0, 0, 0)
        self._pdf.set_creator("waybill")

    @property
    def page_count(self) -> int:
        return self._pdf.page_no()

    def add_page(self) -> None:
        self._pdf.add_page()

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: float,
        bold: bool = False,
        color: str = "#000000",
        width: float = 0.0,
        align: str = "L",
        angle: float = 0.0,
    ) -> None:
        pdf = self._pdf
        self._set_font(size, bold)
        pdf.set_text_color(*hex_color(color))
        line_h = font_line_height(size)
        if angle:
            box_w = width or pdf.get_string_width(pdf_safe(text))
            with pdf.rotation(angle, x=x + box_w / 2, y=y + line_h / 2):
                pdf.set_xy(x, y)
                pdf.cell(w=width, h=line_h, text=pdf_safe(text), align=align)
            return
        pdf.set_xy(x, y)
        pdf.cell(w=width, h=line_h, text=pdf_safe(text), align=align)

    def draw_image(self, data: bytes, x: float, y: float, w: float, h: float) -> None:
        self._pdf.image(io.BytesIO(data), x=x, y=y, w=w, h=h)

    def draw_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        *,
        fill: str | None = None,
        stroke: str | None = None,
        line_width: float = 0.2,
    ) -> None:
        style = self._apply_paint(fill, stroke, line_width)
        if style:
            self._pdf.rect(x, y, w, h, style=style)

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: str = "#000000",
        line_width: float = 0.2,
    ) -> None:
        self._pdf.set_draw_color(*hex_color(color))
        self._pdf.set_line_width(line_width)
        self._pdf.line(x1, y1, x2, y2)

    def draw_circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        *,
        fill: str | None = None,
        stroke: str | None = None,
    ) -> None:
        style = self._apply_paint(fill, stroke, 0.2)
        if style:
            diameter = 2 * radius
            self._pdf.ellipse(cx - radius, cy - radius, diameter, diameter, style=style)

    def string_width(self, text: str, *, size: float, bold: bool = False) -> float:
        self._set_font(size, bold)
        return float(self._pdf.get_string_width(pdf_safe(text)))

    def output(self) -> bytes:
        return bytes(self._pdf.output())

    def _set_font(self, size: float, bold: bool) -> None:
        self._pdf.set_font(self._font_family, style="B" if bold else "", size=size)

    def _apply_paint(self, fill: str | None, stroke: str | None, line_width: float) -> str:
        style = ""
        if fill is not None:
            self._pdf.set_fill_color(*hex_color(fill))
            style += "F"
        if stroke is not None:
            self._pdf.set_draw_color(*hex_color(stroke))
            self._pdf.set_line_width(line_width)
            style = "D" if not style else "DF"
        return style


@contextmanager
def decorative(
    element: str,
    report: Callable[[DecorativeDrawError], None] | None = None,
) -> Iterator[None]:
    """Run an optional draw step; a failure is reported and the step skipped."""
    try:
        yield
    except Exception as exc:  # any backend or codec failure degrades to omission
        error = DecorativeDrawError(element, str(exc) or type(exc).__name__)
        if report is not None:
            report(error)


__all__ = ["Canvas", "FpdfCanvas", "decorative"]
