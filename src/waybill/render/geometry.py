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

from dataclasses import dataclass

from ..core.errors import ConfigurationError
from ..core.validation import require_non_negative_number, require_positive_number

# Paper sizes in millimetres (portrait).
PAPER_SIZES_MM: dict[str, tuple[float, float]] = {
    "A4": (210.0, 297.0),
    "A5": (148.0, 210.0),
    "LETTER": (215.9, 279.4),
    "LEGAL": (215.9, 355.6),
}

# Tolerance for coordinate comparisons (floating point row accumulation)
COORDINATE_EPSILON = 0.01

# Footer rule plus one line of 7pt text, measured up from the page edge.
FOOTER_HEIGHT_MM = 9.0
# Support title and contact line, stacked directly above the footer rule.
HELP_BLOCK_HEIGHT_MM = 8.0


@dataclass(frozen=True)
class PageGeometry:
    page_w: float
    page_h: float
    margin: float
    top_band: float
    bottom_band: float

    @property
    def usable_w(self) -> float:
        return self.page_w - 2 * self.margin

    @property
    def usable_height(self) -> float:
        return self.page_h - self.top_band - self.bottom_band - 2 * self.margin

    @property
    def content_top(self) -> float:
        """Y of the first content row, below the branding band."""
        return self.top_band + self.margin

    @property
    def content_bottom(self) -> float:
        return self.content_top + self.usable_height

    @property
    def footer_top(self) -> float:
        return self.page_h - self.bottom_band

    def validate(self) -> PageGeometry:
        require_positive_number(self.page_w, label="page width")
        require_positive_number(self.page_h, label="page height")
        require_non_negative_number(self.margin, label="page margin")
        require_non_negative_number(self.top_band, label="header band")
        require_non_negative_number(self.bottom_band, label="footer band")
        if self.bottom_band + COORDINATE_EPSILON < FOOTER_HEIGHT_MM:
            raise ConfigurationError(f"footer band must be at least {FOOTER_HEIGHT_MM:g} mm")
        if self.usable_w <= 0:
            raise ConfigurationError("page too narrow for configured margins")
        if self.usable_height <= 0:
            raise ConfigurationError("page too small for configured header and footer bands")
        return self


def paper_size_mm(size: str) -> tuple[float, float]:
    key = size.strip().upper()
    try:
        return PAPER_SIZES_MM[key]
    except KeyError:
        raise ConfigurationError(f"unknown paper size: {size}") from None


def geometry_for_paper(
    size: str,
    *,
    margin: float,
    top_band: float,
    bottom_band: float,
    width_mm: float | None = None,
    height_mm: float | None = None,
) -> PageGeometry:
    if width_mm and height_mm:
        page_w, page_h = float(width_mm), float(height_mm)
    else:
        page_w, page_h = paper_size_mm(size)
    return PageGeometry(
        page_w=page_w,
        page_h=page_h,
        margin=float(margin),
        top_band=float(top_band),
        bottom_band=float(bottom_band),
    ).validate()


def rows_fitting(available: float, row_height: float) -> int:
    if available <= 0:
        return 0
    return int((available + COORDINATE_EPSILON) // row_height)
