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

from dataclasses import dataclass, field, replace

from ..core.errors import ConfigurationError
from .geometry import (
    COORDINATE_EPSILON,
    FOOTER_HEIGHT_MM,
    HELP_BLOCK_HEIGHT_MM,
    PageGeometry,
    geometry_for_paper,
)
from .planner import PlanOptions

SECTION_PACKAGES = "packages"
SECTION_HISTORY = "history"


@dataclass(frozen=True)
class PageSpec:
    size: str = "A4"
    margin_mm: float = 14.0
    header_band_mm: float = 22.0
    footer_band_mm: float = 22.0
    width_mm: float | None = None
    height_mm: float | None = None


@dataclass(frozen=True)
class BrandSpec:
    name: str = "WAYBILL EXPRESS LOGISTICS"
    tagline: str = "Global Logistics Solutions"
    continuation_tagline: str = "Shipment Packages & History"
    font_family: str = "Helvetica"
    primary_color: str = "#003366"
    band_text_color: str = "#FFFFFF"
    band_subtext_color: str = "#E6EEF8"
    text_color: str = "#333333"
    muted_color: str = "#666666"
    stripe_color: str = "#F8F9FA"
    border_color: str = "#E8EDF3"
    support_title: str = "Need help?"
    support_line: str = "support@example.com | +1-800-000-0000"


@dataclass(frozen=True)
class SummarySpec:
    title: str = "SHIPMENT DETAILS"
    own_page: bool = True
    height_mm: float = 150.0
    line_height_mm: float = 5.0
    tracking_box_height_mm: float = 64.0


@dataclass(frozen=True)
class SectionSpec:
    key: str
    title: str
    row_height_mm: float
    header_height_mm: float
    gap_before_mm: float = 4.0
    marker_height_mm: float = 10.0
    min_rows_per_page: int = 1
    max_rows_per_page: int | None = None
    max_rows: int | None = None

    def plan_options(self) -> PlanOptions:
        return PlanOptions(
            min_rows_per_page=self.min_rows_per_page,
            max_rows_per_page=self.max_rows_per_page,
            max_rows=self.max_rows,
            header_height=self.header_height_mm,
            marker_height=self.marker_height_mm,
        )


@dataclass(frozen=True)
class WatermarkSpec:
    enabled: bool = True
    text: str = "TRACKING COPY"
    color: str = "#EEF2F7"
    font_size: float = 54.0
    angle: float = 45.0


def _packages_section() -> SectionSpec:
    return SectionSpec(
        key=SECTION_PACKAGES,
        title="PACKAGE DETAILS",
        row_height_mm=7.0,
        header_height_mm=14.0,
    )


def _history_section() -> SectionSpec:
    return SectionSpec(
        key=SECTION_HISTORY,
        title="HISTORY",
        row_height_mm=16.0,
        header_height_mm=7.0,
        min_rows_per_page=2,
    )


@dataclass(frozen=True)
class DocumentSpec:
    page: PageSpec = field(default_factory=PageSpec)
    brand: BrandSpec = field(default_factory=BrandSpec)
    summary: SummarySpec = field(default_factory=SummarySpec)
    packages: SectionSpec = field(default_factory=_packages_section)
    history: SectionSpec = field(default_factory=_history_section)
    watermark: WatermarkSpec = field(default_factory=WatermarkSpec)

    def geometry(self) -> PageGeometry:
        geometry = geometry_for_paper(
            self.page.size,
            margin=self.page.margin_mm,
            top_band=self.page.header_band_mm,
            bottom_band=self.page.footer_band_mm,
            width_mm=self.page.width_mm,
            height_mm=self.page.height_mm,
        )
        return self.require_footer_room(geometry)

    def footer_height(self) -> float:
        """Bottom band the footer needs, including the help block when one is printed."""
        if self.brand.support_line:
            return FOOTER_HEIGHT_MM + HELP_BLOCK_HEIGHT_MM
        return FOOTER_HEIGHT_MM

    def require_footer_room(self, geometry: PageGeometry) -> PageGeometry:
        needed = self.footer_height()
        if geometry.bottom_band + COORDINATE_EPSILON < needed:
            raise ConfigurationError(f"footer band must be at least {needed:g} mm")
        return geometry

    def sections(self) -> tuple[SectionSpec, SectionSpec]:
        return (self.packages, self.history)

    def with_paper(self, size: str) -> DocumentSpec:
        return replace(self, page=replace(self.page, size=size, width_mm=None, height_mm=None))


def document_spec(paper_size: str = "A4") -> DocumentSpec:
    spec = DocumentSpec(page=PageSpec(size=paper_size))
    if paper_size.strip().upper() == "LETTER":
        spec = replace(spec, summary=replace(spec.summary, height_mm=140.0))
    return spec


__all__ = [
    "BrandSpec",
    "DocumentSpec",
    "PageSpec",
    "SECTION_HISTORY",
    "SECTION_PACKAGES",
    "SectionSpec",
    "SummarySpec",
    "WatermarkSpec",
    "document_spec",
]
