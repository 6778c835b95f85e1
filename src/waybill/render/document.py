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

"""Turn a shipment record into an ordered plan of pages."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone

from ..core.errors import ConfigurationError
from ..core.models import ShipmentRecord
from ..core.validation import require_tracking_number
from .geometry import COORDINATE_EPSILON, PageGeometry
from .planner import SectionPlan, plan_section
from .spec import SECTION_HISTORY, SECTION_PACKAGES, DocumentSpec

DOCUMENT_ID_HEX_CHARS = 16


@dataclass(frozen=True)
class SectionSlice:
    section: str
    start_index: int
    row_count: int
    y_offset: float

    @property
    def end_index(self) -> int:
        return self.start_index + self.row_count

    @property
    def continued(self) -> bool:
        return self.start_index > 0


@dataclass(frozen=True)
class MarkerSlice:
    section: str
    omitted: int
    shown: int
    y_offset: float


@dataclass(frozen=True)
class FooterMeta:
    page_number: int
    page_total: int
    tracking_number: str
    document_id: str
    generated_at: str


@dataclass(frozen=True)
class PagePlan:
    index: int
    full_header: bool
    draws_summary: bool
    sections: tuple[SectionSlice, ...]
    markers: tuple[MarkerSlice, ...]
    footer: FooterMeta
    is_last: bool

    @property
    def page_number(self) -> int:
        return self.footer.page_number


@dataclass(frozen=True)
class RenderPlan:
    record: ShipmentRecord
    geometry: PageGeometry
    document_id: str
    generated_at: str
    pages: tuple[PagePlan, ...]
    section_plans: tuple[tuple[str, SectionPlan], ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def section_plan(self, key: str) -> SectionPlan:
        for name, plan in self.section_plans:
            if name == key:
                return plan
        raise KeyError(key)


def document_id_for(tracking_number: str) -> str:
    digest = hashlib.sha256(tracking_number.strip().upper().encode("utf-8")).hexdigest()
    return digest[:DOCUMENT_ID_HEX_CHARS]


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def section_items(record: ShipmentRecord, key: str) -> tuple[object, ...]:
    if key == SECTION_PACKAGES:
        return record.packages
    if key == SECTION_HISTORY:
        return record.history
    raise ConfigurationError(f"unknown section: {key}")


def assemble(
    record: ShipmentRecord,
    geometry: PageGeometry,
    spec: DocumentSpec | None = None,
    *,
    generated_at: datetime | None = None,
) -> RenderPlan:
    """Plan every page of the document for ``record``.

    The summary page is always emitted. Packages follow, then history;
    a section continues on the page where the previous one ended when
    the planner finds enough room, otherwise it starts on a fresh page.
    Raises ConfigurationError for a blank tracking number or an invalid
    geometry before anything is planned.
    """
    if not isinstance(record, ShipmentRecord):
        raise ConfigurationError("a shipment record is required")
    tracking_number = require_tracking_number(record.tracking_number)
    spec = spec or DocumentSpec()
    geometry = spec.require_footer_room(geometry.validate())
    available = geometry.usable_height

    summary_height = float(spec.summary.height_mm)
    if summary_height > available + COORDINATE_EPSILON:
        raise ConfigurationError("summary block does not fit the page content area")
    if spec.summary.own_page:
        page, offset = 1, 0.0
    else:
        page, offset = 0, summary_height

    plans: list[tuple[str, SectionPlan]] = []
    for section in spec.sections():
        items = section_items(record, section.key)
        start_offset = offset + section.gap_before_mm if offset > COORDINATE_EPSILON else 0.0
        plan = plan_section(
            items,
            section.row_height_mm,
            available,
            section.plan_options(),
            start_page=page,
            start_offset=start_offset,
        )
        plans.append((section.key, plan))
        if items:
            page, offset = plan.end_page_index, plan.end_offset

    last_index = 0
    for _key, plan in plans:
        for index in plan.page_indices:
            last_index = max(last_index, index)
    page_total = last_index + 1

    document_id = document_id_for(tracking_number)
    stamp = format_timestamp(generated_at or datetime.now(timezone.utc))
    pages = tuple(
        _page_plan(
            index,
            plans,
            FooterMeta(
                page_number=index + 1,
                page_total=page_total,
                tracking_number=tracking_number,
                document_id=document_id,
                generated_at=stamp,
            ),
            is_last=index == last_index,
        )
        for index in range(page_total)
    )
    return RenderPlan(
        record=record,
        geometry=geometry,
        document_id=document_id,
        generated_at=stamp,
        pages=pages,
        section_plans=tuple(plans),
    )


def _page_plan(
    index: int,
    plans: list[tuple[str, SectionPlan]],
    footer: FooterMeta,
    *,
    is_last: bool,
) -> PagePlan:
    slices: list[SectionSlice] = []
    markers: list[MarkerSlice] = []
    for key, plan in plans:
        for portion in plan.portions:
            if portion.page_index == index:
                slices.append(
                    SectionSlice(
                        section=key,
                        start_index=portion.start_index,
                        row_count=portion.row_count,
                        y_offset=portion.y_offset,
                    )
                )
        marker = plan.continuation
        if marker is not None and marker.page_index == index:
            markers.append(
                MarkerSlice(
                    section=key,
                    omitted=marker.omitted,
                    shown=marker.shown,
                    y_offset=marker.y_offset,
                )
            )
    return PagePlan(
        index=index,
        full_header=index == 0,
        draws_summary=index == 0,
        sections=tuple(slices),
        markers=tuple(markers),
        footer=footer,
        is_last=is_last,
    )


__all__ = [
    "FooterMeta",
    "MarkerSlice",
    "PagePlan",
    "RenderPlan",
    "SectionSlice",
    "assemble",
    "document_id_for",
    "format_timestamp",
    "section_items",
]
