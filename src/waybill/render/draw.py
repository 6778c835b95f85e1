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

"""Draw planned pages through a :class:`~waybill.render.canvas.Canvas`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..core.bounds import MAX_DESCRIPTION_CHARS, MAX_REMARKS_CHARS
from ..core.errors import DecorativeDrawError
from ..core.models import PLACEHOLDER, HistoryEvent, PackageItem, ShipmentRecord
from .canvas import Canvas, decorative
from .document import MarkerSlice, PagePlan, RenderPlan, SectionSlice
from .geometry import FOOTER_HEIGHT_MM, HELP_BLOCK_HEIGHT_MM, PageGeometry
from .spec import SECTION_HISTORY, SECTION_PACKAGES, DocumentSpec, SectionSpec
from .text import display, font_line_height, truncate, wrap_lines_to_width

STATUS_COLORS = {
    "delivered": "#28A745",
    "intransit": "#17A2B8",
    "exception": "#DC3545",
}
DEFAULT_STATUS_COLOR = "#6C757D"

# (label, share of the usable width)
PACKAGE_COLUMNS: tuple[tuple[str, float], ...] = (
    ("Type", 0.18),
    ("Description", 0.40),
    ("Dimensions", 0.18),
    ("Weight", 0.14),
    ("Qty", 0.10),
)

ReportFn = Callable[[DecorativeDrawError], None]


@dataclass(frozen=True)
class DocumentAssets:
    barcode_png: bytes | None = None
    qr_png: bytes | None = None
    tracking_url: str = ""


def status_color(status: str | None) -> str:
    key = "".join(ch for ch in (status or "").lower() if ch.isalnum())
    return STATUS_COLORS.get(key, DEFAULT_STATUS_COLOR)


def with_unit(value: str | None, unit: str) -> str:
    text = display(value)
    if text == PLACEHOLDER or text.lower().endswith(unit.lower()):
        return text
    return f"{text} {unit}"


def render_page(
    canvas: Canvas,
    plan: RenderPlan,
    page: PagePlan,
    spec: DocumentSpec,
    assets: DocumentAssets | None = None,
    *,
    report: ReportFn | None = None,
) -> None:
    """Draw one planned page onto the canvas's current page."""
    assets = assets or DocumentAssets()
    geometry = plan.geometry
    record = plan.record

    if spec.watermark.enabled and spec.watermark.text:
        with decorative("watermark", report):
            _draw_watermark(canvas, geometry, spec)
    _draw_header_band(canvas, geometry, spec, record, page)
    if page.draws_summary:
        _draw_summary(canvas, geometry, spec, record, assets, report)
    for section_slice in page.sections:
        section = _section_spec(spec, section_slice.section)
        if section.key == SECTION_PACKAGES:
            _draw_package_slice(canvas, geometry, spec, section, record.packages, section_slice)
        else:
            _draw_history_slice(canvas, geometry, spec, section, record.history, section_slice)
    for marker in page.markers:
        _draw_marker(canvas, geometry, spec, marker, assets)
    if page.is_last:
        _draw_help(canvas, geometry, spec)
    _draw_footer(canvas, geometry, spec, page)


def _section_spec(spec: DocumentSpec, key: str) -> SectionSpec:
    for section in spec.sections():
        if section.key == key:
            return section
    raise KeyError(key)


def _draw_watermark(canvas: Canvas, geometry: PageGeometry, spec: DocumentSpec) -> None:
    mark = spec.watermark
    line_h = font_line_height(mark.font_size)
    canvas.draw_text(
        geometry.margin,
        (geometry.page_h - line_h) / 2,
        mark.text,
        size=mark.font_size,
        bold=True,
        color=mark.color,
        width=geometry.usable_w,
        align="C",
        angle=mark.angle,
    )


def _draw_header_band(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    record: ShipmentRecord,
    page: PagePlan,
) -> None:
    brand = spec.brand
    band_h = geometry.top_band
    if band_h <= 0:
        return
    canvas.draw_rect(0, 0, geometry.page_w, band_h, fill=brand.primary_color)
    x = geometry.margin
    if page.full_header:
        title_size, sub_size = 16.0, 9.0
        subtitle = brand.tagline
    else:
        title_size, sub_size = 12.0, 8.0
        subtitle = brand.continuation_tagline
    title_h = font_line_height(title_size)
    top = max(0.0, (band_h - title_h - font_line_height(sub_size)) / 2)
    canvas.draw_text(x, top, brand.name, size=title_size, bold=True, color=brand.band_text_color)
    canvas.draw_text(
        x, top + title_h, subtitle, size=sub_size, color=brand.band_subtext_color
    )
    canvas.draw_text(
        x,
        top,
        f"Tracking: {record.tracking_number}",
        size=9.0,
        bold=True,
        color=brand.band_text_color,
        width=geometry.usable_w,
        align="R",
    )


def _draw_summary(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    record: ShipmentRecord,
    assets: DocumentAssets,
    report: ReportFn | None,
) -> None:
    brand = spec.brand
    summary = spec.summary
    x = geometry.margin
    width = geometry.usable_w
    y = geometry.content_top
    bottom = y + summary.height_mm

    canvas.draw_text(x, y, summary.title, size=12.0, bold=True, color=brand.primary_color)
    y += 8.0
    y = _draw_tracking_box(canvas, geometry, spec, record, assets, y, report)
    y += 6.0

    overview = (
        ("Origin", display(record.origin)),
        ("Destination", display(record.destination)),
        ("Carrier", display(record.carrier)),
        ("Service Type", display(record.shipment_type)),
        ("Total Weight", with_unit(record.weight, "kg")),
        ("Package Count", record.package_count_label),
    )
    y = _draw_field_grid(canvas, spec, overview, x, y, width, columns=3)
    y += 4.0

    column_w = (width - 6.0) / 2
    parties = (
        ("SHIPPER", record.shipper_name, record.shipper_address),
        ("RECEIVER", record.receiver_name, record.receiver_address),
    )
    party_bottom = y
    for offset, (label, name, address) in enumerate(parties):
        px = x + offset * (column_w + 6.0)
        party_bottom = max(
            party_bottom,
            _draw_party(canvas, spec, label, name, address, px, y, column_w),
        )
    y = party_bottom + 3.0

    canvas.draw_line(x, y, x + width, y, color=brand.border_color)
    y += 2.0
    details = " | ".join(
        (
            f"Product: {display(record.product_name)}",
            f"Qty: {display(record.quantity)}",
            f"Payment: {display(record.payment_mode)}",
            f"Freight: {_money(record.freight_cost)}",
        )
    )
    canvas.draw_text(x, y, details, size=9.0, color=brand.text_color, width=width)
    y += 5.0
    schedule = " | ".join(
        (
            f"Mode: {display(record.shipment_mode)}",
            f"Carrier ref: {display(record.carrier_reference_no)}",
            f"Departure: {display(record.departure_time)}",
            f"Pickup: {_joined(record.pickup_date, record.pickup_time)}",
        )
    )
    canvas.draw_text(x, y, schedule, size=9.0, color=brand.muted_color, width=width)
    y += 5.0

    if record.comments and y + summary.line_height_mm <= bottom:
        lines = wrap_lines_to_width(
            lambda text: canvas.string_width(text, size=8.5),
            [f"Comments: {record.comments}"],
            width,
        )
        room = int((bottom - y) // summary.line_height_mm)
        for line in lines[: max(0, min(2, room))]:
            canvas.draw_text(x, y, line, size=8.5, color=brand.muted_color)
            y += summary.line_height_mm


def _draw_tracking_box(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    record: ShipmentRecord,
    assets: DocumentAssets,
    y: float,
    report: ReportFn | None,
) -> float:
    brand = spec.brand
    x = geometry.margin
    width = geometry.usable_w
    box_h = spec.summary.tracking_box_height_mm
    canvas.draw_rect(x, y, width, box_h, fill=brand.stripe_color, stroke=brand.border_color)

    inner_x = x + 5.0
    cursor = y + 5.0
    canvas.draw_text(inner_x, cursor, "TRACKING NUMBER", size=8.0, color=brand.muted_color)
    cursor += 4.5
    canvas.draw_text(
        inner_x, cursor, record.tracking_number, size=18.0, bold=True, color=brand.primary_color
    )
    cursor += 9.0

    label = record.status_label
    pill_w = canvas.string_width(label, size=9.0, bold=True) + 8.0
    canvas.draw_rect(inner_x, cursor, pill_w, 6.0, fill=status_color(label))
    canvas.draw_text(
        inner_x, cursor + 1.0, label, size=9.0, bold=True, color="#FFFFFF", width=pill_w, align="C"
    )
    canvas.draw_text(
        inner_x + pill_w + 4.0,
        cursor + 1.0,
        f"Expected delivery: {display(record.expected_delivery_date)}",
        size=9.0,
        color=brand.text_color,
    )
    cursor += 10.0

    qr_size = min(box_h - 16.0, 44.0)
    if assets.barcode_png:
        with decorative("barcode", report):
            canvas.draw_image(assets.barcode_png, inner_x, cursor, min(90.0, width * 0.5), 20.0)
    if assets.qr_png and qr_size > 0:
        qr_x = x + width - qr_size - 6.0
        with decorative("qr", report):
            canvas.draw_image(assets.qr_png, qr_x, y + 4.0, qr_size, qr_size)
            canvas.draw_text(
                qr_x,
                y + 5.0 + qr_size,
                "Scan to track",
                size=7.5,
                color=brand.muted_color,
                width=qr_size,
                align="C",
            )
    return y + box_h


def _draw_field_grid(
    canvas: Canvas,
    spec: DocumentSpec,
    fields: tuple[tuple[str, str], ...],
    x: float,
    y: float,
    width: float,
    *,
    columns: int,
) -> float:
    brand = spec.brand
    cell_w = width / columns
    row_h = 10.0
    for index, (label, value) in enumerate(fields):
        row, column = divmod(index, columns)
        cx = x + column * cell_w
        cy = y + row * row_h
        canvas.draw_text(cx, cy, label.upper(), size=7.5, color=brand.muted_color)
        canvas.draw_text(
            cx, cy + 3.8, value, size=10.0, bold=True, color=brand.text_color, width=cell_w - 2.0
        )
    rows = -(-len(fields) // columns)
    return y + rows * row_h


def _draw_party(
    canvas: Canvas,
    spec: DocumentSpec,
    label: str,
    name: str | None,
    address: str | None,
    x: float,
    y: float,
    width: float,
) -> float:
    brand = spec.brand
    canvas.draw_text(x, y, label, size=8.0, bold=True, color=brand.primary_color)
    y += 4.5
    canvas.draw_text(x, y, display(name), size=10.0, bold=True, color=brand.text_color)
    y += 5.0
    lines = wrap_lines_to_width(
        lambda text: canvas.string_width(text, size=9.0),
        [display(address)],
        width,
    )
    for line in lines[:3]:
        canvas.draw_text(x, y, line, size=9.0, color=brand.text_color)
        y += 4.2
    return y


def _draw_section_title(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    section: SectionSpec,
    section_slice: SectionSlice,
    y: float,
) -> None:
    title = section.title
    if section_slice.continued:
        title = f"{title} (continued)"
    canvas.draw_text(
        geometry.margin, y, title, size=11.0, bold=True, color=spec.brand.primary_color
    )


def _draw_package_slice(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    section: SectionSpec,
    items: tuple[PackageItem, ...],
    section_slice: SectionSlice,
) -> None:
    brand = spec.brand
    x = geometry.margin
    width = geometry.usable_w
    top = geometry.content_top + section_slice.y_offset
    column_h = min(7.0, section.header_height_mm / 2)
    _draw_section_title(canvas, geometry, spec, section, section_slice, top)

    header_y = top + section.header_height_mm - column_h
    canvas.draw_rect(x, header_y, width, column_h, fill=brand.primary_color)
    cx = x
    for label, share in PACKAGE_COLUMNS:
        canvas.draw_text(
            cx + 2.0,
            header_y + (column_h - font_line_height(8.5)) / 2,
            label,
            size=8.5,
            bold=True,
            color=brand.band_text_color,
        )
        cx += width * share

    row_h = section.row_height_mm
    text_dy = max(0.0, (row_h - font_line_height(8.5)) / 2)
    y = top + section.header_height_mm
    for index in range(section_slice.start_index, section_slice.end_index):
        item = items[index]
        if index % 2 == 1:
            canvas.draw_rect(x, y, width, row_h, fill=brand.stripe_color)
        values = (
            display(item.piece_type),
            truncate(display(item.description), MAX_DESCRIPTION_CHARS),
            display(item.dimensions),
            with_unit(item.weight, "kg"),
            display(item.quantity),
        )
        cx = x
        for value, (_label, share) in zip(values, PACKAGE_COLUMNS):
            canvas.draw_text(
                cx + 2.0,
                y + text_dy,
                value,
                size=8.5,
                color=brand.text_color,
                width=width * share - 3.0,
            )
            cx += width * share
        canvas.draw_line(x, y + row_h, x + width, y + row_h, color=brand.border_color)
        y += row_h


def _draw_history_slice(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    section: SectionSpec,
    events: tuple[HistoryEvent, ...],
    section_slice: SectionSlice,
) -> None:
    brand = spec.brand
    x = geometry.margin
    width = geometry.usable_w
    top = geometry.content_top + section_slice.y_offset
    _draw_section_title(canvas, geometry, spec, section, section_slice, top)

    row_h = section.row_height_mm
    marker_x = x + 3.0
    text_x = x + 10.0
    text_w = width - 10.0
    radius = 1.8
    y = top + section.header_height_mm
    for index in range(section_slice.start_index, section_slice.end_index):
        event = events[index]
        color = status_color(event.status)
        center_y = y + 2.5
        if index + 1 < section_slice.end_index:
            canvas.draw_line(
                marker_x,
                center_y + radius,
                marker_x,
                center_y + row_h - radius,
                color=brand.border_color,
                line_width=0.6,
            )
        canvas.draw_circle(marker_x, center_y, radius, fill=color)
        canvas.draw_text(text_x, y, display(event.status), size=10.0, bold=True, color=color)
        canvas.draw_text(
            text_x,
            y,
            _joined(event.date, event.time),
            size=8.0,
            color=brand.muted_color,
            width=text_w,
            align="R",
        )
        location = f"Location: {event.location or 'Not specified'}"
        if event.updated_by:
            location = f"{location} | Updated by: {event.updated_by}"
        canvas.draw_text(text_x, y + 5.0, location, size=8.5, color=brand.text_color)
        if event.remarks:
            canvas.draw_text(
                text_x,
                y + 9.5,
                truncate(event.remarks, MAX_REMARKS_CHARS),
                size=8.0,
                color=brand.muted_color,
                width=text_w,
            )
        y += row_h


def _draw_marker(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    marker: MarkerSlice,
    assets: DocumentAssets,
) -> None:
    brand = spec.brand
    x = geometry.margin
    y = geometry.content_top + marker.y_offset + 2.0
    if marker.section == SECTION_HISTORY:
        text = f"+ {marker.omitted} more history entries. See full tracking:"
    else:
        noun = "package" if marker.omitted == 1 else "packages"
        text = f"+ {marker.omitted} more {noun} available on the tracking page."
    canvas.draw_text(x, y, text, size=9.0, color=brand.muted_color, width=geometry.usable_w)
    if marker.section == SECTION_HISTORY and assets.tracking_url:
        canvas.draw_text(
            x, y + 4.2, assets.tracking_url, size=8.5, color=brand.primary_color
        )


def _draw_help(canvas: Canvas, geometry: PageGeometry, spec: DocumentSpec) -> None:
    brand = spec.brand
    if not brand.support_line:
        return
    y = _footer_rule_y(geometry) - HELP_BLOCK_HEIGHT_MM
    canvas.draw_text(
        geometry.margin, y, brand.support_title, size=9.0, bold=True, color=brand.primary_color
    )
    canvas.draw_text(
        geometry.margin, y + 4.5, brand.support_line, size=8.0, color=brand.muted_color
    )


def _draw_footer(
    canvas: Canvas,
    geometry: PageGeometry,
    spec: DocumentSpec,
    page: PagePlan,
) -> None:
    brand = spec.brand
    footer = page.footer
    y = _footer_rule_y(geometry)
    x = geometry.margin
    canvas.draw_line(x, y, x + geometry.usable_w, y, color=brand.border_color)
    text = (
        f"Document generated: {footer.generated_at} | Tracking: {footer.tracking_number}"
        f" | Ref: {footer.document_id}"
    )
    canvas.draw_text(x, y + 1.5, text, size=7.0, color=brand.muted_color)
    canvas.draw_text(
        x,
        y + 1.5,
        f"Page {footer.page_number} of {footer.page_total}",
        size=7.0,
        color=brand.muted_color,
        width=geometry.usable_w,
        align="R",
    )


def _footer_rule_y(geometry: PageGeometry) -> float:
    return geometry.page_h - FOOTER_HEIGHT_MM


def _joined(first: str | None, second: str | None) -> str:
    parts = [part.strip() for part in (first, second) if part and part.strip()]
    return " ".join(parts) or PLACEHOLDER


def _money(value: str | None) -> str:
    text = display(value)
    if text == PLACEHOLDER or text.startswith("$"):
        return text
    return f"${text}"


__all__ = [
    "DEFAULT_STATUS_COLOR",
    "DocumentAssets",
    "PACKAGE_COLUMNS",
    "STATUS_COLORS",
    "render_page",
    "status_color",
    "with_unit",
]
