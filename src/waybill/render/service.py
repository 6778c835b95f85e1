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

"""Outward boundary: tracking number in, finished PDF out."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from rich.console import Console

from ..codes.linear import barcode_png
from ..codes.qr import qr_png
from ..core.errors import (
    ConfigurationError,
    DecorativeDrawError,
    GenerationError,
    StreamError,
)
from ..core.models import ShipmentRecord
from ..core.validation import require_tracking_number
from ..store.records import RecordSource
from .canvas import Canvas, FpdfCanvas, decorative
from .document import RenderPlan, assemble
from .draw import DocumentAssets, render_page
from .geometry import PageGeometry
from .sink import BytesSink, OutputSink
from .spec import DocumentSpec
from .text import DEFAULT_TRACKING_URL_TEMPLATE, safe_filename, tracking_url

OUTPUT_CHUNK_BYTES = 64 * 1024

WarnFn = Callable[[str], None]
CanvasFactory = Callable[[PageGeometry, DocumentSpec], Canvas]

_console_err = Console(stderr=True)


@dataclass(frozen=True)
class GeneratedDocument:
    content: bytes
    filename: str
    page_count: int
    document_id: str
    warnings: tuple[str, ...] = ()


def default_warn(message: str) -> None:
    _console_err.print(f"[yellow]Warning:[/yellow] {message}")


def _fpdf_canvas(geometry: PageGeometry, spec: DocumentSpec) -> Canvas:
    return FpdfCanvas(geometry, font_family=spec.brand.font_family)


def generate_document(
    code: str,
    *,
    store: RecordSource,
    spec: DocumentSpec | None = None,
    geometry: PageGeometry | None = None,
    qr_encoder: Callable[[str], bytes] = qr_png,
    barcode_encoder: Callable[[str], bytes] = barcode_png,
    tracking_url_template: str = DEFAULT_TRACKING_URL_TEMPLATE,
    sink: OutputSink | None = None,
    warn: WarnFn | None = None,
    is_cancelled: Callable[[], bool] | None = None,
    generated_at: datetime | None = None,
    canvas_factory: CanvasFactory | None = None,
) -> GeneratedDocument:
    """Render the tracking document for ``code``.

    A blank code raises ConfigurationError before any lookup. An unknown
    code raises NotFoundError before anything is drawn. Barcode and QR
    failures only drop the image and emit a warning. The sink is aborted
    on every failure, lookup and planning included; cancellation and sink
    failures raise StreamError, so partial output is never committed.
    """
    target = sink if sink is not None else BytesSink()
    try:
        record, spec, plan = _plan_document(
            code, store=store, spec=spec, geometry=geometry, generated_at=generated_at
        )
    except BaseException:
        target.abort()
        raise
    geometry = plan.geometry
    warn = warn or default_warn
    warnings: list[str] = []

    def report(error: DecorativeDrawError) -> None:
        message = str(error)
        warnings.append(message)
        warn(message)

    cancelled = is_cancelled or (lambda: False)
    try:
        assets = _encode_assets(
            record.tracking_number,
            tracking_url(tracking_url_template, record.tracking_number),
            qr_encoder=qr_encoder,
            barcode_encoder=barcode_encoder,
            report=report,
        )
        canvas = (canvas_factory or _fpdf_canvas)(geometry, spec)
        for page in plan.pages:
            if cancelled():
                raise StreamError(f"generation cancelled before page {page.page_number}")
            canvas.add_page()
            render_page(canvas, plan, page, spec, assets, report=report)
        content = canvas.output()
        for start in range(0, len(content), OUTPUT_CHUNK_BYTES):
            if cancelled():
                raise StreamError("generation cancelled while writing output")
            target.write(content[start : start + OUTPUT_CHUNK_BYTES])
        target.commit()
    except (GenerationError, ConfigurationError):
        target.abort()
        raise
    except Exception as exc:
        target.abort()
        raise GenerationError(f"document generation failed: {exc}") from exc
    except BaseException:
        target.abort()
        raise

    return GeneratedDocument(
        content=content,
        filename=safe_filename(record.tracking_number),
        page_count=plan.page_count,
        document_id=plan.document_id,
        warnings=tuple(warnings),
    )


def _encode_assets(
    tracking_number: str,
    url: str,
    *,
    qr_encoder: Callable[[str], bytes],
    barcode_encoder: Callable[[str], bytes],
    report: Callable[[DecorativeDrawError], None],
) -> DocumentAssets:
    barcode_image: bytes | None = None
    qr_image: bytes | None = None
    with decorative("barcode", report):
        barcode_image = barcode_encoder(tracking_number)
    with decorative("qr", report):
        qr_image = qr_encoder(url)
    return DocumentAssets(barcode_png=barcode_image, qr_png=qr_image, tracking_url=url)


def _plan_document(
    code: str,
    *,
    store: RecordSource,
    spec: DocumentSpec | None,
    geometry: PageGeometry | None,
    generated_at: datetime | None,
) -> tuple[ShipmentRecord, DocumentSpec, RenderPlan]:
    tracking_number = require_tracking_number(code)
    record = store.find_by_tracking_number(tracking_number, case_insensitive=True)
    spec = spec or DocumentSpec()
    geometry = (geometry or spec.geometry()).validate()
    return record, spec, assemble(record, geometry, spec, generated_at=generated_at)


__all__ = ["GeneratedDocument", "OUTPUT_CHUNK_BYTES", "default_warn", "generate_document"]
