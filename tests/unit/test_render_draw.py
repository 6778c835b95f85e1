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

import unittest
from dataclasses import replace
from datetime import datetime, timezone

from test_support import FAKE_PNG, RecordingCanvas, make_record

from waybill.core.errors import DecorativeDrawError
from waybill.core.models import PackageItem
from waybill.render.document import assemble
from waybill.render.draw import (
    DEFAULT_STATUS_COLOR,
    DocumentAssets,
    render_page,
    status_color,
    with_unit,
)
from waybill.render.geometry import FOOTER_HEIGHT_MM
from waybill.render.spec import DocumentSpec
from waybill.render.text import font_line_height

FIXED_TIME = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)
ASSETS = DocumentAssets(
    barcode_png=FAKE_PNG,
    qr_png=FAKE_PNG,
    tracking_url="https://track.example.com/track?code=SWX123456",
)


def _render(record, spec=None, *, canvas=None, assets=ASSETS):
    spec = spec or DocumentSpec()
    canvas = canvas or RecordingCanvas()
    plan = assemble(record, spec.geometry(), spec, generated_at=FIXED_TIME)
    reports = []
    for page in plan.pages:
        canvas.add_page()
        render_page(canvas, plan, page, spec, assets, report=reports.append)
    return canvas, plan, reports


def _text_call(canvas, text, *, page=1):
    return next(
        call
        for call in canvas.named("draw_text")
        if call.args[2] == text and call.page == page
    )


class RotationFailingCanvas(RecordingCanvas):
    def draw_text(self, x, y, text, **kwargs):
        if kwargs.get("angle"):
            raise RuntimeError("rotation unsupported")
        super().draw_text(x, y, text, **kwargs)


class TestRenderPage(unittest.TestCase):
    def test_summary_page_content(self) -> None:
        canvas, plan, reports = _render(make_record(packages=3, history=2))
        self.assertEqual(canvas.pages, plan.page_count)
        texts = canvas.texts(page=1)
        for expected in (
            "WAYBILL EXPRESS LOGISTICS",
            "SHIPMENT DETAILS",
            "SWX123456",
            "Tracking: SWX123456",
            "Processing",
            "Springfield",
            "Lisbon",
            "Jane Doe",
            "42 kg",
            "Scan to track",
            "TRACKING COPY",
            "Page 1 of 2",
        ):
            self.assertIn(expected, texts)
        self.assertNotIn("Need help?", texts)
        self.assertEqual(len(canvas.named("draw_image")), 2)
        self.assertEqual(reports, [])

    def test_missing_fields_use_placeholder(self) -> None:
        canvas, _plan, _reports = _render(make_record(carrier=None))
        texts = canvas.texts(page=1)
        self.assertIn("-", texts)
        self.assertIn("Product: - | Qty: - | Payment: - | Freight: -", texts)

    def test_continuation_page_content(self) -> None:
        canvas, _plan, _reports = _render(make_record(packages=3, history=2))
        texts = canvas.texts(page=2)
        for expected in (
            "Shipment Packages & History",
            "PACKAGE DETAILS",
            "Description",
            "Package 1",
            "Package 3",
            "HISTORY",
            "In Transit",
            "Location: Hub 1 | Updated by: ops",
            "Need help?",
            "Page 2 of 2",
        ):
            self.assertIn(expected, texts)
        self.assertNotIn("SHIPMENT DETAILS", texts)
        self.assertEqual(len(canvas.named("draw_circle")), 2)

    def test_footer_carries_reference(self) -> None:
        canvas, plan, _reports = _render(make_record())
        footer = (
            "Document generated: 2026-01-02 03:04 UTC | Tracking: SWX123456"
            f" | Ref: {plan.document_id}"
        )
        self.assertIn(footer, canvas.texts(page=1))

    def test_continued_section_title(self) -> None:
        canvas, _plan, _reports = _render(make_record(packages=40))
        self.assertIn("PACKAGE DETAILS", canvas.texts(page=2))
        self.assertIn("PACKAGE DETAILS (continued)", canvas.texts(page=3))

    def test_long_description_is_truncated(self) -> None:
        record = replace(
            make_record(),
            packages=(PackageItem(description="x" * 60, weight="3kg"),),
        )
        texts = _render(record)[0].texts(page=2)
        self.assertIn("x" * 40, texts)
        self.assertNotIn("x" * 41, texts)
        self.assertIn("3kg", texts)

    def test_row_cap_draws_markers(self) -> None:
        spec = DocumentSpec()
        spec = replace(
            spec,
            packages=replace(spec.packages, max_rows=12),
            history=replace(spec.history, max_rows=2),
        )
        canvas, _plan, _reports = _render(make_record(packages=25, history=5), spec)
        texts = canvas.texts()
        self.assertIn("+ 13 more packages available on the tracking page.", texts)
        self.assertIn("+ 3 more history entries. See full tracking:", texts)
        self.assertIn(ASSETS.tracking_url, texts)
        self.assertNotIn("Package 13", texts)

    def test_single_omitted_package_is_singular(self) -> None:
        spec = DocumentSpec()
        spec = replace(spec, packages=replace(spec.packages, max_rows=2))
        canvas, _plan, _reports = _render(make_record(packages=3), spec)
        self.assertIn("+ 1 more package available on the tracking page.", canvas.texts())

    def test_image_failure_is_reported_and_skipped(self) -> None:
        canvas = RecordingCanvas(fail_images=True)
        canvas, _plan, reports = _render(make_record(), canvas=canvas)
        self.assertEqual(
            [str(report) for report in reports],
            ["barcode skipped: image backend failure", "qr skipped: image backend failure"],
        )
        self.assertIn("Page 1 of 1", canvas.texts(page=1))
        self.assertNotIn("Scan to track", canvas.texts(page=1))

    def test_missing_assets_draw_no_images(self) -> None:
        canvas, _plan, reports = _render(make_record(), assets=None)
        self.assertEqual(canvas.named("draw_image"), [])
        self.assertEqual(reports, [])

    def test_watermark_can_be_disabled(self) -> None:
        spec = DocumentSpec()
        spec = replace(spec, watermark=replace(spec.watermark, enabled=False))
        canvas, _plan, _reports = _render(make_record(), spec)
        self.assertNotIn("TRACKING COPY", canvas.texts())

    def test_watermark_failure_is_reported_and_page_completes(self) -> None:
        canvas, _plan, reports = _render(make_record(), canvas=RotationFailingCanvas())
        self.assertEqual(len(reports), 1)
        self.assertIsInstance(reports[0], DecorativeDrawError)
        self.assertEqual(str(reports[0]), "watermark skipped: rotation unsupported")
        texts = canvas.texts(page=1)
        self.assertNotIn("TRACKING COPY", texts)
        for expected in ("WAYBILL EXPRESS LOGISTICS", "SHIPMENT DETAILS", "Page 1 of 1"):
            with self.subTest(expected=expected):
                self.assertIn(expected, texts)

    def test_footer_and_help_block_fit_the_bottom_band(self) -> None:
        base = DocumentSpec()
        for paper, band in (("A4", 22.0), ("A4", 17.0), ("LETTER", 17.0)):
            with self.subTest(paper=paper, band=band):
                spec = base.with_paper(paper)
                spec = replace(spec, page=replace(spec.page, footer_band_mm=band))
                canvas, plan, _reports = _render(make_record(), spec)
                geometry = plan.geometry
                rule_y = geometry.page_h - FOOTER_HEIGHT_MM
                rules = [
                    call for call in canvas.named("draw_line") if call.args[1] == rule_y
                ]
                self.assertTrue(rules)

                page_label = _text_call(canvas, "Page 1 of 1")
                self.assertGreater(page_label.args[1], rule_y)
                self.assertLessEqual(
                    page_label.args[1] + font_line_height(7.0), geometry.page_h
                )

                title = _text_call(canvas, spec.brand.support_title)
                contact = _text_call(canvas, spec.brand.support_line)
                self.assertGreaterEqual(title.args[1] + 1e-6, geometry.footer_top)
                self.assertLessEqual(contact.args[1] + font_line_height(8.0), rule_y)


class TestDrawHelpers(unittest.TestCase):
    def test_status_color(self) -> None:
        cases = (
            ("Delivered", "#28A745"),
            ("in transit", "#17A2B8"),
            ("EXCEPTION", "#DC3545"),
            ("Processing", DEFAULT_STATUS_COLOR),
            (None, DEFAULT_STATUS_COLOR),
        )
        for status, expected in cases:
            with self.subTest(status=status):
                self.assertEqual(status_color(status), expected)

    def test_with_unit(self) -> None:
        self.assertEqual(with_unit("5", "kg"), "5 kg")
        self.assertEqual(with_unit("5 KG", "kg"), "5 KG")
        self.assertEqual(with_unit(None, "kg"), "-")


if __name__ == "__main__":
    unittest.main()
