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

import io
import unittest

from PIL import Image

from waybill.core.errors import DecorativeDrawError
from waybill.render.canvas import FpdfCanvas, decorative
from waybill.render.geometry import geometry_for_paper


def _png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), (0, 51, 102)).save(buf, format="PNG")
    return buf.getvalue()


class TestFpdfCanvas(unittest.TestCase):
    def setUp(self) -> None:
        self.geometry = geometry_for_paper("A4", margin=14, top_band=22, bottom_band=22)

    def test_draws_every_primitive(self) -> None:
        canvas = FpdfCanvas(self.geometry)
        canvas.add_page()
        canvas.draw_text(14, 40, "Tracking – “SWX1”", size=10, bold=True, color="#003366")
        canvas.draw_text(14, 50, "Right", size=8, width=100, align="R")
        canvas.draw_text(14, 140, "TRACKING COPY", size=54, width=182, align="C", angle=45)
        canvas.draw_rect(10, 10, 50, 20, fill="#F8F9FA", stroke="#E8EDF3")
        canvas.draw_rect(10, 40, 50, 20)
        canvas.draw_line(10, 70, 100, 70, color="#E8EDF3", line_width=0.5)
        canvas.draw_circle(20, 90, 2, fill="#28A745")
        canvas.draw_image(_png(), 120, 30, 20, 20)
        canvas.add_page()
        self.assertEqual(canvas.page_count, 2)
        output = canvas.output()
        self.assertTrue(output.startswith(b"%PDF"))

    def test_string_width_grows_with_size(self) -> None:
        canvas = FpdfCanvas(self.geometry)
        small = canvas.string_width("SWX123456", size=8)
        large = canvas.string_width("SWX123456", size=16)
        bold = canvas.string_width("SWX123456", size=8, bold=True)
        self.assertGreater(small, 0)
        self.assertAlmostEqual(large, small * 2, places=3)
        self.assertGreaterEqual(bold, small)

    def test_custom_page_size(self) -> None:
        geometry = geometry_for_paper(
            "A4", margin=5, top_band=10, bottom_band=10, width_mm=100, height_mm=150
        )
        canvas = FpdfCanvas(geometry)
        canvas.add_page()
        self.assertTrue(canvas.output().startswith(b"%PDF"))


class TestDecorative(unittest.TestCase):
    def test_failure_is_reported_not_raised(self) -> None:
        reports: list[DecorativeDrawError] = []
        with decorative("qr", reports.append):
            raise ValueError("bad png")
        self.assertEqual(len(reports), 1)
        self.assertEqual(reports[0].element, "qr")
        self.assertEqual(str(reports[0]), "qr skipped: bad png")

    def test_failure_without_message_uses_type_name(self) -> None:
        reports: list[DecorativeDrawError] = []
        with decorative("watermark", reports.append):
            raise KeyError
        self.assertEqual(str(reports[0]), "watermark skipped: KeyError")

    def test_success_reports_nothing(self) -> None:
        reports: list[DecorativeDrawError] = []
        with decorative("barcode", reports.append):
            pass
        self.assertEqual(reports, [])

    def test_interrupts_propagate(self) -> None:
        with self.assertRaises(KeyboardInterrupt):
            with decorative("barcode"):
                raise KeyboardInterrupt


if __name__ == "__main__":
    unittest.main()
