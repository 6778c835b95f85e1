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

from waybill.codes.linear import BarcodeConfig, barcode_png
from waybill.codes.qr import QrConfig, make_qr, qr_png
from waybill.core.errors import EncodingError

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class TestQrCodes(unittest.TestCase):
    def test_qr_png_is_png(self) -> None:
        data = qr_png("https://track.example.com/track?code=SWX123456")
        self.assertTrue(data.startswith(PNG_MAGIC))

    def test_rounded_modules_render_rgba(self) -> None:
        data = qr_png("SWX123456", QrConfig(module_shape="rounded", dark="#003366"))
        with Image.open(io.BytesIO(data)) as image:
            self.assertEqual(image.mode, "RGBA")
            self.assertEqual(image.size[0], image.size[1])

    def test_scale_changes_size(self) -> None:
        small = make_qr("SWX123456").symbol_size(scale=2, border=0)
        with Image.open(io.BytesIO(qr_png("SWX123456", QrConfig(scale=2, border=0)))) as image:
            self.assertEqual(image.size, small)

    def test_invalid_config_raises(self) -> None:
        cases = (
            QrConfig(error="Z"),
            QrConfig(scale=0),
            QrConfig(border=-1),
            QrConfig(module_shape="dots"),
        )
        for config in cases:
            with self.subTest(config=config):
                with self.assertRaises(ValueError):
                    qr_png("SWX123456", config)

    def test_unencodable_payloads(self) -> None:
        for payload in ("", "x" * 5000):
            with self.subTest(length=len(payload)):
                with self.assertRaises(EncodingError):
                    qr_png(payload)


class TestLinearBarcodes(unittest.TestCase):
    def test_code128_png(self) -> None:
        data = barcode_png("SWX123456")
        self.assertTrue(data.startswith(PNG_MAGIC))

    def test_module_height_changes_image(self) -> None:
        short = barcode_png("SWX123456", config=BarcodeConfig(module_height=5.0, dpi=100))
        tall = barcode_png("SWX123456", config=BarcodeConfig(module_height=20.0, dpi=100))
        with Image.open(io.BytesIO(short)) as short_image:
            with Image.open(io.BytesIO(tall)) as tall_image:
                self.assertLess(short_image.size[1], tall_image.size[1])

    def test_encoding_errors(self) -> None:
        cases = (
            ("", "code128"),
            ("   ", "code128"),
            ("SWX123456", "no-such-symbology"),
            ("SWX123456", "ean13"),
        )
        for text, symbology in cases:
            with self.subTest(text=text, symbology=symbology):
                with self.assertRaises(EncodingError):
                    barcode_png(text, symbology)


if __name__ == "__main__":
    unittest.main()
