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

import io
from dataclasses import dataclass

import barcode
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter

from ..core.errors import EncodingError

DEFAULT_SYMBOLOGY = "code128"


@dataclass(frozen=True)
class BarcodeConfig:
    module_width: float = 0.3
    module_height: float = 12.0
    quiet_zone: float = 2.0
    dpi: int = 300


def barcode_png(
    text: str,
    symbology: str = DEFAULT_SYMBOLOGY,
    config: BarcodeConfig | None = None,
) -> bytes:
    """Encode ``text`` as a linear barcode PNG without the human-readable line.

    Raises EncodingError when the symbology is unknown or cannot carry the text.
    """
    config = config or BarcodeConfig()
    if not text or not text.strip():
        raise EncodingError("barcode text is empty")
    try:
        barcode_class = barcode.get_barcode_class(symbology.strip().lower())
    except BarcodeError as exc:
        raise EncodingError(f"unsupported barcode symbology: {symbology}") from exc

    options = {
        "write_text": False,
        "module_width": config.module_width,
        "module_height": config.module_height,
        "quiet_zone": config.quiet_zone,
        "dpi": config.dpi,
        "format": "PNG",
    }
    buf = io.BytesIO()
    try:
        code = barcode_class(text.strip(), writer=ImageWriter())
        code.write(buf, options=options)
    except (BarcodeError, KeyError, ValueError) as exc:
        raise EncodingError(f"cannot encode {text!r} as {symbology}: {exc}") from exc
    return buf.getvalue()


__all__ = ["BarcodeConfig", "DEFAULT_SYMBOLOGY", "barcode_png"]
