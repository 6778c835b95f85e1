#!/usr/bin/env python3
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

import segno
from PIL import Image, ImageColor, ImageDraw

from ..core.errors import EncodingError

ColorValue = str | tuple[int, int, int] | tuple[int, int, int, int] | None

_MODULE_SHAPES = frozenset({"square", "rounded"})
_ROUNDED_RATIO = 0.2
_ERROR_LEVELS = frozenset({"L", "M", "Q", "H"})


@dataclass(frozen=True)
class QrConfig:
    error: str = "M"
    scale: int = 6
    border: int = 2
    dark: ColorValue = None
    light: ColorValue = None
    module_shape: str = "square"

    def validate(self) -> QrConfig:
        if self.error.upper() not in _ERROR_LEVELS:
            raise ValueError(f"unsupported QR error level: {self.error}")
        if self.scale < 1:
            raise ValueError("QR scale must be >= 1")
        if self.border < 0:
            raise ValueError("QR border must be >= 0")
        if self.module_shape.strip().lower() not in _MODULE_SHAPES:
            raise ValueError(f"unsupported module_shape: {self.module_shape}")
        return self


def make_qr(data: str, *, error: str = "M") -> Any:
    if not data:
        raise EncodingError("QR payload is empty")
    try:
        return segno.make(data, error=error.lower(), micro=False, boost_error=True)
    except segno.DataOverflowError as exc:
        raise EncodingError(f"QR payload too large: {len(data)} chars") from exc


def qr_png(data: str, config: QrConfig | None = None) -> bytes:
    """Encode ``data`` (normally the public tracking URL) as a PNG QR code."""
    config = (config or QrConfig()).validate()
    qr = make_qr(data, error=config.error)
    if config.module_shape.strip().lower() == "rounded":
        return _render_rounded(qr, config)
    buf = io.BytesIO()
    qr.save(
        buf,
        kind="png",
        scale=config.scale,
        border=config.border,
        **_segno_color_kwargs(dark=config.dark, light=config.light),
    )
    return buf.getvalue()


def _render_rounded(qr: Any, config: QrConfig) -> bytes:
    light = _color_to_rgba(config.light, (255, 255, 255, 255))
    dark = _color_to_rgba(config.dark, (0, 0, 0, 255))
    scale = config.scale
    width, height = qr.symbol_size(scale=scale, border=config.border)
    image = Image.new("RGBA", (width, height), light)
    draw = ImageDraw.Draw(image)
    radius = _ROUNDED_RATIO * scale
    for row_idx, row in enumerate(qr.matrix_iter(scale=1, border=config.border)):
        for col_idx, is_dark in enumerate(row):
            if not is_dark:
                continue
            x = col_idx * scale
            y = row_idx * scale
            draw.rounded_rectangle((x, y, x + scale, y + scale), radius=radius, fill=dark)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def _color_to_rgba(value: ColorValue, fallback: tuple[int, int, int, int]) -> tuple[int, ...]:
    if value is None:
        return fallback
    if isinstance(value, str):
        text = value.strip()
        if not text or text.lower() in ("none", "transparent"):
            return fallback
        rgba = ImageColor.getcolor(text, "RGBA")
        if isinstance(rgba, int):
            return (rgba, rgba, rgba, 255)
        return tuple(int(part) for part in rgba)
    if len(value) == 3:
        return (int(value[0]), int(value[1]), int(value[2]), 255)
    return tuple(int(part) for part in value)


def _segno_color_kwargs(**values: ColorValue) -> dict[str, object]:
    style: dict[str, object] = {}
    for key, value in values.items():
        if value is None:
            continue
        style[key] = value.strip() if isinstance(value, str) else value
    return style


__all__ = ["QrConfig", "make_qr", "qr_png"]
