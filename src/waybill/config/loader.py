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

import math
import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from ..codes.linear import DEFAULT_SYMBOLOGY, BarcodeConfig
from ..codes.qr import ColorValue, QrConfig
from ..render.spec import (
    BrandSpec,
    DocumentSpec,
    PageSpec,
    SectionSpec,
    SummarySpec,
    WatermarkSpec,
    document_spec,
)
from ..render.text import DEFAULT_TRACKING_URL_TEMPLATE, hex_color
from .installer import DEFAULT_PAPER_SIZE, default_store_path, resolve_config_path

TRACKING_URL_ENV = "WAYBILL_PUBLIC_TRACKING_URL"

_BRAND_COLOR_FIELDS = frozenset(
    f.name for f in fields(BrandSpec) if f.name.endswith("_color")
)


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class AppConfig:
    config_path: Path | None
    paper_size: str
    document: DocumentSpec
    qr_config: QrConfig = field(default_factory=QrConfig)
    barcode_symbology: str = DEFAULT_SYMBOLOGY
    barcode_config: BarcodeConfig = field(default_factory=BarcodeConfig)
    tracking_url_template: str = DEFAULT_TRACKING_URL_TEMPLATE
    store_path: Path = field(default_factory=default_store_path)
    ui: UiDefaults = field(default_factory=UiDefaults)


def load_app_config(path: str | Path | None = None, *, paper_size: str | None = None) -> AppConfig:
    config_path = resolve_config_path(path, paper_size=paper_size)
    data = _load_toml(config_path)

    page_cfg = _get_dict(data, "page")
    resolved_paper_size = (
        paper_size
        or _parse_optional_unset_str(page_cfg.get("size"), field="page.size")
        or DEFAULT_PAPER_SIZE
    ).upper()
    document = build_document_spec(data, paper_size=resolved_paper_size)

    barcode_cfg = _get_dict(data, "barcode")
    tracking_cfg = _get_dict(data, "tracking")
    store_cfg = _get_dict(data, "store")
    url_template = os.environ.get(TRACKING_URL_ENV) or _parse_str(
        tracking_cfg.get("url_template"),
        field="tracking.url_template",
        default=DEFAULT_TRACKING_URL_TEMPLATE,
    )
    store_value = _parse_optional_unset_str(store_cfg.get("path"), field="store.path")
    return AppConfig(
        config_path=config_path,
        paper_size=resolved_paper_size,
        document=document,
        qr_config=build_qr_config(_get_dict(data, "qr")),
        barcode_symbology=_parse_str(
            barcode_cfg.get("symbology"), field="barcode.symbology", default=DEFAULT_SYMBOLOGY
        ).lower(),
        barcode_config=build_barcode_config(barcode_cfg),
        tracking_url_template=url_template,
        store_path=Path(store_value).expanduser() if store_value else default_store_path(),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def build_document_spec(data: dict[str, object], *, paper_size: str) -> DocumentSpec:
    base = document_spec(paper_size)
    page_cfg = _get_dict(data, "page")
    page = PageSpec(
        size=paper_size,
        margin_mm=_mm(page_cfg, "margin_mm", table="page", default=base.page.margin_mm),
        header_band_mm=_mm(
            page_cfg, "header_band_mm", table="page", default=base.page.header_band_mm
        ),
        footer_band_mm=_mm(
            page_cfg, "footer_band_mm", table="page", default=base.page.footer_band_mm
        ),
        width_mm=_optional_mm(page_cfg, "width_mm", table="page"),
        height_mm=_optional_mm(page_cfg, "height_mm", table="page"),
    )
    spec = replace(
        base,
        page=page,
        brand=_parse_brand(_get_dict(data, "brand"), base.brand),
        summary=_parse_summary(_get_dict(data, "summary"), base.summary),
        packages=_parse_section(_get_dict(data, "packages"), base.packages),
        history=_parse_section(_get_dict(data, "history"), base.history),
        watermark=_parse_watermark(_get_dict(data, "watermark"), base.watermark),
    )
    # Page, band and footer problems surface here, not at render time.
    spec.geometry()
    return spec


def build_qr_config(cfg: dict[str, object] | None = None) -> QrConfig:
    cfg = cfg or {}
    base = QrConfig()
    return QrConfig(
        error=_text(cfg, "error", table="qr", default=base.error).upper(),
        scale=_count(cfg, "scale", table="qr", default=base.scale),
        border=_count(cfg, "border", table="qr", default=base.border, allow_zero=True),
        dark=_parse_color(cfg.get("dark")),
        light=_parse_color(cfg.get("light")),
        module_shape=_text(cfg, "module_shape", table="qr", default=base.module_shape),
    ).validate()


def build_barcode_config(cfg: dict[str, object] | None = None) -> BarcodeConfig:
    cfg = cfg or {}
    base = BarcodeConfig()
    return BarcodeConfig(
        module_width=_mm(
            cfg, "module_width", table="barcode", default=base.module_width, positive=True
        ),
        module_height=_mm(
            cfg, "module_height", table="barcode", default=base.module_height, positive=True
        ),
        quiet_zone=_mm(cfg, "quiet_zone", table="barcode", default=base.quiet_zone),
        dpi=_count(cfg, "dpi", table="barcode", default=base.dpi),
    )


def _parse_brand(cfg: dict[str, object], base: BrandSpec) -> BrandSpec:
    changes: dict[str, str] = {}
    for item in fields(BrandSpec):
        if cfg.get(item.name) is None:
            continue
        if item.name in _BRAND_COLOR_FIELDS:
            changes[item.name] = _hex(
                cfg, item.name, table="brand", default=getattr(base, item.name)
            )
        else:
            changes[item.name] = _text(
                cfg, item.name, table="brand", default=getattr(base, item.name)
            )
    return replace(base, **changes)


def _parse_summary(cfg: dict[str, object], base: SummarySpec) -> SummarySpec:
    return replace(
        base,
        title=_text(cfg, "title", table="summary", default=base.title),
        own_page=_flag(cfg, "own_page", table="summary", default=base.own_page),
        height_mm=_mm(cfg, "height_mm", table="summary", default=base.height_mm, positive=True),
    )


def _parse_section(cfg: dict[str, object], base: SectionSpec) -> SectionSpec:
    table = base.key
    section = replace(
        base,
        title=_text(cfg, "title", table=table, default=base.title),
        row_height_mm=_mm(
            cfg, "row_height_mm", table=table, default=base.row_height_mm, positive=True
        ),
        header_height_mm=_mm(cfg, "header_height_mm", table=table, default=base.header_height_mm),
        gap_before_mm=_mm(cfg, "gap_before_mm", table=table, default=base.gap_before_mm),
        marker_height_mm=_mm(cfg, "marker_height_mm", table=table, default=base.marker_height_mm),
        min_rows_per_page=_count(
            cfg, "min_rows_per_page", table=table, default=base.min_rows_per_page
        ),
        # 0 lifts the cap
        max_rows_per_page=_optional_count(cfg, "max_rows_per_page", table=table),
        max_rows=_optional_count(cfg, "max_rows", table=table),
    )
    cap = section.max_rows_per_page
    if cap is not None and cap < section.min_rows_per_page:
        raise ValueError(f"{table}.max_rows_per_page must be >= {table}.min_rows_per_page")
    return section


def _parse_watermark(cfg: dict[str, object], base: WatermarkSpec) -> WatermarkSpec:
    return replace(
        base,
        enabled=_flag(cfg, "enabled", table="watermark", default=base.enabled),
        text=_text(cfg, "text", table="watermark", default=base.text),
        color=_hex(cfg, "color", table="watermark", default=base.color),
        font_size=_mm(cfg, "font_size", table="watermark", default=base.font_size, positive=True),
        angle=_number(cfg.get("angle"), field="watermark.angle", default=base.angle),
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_flag(cfg, "quiet", table="ui", default=False),
        no_color=_flag(cfg, "no_color", table="ui", default=False),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _parse_str(value: object, *, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value.strip()


def _parse_optional_unset_str(value: object, *, field: str) -> str | None:
    text = _parse_str(value, field=field, default="")
    return text or None


def _text(cfg: dict[str, object], key: str, *, table: str, default: str) -> str:
    return _parse_str(cfg.get(key), field=f"{table}.{key}", default=default)


def _hex(cfg: dict[str, object], key: str, *, table: str, default: str) -> str:
    value = cfg.get(key)
    if value is None:
        return default
    message = f"{table}.{key} must be a hex color such as #003366"
    if not isinstance(value, str):
        raise ValueError(message)
    try:
        hex_color(value)
    except ValueError as exc:
        raise ValueError(message) from exc
    text = value.strip()
    return text if text.startswith("#") else f"#{text}"


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _flag(cfg: dict[str, object], key: str, *, table: str, default: bool) -> bool:
    value = cfg.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{table}.{key} must be a boolean")


def _number(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{field} must be a finite number")
    return number


def _mm(
    cfg: dict[str, object],
    key: str,
    *,
    table: str,
    default: float,
    positive: bool = False,
) -> float:
    field = f"{table}.{key}"
    number = _number(cfg.get(key), field=field, default=default)
    if positive and number <= 0:
        raise ValueError(f"{field} must be a positive number")
    if number < 0:
        raise ValueError(f"{field} must be a non-negative number")
    return number


def _optional_mm(cfg: dict[str, object], key: str, *, table: str) -> float | None:
    if cfg.get(key) is None:
        return None
    return _mm(cfg, key, table=table, default=0.0) or None


def _whole(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{field} must be an integer")


def _count(
    cfg: dict[str, object],
    key: str,
    *,
    table: str,
    default: int,
    allow_zero: bool = False,
) -> int:
    value = cfg.get(key)
    if value is None:
        return default
    field = f"{table}.{key}"
    parsed = _whole(value, field=field)
    if parsed < 0 or (parsed == 0 and not allow_zero):
        kind = "non-negative" if allow_zero else "positive"
        raise ValueError(f"{field} must be a {kind} integer")
    return parsed


def _optional_count(cfg: dict[str, object], key: str, *, table: str) -> int | None:
    if cfg.get(key) is None:
        return None
    field = f"{table}.{key}"
    parsed = _whole(cfg[key], field=field)
    if parsed < 0:
        raise ValueError(f"{field} must be a positive integer or 0")
    return parsed or None


def _parse_color(value: object) -> ColorValue:
    if value is None:
        return None
    if isinstance(value, str):
        return None if value.strip().lower() in ("none", "transparent") else value
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        return tuple(int(part) for part in value)
    return None
