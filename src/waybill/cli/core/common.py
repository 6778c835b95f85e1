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

import functools
import importlib.metadata
import json
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

import typer
from rich.traceback import install as install_rich_traceback

from ...codes.linear import barcode_png
from ...config import AppConfig, load_app_config
from ...store.records import RecordStore
from ..ui import console_err


def _run_cli(func: Callable[[], Any], *, debug: bool) -> None:
    if debug:
        install_rich_traceback(show_locals=True)
    try:
        result = func()
    except (OSError, RuntimeError, ValueError, TypeError, LookupError) as exc:
        if debug:
            raise
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if isinstance(result, int) and result != 0:
        raise typer.Exit(code=result)


def _ctx_value(ctx: typer.Context, key: str) -> Any:
    if ctx.obj is None:
        return None
    return ctx.obj.get(key)


def _ctx_flag(ctx: typer.Context, key: str) -> bool:
    return bool(_ctx_value(ctx, key))


def _paper_callback(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().upper()
    if normalized not in {"A4", "LETTER"}:
        raise typer.BadParameter("paper must be A4 or LETTER")
    return normalized


def _get_version() -> str:
    try:
        return importlib.metadata.version("waybill")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def _load_config(ctx: typer.Context) -> AppConfig:
    """Active configuration with the global ``--store`` override applied."""
    config = load_app_config(_ctx_value(ctx, "config"), paper_size=_ctx_value(ctx, "paper"))
    store_override = _ctx_value(ctx, "store")
    if store_override:
        config = replace(config, store_path=Path(store_override).expanduser())
    return config


def _open_store(config: AppConfig) -> RecordStore:
    return RecordStore(config.store_path)


def _barcode_encoder(config: AppConfig) -> Callable[[str], bytes]:
    return functools.partial(
        barcode_png,
        symbology=config.barcode_symbology,
        config=config.barcode_config,
    )


def _read_json_file(path: Path) -> Any:
    try:
        text = path.expanduser().read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"input file not found: {path}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON in {path}: {exc}") from exc
