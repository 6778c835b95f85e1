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

from ..render.text import DEFAULT_TRACKING_URL_TEMPLATE, tracking_url
from .installer import (
    DEFAULT_PAPER_SIZE,
    PAPER_CONFIGS,
    default_store_path,
    init_user_config,
    resolve_config_path,
    user_config_needs_init,
)
from .loader import (
    AppConfig,
    UiDefaults,
    build_barcode_config,
    build_document_spec,
    build_qr_config,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "DEFAULT_PAPER_SIZE",
    "DEFAULT_TRACKING_URL_TEMPLATE",
    "PAPER_CONFIGS",
    "UiDefaults",
    "build_barcode_config",
    "build_document_spec",
    "build_qr_config",
    "default_store_path",
    "init_user_config",
    "load_app_config",
    "resolve_config_path",
    "tracking_url",
    "user_config_needs_init",
]
