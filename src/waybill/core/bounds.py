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

# Maximum tracking number length (characters, after trimming).
MAX_TRACKING_NUMBER_CHARS = 64

# Maximum packages per shipment record.
MAX_PACKAGES = 10_000

# Maximum history events per shipment record.
MAX_HISTORY_EVENTS = 10_000

# Maximum record store file size (UTF-8 bytes).
MAX_STORE_BYTES = 52_428_800

# Maximum characters of a package description drawn in a table row.
MAX_DESCRIPTION_CHARS = 40

# Maximum characters of history remarks drawn in a timeline row.
MAX_REMARKS_CHARS = 120


__all__ = [
    "MAX_DESCRIPTION_CHARS",
    "MAX_HISTORY_EVENTS",
    "MAX_PACKAGES",
    "MAX_REMARKS_CHARS",
    "MAX_STORE_BYTES",
    "MAX_TRACKING_NUMBER_CHARS",
]
