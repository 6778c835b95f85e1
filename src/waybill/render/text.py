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

import re
from typing import Callable, Sequence
from urllib.parse import quote

from ..core.errors import ConfigurationError
from ..core.models import PLACEHOLDER

DEFAULT_TRACKING_URL_TEMPLATE = "https://track.example.com/track?code={code}"

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]")
_HEX_COLOR = re.compile(r"^#?([0-9A-Fa-f]{6})$")

# Core PDF fonts only cover latin-1; common typographic characters are folded.
_LATIN1_FOLDS = {
    "–": "-",
    "—": "-",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "•": "|",
    "…": "...",
    " ": " ",
}


def display(value: str | None) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    return text or PLACEHOLDER


def truncate(text: str, limit: int) -> str:
    if limit <= 0:
        return ""
    return text[:limit]


def pdf_safe(text: str) -> str:
    """Fold text into the latin-1 range supported by the built-in fonts."""
    folded = "".join(_LATIN1_FOLDS.get(ch, ch) for ch in text)
    return folded.encode("latin-1", errors="replace").decode("latin-1")


def safe_filename(tracking_number: str, suffix: str = ".pdf") -> str:
    stem = _UNSAFE_FILENAME.sub("-", tracking_number.strip())
    return f"{stem or 'shipment'}{suffix}"


def tracking_url(template: str, code: str) -> str:
    """Public tracking page for ``code``; templates without ``{code}`` are used as-is."""
    if "{code}" not in template:
        return template
    return template.replace("{code}", quote(code.strip(), safe=""))


def hex_color(value: str) -> tuple[int, int, int]:
    match = _HEX_COLOR.match(value.strip())
    if match is None:
        raise ConfigurationError(f"invalid color: {value!r}")
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def font_line_height(size_pt: float, multiplier: float = 1.2) -> float:
    pt_to_mm = 0.3527777778
    return float(size_pt) * pt_to_mm * multiplier


def wrap_lines_to_width(
    measure: Callable[[str], float],
    lines: Sequence[str],
    max_width: float,
) -> list[str]:
    wrapped: list[str] = []
    for line in lines:
        if not line:
            wrapped.append("")
            continue
        current = ""
        for word in line.split(" "):
            candidate = word if not current else f"{current} {word}"
            if measure(candidate) <= max_width:
                current = candidate
                continue
            if current:
                wrapped.append(current)
                current = ""
            if measure(word) <= max_width:
                current = word
                continue
            parts: list[str] = []
            chunk = ""
            for ch in word:
                next_chunk = f"{chunk}{ch}"
                if chunk and measure(next_chunk) > max_width:
                    parts.append(chunk)
                    chunk = ch
                else:
                    chunk = next_chunk
            if chunk:
                parts.append(chunk)
            wrapped.extend(parts[:-1])
            current = parts[-1] if parts else ""
        if current:
            wrapped.append(current)
    return wrapped


__all__ = [
    "DEFAULT_TRACKING_URL_TEMPLATE",
    "display",
    "font_line_height",
    "hex_color",
    "pdf_safe",
    "safe_filename",
    "tracking_url",
    "truncate",
    "wrap_lines_to_width",
]
