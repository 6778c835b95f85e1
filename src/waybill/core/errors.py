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

from dataclasses import dataclass


class NotFoundError(LookupError):
    def __init__(self, code: str) -> None:
        super().__init__(f"shipment not found: {code}")
        self.code = code


class ConfigurationError(ValueError):
    pass


class EncodingError(ValueError):
    pass


class GenerationError(RuntimeError):
    pass


@dataclass
class DecorativeDrawError(GenerationError):
    element: str
    detail: str

    def __str__(self) -> str:
        message = self.detail.strip() or "unknown error"
        return f"{self.element} skipped: {message}"


class StreamError(GenerationError):
    pass


__all__ = [
    "ConfigurationError",
    "DecorativeDrawError",
    "EncodingError",
    "GenerationError",
    "NotFoundError",
    "StreamError",
]
