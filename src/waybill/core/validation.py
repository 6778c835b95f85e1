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
from typing import Any

from .bounds import MAX_TRACKING_NUMBER_CHARS
from .errors import ConfigurationError


def require_list(value: object, *, label: str) -> list[Any] | tuple[Any, ...]:
    """Validate that value is a list/tuple."""
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{label} must be a list")
    return value


def require_dict(value: object, *, label: str) -> dict[Any, Any]:
    """Validate that value is a dict."""
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be a dict")
    return value


def require_max_items(value: list[Any] | tuple[Any, ...], limit: int, *, label: str) -> None:
    """Validate that a list does not exceed limit entries."""
    if len(value) > limit:
        raise ValueError(f"{label} exceeds {limit} entries: {len(value)}")


def require_tracking_number(value: object) -> str:
    """Normalize a tracking number, failing on blank or oversized values."""
    if not isinstance(value, str):
        raise ConfigurationError("tracking number is required")
    code = value.strip()
    if not code:
        raise ConfigurationError("tracking number is required")
    if len(code) > MAX_TRACKING_NUMBER_CHARS:
        raise ConfigurationError(
            f"tracking number exceeds {MAX_TRACKING_NUMBER_CHARS} characters: {len(code)}"
        )
    return code


def require_positive_number(value: object, *, label: str) -> float:
    """Validate that value is a finite number > 0."""
    number = _finite_number(value, label=label)
    if number <= 0:
        raise ConfigurationError(f"{label} must be positive")
    return number


def require_non_negative_number(value: object, *, label: str) -> float:
    """Validate that value is a finite number >= 0."""
    number = _finite_number(value, label=label)
    if number < 0:
        raise ConfigurationError(f"{label} must not be negative")
    return number


def require_positive_int(value: object, *, label: str) -> int:
    """Validate that value is a positive integer (> 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{label} must be a positive int")
    return value


def require_optional_positive_int(value: object, *, label: str) -> int | None:
    if value is None:
        return None
    return require_positive_int(value, label=label)


def _finite_number(value: object, *, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{label} must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise ConfigurationError(f"{label} must be finite")
    return number
