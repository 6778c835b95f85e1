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

"""Split variable-length lists into per-page portions.

Offsets are measured from the top of a page's content area, so a plan is
independent of where that area sits on the physical page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sized

from ..core.errors import ConfigurationError
from ..core.validation import (
    require_non_negative_number,
    require_optional_positive_int,
    require_positive_int,
    require_positive_number,
)
from .geometry import COORDINATE_EPSILON, rows_fitting

__all__ = [
    "ContinuationMarker",
    "PagePortion",
    "PlanOptions",
    "SectionPlan",
    "plan_section",
    "rows_per_page",
]


@dataclass(frozen=True)
class PlanOptions:
    min_rows_per_page: int = 1
    max_rows_per_page: int | None = None
    max_rows: int | None = None
    header_height: float = 0.0
    marker_height: float = 0.0

    def validate(self) -> PlanOptions:
        require_positive_int(self.min_rows_per_page, label="min_rows_per_page")
        require_optional_positive_int(self.max_rows_per_page, label="max_rows_per_page")
        require_optional_positive_int(self.max_rows, label="max_rows")
        require_non_negative_number(self.header_height, label="section header height")
        require_non_negative_number(self.marker_height, label="continuation marker height")
        if (
            self.max_rows_per_page is not None
            and self.max_rows_per_page < self.min_rows_per_page
        ):
            raise ConfigurationError("max_rows_per_page must be >= min_rows_per_page")
        return self


@dataclass(frozen=True)
class PagePortion:
    page_index: int
    start_index: int
    row_count: int
    y_offset: float

    @property
    def end_index(self) -> int:
        return self.start_index + self.row_count


@dataclass(frozen=True)
class ContinuationMarker:
    omitted: int
    shown: int
    page_index: int
    y_offset: float


@dataclass(frozen=True)
class SectionPlan:
    portions: tuple[PagePortion, ...]
    item_count: int
    page_break_before: bool = False
    continuation: ContinuationMarker | None = None
    end_page_index: int = 0
    end_offset: float = 0.0

    @property
    def shown_count(self) -> int:
        return sum(portion.row_count for portion in self.portions)

    @property
    def omitted_count(self) -> int:
        return self.item_count - self.shown_count

    @property
    def page_indices(self) -> tuple[int, ...]:
        indices = [portion.page_index for portion in self.portions]
        if self.continuation is not None:
            indices.append(self.continuation.page_index)
        return tuple(sorted(set(indices)))


def rows_per_page(available_height: float, row_height: float, options: PlanOptions) -> int:
    """Rows a fresh page holds, never less than ``min_rows_per_page``."""
    fitting = rows_fitting(available_height - options.header_height, row_height)
    rows = max(options.min_rows_per_page, fitting)
    if options.max_rows_per_page is not None:
        rows = min(rows, options.max_rows_per_page)
    if rows < 1:
        raise ConfigurationError("page holds no rows for this section")
    return rows


def plan_section(
    items: Sized,
    row_height: float,
    available_height: float,
    options: PlanOptions | None = None,
    *,
    start_page: int = 0,
    start_offset: float = 0.0,
) -> SectionPlan:
    """Plan how a list is spread over pages.

    ``available_height`` is the content height of a full page. When
    ``start_offset`` is positive the current page already holds other
    content; the first portion stays on it only if at least
    ``min_rows_per_page`` rows (or the whole shown list) fit below.
    """
    options = (options or PlanOptions()).validate()
    require_positive_number(row_height, label="row height")
    require_non_negative_number(available_height, label="available height")
    require_non_negative_number(start_offset, label="start offset")
    if start_page < 0:
        raise ConfigurationError("start page must not be negative")

    count = len(items)
    if count == 0:
        return SectionPlan(
            portions=(),
            item_count=0,
            end_page_index=start_page,
            end_offset=start_offset,
        )

    shown = count if options.max_rows is None else min(count, options.max_rows)
    omitted = count - shown
    fresh_capacity = rows_per_page(available_height, row_height, options)

    page = start_page
    offset = start_offset
    page_break_before = False
    shared_capacity = 0
    if offset > COORDINATE_EPSILON:
        shared_capacity = _shared_rows(available_height - offset, row_height, options)
        if shared_capacity < min(options.min_rows_per_page, shown):
            page += 1
            offset = 0.0
            page_break_before = True
    else:
        offset = 0.0

    portions: list[PagePortion] = []
    index = 0
    while index < shown:
        capacity = shared_capacity if offset > 0 else fresh_capacity
        rows = min(capacity, shown - index)
        portions.append(
            PagePortion(page_index=page, start_index=index, row_count=rows, y_offset=offset)
        )
        index += rows
        offset += options.header_height + rows * row_height
        if index < shown:
            page += 1
            offset = 0.0

    continuation = None
    if omitted > 0:
        if offset + options.marker_height > available_height + COORDINATE_EPSILON:
            page += 1
            offset = 0.0
        continuation = ContinuationMarker(
            omitted=omitted,
            shown=shown,
            page_index=page,
            y_offset=offset,
        )
        offset += options.marker_height

    return SectionPlan(
        portions=tuple(portions),
        item_count=count,
        page_break_before=page_break_before,
        continuation=continuation,
        end_page_index=page,
        end_offset=offset,
    )


def _shared_rows(remaining: float, row_height: float, options: PlanOptions) -> int:
    rows = rows_fitting(remaining - options.header_height, row_height)
    if options.max_rows_per_page is not None:
        rows = min(rows, options.max_rows_per_page)
    return rows
