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

import unittest

from waybill.render.planner import PlanOptions
from waybill.render.spec import (
    SECTION_HISTORY,
    SECTION_PACKAGES,
    DocumentSpec,
    SectionSpec,
    document_spec,
)


class TestDocumentSpec(unittest.TestCase):
    def test_section_order(self) -> None:
        keys = [section.key for section in DocumentSpec().sections()]
        self.assertEqual(keys, [SECTION_PACKAGES, SECTION_HISTORY])

    def test_sections_are_uncapped_by_default(self) -> None:
        for section in DocumentSpec().sections():
            with self.subTest(section=section.key):
                self.assertIsNone(section.max_rows)
                self.assertIsNone(section.max_rows_per_page)

    def test_plan_options_follow_section(self) -> None:
        section = SectionSpec(
            key=SECTION_HISTORY,
            title="HISTORY",
            row_height_mm=16.0,
            header_height_mm=7.0,
            marker_height_mm=12.0,
            min_rows_per_page=2,
            max_rows=40,
        )
        self.assertEqual(
            section.plan_options(),
            PlanOptions(
                min_rows_per_page=2,
                max_rows_per_page=None,
                max_rows=40,
                header_height=7.0,
                marker_height=12.0,
            ),
        )

    def test_paper_defaults(self) -> None:
        self.assertEqual(document_spec().summary.height_mm, 150.0)
        self.assertEqual(document_spec("LETTER").summary.height_mm, 140.0)
        self.assertEqual(document_spec("LETTER").page.size, "LETTER")


if __name__ == "__main__":
    unittest.main()
