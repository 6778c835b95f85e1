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

import dataclasses
import unittest

from waybill.core.errors import ConfigurationError
from waybill.core.models import (
    HistoryEvent,
    PackageItem,
    ShipmentRecord,
    ShipmentStatus,
    camel_key,
)


class TestShipmentStatus(unittest.TestCase):
    def test_parse_known_and_unknown(self) -> None:
        cases = (
            ("Delivered", ShipmentStatus.DELIVERED),
            ("in transit", ShipmentStatus.IN_TRANSIT),
            ("IN-TRANSIT", ShipmentStatus.IN_TRANSIT),
            ("out for delivery", ShipmentStatus.OUT_FOR_DELIVERY),
            ("Customs Hold", "Customs Hold"),
        )
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(ShipmentStatus.parse(raw), expected)


class TestShipmentRecord(unittest.TestCase):
    def test_from_dict_accepts_camel_and_snake_keys(self) -> None:
        camel = ShipmentRecord.from_dict(
            {
                "trackingNumber": "SWX1",
                "shipperName": "Acme",
                "expectedDeliveryDate": "2026-02-01",
                "packages": [{"pieceType": "Box", "description": "Books"}],
                "history": [{"status": "Delivered", "updatedBy": "ops"}],
            }
        )
        snake = ShipmentRecord.from_dict(
            {
                "tracking_number": "SWX1",
                "shipper_name": "Acme",
                "expected_delivery_date": "2026-02-01",
                "packages": [{"piece_type": "Box", "description": "Books"}],
                "history": [{"status": "Delivered", "updated_by": "ops"}],
            }
        )
        self.assertEqual(camel, snake)
        self.assertEqual(camel.packages[0].piece_type, "Box")
        self.assertEqual(camel.history[0].updated_by, "ops")

    def test_numbers_become_text(self) -> None:
        record = ShipmentRecord.from_dict(
            {"trackingNumber": "SWX1", "weight": 12.5, "quantity": 3, "freightCost": 40.0}
        )
        self.assertEqual(record.weight, "12.5")
        self.assertEqual(record.quantity, "3")
        self.assertEqual(record.freight_cost, "40")

    def test_defaults(self) -> None:
        record = ShipmentRecord.from_dict({"trackingNumber": " SWX1 ", "origin": "   "})
        self.assertEqual(record.tracking_number, "SWX1")
        self.assertEqual(record.status, ShipmentStatus.PROCESSING)
        self.assertIsNone(record.origin)
        self.assertEqual(record.packages, ())
        self.assertEqual(record.history, ())
        self.assertEqual(record.package_count_label, "0")

    def test_unknown_status_is_kept_as_text(self) -> None:
        record = ShipmentRecord.from_dict({"trackingNumber": "SWX1", "status": "Customs Hold"})
        self.assertEqual(record.status_label, "Customs Hold")

    def test_missing_tracking_number_is_configuration_error(self) -> None:
        for document in ({}, {"trackingNumber": ""}, {"trackingNumber": "   "}):
            with self.subTest(document=document):
                with self.assertRaises(ConfigurationError):
                    ShipmentRecord.from_dict(document)

    def test_invalid_shapes_raise_value_error(self) -> None:
        cases = (
            {"trackingNumber": "SWX1", "packages": "nope"},
            {"trackingNumber": "SWX1", "history": {"status": "x"}},
            {"trackingNumber": "SWX1", "packages": ["nope"]},
            {"trackingNumber": "SWX1", "origin": ["a"]},
            {"trackingNumber": "SWX1", "weight": True},
        )
        for document in cases:
            with self.subTest(document=document):
                with self.assertRaises(ValueError):
                    ShipmentRecord.from_dict(document)

    def test_to_dict_uses_camel_case(self) -> None:
        record = ShipmentRecord(
            tracking_number="SWX1",
            status=ShipmentStatus.IN_TRANSIT,
            carrier_reference_no="REF-9",
            packages=(PackageItem(piece_type="Pallet"),),
            history=(HistoryEvent(updated_by="ops"),),
        )
        payload = record.to_dict()
        self.assertEqual(payload["trackingNumber"], "SWX1")
        self.assertEqual(payload["status"], "In Transit")
        self.assertEqual(payload["carrierReferenceNo"], "REF-9")
        self.assertNotIn("origin", payload)
        self.assertEqual(payload["packages"], [{"pieceType": "Pallet"}])
        self.assertEqual(payload["history"], [{"updatedBy": "ops"}])
        self.assertEqual(ShipmentRecord.from_dict(payload), record)

    def test_package_count_label_prefers_stored_value(self) -> None:
        record = ShipmentRecord(
            tracking_number="SWX1", package_count="7", packages=(PackageItem(),)
        )
        self.assertEqual(record.package_count_label, "7")

    def test_records_are_immutable(self) -> None:
        record = ShipmentRecord(tracking_number="SWX1")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            record.tracking_number = "OTHER"  # type: ignore[misc]

    def test_camel_key(self) -> None:
        self.assertEqual(camel_key("expected_delivery_date"), "expectedDeliveryDate")
        self.assertEqual(camel_key("origin"), "origin")


if __name__ == "__main__":
    unittest.main()
