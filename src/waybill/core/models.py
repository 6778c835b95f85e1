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

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping

from .bounds import MAX_HISTORY_EVENTS, MAX_PACKAGES
from .validation import require_dict, require_list, require_max_items, require_tracking_number

PLACEHOLDER = "-"

_STRUCTURED_FIELDS = frozenset({"tracking_number", "status", "packages", "history"})


class ShipmentStatus(str, Enum):
    PROCESSING = "Processing"
    IN_TRANSIT = "In Transit"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"

    @classmethod
    def parse(cls, value: str) -> ShipmentStatus | str:
        """Map a stored status onto the enum; unknown values pass through as text."""
        key = "".join(ch for ch in value.lower() if ch.isalnum())
        for member in cls:
            if key == "".join(ch for ch in member.value.lower() if ch.isalnum()):
                return member
        return value


@dataclass(frozen=True)
class PackageItem:
    piece_type: str | None = None
    description: str | None = None
    dimensions: str | None = None
    weight: str | None = None
    quantity: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PackageItem:
        return cls(**_read_fields(cls, data, label="package"))

    def to_dict(self) -> dict[str, object]:
        return _write_fields(self)


@dataclass(frozen=True)
class HistoryEvent:
    date: str | None = None
    time: str | None = None
    location: str | None = None
    status: str | None = None
    updated_by: str | None = None
    remarks: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> HistoryEvent:
        return cls(**_read_fields(cls, data, label="history"))

    def to_dict(self) -> dict[str, object]:
        return _write_fields(self)


@dataclass(frozen=True)
class ShipmentRecord:
    tracking_number: str
    status: ShipmentStatus | str = ShipmentStatus.PROCESSING
    shipper_name: str | None = None
    shipper_address: str | None = None
    receiver_name: str | None = None
    receiver_address: str | None = None
    origin: str | None = None
    destination: str | None = None
    carrier: str | None = None
    carrier_reference_no: str | None = None
    shipment_type: str | None = None
    shipment_mode: str | None = None
    product_name: str | None = None
    quantity: str | None = None
    payment_mode: str | None = None
    freight_cost: str | None = None
    weight: str | None = None
    package_count: str | None = None
    expected_delivery_date: str | None = None
    departure_time: str | None = None
    pickup_date: str | None = None
    pickup_time: str | None = None
    comments: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    packages: tuple[PackageItem, ...] = ()
    history: tuple[HistoryEvent, ...] = ()

    @property
    def status_label(self) -> str:
        if isinstance(self.status, ShipmentStatus):
            return self.status.value
        return self.status or PLACEHOLDER

    @property
    def package_count_label(self) -> str:
        if self.package_count is not None:
            return self.package_count
        return str(len(self.packages))

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ShipmentRecord:
        """Build a record from a stored shipment document.

        Keys may be camelCase (``trackingNumber``) or snake_case
        (``tracking_number``). Numeric fields accept numbers or strings.
        """
        data = require_dict(data, label="shipment")
        scalar_names = [f.name for f in fields(cls) if f.name not in _STRUCTURED_FIELDS]
        values: dict[str, Any] = {
            name: _text(_lookup(data, name), label=f"shipment.{name}") for name in scalar_names
        }
        tracking = _lookup(data, "tracking_number")
        values["tracking_number"] = require_tracking_number(
            _text(tracking, label="shipment.tracking_number") or ""
        )
        status = _text(_lookup(data, "status"), label="shipment.status")
        values["status"] = ShipmentStatus.parse(status) if status else ShipmentStatus.PROCESSING

        raw_packages = require_list(_lookup(data, "packages") or [], label="shipment.packages")
        require_max_items(raw_packages, MAX_PACKAGES, label="shipment.packages")
        values["packages"] = tuple(
            PackageItem.from_dict(require_dict(item, label="shipment.packages[]"))
            for item in raw_packages
        )
        raw_history = require_list(_lookup(data, "history") or [], label="shipment.history")
        require_max_items(raw_history, MAX_HISTORY_EVENTS, label="shipment.history")
        values["history"] = tuple(
            HistoryEvent.from_dict(require_dict(item, label="shipment.history[]"))
            for item in raw_history
        )
        return cls(**values)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"trackingNumber": self.tracking_number}
        payload["status"] = self.status_label
        for f in fields(self):
            if f.name in _STRUCTURED_FIELDS:
                continue
            value = getattr(self, f.name)
            if value is not None:
                payload[camel_key(f.name)] = value
        payload["packages"] = [item.to_dict() for item in self.packages]
        payload["history"] = [event.to_dict() for event in self.history]
        return payload


def camel_key(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _lookup(data: Mapping[str, object], name: str) -> object:
    camel = camel_key(name)
    if camel in data:
        return data[camel]
    return data.get(name)


def _text(value: object, *, label: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a string or number")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value.strip() or None
    raise ValueError(f"{label} must be a string or number")


def _read_fields(cls: type, data: Mapping[str, object], *, label: str) -> dict[str, str | None]:
    return {f.name: _text(_lookup(data, f.name), label=f"{label}.{f.name}") for f in fields(cls)}


def _write_fields(item: object) -> dict[str, object]:
    payload: dict[str, object] = {}
    for f in fields(item):  # type: ignore[arg-type]
        value = getattr(item, f.name)
        if value is not None:
            payload[camel_key(f.name)] = value
    return payload


__all__ = [
    "HistoryEvent",
    "PLACEHOLDER",
    "PackageItem",
    "ShipmentRecord",
    "ShipmentStatus",
    "camel_key",
]
