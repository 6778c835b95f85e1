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

"""JSON-file shipment store.

The file holds a list of shipment documents in the camelCase shape used by
:meth:`ShipmentRecord.to_dict`. A missing file is an empty store. Writes go
through a temporary file that replaces the store atomically.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Protocol

from ..core.bounds import MAX_STORE_BYTES
from ..core.errors import NotFoundError
from ..core.models import ShipmentRecord, camel_key
from ..core.validation import require_dict, require_list, require_tracking_number


class RecordSource(Protocol):
    def find_by_tracking_number(
        self, code: str, *, case_insensitive: bool = True
    ) -> ShipmentRecord: ...


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _codes_match(stored: str, wanted: str, *, case_insensitive: bool) -> bool:
    if case_insensitive:
        return stored.casefold() == wanted.casefold()
    return stored == wanted


def _document_code(document: Mapping[str, Any]) -> str:
    value = document.get("trackingNumber", document.get("tracking_number"))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return ""
    return value.strip()


class RecordStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_documents(self) -> list[dict[str, Any]]:
        try:
            size = self.path.stat().st_size
        except FileNotFoundError:
            return []
        if size > MAX_STORE_BYTES:
            raise ValueError(
                f"shipment store exceeds {MAX_STORE_BYTES} bytes: {self.path} ({size} bytes)"
            )
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid shipment store {self.path}: {exc}") from exc
        if isinstance(payload, dict) and "shipments" in payload:
            payload = payload["shipments"]
        documents = require_list(payload, label="shipment store")
        return [require_dict(item, label="shipment store entry") for item in documents]

    def _write_documents(self, documents: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(documents, handle, indent=2, ensure_ascii=False)
                handle.write("\n")
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def _index_of(
        self,
        documents: list[dict[str, Any]],
        code: str,
        *,
        case_insensitive: bool = True,
    ) -> int:
        for index, document in enumerate(documents):
            if _codes_match(_document_code(document), code, case_insensitive=case_insensitive):
                return index
        raise NotFoundError(code)

    def list_records(self) -> list[ShipmentRecord]:
        return [ShipmentRecord.from_dict(document) for document in self._read_documents()]

    def find_by_tracking_number(
        self, code: str, *, case_insensitive: bool = True
    ) -> ShipmentRecord:
        """Return the record whose tracking number equals ``code``.

        Matching is exact apart from letter case (ignored by default) and
        surrounding whitespace. Raises NotFoundError when nothing matches.
        """
        code = require_tracking_number(code)
        documents = self._read_documents()
        index = self._index_of(documents, code, case_insensitive=case_insensitive)
        return ShipmentRecord.from_dict(documents[index])

    def add(self, record: ShipmentRecord, *, now: str | None = None) -> ShipmentRecord:
        documents = self._read_documents()
        try:
            self._index_of(documents, record.tracking_number)
        except NotFoundError:
            pass
        else:
            raise ValueError(f"shipment already exists: {record.tracking_number}")
        stamp = now or _utc_now()
        stored = replace(
            record,
            created_at=record.created_at or stamp,
            updated_at=record.updated_at or stamp,
        )
        documents.append(stored.to_dict())
        self._write_documents(documents)
        return stored

    def update(
        self,
        code: str,
        changes: Mapping[str, Any],
        *,
        now: str | None = None,
    ) -> ShipmentRecord:
        """Merge ``changes`` (camelCase or snake_case keys) into a stored record."""
        code = require_tracking_number(code)
        documents = self._read_documents()
        index = self._index_of(documents, code)
        merged = ShipmentRecord.from_dict(documents[index]).to_dict()
        for key, value in require_dict(dict(changes), label="shipment changes").items():
            merged[camel_key(str(key))] = value
        merged["updatedAt"] = now or _utc_now()
        updated = ShipmentRecord.from_dict(merged)

        for other_index, document in enumerate(documents):
            if other_index != index and _codes_match(
                _document_code(document), updated.tracking_number, case_insensitive=True
            ):
                raise ValueError(f"shipment already exists: {updated.tracking_number}")
        documents[index] = updated.to_dict()
        self._write_documents(documents)
        return updated

    def delete(self, code: str) -> ShipmentRecord:
        code = require_tracking_number(code)
        documents = self._read_documents()
        index = self._index_of(documents, code)
        removed = ShipmentRecord.from_dict(documents.pop(index))
        self._write_documents(documents)
        return removed


__all__ = ["RecordSource", "RecordStore"]
