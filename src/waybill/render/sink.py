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

import os
import tempfile
from pathlib import Path
from types import TracebackType
from typing import IO, Protocol

from ..core.errors import StreamError

_OPEN = "open"
_COMMITTED = "committed"
_ABORTED = "aborted"


class OutputSink(Protocol):
    def write(self, data: bytes) -> None: ...

    def commit(self) -> None: ...

    def abort(self) -> None: ...


class _SinkBase:
    """Append-only output; committed on a clean exit, aborted otherwise."""

    def __init__(self) -> None:
        self._state = _OPEN

    @property
    def committed(self) -> bool:
        return self._state == _COMMITTED

    @property
    def aborted(self) -> bool:
        return self._state == _ABORTED

    def _require_open(self) -> None:
        if self._state != _OPEN:
            raise StreamError(f"output sink is {self._state}")

    def write(self, data: bytes) -> None:
        raise NotImplementedError

    def commit(self) -> None:
        raise NotImplementedError

    def abort(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._state != _OPEN:
            return
        if exc_type is None:
            self.commit()
        else:
            self.abort()


class BytesSink(_SinkBase):
    def __init__(self) -> None:
        super().__init__()
        self._buffer = bytearray()

    def write(self, data: bytes) -> None:
        self._require_open()
        self._buffer.extend(data)

    def commit(self) -> None:
        self._require_open()
        self._state = _COMMITTED

    def abort(self) -> None:
        if self._state == _OPEN:
            self._buffer.clear()
            self._state = _ABORTED

    def getvalue(self) -> bytes:
        if self._state != _COMMITTED:
            raise StreamError("output was not committed")
        return bytes(self._buffer)


class FileSink(_SinkBase):
    """Write into a temporary file beside ``path``; replace ``path`` on commit."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._handle: IO[bytes] | None = None
        self._temp_path: Path | None = None

    def _ensure_open(self) -> IO[bytes]:
        if self._handle is None:
            parent = self.path.parent
            try:
                parent.mkdir(parents=True, exist_ok=True)
                handle = tempfile.NamedTemporaryFile(
                    mode="wb",
                    dir=parent,
                    prefix=f".{self.path.name}.",
                    suffix=".part",
                    delete=False,
                )
            except OSError as exc:
                raise StreamError(f"cannot open output {self.path}: {exc}") from exc
            self._handle = handle
            self._temp_path = Path(handle.name)
        return self._handle

    def write(self, data: bytes) -> None:
        self._require_open()
        handle = self._ensure_open()
        try:
            handle.write(data)
        except OSError as exc:
            self.abort()
            raise StreamError(f"write to {self.path} failed: {exc}") from exc

    def commit(self) -> None:
        self._require_open()
        handle = self._ensure_open()
        try:
            handle.flush()
            os.fsync(handle.fileno())
            handle.close()
            os.replace(self._temp_path, self.path)  # type: ignore[arg-type]
        except OSError as exc:
            self.abort()
            raise StreamError(f"cannot finalize {self.path}: {exc}") from exc
        self._handle = None
        self._temp_path = None
        self._state = _COMMITTED

    def abort(self) -> None:
        if self._state != _OPEN:
            return
        self._state = _ABORTED
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        if self._temp_path is not None:
            self._temp_path.unlink(missing_ok=True)
            self._temp_path = None


__all__ = ["BytesSink", "FileSink", "OutputSink"]
