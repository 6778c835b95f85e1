#!/usr/bin/env python3
from __future__ import annotations

from typing import Callable

from ..ui import console, console_err


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[yellow]Warning:[/yellow] {message}")


def _info(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console.print(f"[dim]{message}[/dim]")


def _warning_printer(*, quiet: bool) -> Callable[[str], None]:
    def _print(message: str) -> None:
        _warn(message, quiet=quiet)

    return _print
