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

"""Where configuration and shipment data live on disk.

Packaged TOML defaults (one per paper size) are installed into the per-user
config directory on first run so they can be edited in place. Shipment data
defaults to the per-user data directory.
"""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "waybill"
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
PAPER_CONFIGS = {
    "A4": PACKAGE_ROOT / "config/a4.toml",
    "LETTER": PACKAGE_ROOT / "config/letter.toml",
}
DEFAULT_PAPER_SIZE = "A4"
DEFAULT_CONFIG_PATH = PAPER_CONFIGS[DEFAULT_PAPER_SIZE]
DEFAULT_STORE_FILENAME = "shipments.json"
PAPER_SIZE_ENV = "WAYBILL_PAPER_SIZE"
XDG_CONFIG_ENV = "XDG_CONFIG_HOME"
XDG_DATA_ENV = "XDG_DATA_HOME"


@dataclass(frozen=True)
class ConfigPaths:
    user_config_dir: Path
    user_paper_configs: dict[str, Path]

    @property
    def user_required_files(self) -> tuple[Path, ...]:
        return tuple(self.user_paper_configs.values())

    def installed(self) -> bool:
        return all(path.exists() for path in self.user_required_files)


def _platform_dir(
    env_name: str,
    platform_lookup: Callable[..., str],
    darwin_parts: tuple[str, ...],
) -> Path:
    # XDG variables win everywhere; macOS keeps dotfile-style dirs.
    override = os.environ.get(env_name)
    if override:
        return Path(override) / APP_NAME
    if sys.platform == "darwin":
        return Path.home().joinpath(*darwin_parts, APP_NAME)
    return Path(platform_lookup(APP_NAME, appauthor=False))


def _user_config_dir() -> Path:
    return _platform_dir(XDG_CONFIG_ENV, user_config_dir, (".config",))


def _user_data_dir() -> Path:
    return _platform_dir(XDG_DATA_ENV, user_data_dir, (".local", "share"))


def _build_paths() -> ConfigPaths:
    config_dir = _user_config_dir()
    return ConfigPaths(
        user_config_dir=config_dir,
        user_paper_configs={
            paper: config_dir / source.name for paper, source in PAPER_CONFIGS.items()
        },
    )


def default_store_path() -> Path:
    return _user_data_dir() / DEFAULT_STORE_FILENAME


def user_config_needs_init() -> bool:
    return not _build_paths().installed()


def init_user_config() -> Path:
    """Install missing default configs; existing user files are left alone."""
    paths = _build_paths()
    if not _ensure_user_config(paths):
        raise OSError(f"unable to create config dir at {paths.user_config_dir}")
    return paths.user_config_dir


def resolve_config_path(path: str | Path | None = None, *, paper_size: str | None = None) -> Path:
    """Pick the config file.

    Order: explicit ``path``, then ``paper_size`` (or ``WAYBILL_PAPER_SIZE``),
    then the user's A4 file, then the packaged A4 defaults. User copies are
    preferred over packaged ones whenever the user directory is writable.
    """
    if path:
        return Path(path)

    paths = _build_paths()
    candidates: dict[str, Path] = dict(PAPER_CONFIGS)
    if _ensure_user_config(paths):
        candidates.update(paths.user_paper_configs)

    requested = paper_size or os.environ.get(PAPER_SIZE_ENV)
    key = (requested or DEFAULT_PAPER_SIZE).strip().upper()
    if key not in candidates:
        raise ValueError(f"unknown paper size: {requested}")
    chosen = candidates[key]
    if requested or chosen.exists():
        return chosen
    return DEFAULT_CONFIG_PATH


def _ensure_user_config(paths: ConfigPaths) -> bool:
    try:
        for paper, source in PAPER_CONFIGS.items():
            _install_default(source, paths.user_paper_configs[paper])
    except OSError:
        return False
    return True


def _install_default(source: Path, target: Path) -> None:
    if target.exists():
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
