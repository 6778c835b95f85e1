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

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from waybill.config import installer


class TestConfigInstaller(unittest.TestCase):
    def test_user_config_dir_precedence(self) -> None:
        with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: "/tmp/xdg"}, clear=False):
            with mock.patch.object(installer.sys, "platform", "linux"):
                self.assertEqual(installer._user_config_dir(), Path("/tmp/xdg/waybill"))

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "darwin"):
                with mock.patch.object(installer.Path, "home", return_value=Path("/Users/example")):
                    self.assertEqual(
                        installer._user_config_dir(),
                        Path("/Users/example/.config/waybill"),
                    )

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "linux"):
                with mock.patch.object(
                    installer, "user_config_dir", return_value="/opt/config/waybill"
                ):
                    self.assertEqual(installer._user_config_dir(), Path("/opt/config/waybill"))

    def test_default_store_path_follows_data_dir(self) -> None:
        with mock.patch.dict(os.environ, {installer.XDG_DATA_ENV: "/tmp/xdg-data"}, clear=False):
            self.assertEqual(
                installer.default_store_path(), Path("/tmp/xdg-data/waybill/shipments.json")
            )

    def test_build_paths_lists_paper_configs(self) -> None:
        with mock.patch.object(installer, "_user_config_dir", return_value=Path("/tmp/usercfg")):
            paths = installer._build_paths()
        self.assertEqual(paths.user_config_dir, Path("/tmp/usercfg"))
        self.assertEqual(
            paths.user_paper_configs,
            {"A4": Path("/tmp/usercfg/a4.toml"), "LETTER": Path("/tmp/usercfg/letter.toml")},
        )
        self.assertEqual(len(paths.user_required_files), 2)

    def test_init_user_config_copies_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: tmpdir}, clear=False):
                self.assertTrue(installer.user_config_needs_init())
                config_dir = installer.init_user_config()
                self.assertFalse(installer.user_config_needs_init())
            self.assertEqual(config_dir, Path(tmpdir) / "waybill")
            for name in ("a4.toml", "letter.toml"):
                with self.subTest(name=name):
                    copied = (config_dir / name).read_text(encoding="utf-8")
                    self.assertIn("[packages]", copied)

    def test_init_keeps_existing_user_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_dir = Path(tmpdir) / "waybill"
            config_dir.mkdir()
            (config_dir / "a4.toml").write_text("# mine\n", encoding="utf-8")
            with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: tmpdir}, clear=False):
                installer.init_user_config()
            self.assertEqual((config_dir / "a4.toml").read_text(encoding="utf-8"), "# mine\n")
            self.assertTrue((config_dir / "letter.toml").exists())

    def test_resolve_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env = {installer.XDG_CONFIG_ENV: tmpdir}
            with mock.patch.dict(os.environ, env, clear=False):
                os.environ.pop(installer.PAPER_SIZE_ENV, None)
                user_dir = Path(tmpdir) / "waybill"
                self.assertEqual(installer.resolve_config_path(), user_dir / "a4.toml")
                self.assertEqual(
                    installer.resolve_config_path(paper_size="letter"),
                    user_dir / "letter.toml",
                )
                self.assertEqual(
                    installer.resolve_config_path("/etc/custom.toml"), Path("/etc/custom.toml")
                )
                with mock.patch.dict(os.environ, {installer.PAPER_SIZE_ENV: "Letter"}):
                    self.assertEqual(installer.resolve_config_path(), user_dir / "letter.toml")
                with self.assertRaises(ValueError):
                    installer.resolve_config_path(paper_size="B5")

    def test_resolve_falls_back_to_packaged_config(self) -> None:
        with mock.patch.object(installer, "_ensure_user_config", return_value=False):
            with mock.patch.dict(os.environ, {}, clear=False):
                os.environ.pop(installer.PAPER_SIZE_ENV, None)
                self.assertEqual(installer.resolve_config_path(), installer.DEFAULT_CONFIG_PATH)
                self.assertEqual(
                    installer.resolve_config_path(paper_size="LETTER"),
                    installer.PAPER_CONFIGS["LETTER"],
                )


if __name__ == "__main__":
    unittest.main()
