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
from unittest import mock

from cardpress.cli import startup
from tests.test_support import temp_config_home, temp_env


class TestRunStartup(unittest.TestCase):
    def test_init_config_exits(self) -> None:
        with temp_config_home() as home:
            should_exit = startup.run_startup(
                quiet=True, no_color=True, debug=False, init_config=True
            )
            self.assertTrue((home / "cardpress" / "a4.toml").is_file())
        self.assertTrue(should_exit)

    def test_missing_user_config_is_initialized(self) -> None:
        with temp_config_home() as home:
            should_exit = startup.run_startup(
                quiet=True, no_color=False, debug=False, init_config=False
            )
            self.assertTrue((home / "cardpress" / "letter.toml").is_file())
        self.assertFalse(should_exit)


class TestEnsurePlaywright(unittest.TestCase):
    def test_skip_env_short_circuits(self) -> None:
        with temp_env({"CARDPRESS_SKIP_PLAYWRIGHT_INSTALL": "1"}):
            with mock.patch.object(startup, "_playwright_precheck") as precheck:
                startup.ensure_playwright_browsers(quiet=True)
        precheck.assert_not_called()

    def test_installed_browser_skips_install(self) -> None:
        with temp_env({"CARDPRESS_SKIP_PLAYWRIGHT_INSTALL": ""}):
            with mock.patch.object(startup, "_playwright_precheck", return_value=True):
                with mock.patch.object(startup, "_playwright_install") as install:
                    startup.ensure_playwright_browsers(quiet=True)
        install.assert_not_called()

    def test_missing_browser_is_installed(self) -> None:
        with temp_env({"CARDPRESS_SKIP_PLAYWRIGHT_INSTALL": ""}):
            with mock.patch.object(startup, "_playwright_precheck", return_value=False):
                with mock.patch.object(startup, "_playwright_install") as install:
                    startup.ensure_playwright_browsers(quiet=True)
        install.assert_called_once_with(None)

    def test_parse_progress(self) -> None:
        self.assertEqual(startup._parse_playwright_progress("|■■■■   |  42% of 120 MiB"), 42)
        self.assertIsNone(startup._parse_playwright_progress("Downloading Chromium"))


if __name__ == "__main__":
    unittest.main()
