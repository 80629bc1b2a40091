"""Terminal size queries and their unavailable fallback."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from eb import terminal


class TerminalWidthTests(unittest.TestCase):
    def test_columns_override_wins(self) -> None:
        with mock.patch.dict(os.environ, {"COLUMNS": "123"}):
            self.assertEqual(terminal.terminal_width(), 123)

    def test_invalid_override_is_ignored(self) -> None:
        size = os.terminal_size((90, 30))
        for value in ("abc", "0", "-5", ""):
            with self.subTest(value=value), mock.patch.dict(os.environ, {"COLUMNS": value}), mock.patch(
                "eb.terminal.os.get_terminal_size", return_value=size
            ):
                self.assertEqual(terminal.terminal_width(), 90)

    def test_no_terminal_means_unknown_width(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True), mock.patch(
            "eb.terminal.os.get_terminal_size", side_effect=OSError(25, "Inappropriate ioctl for device")
        ):
            self.assertIsNone(terminal.terminal_width())
            self.assertIsNone(terminal.terminal_height())

    def test_height_override(self) -> None:
        with mock.patch.dict(os.environ, {"LINES": "40"}):
            self.assertEqual(terminal.terminal_height(), 40)


if __name__ == "__main__":
    unittest.main()
