"""Directory traversal, filtering, and dispatch between listing and printing."""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from eb.listing.columns import FieldSelection
from eb.printer import PrintOptions
from eb.walk import Lister, ListOptions, scan_directory


def run_lister(paths: list[str], width: int | None = 80, **option_values) -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    options = ListOptions(**option_values)
    with mock.patch("eb.walk.terminal_width", return_value=width):
        status = Lister(options, PrintOptions(), out=out, err=err).run(paths)
    return status, out.getvalue(), err.getvalue()


class ShortListingTests(unittest.TestCase):
    def test_grid_hides_dotfiles_and_sorts_case_insensitively(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("b.txt", "A.txt", ".hidden"):
                (root / name).write_text("x", encoding="utf-8")

            status, out, err = run_lister([str(root)])

            self.assertEqual(status, 0)
            self.assertEqual(err, "")
            self.assertEqual(out, "A.txt  b.txt\n")

    def test_show_hidden_and_oneline(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("b", ".a"):
                (root / name).write_text("x", encoding="utf-8")

            _status, out, _err = run_lister([str(root)], show_hidden=True, oneline=True)

            self.assertEqual(out, ".a\nb\n")

    def test_unknown_terminal_width_falls_back_to_one_per_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("a", "b"):
                (root / name).write_text("x", encoding="utf-8")

            _status, out, _err = run_lister([str(root)], width=None)

            self.assertEqual(out, "a\nb\n")

    def test_only_dirs_and_directories_first(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("x", encoding="utf-8")
            (root / "zdir").mkdir()
            (root / "Mdir").mkdir()

            _status, grouped, _err = run_lister([str(root)], oneline=True, group_directories_first=True)
            _status, dirs_only, _err = run_lister([str(root)], oneline=True, only_dirs=True)

            self.assertEqual(grouped, "Mdir\nzdir\na.txt\n")
            self.assertEqual(dirs_only, "Mdir\nzdir\n")


class RecursionTests(unittest.TestCase):
    def build_tree(self, root: Path) -> None:
        (root / "a.txt").write_text("x", encoding="utf-8")
        (root / "sub").mkdir()
        (root / "sub" / "x.txt").write_text("x", encoding="utf-8")
        (root / "sub" / "deeper").mkdir()
        (root / "sub" / "deeper" / "y.txt").write_text("y", encoding="utf-8")

    def test_recurse_lists_each_subdirectory_after_its_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.build_tree(root)

            _status, out, _err = run_lister([str(root)], oneline=True, recurse=True)

            self.assertEqual(
                out,
                "a.txt\nsub\n"
                f"\n{root / 'sub'}:\ndeeper\nx.txt\n"
                f"\n{root / 'sub' / 'deeper'}:\ny.txt\n",
            )

    def test_level_limits_recursion_depth(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.build_tree(root)

            _status, out, _err = run_lister([str(root)], oneline=True, recurse=True, level=2)

            self.assertIn(f"{root / 'sub'}:", out)
            self.assertNotIn(f"{root / 'sub' / 'deeper'}:", out)

    def test_tree_draws_branches(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.build_tree(root)

            _status, out, _err = run_lister([str(root)], tree=True)

            self.assertEqual(
                out,
                f"{root}\n"
                "├─ a.txt\n"
                "└─ sub\n"
                "   ├─ deeper\n"
                "   │  └─ y.txt\n"
                "   └─ x.txt\n",
            )

    def test_tree_honors_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.build_tree(root)

            _status, out, _err = run_lister([str(root)], tree=True, level=1)

            self.assertEqual(out, f"{root}\n├─ a.txt\n└─ sub\n")


class LongListingDispatchTests(unittest.TestCase):
    def test_long_rows_end_with_entry_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "small").write_bytes(b"x" * 10)
            (root / "large").write_bytes(b"x" * 2048)
            selection = FieldSelection(permissions=False, user=False, times=())

            _status, out, _err = run_lister([str(root)], long=True, selection=selection)

            self.assertEqual(out, "2.0k large\n  10 small\n")

    def test_long_rows_can_be_packed_into_a_grid(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a").write_bytes(b"x")
            (root / "b").write_bytes(b"xy")
            selection = FieldSelection(permissions=False, user=False, times=())

            _status, out, _err = run_lister([str(root)], long=True, grid=True, selection=selection)

            self.assertEqual(out, "1 a    2 b\n")

    def test_list_dirs_shows_arguments_themselves(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "inner.txt").write_text("x", encoding="utf-8")

            _status, out, _err = run_lister([str(root)], list_dirs=True, oneline=True)

            self.assertEqual(out, f"{root}\n")


class PathDispatchTests(unittest.TestCase):
    def test_missing_path_is_reported_and_run_continues(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a").write_text("x", encoding="utf-8")
            missing = root / "missing"

            status, out, err = run_lister([str(missing), str(root)], oneline=True)

            self.assertEqual(status, 1)
            self.assertEqual(err, f"eb: {missing}: No such file or directory\n")
            self.assertEqual(out, f"{missing}:\n\n{root}:\na\n")

    def test_files_are_printed_not_listed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            target.write_text("first\nsecond\n", encoding="utf-8")

            status, out, _err = run_lister([str(target)])

            self.assertEqual(status, 0)
            self.assertEqual(out, "first\nsecond\n")

    def test_scan_directory_keeps_dangling_symlinks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "link").symlink_to(root / "nowhere")

            entries = scan_directory(root)

            self.assertEqual([entry.name for entry in entries], ["link"])
            self.assertFalse(entries[0].is_file)


if __name__ == "__main__":
    unittest.main()
