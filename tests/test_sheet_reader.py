"""Tests for loading sheet exports as raw grids.

Feature: hn-filter
"""

import pytest
from openpyxl import Workbook

from hn_filter.connectors.sheet_reader import (
    EmptySheetError,
    SheetNotFoundError,
    UnsupportedSheetFormatError,
    load_grid,
)


def _write_workbook(path, sheets):
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


class TestCSV:

    def test_reads_rows_as_strings(self, tmp_path):
        path = tmp_path / "ycombinator.csv"
        path.write_text("rank,titleline,score\n1.,Foo,42 points\n", encoding="utf-8")

        grid = load_grid(path)

        assert grid == [["rank", "titleline", "score"], ["1.", "Foo", "42 points"]]

    def test_strips_byte_order_mark(self, tmp_path):
        path = tmp_path / "hn.csv"
        path.write_text("\ufeffrank,titleline\n", encoding="utf-8")
        assert load_grid(path)[0][0] == "rank"

    def test_empty_csv_raises(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(EmptySheetError, match="No data found"):
            load_grid(path)


class TestExcel:

    def test_reads_named_sheet(self, tmp_path):
        path = _write_workbook(tmp_path / "export.xlsx", {
            "other": [["ignored"]],
            "ycombinator": [["rank", "titleline", "score"], [1, "Foo", 150]],
        })

        grid = load_grid(path, "ycombinator")

        assert grid == [["rank", "titleline", "score"], [1, "Foo", 150]]

    def test_first_sheet_when_unnamed(self, tmp_path):
        path = _write_workbook(tmp_path / "export.xlsx", {"first": [["a"]], "second": [["b"]]})
        assert load_grid(path) == [["a"]]

    def test_missing_worksheet_raises(self, tmp_path):
        path = _write_workbook(tmp_path / "export.xlsx", {"other": [["a"]]})
        with pytest.raises(SheetNotFoundError, match='Sheet "ycombinator" not found'):
            load_grid(path, "ycombinator")


class TestLocations:

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(SheetNotFoundError):
            load_grid(tmp_path / "nope.csv", "ycombinator")

    def test_directory_of_exports(self, tmp_path):
        (tmp_path / "ycombinator.csv").write_text("rank,titleline\n", encoding="utf-8")
        assert load_grid(tmp_path, "ycombinator") == [["rank", "titleline"]]

    def test_directory_without_export_raises(self, tmp_path):
        with pytest.raises(SheetNotFoundError) as exc_info:
            load_grid(tmp_path, "ycombinator")
        assert exc_info.value.sheet_name == "ycombinator"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(UnsupportedSheetFormatError):
            load_grid(path)
