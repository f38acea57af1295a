"""Sheet reader for loading listing exports as raw grids.

Supports CSV exports, Excel workbooks (.xlsx/.xlsm) and directories of
per-sheet exports named <sheet_name>.csv or <sheet_name>.xlsx. Cells are
returned as read, with no type coercion beyond None for empty Excel cells.
"""

import csv
import logging
from pathlib import Path
from typing import Any

from openpyxl import load_workbook


logger = logging.getLogger(__name__)


CSV_SUFFIXES = frozenset({".csv"})
EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm"})


class SheetReadError(Exception):
    """Base class for errors raised while reading a sheet."""

    pass


class SheetNotFoundError(SheetReadError):
    """Raised when the file, worksheet or export for a sheet does not exist."""

    def __init__(self, sheet_name: str, location: str | Path = ""):
        self.sheet_name = sheet_name
        self.location = str(location)
        message = f'Sheet "{sheet_name}" not found'
        if self.location:
            message += f" in {self.location}"
        super().__init__(message)


class EmptySheetError(SheetReadError):
    """Raised when a sheet contains no rows."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'No data found in sheet "{sheet_name}"')


class UnsupportedSheetFormatError(SheetReadError):
    """Raised for files that are neither CSV nor Excel workbooks."""

    pass


def _read_csv(path: Path) -> list[list[Any]]:
    # utf-8-sig drops the BOM that spreadsheet exports often prepend
    with open(path, newline='', encoding='utf-8-sig') as csvfile:
        return [list(row) for row in csv.reader(csvfile)]


def _read_excel(path: Path, sheet_name: str | None) -> list[list[Any]]:
    wb = load_workbook(filename=path, data_only=True, read_only=True)
    try:
        if sheet_name:
            if sheet_name not in wb.sheetnames:
                raise SheetNotFoundError(sheet_name, path)
            ws = wb[sheet_name]
        else:
            ws = wb[wb.sheetnames[0]]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _resolve_export(directory: Path, sheet_name: str) -> Path:
    for suffix in (".csv", ".xlsx", ".xlsm"):
        candidate = directory / f"{sheet_name}{suffix}"
        if candidate.is_file():
            return candidate
    raise SheetNotFoundError(sheet_name, directory)


def load_grid(path: str | Path, sheet_name: str | None = None) -> list[list[Any]]:
    """Load a sheet as a two-dimensional list of cell values.

    Args:
        path: CSV file, Excel workbook, or directory of per-sheet exports
        sheet_name: Worksheet to read from a workbook, or export name to look
            up in a directory. Ignored for CSV files.

    Returns:
        List of rows, each a list of cell values

    Raises:
        SheetNotFoundError: If the file, worksheet or export does not exist
        EmptySheetError: If the sheet has no rows
        UnsupportedSheetFormatError: If the file type is not supported
    """
    source = Path(path)
    name = sheet_name or source.stem

    if source.is_dir():
        if not sheet_name:
            raise SheetNotFoundError("", source)
        source = _resolve_export(source, sheet_name)
    elif not source.is_file():
        raise SheetNotFoundError(name, source)

    suffix = source.suffix.lower()
    if suffix in CSV_SUFFIXES:
        grid = _read_csv(source)
    elif suffix in EXCEL_SUFFIXES:
        grid = _read_excel(source, sheet_name)
    else:
        raise UnsupportedSheetFormatError(
            f"Unsupported sheet format '{source.suffix}' for {source}"
        )

    if not grid:
        raise EmptySheetError(name)

    logger.info(f"Found {len(grid)} rows of data in {source}")
    return grid
