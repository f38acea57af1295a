"""Connectors module - sheet storage access."""

from hn_filter.connectors.sheet_reader import (
    EmptySheetError,
    SheetNotFoundError,
    SheetReadError,
    UnsupportedSheetFormatError,
    load_grid,
)

__all__ = [
    "EmptySheetError",
    "SheetNotFoundError",
    "SheetReadError",
    "UnsupportedSheetFormatError",
    "load_grid",
]
