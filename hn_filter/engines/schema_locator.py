"""Header row detection and column mapping for listing exports.

The header row of a scraped listing export is not guaranteed to be the first
row, and column names carry scraper noise ("subline (3)", "titleline href").
This module finds the header within a bounded window and resolves each
semantic field by case-insensitive substring match.

Feature: hn-filter
"""

import logging
from collections.abc import Sequence
from typing import Any

from hn_filter.engines.post_record import NOT_FOUND, ColumnMap


logger = logging.getLogger(__name__)


# Number of leading rows searched for the header
HEADER_SCAN_ROWS = 5

# Keywords identifying the header row of a listing export
HEADER_KEYWORDS: tuple[str, ...] = ("rank", "titleline", "score", "subline")

# Looser keywords for hand-made sheets ("Title", "Score", "Comments")
LOOSE_HEADER_KEYWORDS: tuple[str, ...] = ("title", "score", "comment")

# Candidate header substrings for each ColumnMap field, checked in order
COLUMN_CANDIDATES: dict[str, tuple[str, ...]] = {
    "rank": ("rank",),
    "title_text": ("titleline",),
    "title_link": ("titleline href",),
    "domain": ("sitestr",),
    "score": ("score",),
    "comments": ("subline (3)",),
    "age": ("age",),
    "author": ("hnuser",),
    "subline": ("subline",),
    "sitebit": ("sitebit",),
}


class SchemaError(Exception):
    """Base class for errors that make a grid unreadable as a listing."""

    pass


class SchemaNotFound(SchemaError):
    """Raised when no header row is found within the scan window."""

    def __init__(self, rows_scanned: int, row_count: int):
        self.rows_scanned = rows_scanned
        self.row_count = row_count
        super().__init__(
            f"Could not find header row in the first {rows_scanned} of "
            f"{row_count} rows. Please make sure your data has column headers."
        )


class RequiredColumnMissing(SchemaError):
    """Raised when the header lacks a column the reconstructor cannot do without."""

    def __init__(self, field: str, header_row: int, headers: Sequence[str]):
        self.field = field
        self.header_row = header_row
        self.headers = list(headers)
        super().__init__(
            f"{field} column not found in header row {header_row} "
            f"(headers: {', '.join(h for h in self.headers if h) or 'none'})"
        )


def normalize_header(cell: Any) -> str:
    """Lowercase and trim a header cell; empty cells become ''."""
    if cell is None or cell == "":
        return ""
    return str(cell).lower().strip()


def is_header_row(row: Sequence[Any], keywords: Sequence[str] = HEADER_KEYWORDS) -> bool:
    """Check whether any text cell of a row contains one of the keywords.

    Only string cells are considered so that numeric data rows never
    qualify.
    """
    for cell in row:
        if not cell or not isinstance(cell, str):
            continue
        text = cell.lower()
        if any(keyword in text for keyword in keywords):
            return True
    return False


def locate_header(
    grid: Sequence[Sequence[Any]],
    keywords: Sequence[str] = HEADER_KEYWORDS,
    scan_rows: int = HEADER_SCAN_ROWS,
) -> tuple[int, list[str]]:
    """Find the header row within the first scan_rows rows of the grid.

    Args:
        grid: Raw two-dimensional cell values
        keywords: Lowercase substrings that identify a header cell
        scan_rows: Number of leading rows to search

    Returns:
        Tuple of (header row index, normalized header texts)

    Raises:
        SchemaNotFound: If none of the scanned rows qualifies

    Example:
        >>> locate_header([["", ""], ["Rank", "titleline"], ["1.", "Foo"]])
        (1, ['rank', 'titleline'])
    """
    window = min(scan_rows, len(grid))
    for index in range(window):
        row = grid[index] or []
        if is_header_row(row, keywords):
            headers = [normalize_header(cell) for cell in row]
            logger.info(f"Found headers at row {index}: {', '.join(headers)}")
            return index, headers

    raise SchemaNotFound(rows_scanned=window, row_count=len(grid))


def find_column_index(headers: Sequence[str], candidates: Sequence[str]) -> int:
    """Return the index of the first header containing any candidate.

    Example:
        >>> find_column_index(["rank", "titleline", "titleline href"], ["titleline href"])
        2
        >>> find_column_index(["rank"], ["score"])
        -1
    """
    lowered = [candidate.lower() for candidate in candidates]
    for index, header in enumerate(headers):
        if any(candidate in header for candidate in lowered):
            return index
    return NOT_FOUND


def map_columns(headers: Sequence[str]) -> ColumnMap:
    """Resolve every ColumnMap field against the header texts, without validation."""
    normalized = [normalize_header(h) for h in headers]
    return ColumnMap(**{
        field: find_column_index(normalized, candidates)
        for field, candidates in COLUMN_CANDIDATES.items()
    })


def build_column_map(headers: Sequence[str], header_row: int = 0) -> ColumnMap:
    """Build and validate the column map for a detected header row.

    A title column is always required. Numeric fields need either a
    dedicated score column or a free-text subline to fall back on.

    Args:
        headers: Header cell texts
        header_row: Index of the header row, reported in errors

    Returns:
        ColumnMap with NOT_FOUND for unmatched fields

    Raises:
        RequiredColumnMissing: If the title column, or both the score and
            subline columns, are absent
    """
    column_map = map_columns(headers)
    logger.debug(f"Column indexes found: {column_map.found()}")

    if column_map.title_text == NOT_FOUND:
        raise RequiredColumnMissing("titleline", header_row, headers)
    if column_map.score == NOT_FOUND and column_map.subline == NOT_FOUND:
        raise RequiredColumnMissing("score or subline", header_row, headers)

    return column_map
