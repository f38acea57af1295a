"""Debug report for checking how a sheet will be parsed.

Run this first when a sheet yields no posts: it shows the leading rows,
where the header was found, which columns were mapped and what the first
few posts look like after reconstruction.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from hn_filter.engines.post_record import ColumnMap, PostRecord
from hn_filter.engines.row_reconstructor import reconstruct_posts
from hn_filter.engines.schema_locator import (
    HEADER_SCAN_ROWS,
    LOOSE_HEADER_KEYWORDS,
    SchemaNotFound,
    locate_header,
    map_columns,
)


logger = logging.getLogger(__name__)


@dataclass
class DebugReport:
    row_count: int
    column_count: int
    preview_rows: list[list[Any]] = field(default_factory=list)
    header_row: int | None = None
    headers: list[str] = field(default_factory=list)
    column_map: ColumnMap | None = None
    samples: list[PostRecord] = field(default_factory=list)


def build_debug_report(
    grid: Sequence[Sequence[Any]],
    sample_rows: int = 10,
    scan_rows: int = HEADER_SCAN_ROWS,
) -> DebugReport:
    """Inspect a grid without failing on a missing header.

    Args:
        grid: Raw two-dimensional cell values
        sample_rows: Number of rows after the header to reconstruct
        scan_rows: Number of leading rows searched for the header

    Returns:
        DebugReport; header_row is None if no header was found
    """
    report = DebugReport(
        row_count=len(grid),
        column_count=len(grid[0]) if grid else 0,
        preview_rows=[list(row) for row in grid[:HEADER_SCAN_ROWS]],
    )

    try:
        header_row, headers = locate_header(grid, LOOSE_HEADER_KEYWORDS, scan_rows)
    except SchemaNotFound as e:
        logger.warning(str(e))
        return report

    columns = map_columns(headers)
    report.header_row = header_row
    report.headers = headers
    report.column_map = columns
    report.samples = reconstruct_posts(
        grid, header_row, columns, stop=header_row + sample_rows
    )
    return report


def render_debug_report(report: DebugReport) -> str:
    """Render a DebugReport as plain text."""
    lines = [
        "=== DEBUG DATA PARSING ===",
        f"Sheet has {report.row_count} rows, {report.column_count} columns",
        "",
        f"--- First {len(report.preview_rows)} rows of data ---",
    ]
    for index, row in enumerate(report.preview_rows):
        lines.append(f"Row {index}: [{', '.join('' if c is None else str(c) for c in row)}]")

    if report.header_row is None or report.column_map is None:
        lines.append("❌ No header row found")
        lines.append(
            "Please make sure your sheet has column headers like: "
            "title, score, comments, link, etc."
        )
        lines.append("=== END DEBUG ===")
        return "\n".join(lines)

    lines.append(f"✓ Found headers at row {report.header_row}: [{', '.join(report.headers)}]")
    lines.append("")
    lines.append("--- Column mapping ---")
    found = report.column_map.found()
    for name in list(found) + report.column_map.missing():
        if name in found:
            index = found[name]
            lines.append(f"✓ {name}: Column {index} ({report.headers[index]})")
        else:
            lines.append(f"❌ {name}: Not found")

    lines.append("")
    lines.append("--- Sample data ---")
    for post in report.samples:
        lines.append(f"Post #{post.rank}:")
        lines.append(f"  Title: {post.title}")
        lines.append(f"  Link: {post.link}")
        lines.append(f"  Domain: {post.domain}")
        lines.append(f"  Score: {post.score}")
        lines.append(f"  Comments: {post.comments}")
        lines.append("---")

    lines.append("=== END DEBUG ===")
    return "\n".join(lines)
