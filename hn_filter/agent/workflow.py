"""Workflow orchestrator for the hn-filter pipeline.

This module provides the core entry point, which turns a raw grid into
ranked posts, and the run orchestration that reads the sheet, presents the
results and opens the links the user picked.

Feature: hn-filter
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from hn_filter.config.settings import Settings
from hn_filter.connectors.sheet_reader import SheetReadError, load_grid
from hn_filter.engines.observability import (
    RunMetrics,
    create_run_metrics,
    log_stage_counts,
    write_run_log,
)
from hn_filter.engines.post_record import FilterCriteria, PostRecord
from hn_filter.engines.presenter import (
    ListingItem,
    build_listing,
    open_links,
    selected_links,
)
from hn_filter.engines.row_reconstructor import reconstruct_posts
from hn_filter.engines.schema_locator import (
    HEADER_SCAN_ROWS,
    HEADER_KEYWORDS,
    SchemaError,
    build_column_map,
    locate_header,
)
from hn_filter.engines.selector import TOP_N, select_top_posts


logger = logging.getLogger(__name__)


@dataclass
class FilterRunResult:
    """Result of a filter workflow execution.

    Attributes:
        success: Whether the sheet was read and parsed
        posts: Ranked posts, at most ten
        listing: Listing entries built from posts
        opened_count: Number of links opened in the browser
        error: Fatal error message, shown to the user verbatim
        metrics: Run metrics collected during execution
    """
    success: bool
    posts: list[PostRecord] = field(default_factory=list)
    listing: list[ListingItem] = field(default_factory=list)
    opened_count: int = 0
    error: str | None = None
    metrics: RunMetrics = field(default_factory=RunMetrics)


def reconstruct_and_filter(
    grid: Sequence[Sequence[Any]],
    criteria: FilterCriteria | None = None,
    *,
    limit: int = TOP_N,
    scan_rows: int = HEADER_SCAN_ROWS,
) -> list[PostRecord]:
    """Reconstruct posts from a raw grid and return the most discussed ones.

    Args:
        grid: Raw two-dimensional cell values, as read from the sheet
        criteria: Minimum comment and score thresholds (defaults 100 and 0)
        limit: Maximum number of posts returned
        scan_rows: Leading rows searched for the header

    Returns:
        Up to `limit` posts sorted by comments descending

    Raises:
        SchemaNotFound: If no header row is found
        RequiredColumnMissing: If the title column, or both the score and
            subline columns, are missing
    """
    posts, _ = _reconstruct(grid, criteria or FilterCriteria(), limit, scan_rows)
    return posts


def _reconstruct(
    grid: Sequence[Sequence[Any]],
    criteria: FilterCriteria,
    limit: int,
    scan_rows: int,
) -> tuple[list[PostRecord], dict[str, int]]:
    """Run the core stages, returning the posts and per-stage counts."""
    header_row, headers = locate_header(grid, HEADER_KEYWORDS, scan_rows)
    columns = build_column_map(headers, header_row)

    reconstructed = reconstruct_posts(grid, header_row, columns)
    log_stage_counts("reconstructed", len(reconstructed))

    selected = select_top_posts(reconstructed, criteria, limit)
    log_stage_counts("selected", len(selected))

    for post in selected:
        logger.debug(f"- {post.display_text}")

    return selected, {"header_row": header_row, "reconstructed": len(reconstructed)}


def run_filter(
    settings: Settings,
    criteria: FilterCriteria | None = None,
    *,
    open_selected: bool = False,
    chosen: Iterable[int] | None = None,
) -> FilterRunResult:
    """Execute the filter workflow against the configured sheet.

    Stages:
    1. Load the grid from the sheet export
    2. Reconstruct, filter and rank posts
    3. Build the selectable listing
    4. Optionally open the chosen links
    5. Write the run log if a log directory is configured

    Sheet and schema errors end the run with success=False and the error
    message; no partial result is returned.

    Args:
        settings: Configuration settings
        criteria: Thresholds; defaults to the configured ones
        open_selected: If True, open the chosen links in the browser
        chosen: 1-based listing indexes to open; None opens every entry
            selected by default

    Returns:
        FilterRunResult with posts, listing and metrics
    """
    criteria = criteria or settings.criteria()
    criteria.validate()
    metrics = create_run_metrics(
        sheet=settings.sheet_path,
        min_comments=criteria.min_comments,
        min_score=criteria.min_score,
        run_timestamp=datetime.now(),
    )

    logger.info(
        f"Starting filter with minComments: {criteria.min_comments}, "
        f"minScore: {criteria.min_score}"
    )

    try:
        grid = load_grid(settings.sheet_path, settings.sheet_name)
        metrics.grid_rows = len(grid)
        posts, counts = _reconstruct(grid, criteria, TOP_N, HEADER_SCAN_ROWS)
    except (SheetReadError, SchemaError) as e:
        error_msg = str(e)
        logger.error(f"Filter error: {error_msg}")
        metrics.errors.append(error_msg)
        _write_log(metrics, settings)
        return FilterRunResult(success=False, error=error_msg, metrics=metrics)

    metrics.header_row = counts["header_row"]
    metrics.reconstructed_count = counts["reconstructed"]
    metrics.selected_count = len(posts)

    listing = build_listing(posts, settings.title_display_limit)

    opened_count = 0
    if open_selected and listing:
        links = selected_links(listing, chosen)
        if links:
            opened_count = open_links(links, settings.open_delay_seconds)
        else:
            logger.warning("No selected post has a valid link to open")
    metrics.opened_count = opened_count

    _write_log(metrics, settings)

    logger.info(f"Final filtered posts: {len(posts)}")

    return FilterRunResult(
        success=True,
        posts=posts,
        listing=listing,
        opened_count=opened_count,
        metrics=metrics,
    )


def _write_log(metrics: RunMetrics, settings: Settings) -> None:
    if not settings.run_log_dir:
        return
    try:
        write_run_log(metrics, settings.run_log_dir)
    except OSError as e:
        logger.error(f"Failed to write run log: {e}")
