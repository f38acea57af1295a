"""Observability and run metrics for the filter workflow.

This module provides data structures and functions for tracking filter run
metrics, logging stage counts, and writing run logs.

Feature: hn-filter
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


@dataclass
class RunMetrics:
    """Metrics collected during a filter run.

    Attributes:
        sheet: Path or name of the sheet that was read
        grid_rows: Number of rows in the raw grid
        header_row: Index of the detected header row, or None
        reconstructed_count: Posts reconstructed from the grid
        selected_count: Posts returned after filtering and ranking
        min_comments: Comment threshold used for the run
        min_score: Score threshold used for the run
        opened_count: Links opened in the browser
        errors: Error messages encountered during the run
        run_timestamp: Timestamp when the run started
    """
    sheet: str = ""
    grid_rows: int = 0
    header_row: int | None = None
    reconstructed_count: int = 0
    selected_count: int = 0
    min_comments: int = 0
    min_score: int = 0
    opened_count: int = 0
    errors: list[str] = field(default_factory=list)
    run_timestamp: datetime = field(default_factory=datetime.now)


def create_run_metrics(
    sheet: str = "",
    grid_rows: int = 0,
    header_row: int | None = None,
    reconstructed_count: int = 0,
    selected_count: int = 0,
    min_comments: int = 0,
    min_score: int = 0,
    opened_count: int = 0,
    errors: list[str] | None = None,
    run_timestamp: datetime | None = None,
) -> RunMetrics:
    """Create a RunMetrics instance with proper defaults for optional fields.

    Example:
        >>> metrics = create_run_metrics(grid_rows=61, reconstructed_count=30, selected_count=10)
        >>> metrics.selected_count
        10
    """
    return RunMetrics(
        sheet=sheet,
        grid_rows=grid_rows,
        header_row=header_row,
        reconstructed_count=reconstructed_count,
        selected_count=selected_count,
        min_comments=min_comments,
        min_score=min_score,
        opened_count=opened_count,
        errors=errors or [],
        run_timestamp=run_timestamp or datetime.now(),
    )


def write_run_log(metrics: RunMetrics, output_dir: str) -> str:
    """Write run metrics to a JSON log file.

    Creates run_log_YYYYMMDD_HHMMSS.json in output_dir.

    Args:
        metrics: RunMetrics instance to write
        output_dir: Directory path for output file

    Returns:
        The filepath of the written JSON file

    Raises:
        OSError: If the output directory cannot be created or file cannot be written
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = metrics.run_timestamp.strftime('%Y%m%d_%H%M%S')
    filepath = output_path / f"run_log_{timestamp}.json"

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(_metrics_to_dict(metrics), f, indent=2, ensure_ascii=False)

    logger.info(f"Run log written to {filepath}")
    return str(filepath)


def _metrics_to_dict(metrics: RunMetrics) -> dict[str, Any]:
    """Convert RunMetrics to a JSON-serializable dictionary."""
    return {
        "sheet": metrics.sheet,
        "grid_rows": metrics.grid_rows,
        "header_row": metrics.header_row,
        "reconstructed_count": metrics.reconstructed_count,
        "selected_count": metrics.selected_count,
        "min_comments": metrics.min_comments,
        "min_score": metrics.min_score,
        "opened_count": metrics.opened_count,
        "errors": metrics.errors,
        "run_timestamp": metrics.run_timestamp.isoformat(),
    }


def log_stage_counts(stage: str, count: int) -> None:
    """Log the count for a workflow stage.

    Example:
        >>> log_stage_counts("reconstructed", 30)
        # Logs: "Filter stage 'reconstructed': 30 posts"
    """
    logger.info(f"Filter stage '{stage}': {count} posts")
