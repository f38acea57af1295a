"""Runner module for the hn-filter workflow.

This module wires settings, logging and the workflow together and maps the
outcome to a process exit code.
"""

import logging
import sys
from dataclasses import replace

from hn_filter.agent.workflow import run_filter
from hn_filter.config.settings import ConfigurationError, load_settings
from hn_filter.connectors.sheet_reader import SheetReadError, load_grid
from hn_filter.engines.diagnostics import build_debug_report, render_debug_report
from hn_filter.engines.post_record import FilterCriteria
from hn_filter.engines.presenter import render_listing


# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_FILTER_ERROR = 2


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run(
    sheet_path: str | None = None,
    sheet_name: str | None = None,
    min_comments: int | None = None,
    min_score: int | None = None,
    open_selected: bool = False,
    chosen: list[int] | None = None,
    debug: bool = False,
    verbose: bool = False,
) -> int:
    """Run the filter workflow with command line overrides.

    Arguments left as None fall back to the loaded settings.

    Returns:
        Exit code:
        - 0: Success (including when no post matches)
        - 1: Configuration error
        - 2: Sheet could not be read or parsed
    """
    _setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(validate=False)
        overrides = {
            key: value for key, value in {
                "sheet_path": sheet_path,
                "sheet_name": sheet_name,
                "min_comments": min_comments,
                "min_score": min_score,
            }.items()
            if value is not None
        }
        settings = replace(settings, **overrides)
        settings.validate()
        logger.debug("Configuration loaded successfully")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    if debug:
        try:
            grid = load_grid(settings.sheet_path, settings.sheet_name)
        except SheetReadError as e:
            logger.error(f"Debug error: {e}")
            return EXIT_FILTER_ERROR
        report = build_debug_report(grid)
        print(render_debug_report(report))
        return EXIT_SUCCESS

    criteria = FilterCriteria(
        min_comments=settings.min_comments,
        min_score=settings.min_score,
    )
    result = run_filter(
        settings,
        criteria,
        open_selected=open_selected,
        chosen=chosen,
    )

    if not result.success:
        print(f"Error: {result.error}")
        return EXIT_FILTER_ERROR

    print(render_listing(result.listing))
    if open_selected:
        print(f"Opened {result.opened_count} links")
    return EXIT_SUCCESS
