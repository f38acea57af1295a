"""Property-based tests for observability and run metrics.

Feature: hn-filter
"""

import json
import logging
from datetime import datetime

from hypothesis import given, settings, strategies as st

from hn_filter.engines.observability import (
    RunMetrics,
    _metrics_to_dict,
    create_run_metrics,
    log_stage_counts,
    write_run_log,
)


error_message_strategy = st.text(
    alphabet=st.characters(whitelist_categories=('L', 'N', 'P', 'S'), whitelist_characters=' '),
    min_size=1,
    max_size=200
).filter(lambda x: x.strip())


class TestMetricsCompleteness:
    """Property tests for metrics completeness."""

    @given(
        grid_rows=st.integers(min_value=0, max_value=5000),
        header_row=st.one_of(st.none(), st.integers(min_value=0, max_value=4)),
        reconstructed=st.integers(min_value=0, max_value=2500),
        selected=st.integers(min_value=0, max_value=10),
        errors=st.lists(error_message_strategy, max_size=3),
    )
    @settings(max_examples=100)
    def test_dict_contains_all_fields(self, grid_rows, header_row, reconstructed, selected, errors):
        metrics = create_run_metrics(
            sheet="ycombinator.csv",
            grid_rows=grid_rows,
            header_row=header_row,
            reconstructed_count=reconstructed,
            selected_count=selected,
            min_comments=100,
            errors=errors,
        )

        data = _metrics_to_dict(metrics)

        assert data["grid_rows"] == grid_rows
        assert data["header_row"] == header_row
        assert data["reconstructed_count"] == reconstructed
        assert data["selected_count"] == selected
        assert data["min_comments"] == 100
        assert data["errors"] == errors
        assert datetime.fromisoformat(data["run_timestamp"]) == metrics.run_timestamp

    def test_defaults(self):
        metrics = create_run_metrics()
        assert metrics.errors == []
        assert metrics.header_row is None
        assert isinstance(metrics.run_timestamp, datetime)


class TestRunLog:

    def test_write_run_log(self, tmp_path):
        metrics = RunMetrics(
            sheet="hn.csv",
            selected_count=4,
            run_timestamp=datetime(2024, 1, 16, 10, 30, 45),
        )

        path = write_run_log(metrics, str(tmp_path / "logs"))

        assert path.endswith("run_log_20240116_103045.json")
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["sheet"] == "hn.csv"
        assert data["selected_count"] == 4

    def test_log_stage_counts(self, caplog):
        with caplog.at_level(logging.INFO, logger="hn_filter.engines.observability"):
            log_stage_counts("reconstructed", 30)
        assert "Filter stage 'reconstructed': 30 posts" in caplog.text
