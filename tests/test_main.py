"""Tests for the command line interface and runner exit codes.

Feature: hn-filter
"""

import csv
import os
from unittest.mock import patch

import pytest

from hn_filter.agent.runner import EXIT_CONFIG_ERROR, EXIT_FILTER_ERROR, EXIT_SUCCESS
from hn_filter.main import main, parse_args


HN_HEADERS = ["rank", "titleline", "titleline href", "sitestr", "score", "subline (3)", "age", "hnuser"]


@pytest.fixture
def sheet(tmp_path):
    path = tmp_path / "ycombinator.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HN_HEADERS)
        writer.writerow(["1.", "Busy thread", "https://x.test/1", "x.test", "", "", "", ""])
        writer.writerow(["", "", "", "", "300 points", "250 comments", "5 hours ago", "carol"])
        writer.writerow(["2.", "Quiet thread", "https://x.test/2", "x.test", "", "", "", ""])
        writer.writerow(["", "", "", "", "12 points", "4 comments", "1 hour ago", "dan"])
    return path


@pytest.fixture(autouse=True)
def clean_env():
    with patch.dict(os.environ, {}, clear=True), patch("hn_filter.config.settings.load_dotenv"):
        yield


class TestParseArgs:

    def test_defaults(self):
        parsed = parse_args([])
        assert parsed.sheet_path is None
        assert parsed.min_comments is None
        assert parsed.pick is None
        assert not parsed.open_selected
        assert not parsed.debug

    def test_pick_list(self):
        assert parse_args(["--pick", "1,3, 5"]).pick == [1, 3, 5]

    def test_negative_threshold_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--min-comments", "-1"])


class TestMain:

    def test_lists_matching_posts(self, sheet, capsys):
        assert main(["--sheet", str(sheet)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "1 matching posts" in out
        assert "Busy thread" in out
        assert "Quiet thread" not in out

    def test_no_results_message(self, sheet, capsys):
        assert main(["--sheet", str(sheet), "--min-comments", "1000"]) == EXIT_SUCCESS
        assert "No posts found matching your criteria" in capsys.readouterr().out

    def test_missing_sheet_exit_code(self, tmp_path, capsys):
        assert main(["--sheet", str(tmp_path / "none.csv")]) == EXIT_FILTER_ERROR
        assert "Error: Sheet" in capsys.readouterr().out

    def test_invalid_configuration_exit_code(self):
        with patch.dict(os.environ, {"MIN_COMMENTS": "-1"}):
            assert main([]) == EXIT_CONFIG_ERROR

    def test_debug_report(self, sheet, capsys):
        assert main(["--sheet", str(sheet), "--debug"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "=== DEBUG DATA PARSING ===" in out
        assert "Comments: 250" in out

    def test_open_picked_links(self, sheet):
        with patch("hn_filter.agent.workflow.open_links", return_value=1) as mock_open:
            code = main(["--sheet", str(sheet), "--min-comments", "0", "--open", "--pick", "2"])

        assert code == EXIT_SUCCESS
        mock_open.assert_called_once_with(["https://x.test/2"], 0.25)

    def test_pick_implies_open(self, sheet, capsys):
        with patch("hn_filter.agent.workflow.open_links", return_value=1) as mock_open:
            code = main(["--sheet", str(sheet), "--min-comments", "0", "--pick", "2"])

        assert code == EXIT_SUCCESS
        mock_open.assert_called_once_with(["https://x.test/2"], 0.25)
        assert "Opened 1 links" in capsys.readouterr().out

    def test_listing_only_opens_nothing(self, sheet):
        with patch("hn_filter.agent.workflow.open_links") as mock_open:
            assert main(["--sheet", str(sheet), "--min-comments", "0"]) == EXIT_SUCCESS

        mock_open.assert_not_called()
