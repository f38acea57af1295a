"""Reconstruction of post records from listing grid rows.

Listing exports arrive in two layouts: a title row followed by a metadata
row, or a single row carrying everything. Both are handled by one walk:
every row with a rank starts a post, and when its score cell is empty the
metadata fields are overlaid from the following row.

Feature: hn-filter
"""

import logging
import re
from collections.abc import Sequence
from typing import Any

from hn_filter.engines.post_record import (
    MISSING_TITLE,
    NOT_FOUND,
    ColumnMap,
    PostRecord,
    is_valid_title,
)


logger = logging.getLogger(__name__)


_DIGITS_RE = re.compile(r"\d+")
_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d{3})")
_SUBLINE_PATTERNS: dict[str, re.Pattern[str]] = {
    "points": re.compile(r"(\d+)\s*points?", re.IGNORECASE),
    "comments": re.compile(r"(\d+)\s*comments?", re.IGNORECASE),
}
_TRAILING_SEPARATOR_RE = re.compile(r"\s+\|\s*$")
_AGO_SUFFIX_RE = re.compile(r"\s+ago\s*$")


def _cell_to_text(value: Any) -> str:
    """Render a cell value as text, dropping the '.0' of whole floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def cell_text(row: Sequence[Any], index: int, fallback: str = "") -> str:
    """Read a trimmed cell, returning fallback when it is absent or empty.

    Falsy cells (None, "", 0) count as empty, so a zero score in a title
    row still lets the metadata row provide the real value.

    Example:
        >>> cell_text(["1.", "  Foo  "], 1)
        'Foo'
        >>> cell_text(["1."], 5, "No title")
        'No title'
        >>> cell_text(["1.", None], 1, "0")
        '0'
    """
    if index == NOT_FOUND or index < 0 or index >= len(row):
        return fallback
    value = row[index]
    if not value:
        return fallback
    return _cell_to_text(value).strip()


def extract_number(value: Any) -> int:
    """Parse the first run of digits in a cell value.

    Thousands separators are removed first; signs and trailing units are
    ignored. Anything without digits yields 0.

    Example:
        >>> extract_number("1,234 points")
        1234
        >>> extract_number("42 comments")
        42
        >>> extract_number(None)
        0
    """
    if value is None or value == "":
        return 0
    text = _THOUSANDS_RE.sub("", _cell_to_text(value))
    match = _DIGITS_RE.search(text)
    return int(match.group(0)) if match else 0


def extract_number_from_subline(subline_text: Any, keyword: str) -> int:
    """Find the count written before a keyword in free-text subline.

    Args:
        subline_text: Text such as "250 points by bob 3 hours ago | 88 comments"
        keyword: "points" or "comments"

    Returns:
        The matched count, or 0 if there is no match or the keyword is unknown
    """
    if not subline_text:
        return 0
    pattern = _SUBLINE_PATTERNS.get(keyword)
    if pattern is None:
        return 0
    text = _THOUSANDS_RE.sub("", _cell_to_text(subline_text))
    match = pattern.search(text)
    return int(match.group(1)) if match else 0


def resolve_score(score_text: Any, subline_text: Any = "") -> int:
    """Score from its dedicated column, else from "<n> points" in the subline."""
    return extract_number(score_text) or extract_number_from_subline(subline_text, "points")


def resolve_comments(comments_text: Any, subline_text: Any = "") -> int:
    """Comment count from its column, else from "<n> comments" in the subline."""
    return extract_number(comments_text) or extract_number_from_subline(subline_text, "comments")


def clean_age(age: str | None) -> str:
    """Normalize a relative age cell.

    Example:
        >>> clean_age("3 hours   ago |")
        '3 hours ago'
        >>> clean_age("flagged | 2 days ago")
        'flagged | 2 days ago'
        >>> clean_age("")
        ''
    """
    if not age:
        return ""
    text = _TRAILING_SEPARATOR_RE.sub("", str(age))
    text = _AGO_SUFFIX_RE.sub(" ago", text)
    return text.strip()


def domain_from_sitebit(sitebit: str) -> str:
    """Strip the parentheses of a "(example.com)" annotation."""
    return re.sub(r"[()]", "", sitebit or "").strip()


def _is_blank_row(row: Sequence[Any] | None) -> bool:
    return not row or not any(row)


def _read_metadata(
    row: Sequence[Any],
    next_row: Sequence[Any] | None,
    columns: ColumnMap,
) -> dict[str, str]:
    """Read metadata cells, overlaying them from the next row if score is empty."""
    meta = {
        "score": cell_text(row, columns.score, "0"),
        "comments": cell_text(row, columns.comments, "0"),
        "age": cell_text(row, columns.age),
        "author": cell_text(row, columns.author),
        "subline": cell_text(row, columns.subline),
    }

    if (not meta["score"] or meta["score"] == "0") and next_row:
        meta = {
            "score": cell_text(next_row, columns.score, meta["score"]),
            "comments": cell_text(next_row, columns.comments, meta["comments"]),
            "age": cell_text(next_row, columns.age, meta["age"]),
            "author": cell_text(next_row, columns.author, meta["author"]),
            "subline": cell_text(next_row, columns.subline, meta["subline"]),
        }

    return meta


def reconstruct_post(
    row: Sequence[Any],
    next_row: Sequence[Any] | None,
    columns: ColumnMap,
) -> PostRecord | None:
    """Build a post from a title row and the row after it.

    Args:
        row: Title row (its rank cell is non-empty)
        next_row: The following grid row, or None at the end of the grid
        columns: Column map of the grid

    Returns:
        PostRecord, or None if the title is missing or blank
    """
    rank = cell_text(row, columns.rank)
    title = cell_text(row, columns.title_text, MISSING_TITLE)
    link = cell_text(row, columns.title_link)
    domain = cell_text(row, columns.domain)

    meta = _read_metadata(row, next_row, columns)
    score = resolve_score(meta["score"], meta["subline"])
    comments = resolve_comments(meta["comments"], meta["subline"])

    if not domain:
        domain = domain_from_sitebit(cell_text(row, columns.sitebit))

    post = PostRecord(
        title=title,
        link=link,
        domain=domain,
        score=score,
        comments=comments,
        age=clean_age(meta["age"]),
        author=meta["author"],
        rank=rank,
    )
    logger.debug(f"Processing post #{rank}: {post.display_text}")

    if not is_valid_title(post.title):
        logger.debug(f"Skipping post #{rank}: title could not be read")
        return None

    return post


def iter_title_rows(
    grid: Sequence[Sequence[Any]],
    header_row: int,
    columns: ColumnMap,
    stop: int | None = None,
):
    """Yield (row, next_row) for every title row after the header.

    Rows are examined one at a time, so a metadata row is also checked for
    a rank of its own.
    """
    end = len(grid) if stop is None else min(stop, len(grid))
    for index in range(header_row + 1, end):
        row = grid[index]
        if _is_blank_row(row):
            continue
        if not cell_text(row, columns.rank):
            continue
        next_row = grid[index + 1] if index + 1 < len(grid) else None
        yield row, next_row


def reconstruct_posts(
    grid: Sequence[Sequence[Any]],
    header_row: int,
    columns: ColumnMap,
    stop: int | None = None,
) -> list[PostRecord]:
    """Reconstruct every post below the header, in grid order.

    Per-row problems never abort the batch: unreadable numbers become 0 and
    missing text becomes ''. Rows whose title cannot be read are dropped.

    Args:
        grid: Raw two-dimensional cell values
        header_row: Index of the header row
        columns: Column map built from the header row
        stop: Optional row index at which to stop scanning

    Returns:
        List of PostRecord in encounter order
    """
    posts: list[PostRecord] = []
    skipped = 0
    for row, next_row in iter_title_rows(grid, header_row, columns, stop):
        post = reconstruct_post(row, next_row, columns)
        if post is None:
            skipped += 1
            continue
        posts.append(post)

    if skipped:
        logger.debug(f"Skipped {skipped} rows without a readable title")
    return posts
