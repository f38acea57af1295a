"""Presentation of selected posts as a selectable listing.

Feature: hn-filter
Formats posts for a terminal listing, picks the links the user chose and
opens them one after another in the browser.
"""

import logging
import time
import webbrowser
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from hn_filter.engines.post_record import PostRecord


logger = logging.getLogger(__name__)


TITLE_DISPLAY_LIMIT = 80
ELLIPSIS = "..."
PLACEHOLDER_LINK = "#"
OPEN_DELAY_SECONDS = 0.25

NO_RESULTS_MESSAGE = "No posts found matching your criteria. Try lowering the thresholds."


@dataclass
class ListingItem:
    """One selectable entry of the results listing.

    Attributes:
        index: 1-based position in the listing
        title: Display title, truncated to the display limit
        meta: Meta line with comments, points, age, domain and author
        link: Post URL, or "#" when the post has none
        selected: Whether the entry is checked by default
    """
    index: int
    title: str
    meta: str
    link: str
    selected: bool


def truncate_title(title: str, limit: int = TITLE_DISPLAY_LIMIT) -> str:
    """Truncate a title to `limit` characters, appending an ellipsis.

    Example:
        >>> truncate_title("short")
        'short'
        >>> truncate_title("x" * 100, limit=10)
        'xxxxxxxxxx...'
    """
    if len(title) <= limit:
        return title
    return title[:limit] + ELLIPSIS


def format_meta_line(post: PostRecord) -> str:
    """Format the secondary line shown under each title."""
    meta = f"{post.comments} comments • {post.score} points • {post.age} • {post.domain}"
    if post.author:
        meta += f" • {post.author}"
    return meta


def is_openable_link(link: str | None) -> bool:
    return bool(link) and link.strip() != "" and link != PLACEHOLDER_LINK


def build_listing(
    posts: list[PostRecord],
    title_limit: int = TITLE_DISPLAY_LIMIT,
) -> list[ListingItem]:
    """Build listing entries for the posts, in the order given.

    Entries with a real link are selected by default.
    """
    items: list[ListingItem] = []
    for position, post in enumerate(posts, start=1):
        link = post.link or PLACEHOLDER_LINK
        items.append(ListingItem(
            index=position,
            title=truncate_title(post.title, title_limit),
            meta=format_meta_line(post),
            link=link,
            selected=is_openable_link(link),
        ))
    return items


def render_listing(items: list[ListingItem]) -> str:
    """Render listing entries as plain text for the terminal."""
    if not items:
        return NO_RESULTS_MESSAGE

    lines = [f"{len(items)} matching posts", ""]
    for item in items:
        mark = "x" if item.selected else " "
        lines.append(f"[{mark}] {item.index:>2}. {item.title}")
        lines.append(f"        {item.meta}")
    return "\n".join(lines)


def selected_links(
    items: list[ListingItem],
    chosen_indices: Iterable[int] | None = None,
) -> list[str]:
    """Return the links of the chosen entries, skipping placeholder links.

    Args:
        items: Listing entries
        chosen_indices: 1-based indexes picked by the user. None means the
            entries selected by default.

    Returns:
        Links in listing order
    """
    if chosen_indices is None:
        chosen = [item for item in items if item.selected]
    else:
        wanted = set(chosen_indices)
        chosen = [item for item in items if item.index in wanted]

    return [item.link for item in chosen if is_openable_link(item.link)]


def open_links(
    links: list[str],
    delay_seconds: float = OPEN_DELAY_SECONDS,
    opener: Callable[[str], object] = webbrowser.open_new_tab,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Open links one at a time with a short pause in between.

    A link that fails to open is logged and the rest are still opened.

    Returns:
        Number of links opened successfully
    """
    opened = 0
    for position, link in enumerate(links):
        if position > 0 and delay_seconds > 0:
            sleep(delay_seconds)
        try:
            opener(link)
            opened += 1
            logger.debug(f"Opened {link}")
        except Exception as e:
            logger.error(f"Failed to open {link}: {e}")

    logger.info(f"Opened {opened} of {len(links)} links")
    return opened
