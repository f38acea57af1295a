"""Property-based tests for the results listing and link opening.

Feature: hn-filter
"""

from unittest.mock import MagicMock

from hypothesis import given, settings, strategies as st

from hn_filter.engines.post_record import PostRecord
from hn_filter.engines.presenter import (
    ELLIPSIS,
    NO_RESULTS_MESSAGE,
    PLACEHOLDER_LINK,
    TITLE_DISPLAY_LIMIT,
    build_listing,
    format_meta_line,
    open_links,
    render_listing,
    selected_links,
    truncate_title,
)


class TestTitleTruncation:

    @given(title=st.text(max_size=200))
    @settings(max_examples=100)
    def test_truncated_length(self, title):
        """Display titles SHALL never exceed the limit plus the ellipsis."""
        shown = truncate_title(title)
        if len(title) <= TITLE_DISPLAY_LIMIT:
            assert shown == title
        else:
            assert shown == title[:TITLE_DISPLAY_LIMIT] + ELLIPSIS
            assert len(shown) == TITLE_DISPLAY_LIMIT + len(ELLIPSIS)

    def test_exact_limit_not_truncated(self):
        title = "a" * TITLE_DISPLAY_LIMIT
        assert truncate_title(title) == title


class TestListing:

    def test_meta_line_with_author(self):
        post = PostRecord(title="T", score=10, comments=5, age="1 hour ago", domain="x.test", author="bob")
        assert format_meta_line(post) == "5 comments • 10 points • 1 hour ago • x.test • bob"

    def test_meta_line_without_author(self):
        post = PostRecord(title="T", score=10, comments=5, age="1 hour ago", domain="x.test")
        assert format_meta_line(post) == "5 comments • 10 points • 1 hour ago • x.test"

    def test_posts_without_link_are_not_preselected(self):
        posts = [
            PostRecord(title="linked", link="https://x.test/1"),
            PostRecord(title="bare"),
        ]

        items = build_listing(posts)

        assert [(i.index, i.link, i.selected) for i in items] == [
            (1, "https://x.test/1", True),
            (2, PLACEHOLDER_LINK, False),
        ]

    def test_render_empty_listing(self):
        assert render_listing([]) == NO_RESULTS_MESSAGE

    def test_render_listing(self):
        items = build_listing([PostRecord(title="Foo", link="https://x.test", comments=3)])
        text = render_listing(items)
        assert text.startswith("1 matching posts")
        assert "[x]  1. Foo" in text


class TestLinkSelection:

    @given(
        links=st.lists(
            st.sampled_from(["", "https://a.test", "https://b.test", "https://c.test"]),
            max_size=15,
        )
    )
    @settings(max_examples=100)
    def test_default_selection_skips_placeholders(self, links):
        posts = [PostRecord(title=f"P{i}", link=link) for i, link in enumerate(links)]

        chosen = selected_links(build_listing(posts))

        assert chosen == [link for link in links if link]
        assert PLACEHOLDER_LINK not in chosen

    def test_explicit_indices(self):
        posts = [PostRecord(title=str(i), link=f"https://x.test/{i}") for i in range(1, 5)]
        items = build_listing(posts)
        assert selected_links(items, [3, 1]) == ["https://x.test/1", "https://x.test/3"]

    def test_explicit_index_without_link_is_dropped(self):
        items = build_listing([PostRecord(title="bare")])
        assert selected_links(items, [1]) == []


class TestOpenLinks:

    def test_opens_in_order_with_delay(self):
        opener = MagicMock()
        sleep = MagicMock()

        opened = open_links(["a", "b", "c"], delay_seconds=0.25, opener=opener, sleep=sleep)

        assert opened == 3
        assert [call.args[0] for call in opener.call_args_list] == ["a", "b", "c"]
        assert sleep.call_count == 2
        sleep.assert_called_with(0.25)

    def test_failure_does_not_stop_remaining(self):
        opener = MagicMock(side_effect=[None, RuntimeError("no browser"), None])

        opened = open_links(["a", "b", "c"], opener=opener, sleep=MagicMock())

        assert opened == 2
        assert opener.call_count == 3

    def test_no_links(self):
        opener = MagicMock()
        assert open_links([], opener=opener, sleep=MagicMock()) == 0
        opener.assert_not_called()
