"""Post selector for choosing the most discussed posts.

Feature: hn-filter
Implements threshold filtering and comment-count ranking of reconstructed posts.
"""

import logging

from hn_filter.engines.post_record import FilterCriteria, PostRecord, is_valid_title


logger = logging.getLogger(__name__)


# Maximum number of posts returned to the caller
TOP_N = 10


def passes_criteria(post: PostRecord, criteria: FilterCriteria) -> bool:
    """Check a post against the inclusive score and comment thresholds."""
    return (
        post.score >= criteria.min_score
        and post.comments >= criteria.min_comments
        and is_valid_title(post.title)
    )


def filter_posts(posts: list[PostRecord], criteria: FilterCriteria) -> list[PostRecord]:
    """Keep posts meeting both thresholds, preserving input order.

    Filtering is idempotent: applying the same criteria twice gives the
    same list as applying it once.
    """
    kept = [post for post in posts if passes_criteria(post, criteria)]

    for post in posts:
        if not passes_criteria(post, criteria):
            logger.debug(
                f"Post filtered out: {post.title} (score: {post.score}/{criteria.min_score}, "
                f"comments: {post.comments}/{criteria.min_comments})"
            )

    return kept


def rank_posts(posts: list[PostRecord]) -> list[PostRecord]:
    """Sort posts by comment count descending.

    sorted() is stable, so posts with equal comment counts keep their
    grid order.
    """
    return sorted(posts, key=lambda post: post.comments, reverse=True)


def select_top_posts(
    posts: list[PostRecord],
    criteria: FilterCriteria,
    limit: int = TOP_N,
) -> list[PostRecord]:
    """Select the top posts by comment count that meet the criteria.

    Args:
        posts: Reconstructed posts in grid order
        criteria: Minimum comment and score thresholds
        limit: Maximum number of posts to return (default 10)

    Returns:
        At most `limit` posts sorted by comments descending. Returns an
        empty list when nothing qualifies.

    Example:
        >>> posts = [
        ...     PostRecord(title="A", score=10, comments=150),
        ...     PostRecord(title="B", score=5, comments=300),
        ...     PostRecord(title="C", score=90, comments=20),
        ... ]
        >>> [p.title for p in select_top_posts(posts, FilterCriteria(min_comments=100))]
        ['B', 'A']
    """
    filtered = filter_posts(posts, criteria)
    ranked = rank_posts(filtered)
    selected = ranked[:limit]

    logger.info(
        f"Filter: kept {len(filtered)} of {len(posts)} posts "
        f"(min_comments={criteria.min_comments}, min_score={criteria.min_score}), "
        f"returning top {len(selected)}"
    )

    return selected
