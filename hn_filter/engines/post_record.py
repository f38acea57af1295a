"""Post data models shared by the reconstruction and ranking engines."""

from dataclasses import dataclass, fields


# Sentinel returned when the title cell cannot be read
MISSING_TITLE = "No title"

# Column index used when a semantic field has no matching header
NOT_FOUND = -1


@dataclass(frozen=True)
class ColumnMap:
    """Column indexes for each semantic field of a listing export.

    Built once from the detected header row and passed explicitly to the
    helpers that read cells. Every field defaults to NOT_FOUND.

    Attributes:
        rank: Rank cell ("1.", "2.", ...); non-empty marks a title row
        title_text: Post title ("titleline")
        title_link: Post URL ("titleline href")
        domain: Site domain ("sitestr")
        score: Points text ("score")
        comments: Comment count text ("subline (3)")
        age: Relative age ("age")
        author: Submitter username ("hnuser")
        subline: Free-text subline that may embed points and comments
        sitebit: Bracketed site annotation used when domain is empty
    """
    rank: int = NOT_FOUND
    title_text: int = NOT_FOUND
    title_link: int = NOT_FOUND
    domain: int = NOT_FOUND
    score: int = NOT_FOUND
    comments: int = NOT_FOUND
    age: int = NOT_FOUND
    author: int = NOT_FOUND
    subline: int = NOT_FOUND
    sitebit: int = NOT_FOUND

    def found(self) -> dict[str, int]:
        """Return the fields that resolved to a column, keyed by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) != NOT_FOUND
        }

    def missing(self) -> list[str]:
        """Return the names of fields without a matching column."""
        return [
            f.name for f in fields(self)
            if getattr(self, f.name) == NOT_FOUND
        ]


@dataclass(frozen=True)
class FilterCriteria:
    """Inclusive minimum thresholds applied to reconstructed posts.

    Attributes:
        min_comments: Minimum comment count (default 100)
        min_score: Minimum points (default 0)
    """
    min_comments: int = 100
    min_score: int = 0

    def validate(self) -> None:
        """Raise ValueError if either threshold is negative."""
        if self.min_comments < 0:
            raise ValueError(f"min_comments must be non-negative, got {self.min_comments}")
        if self.min_score < 0:
            raise ValueError(f"min_score must be non-negative, got {self.min_score}")


@dataclass
class PostRecord:
    """A listing entry reconstructed from one or two grid rows.

    Attributes:
        title: Post title, never blank or the missing-title placeholder
        link: Post URL (may be empty)
        domain: Site domain (may be empty)
        score: Points, always >= 0
        comments: Comment count, always >= 0
        age: Normalized relative age such as "3 hours ago"
        author: Submitter username (may be empty)
        rank: Rank cell text as found in the grid
    """
    title: str
    link: str = ""
    domain: str = ""
    score: int = 0
    comments: int = 0
    age: str = ""
    author: str = ""
    rank: str = ""

    @property
    def display_text(self) -> str:
        """One-line summary used in logs and plain listings."""
        return f"{self.title} ({self.score}pts, {self.comments}cmt) - {self.domain}"


def is_valid_title(title: str | None) -> bool:
    """Check that a title was actually read from the grid.

    Example:
        >>> is_valid_title("Show HN: A thing")
        True
        >>> is_valid_title("No title")
        False
        >>> is_valid_title("   ")
        False
    """
    if title is None:
        return False
    return title != MISSING_TITLE and title.strip() != ""
