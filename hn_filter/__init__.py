"""hn-filter: rank Hacker News listing exports by discussion."""

__version__ = "0.1.0"
