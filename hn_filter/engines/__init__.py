"""Engines module - core processing components."""

from hn_filter.engines.post_record import (
    MISSING_TITLE,
    ColumnMap,
    FilterCriteria,
    PostRecord,
)
from hn_filter.engines.schema_locator import (
    RequiredColumnMissing,
    SchemaError,
    SchemaNotFound,
)

__all__ = [
    # Data model
    "MISSING_TITLE",
    "ColumnMap",
    "FilterCriteria",
    "PostRecord",
    # Exceptions
    "RequiredColumnMissing",
    "SchemaError",
    "SchemaNotFound",
]
